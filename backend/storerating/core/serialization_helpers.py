"""
Generic serialization helpers.
No business rules here, only formatting.
"""
from decimal import Decimal, ROUND_HALF_UP


def serialize_decimal(value, places=None):
    """Convert Decimal/None aggregates to float for JSON, rounding half up when places is given"""
    if value is None:
        return 0.0
    if places is None:
        return float(value)
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))

def serialize_datetime(value):
    """Convert datetime to ISO string for JSON"""
    if value is None:
        return None
    return value.isoformat()
