"""
Field rules applied to identity and rating input at the API boundary.

Each ``is_valid_*`` predicate accepts any value and only returns True for a
string (or int, for scores) within the allowed shape. ``validate_*``
helpers collect every failing field and raise a single ``ValidationFailed``.
"""
import re
from typing import Any

from storerating.core.errors import ValidationFailed


NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"
ADDRESS_MAX_LENGTH = 400
MIN_SCORE = 1
MAX_SCORE = 5

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(password: Any) -> bool:
    if not isinstance(password, str):
        return False
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    has_upper = any("A" <= ch <= "Z" for ch in password)
    has_special = any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in password)
    return has_upper and has_special


def is_valid_address(address: Any) -> bool:
    return isinstance(address, str) and 1 <= len(address) <= ADDRESS_MAX_LENGTH


def is_valid_score(score: Any) -> bool:
    # bool is an int subclass; True must not count as a score of 1
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return MIN_SCORE <= score <= MAX_SCORE


def validate_registration(name: Any, email: Any, password: Any, address: Any) -> None:
    checks = (
        ("name", is_valid_name(name)),
        ("email", is_valid_email(email)),
        ("password", is_valid_password(password)),
        ("address", is_valid_address(address)),
    )
    failed = [field for field, ok in checks if not ok]
    if failed:
        raise ValidationFailed(failed)


def validate_email(email: Any) -> None:
    if not is_valid_email(email):
        raise ValidationFailed(["email"], "Invalid email format")


def validate_score(score: Any) -> int:
    if not is_valid_score(score):
        raise ValidationFailed(["rating"], f"Rating must be between {MIN_SCORE} and {MAX_SCORE}")
    return score
