from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String

from storerating.models.base import Base, utcnow


class Store(Base):
    """A rated store; its id is also the login subject of its owner."""

    __tablename__ = "stores"
    __table_args__ = (
        CheckConstraint("role = 'store_owner'", name="ck_stores_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    address = Column(String(400), nullable=False)
    role = Column(String(50), nullable=False, default="store_owner")
    created_at = Column(DateTime, nullable=False, default=utcnow)
