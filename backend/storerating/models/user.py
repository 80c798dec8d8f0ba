from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String

from storerating.models.base import Base, utcnow


class User(Base):
    """Admins and normal users. Store owners live in ``stores``."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'normal_user')", name="ck_users_role"),
        CheckConstraint(
            "claim_status = 'none' OR role = 'normal_user'",
            name="ck_users_claim_status_role",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    address = Column(String(400), nullable=False)
    role = Column(String(50), nullable=False, default="normal_user")
    claim_status = Column(String(50), nullable=False, default="none")
    created_at = Column(DateTime, nullable=False, default=utcnow)
