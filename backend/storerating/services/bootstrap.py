import logging

from sqlalchemy.orm import Session

from storerating.core.config import settings
from storerating.core.roles import ClaimStatus, Role
from storerating.core.security import hash_password
from storerating.models.user import User
from storerating.services.identity_service import email_in_use


logger = logging.getLogger(__name__)


def ensure_admin(db: Session) -> User | None:
    """Create the bootstrap admin when no admin exists. Returns it if created."""
    if db.query(User.id).filter(User.role == Role.admin.value).first():
        return None
    if email_in_use(db, settings.admin_email):
        logger.error("cannot create bootstrap admin: %s is already registered", settings.admin_email)
        return None

    admin = User(
        name=settings.admin_name,
        email=settings.admin_email,
        hashed_password=hash_password(settings.admin_password),
        address=settings.admin_address,
        role=Role.admin.value,
        claim_status=ClaimStatus.none.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("created bootstrap admin %s", admin.email)
    return admin
