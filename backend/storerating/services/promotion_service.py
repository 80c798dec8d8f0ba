"""
Promotion of a normal user into a store owner.

A claim only flags the user. Verification, approved by an admin, moves the
identity: a Store row is inserted with the user's name, email, password hash
and address, and the User row is deleted. Both steps share one session and
one transaction. The unique email index on ``stores`` is what serialises
concurrent promotions of the same email; on any failure nothing changes.

Ratings authored by the promoted user are removed by the ON DELETE CASCADE
on ``ratings.rater_user_id``.
"""
import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storerating.core.database import SessionLocal
from storerating.core.errors import InternalError, NotEligible, NotFound, ServiceError
from storerating.core.roles import ClaimStatus, Role
from storerating.models.store import Store
from storerating.models.user import User


logger = logging.getLogger(__name__)


def claim(db: Session, user_id: int) -> User:
    """Flag a normal user as waiting for store-owner verification. Idempotent."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    if user.role != Role.normal_user.value:
        raise NotEligible("Only normal users can request store ownership")

    if user.claim_status != ClaimStatus.pending_verification.value:
        user.claim_status = ClaimStatus.pending_verification.value
        db.commit()
        db.refresh(user)
        logger.info("user id=%s claimed store ownership", user_id)
    return user


def verify(user_id: int, session_factory: Callable[[], Session] = SessionLocal) -> Store:
    """Atomically turn the user into a store. Runs on its own session."""
    session = session_factory()
    try:
        user = (
            session.query(User)
            .filter(User.id == user_id)
            .with_for_update()
            .first()
        )
        if user is None or user.role != Role.normal_user.value:
            raise NotEligible()

        store = Store(
            name=user.name,
            email=user.email,
            hashed_password=user.hashed_password,
            address=user.address,
            role=Role.store_owner.value,
        )
        session.add(store)
        session.flush()

        session.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        session.commit()
        session.refresh(store)
        logger.info("user id=%s promoted to store id=%s", user_id, store.id)
        return store
    except ServiceError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("promotion of user id=%s rolled back: %s", user_id, exc.__class__.__name__)
        raise InternalError("Internal server error during verification.") from exc
    finally:
        session.close()
