"""
Identity repository: the two login populations (users and stores).

Email is unique across both tables. Each table carries its own unique
index and every insert is preceded by a check against the other table.
"""
import logging
from typing import List, Optional, Tuple, Union

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storerating.core.errors import EmailTaken, NotFound
from storerating.core.roles import ClaimStatus, Population, Role, population_for
from storerating.core.security import hash_password
from storerating.core.sorting import order_clauses
from storerating.core.validators import validate_registration
from storerating.models.store import Store
from storerating.models.user import User


logger = logging.getLogger(__name__)

Identity = Union[User, Store]

USER_SORT_COLUMNS = {
    "name": User.name,
    "email": User.email,
    "role": User.role,
    "claim_status": User.claim_status,
    "created_at": User.created_at,
}


def email_in_use(db: Session, email: str) -> bool:
    if db.query(User.id).filter(User.email == email).first():
        return True
    return db.query(Store.id).filter(Store.email == email).first() is not None


def register_user(db: Session, name: str, email: str, password: str, address: str) -> User:
    validate_registration(name, email, password, address)
    if email_in_use(db, email):
        raise EmailTaken()

    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        address=address,
        role=Role.normal_user.value,
        claim_status=ClaimStatus.none.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise EmailTaken()
    db.refresh(user)
    logger.info("registered user id=%s", user.id)
    return user


def find_by_email(db: Session, email: str) -> Tuple[Population, Identity]:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return Population.users, user
    store = db.query(Store).filter(Store.email == email).first()
    if store:
        return Population.stores, store
    raise NotFound("No account with this email")


def get_profile(db: Session, subject_id: int, role: str) -> Identity:
    model = User if population_for(role) == Population.users else Store
    record = db.query(model).filter(model.id == subject_id).first()
    if not record:
        raise NotFound("User not found")
    return record


def list_users(db: Session, sort_by: Optional[str] = "name", order: Optional[str] = "asc") -> List[User]:
    ordering = order_clauses(USER_SORT_COLUMNS, sort_by, order, tiebreaker=User.id)
    return db.query(User).order_by(*ordering).all()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def count_stores(db: Session) -> int:
    return db.query(func.count(Store.id)).scalar() or 0


def delete_user(db: Session, user_id: int) -> None:
    # Ratings authored by the user go with it (ON DELETE CASCADE)
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info("delete user id=%s removed=%s", user_id, deleted)


def delete_store(db: Session, store_id: int) -> None:
    deleted = db.query(Store).filter(Store.id == store_id).delete(synchronize_session=False)
    db.commit()
    logger.info("delete store id=%s removed=%s", store_id, deleted)
