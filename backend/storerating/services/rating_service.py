import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storerating.core.errors import InternalError, NotFound
from storerating.core.serialization_helpers import serialize_datetime, serialize_decimal
from storerating.core.validators import validate_score
from storerating.models.base import utcnow
from storerating.models.rating import Rating
from storerating.models.store import Store
from storerating.models.user import User


logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_DIALECTS[dialect]
    except KeyError:
        raise InternalError(f"Rating upsert is not supported on {dialect}") from None


def upsert_rating(db: Session, rater_id: int, store_id: int, score: Any) -> None:
    """Insert or replace the rater's score for a store in one statement."""
    score = validate_score(score)
    if not db.query(User.id).filter(User.id == rater_id).first():
        # Token outlived its user (deleted or promoted)
        raise NotFound("User not found")
    if not db.query(Store.id).filter(Store.id == store_id).first():
        raise NotFound("Store not found")

    now = utcnow()
    insert = _insert_for(db)
    stmt = insert(Rating).values(
        rater_user_id=rater_id,
        target_store_id=store_id,
        score=score,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Rating.rater_user_id, Rating.target_store_id],
        set_={"score": stmt.excluded.score, "updated_at": stmt.excluded.updated_at},
    )
    try:
        db.execute(stmt)
        db.commit()
    except IntegrityError:
        # Store or rater deleted between the checks and the write
        db.rollback()
        if not db.query(User.id).filter(User.id == rater_id).first():
            raise NotFound("User not found") from None
        raise NotFound("Store not found") from None
    logger.info("rating upserted rater=%s store=%s", rater_id, store_id)


def get_rating(db: Session, rater_id: int, store_id: int) -> Rating | None:
    return (
        db.query(Rating)
        .filter(Rating.rater_user_id == rater_id, Rating.target_store_id == store_id)
        .first()
    )


def store_aggregates(db: Session, store_id: int) -> Tuple[float, int]:
    average, count = (
        db.query(func.avg(Rating.score), func.count(Rating.id))
        .filter(Rating.target_store_id == store_id)
        .one()
    )
    return serialize_decimal(average), int(count or 0)


def ratings_for_store(db: Session, store_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.query(
            Rating.id,
            Rating.score,
            Rating.created_at,
            User.name.label("user_name"),
            User.email.label("user_email"),
        )
        .join(User, User.id == Rating.rater_user_id)
        .filter(Rating.target_store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .all()
    )
    return [
        {
            "id": row.id,
            "rating": row.score,
            "created_at": serialize_datetime(row.created_at),
            "user_name": row.user_name,
            "user_email": row.user_email,
        }
        for row in rows
    ]


def count_ratings(db: Session) -> int:
    return db.query(func.count(Rating.id)).scalar() or 0
