"""
Composite read paths: store listings and dashboards.

Store listings aggregate ratings in the same query that selects the stores.
Sort parameters are mapped through closed allowlists (see core.sorting).
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import Integer, and_, cast, func, null, or_
from sqlalchemy.orm import Session, aliased

from storerating.core.errors import NotFound
from storerating.core.serialization_helpers import serialize_datetime, serialize_decimal
from storerating.core.sorting import order_clauses
from storerating.models.rating import Rating
from storerating.models.store import Store
from storerating.services import identity_service, rating_service


def _like_pattern(search: str) -> str:
    escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def list_stores_for_viewer(
    db: Session,
    viewer_id: Optional[int],
    search: Optional[str] = None,
    sort_by: Optional[str] = "name",
    order: Optional[str] = "asc",
) -> List[Dict[str, Any]]:
    """
    Stores with their average rating and the viewer's own score.

    ``viewer_id`` is a users-table id; pass None for viewers that cannot rate
    (store owners), whose ``viewer_rating`` is then always null.
    """
    average = func.coalesce(func.avg(Rating.score), 0)
    if viewer_id is not None:
        viewer = aliased(Rating)
        viewer_score = viewer.score
    else:
        viewer_score = cast(null(), Integer)

    query = db.query(
        Store.id.label("store_id"),
        Store.name,
        Store.address,
        average.label("average_rating"),
        viewer_score.label("viewer_rating"),
    ).outerjoin(Rating, Rating.target_store_id == Store.id)

    if viewer_id is not None:
        query = query.outerjoin(
            viewer,
            and_(viewer.target_store_id == Store.id, viewer.rater_user_id == viewer_id),
        )
        query = query.group_by(Store.id, Store.name, Store.address, viewer.score)
    else:
        query = query.group_by(Store.id, Store.name, Store.address)

    if search:
        pattern = _like_pattern(search)
        query = query.filter(
            or_(
                func.lower(Store.name).like(pattern, escape="\\"),
                func.lower(Store.address).like(pattern, escape="\\"),
            )
        )

    columns = {"name": Store.name, "address": Store.address, "average_rating": average}
    query = query.order_by(*order_clauses(columns, sort_by, order, tiebreaker=Store.id))

    return [
        {
            "store_id": row.store_id,
            "name": row.name,
            "address": row.address,
            "average_rating": serialize_decimal(row.average_rating),
            "viewer_rating": row.viewer_rating,
        }
        for row in query.all()
    ]


def list_stores_for_admin(
    db: Session,
    sort_by: Optional[str] = "name",
    order: Optional[str] = "asc",
) -> List[Dict[str, Any]]:
    average = func.coalesce(func.avg(Rating.score), 0)
    total = func.count(Rating.id)

    query = (
        db.query(
            Store.id,
            Store.name,
            Store.email,
            Store.address,
            Store.created_at,
            average.label("average_rating"),
            total.label("total_ratings"),
        )
        .outerjoin(Rating, Rating.target_store_id == Store.id)
        .group_by(Store.id, Store.name, Store.email, Store.address, Store.created_at)
    )
    columns = {
        "name": Store.name,
        "email": Store.email,
        "average_rating": average,
        "total_ratings": total,
    }
    query = query.order_by(*order_clauses(columns, sort_by, order, tiebreaker=Store.id))

    return [
        {
            "id": row.id,
            "name": row.name,
            "email": row.email,
            "address": row.address,
            "created_at": serialize_datetime(row.created_at),
            "average_rating": serialize_decimal(row.average_rating),
            "total_ratings": int(row.total_ratings),
        }
        for row in query.all()
    ]


def admin_dashboard(db: Session) -> Dict[str, int]:
    return {
        "total_users": identity_service.count_users(db),
        "total_stores": identity_service.count_stores(db),
        "total_ratings": rating_service.count_ratings(db),
    }


def store_owner_dashboard(db: Session, store_id: int) -> Dict[str, Any]:
    if not db.query(Store.id).filter(Store.id == store_id).first():
        raise NotFound("Store not found")
    average, total = rating_service.store_aggregates(db, store_id)
    return {
        "ratings": rating_service.ratings_for_store(db, store_id),
        "average_rating": serialize_decimal(average, places=1),
        "total_ratings": total,
    }
