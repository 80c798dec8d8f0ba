from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.deps import require_admin
from storerating.routes.users import UserOut
from storerating.services import identity_service, promotion_service, query_service


router = APIRouter(dependencies=[Depends(require_admin)])


class DashboardOut(BaseModel):
    total_users: int
    total_stores: int
    total_ratings: int


class AdminStoreOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    created_at: datetime
    average_rating: float
    total_ratings: int


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)):
    return query_service.admin_dashboard(db)


@router.get("/users", response_model=List[UserOut])
def list_users(
    sort_by: Optional[str] = Query("name", alias="sortBy"),
    sort_order: Optional[str] = Query("asc", alias="sortOrder"),
    db: Session = Depends(get_db),
):
    return identity_service.list_users(db, sort_by, sort_order)


@router.get("/stores", response_model=List[AdminStoreOut])
def list_stores(
    sort_by: Optional[str] = Query("name", alias="sortBy"),
    sort_order: Optional[str] = Query("asc", alias="sortOrder"),
    db: Session = Depends(get_db),
):
    return query_service.list_stores_for_admin(db, sort_by, sort_order)


@router.post("/users/{user_id}/verify")
def verify_user(user_id: int):
    # The promotion opens its own session for the whole transaction
    store = promotion_service.verify(user_id)
    return {"message": "User verified and converted to Store Owner.", "store_id": store.id}


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    identity_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/stores/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_store(store_id: int, db: Session = Depends(get_db)):
    identity_service.delete_store(db, store_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
