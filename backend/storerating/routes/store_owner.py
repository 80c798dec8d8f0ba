from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.deps import require_store_owner
from storerating.core.security import TokenClaims
from storerating.services import query_service


router = APIRouter()


class ReceivedRatingOut(BaseModel):
    id: int
    rating: int
    created_at: str
    user_name: str
    user_email: str


class StoreOwnerDashboardOut(BaseModel):
    ratings: List[ReceivedRatingOut]
    average_rating: float
    total_ratings: int


@router.get("/dashboard", response_model=StoreOwnerDashboardOut)
def dashboard(db: Session = Depends(get_db), claims: TokenClaims = Depends(require_store_owner)):
    return query_service.store_owner_dashboard(db, claims.subject_id)
