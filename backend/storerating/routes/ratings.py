from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.deps import require_normal_user
from storerating.core.security import TokenClaims
from storerating.services import rating_service


router = APIRouter()


class RatingRequest(BaseModel):
    store_id: int = Field(alias="storeId")
    # Checked by validate_score so floats and strings are rejected, not coerced
    rating: Any = None

    class Config:
        populate_by_name = True


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_rating(
    data: RatingRequest,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_normal_user),
):
    rating_service.upsert_rating(db, claims.subject_id, data.store_id, data.rating)
    return {"message": "Rating submitted successfully"}
