from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.deps import get_current_claims
from storerating.core.roles import Population, population_for
from storerating.core.security import TokenClaims
from storerating.services import query_service


router = APIRouter()


class StoreListingOut(BaseModel):
    store_id: int
    name: str
    address: str
    average_rating: float
    viewer_rating: Optional[int] = None


@router.get("", response_model=List[StoreListingOut])
def list_stores(
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query("name", alias="sortBy"),
    sort_order: Optional[str] = Query("asc", alias="sortOrder"),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    # Store-owner subject ids are store ids and cannot have rated anything
    viewer_id = claims.subject_id if population_for(claims.role) == Population.users else None
    return query_service.list_stores_for_viewer(db, viewer_id, search, sort_by, sort_order)
