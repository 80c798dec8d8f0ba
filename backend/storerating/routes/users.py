from datetime import datetime
from typing import Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.deps import get_current_claims, require_normal_user
from storerating.core.security import TokenClaims
from storerating.models.store import Store
from storerating.models.user import User
from storerating.services import identity_service, promotion_service


router = APIRouter()


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: str
    claim_status: str
    created_at: datetime

    class Config:
        from_attributes = True


class StoreOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class ClaimResponse(BaseModel):
    message: str
    claim_status: str


def identity_out(record: Union[User, Store]) -> dict:
    """Public projection of either population; never includes the hash."""
    schema = UserOut if isinstance(record, User) else StoreOut
    return schema.model_validate(record).model_dump(mode="json")


@router.get("/profile")
def get_profile(db: Session = Depends(get_db), claims: TokenClaims = Depends(get_current_claims)):
    record = identity_service.get_profile(db, claims.subject_id, claims.role)
    return identity_out(record)


@router.post("/claim-store-owner", response_model=ClaimResponse)
def claim_store_owner(db: Session = Depends(get_db), claims: TokenClaims = Depends(require_normal_user)):
    user = promotion_service.claim(db, claims.subject_id)
    return ClaimResponse(
        message="Your request to become a store owner has been submitted for admin review.",
        claim_status=user.claim_status,
    )
