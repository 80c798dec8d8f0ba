from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from storerating.core.database import get_db
from storerating.core.errors import InvalidCredentials, NotFound
from storerating.core.security import create_access_token, verify_password
from storerating.core.validators import validate_email
from storerating.routes.users import identity_out
from storerating.services import identity_service


router = APIRouter()


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    address: str


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: dict


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = identity_service.register_user(db, data.name, data.email, data.password, data.address)
    token = create_access_token(user.id, user.role)
    return AuthResponse(token=token, user=identity_out(user))


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    validate_email(data.email)
    try:
        _, record = identity_service.find_by_email(db, data.email)
    except NotFound:
        raise InvalidCredentials() from None
    if not verify_password(data.password, record.hashed_password):
        raise InvalidCredentials()
    token = create_access_token(record.id, record.role)
    return AuthResponse(token=token, user=identity_out(record))
