from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext

from storerating.core.config import settings
from storerating.core.roles import Role


password_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return password_context.verify(password, hashed_password)
    except ValueError:
        # Malformed or foreign hash in the row
        return False


@dataclass(frozen=True)
class TokenClaims:
    subject_id: int
    role: str


def create_access_token(subject_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    payload: dict[str, Any] = {
        "sub": str(subject_id),
        "role": role,
        "type": "access",
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict[str, Any]]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError:
        return None


def decode_access_token(token: str) -> Optional[TokenClaims]:
    """Return the claims of a valid, unexpired access token, else None."""
    payload = decode_token(token)
    if not payload or payload.get("type") != "access":
        return None
    role = payload.get("role")
    if role not in {r.value for r in Role}:
        return None
    try:
        subject_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
    return TokenClaims(subject_id=subject_id, role=role)
