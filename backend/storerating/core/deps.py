from typing import Callable, Optional

from fastapi import Depends, Header

from storerating.core.errors import AuthInvalid, AuthMissing, Forbidden
from storerating.core.roles import Role
from storerating.core.security import TokenClaims, decode_access_token


def get_current_claims(authorization: Optional[str] = Header(None)) -> TokenClaims:
    """Authenticate the bearer token. Role is taken from the token, not the database."""
    if not authorization:
        raise AuthMissing()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthMissing()
    claims = decode_access_token(token)
    if claims is None:
        raise AuthInvalid()
    return claims


def require_roles(*roles: Role) -> Callable[..., TokenClaims]:
    allowed = {r.value for r in roles}

    def dependency(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in allowed:
            raise Forbidden()
        return claims

    return dependency


require_admin = require_roles(Role.admin)
require_normal_user = require_roles(Role.normal_user)
require_store_owner = require_roles(Role.store_owner)
