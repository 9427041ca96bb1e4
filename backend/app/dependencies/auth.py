"""
Authentication dependencies for route protection.

The principal is optional at this layer: principal-scoped services receive
None for anonymous requests and reject them themselves.
"""
from typing import Annotated, Optional

from fastapi import Depends, Query
from jose import JWTError

from app.core.errors import Unauthenticated
from app.core.security import decode_token
from app.database.connections import get_mongo_client
from app.database.databases import auth_db
from app.models.user import Principal
from app.services.auth_service import AuthService


async def get_auth_service() -> AuthService:
    """Dependency to get AuthService instance."""
    client = await get_mongo_client()
    db = client[auth_db.DB_NAME]
    return AuthService(db)


async def get_optional_principal(
    token: Annotated[Optional[str], Query(description="JWT access token")] = None,
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[Principal]:
    """
    Resolve the caller from the JWT token, if one was sent.

    Token is passed as query parameter: ?token=xxx

    Raises:
        Unauthenticated: If a token was sent but is invalid, expired, or
            names a user that no longer exists
    """
    if not token:
        return None

    try:
        payload = decode_token(token)
    except JWTError:
        raise Unauthenticated("Could not validate credentials")

    user_id = payload.get("sub")
    if user_id is None:
        raise Unauthenticated("Could not validate credentials")

    principal = await auth_service.get_principal(user_id)
    if principal is None:
        raise Unauthenticated("Could not validate credentials")

    return principal


# Type alias for cleaner route signatures
OptionalPrincipal = Annotated[Optional[Principal], Depends(get_optional_principal)]
