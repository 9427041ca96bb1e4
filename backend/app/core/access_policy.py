"""
Access policy for principal-scoped operations.

Each helper either raises a registry error or returns the store filter the
operation must use. Ownership is folded into the filter of a single
find-and-modify call, so a wrong id and a wrong owner are indistinguishable
to the caller (both surface as NotFound).
"""
import logging
from typing import Optional

from bson import ObjectId

from app.core.errors import Forbidden, Unauthenticated
from app.models.user import Principal, UserRole

logger = logging.getLogger(__name__)

# Matches no document; used when a client-supplied id is not an ObjectId.
NO_MATCH_ID = ObjectId("000000000000000000000000")


def to_object_id(value: str) -> ObjectId:
    """Parse an id, mapping malformed input to an id that matches nothing."""
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return NO_MATCH_ID


def require_principal(principal: Optional[Principal]) -> Principal:
    """Fail with Unauthenticated when no principal was resolved."""
    if principal is None:
        raise Unauthenticated("No user")
    return principal


def is_admin(principal: Principal) -> bool:
    """Role check over the closed role set."""
    if principal.role == UserRole.ADMIN:
        return True
    if principal.role == UserRole.USER:
        return False
    raise ValueError(f"Unknown role: {principal.role!r}")


def owner_filter(principal: Optional[Principal]) -> dict:
    """Self-scoped read: restrict to records owned by the principal."""
    principal = require_principal(principal)
    return {"owner": to_object_id(principal.id)}


def owner_scoped_filter(principal: Optional[Principal], cat_id: str) -> dict:
    """Owner-scoped mutate: id and owner must both match."""
    principal = require_principal(principal)
    return {"_id": to_object_id(cat_id), "owner": to_object_id(principal.id)}


def admin_scoped_filter(principal: Optional[Principal], cat_id: str) -> dict:
    """Admin-scoped mutate: role gate, no owner constraint."""
    principal = require_principal(principal)
    if not is_admin(principal):
        logger.warning(f"Admin operation denied for user {principal.id}")
        raise Forbidden("Not admin")
    return {"_id": to_object_id(cat_id)}


def self_filter(principal: Optional[Principal]) -> dict:
    """User self mutate/delete: always the principal's own record."""
    principal = require_principal(principal)
    return {"_id": to_object_id(principal.id)}
