"""
Dependencies for dependency injection in routes.
"""
from app.dependencies.auth import get_auth_service, get_optional_principal, OptionalPrincipal

__all__ = [
    "get_auth_service",
    "get_optional_principal",
    "OptionalPrincipal",
]
