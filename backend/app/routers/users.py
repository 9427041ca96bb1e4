"""
Users router for the user directory.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status

from app.database.connections import get_mongo_client
from app.database.databases import auth_db
from app.dependencies.auth import OptionalPrincipal
from app.schemas.message import MessageResponse
from app.schemas.user import RegisterRequest, UserOutput, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


async def get_user_service() -> UserService:
    """Dependency to get UserService instance."""
    client = await get_mongo_client()
    return UserService(client[auth_db.DB_NAME])


@router.get(
    "",
    response_model=list[UserOutput],
    summary="List users",
)
async def list_users(user_service: UserService = Depends(get_user_service)):
    """List all users. Password hashes and roles are never included."""
    return await user_service.list_users()


@router.post(
    "",
    response_model=MessageResponse[UserOutput],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Register a new user account.

    - **user_name**: Display name (min 3 characters)
    - **email**: Valid email address (must be unique)
    - **password**: Password (min 4 characters)

    New accounts always get the `user` role.
    """
    return await user_service.register_user(body)


@router.put(
    "",
    response_model=MessageResponse[UserOutput],
    summary="Update current user",
)
async def update_current_user(
    body: UserUpdate,
    principal: OptionalPrincipal,
    user_service: UserService = Depends(get_user_service),
):
    """
    Update the authenticated user's own name, email or password.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await user_service.update_current_user(principal, body)


@router.delete(
    "",
    response_model=MessageResponse[UserOutput],
    summary="Delete current user",
)
async def delete_current_user(
    principal: OptionalPrincipal,
    user_service: UserService = Depends(get_user_service),
):
    """
    Delete the authenticated user's own account.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await user_service.delete_current_user(principal)


@router.get(
    "/token",
    response_model=Optional[UserOutput],
    summary="Check session",
)
async def check_session(principal: OptionalPrincipal):
    """
    Return the user the token belongs to, or null when no token was sent.
    """
    return UserService.check_session(principal)


@router.get(
    "/{user_id}",
    response_model=UserOutput,
    summary="Get user",
)
async def get_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
):
    """Get one user by ID."""
    return await user_service.get_user(user_id)
