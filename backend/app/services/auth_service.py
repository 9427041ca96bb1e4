"""
Authentication service for login and principal resolution.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.config import get_settings
from app.core.access_policy import to_object_id
from app.core.errors import Unauthenticated, translate_store_errors
from app.core.security import create_access_token, verify_password
from app.database.databases import auth_db
from app.models.user import Principal, User
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import UserOutput

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]
        self.settings = get_settings()

    @translate_store_errors
    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Authenticate user and return JWT token.

        Raises:
            Unauthenticated: If the email is unknown or the password is wrong
        """
        user_doc = await self.users_collection.find_one({"email": request.email})

        if not user_doc or not verify_password(request.password, user_doc["hashed_password"]):
            logger.warning(f"Failed login for {request.email}")
            raise Unauthenticated("Invalid email or password")

        user_doc["_id"] = str(user_doc["_id"])
        user = User(**user_doc)

        token = create_access_token(user_id=user.id, role=user.role.value)

        return LoginResponse(
            token=token,
            expires_in=self.settings.jwt_access_token_expire_minutes * 60,
            user=UserOutput(id=user.id, user_name=user.user_name, email=user.email),
        )

    @translate_store_errors
    async def get_principal(self, user_id: str) -> Optional[Principal]:
        """
        Load the principal for a token subject.

        Returns:
            Principal or None if the user no longer exists
        """
        user_doc = await self.users_collection.find_one({"_id": to_object_id(user_id)})

        if not user_doc:
            return None

        return Principal(
            id=str(user_doc["_id"]),
            role=user_doc["role"],
            user_name=user_doc["user_name"],
            email=user_doc["email"],
        )
