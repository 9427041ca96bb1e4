"""
User directory service.

Every read path goes through PUBLIC_PROJECTION, so the password hash and
role never leave the store.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.access_policy import self_filter, to_object_id
from app.core.errors import NotFound, ValidationFailed, translate_store_errors
from app.core.security import hash_password
from app.database.databases import auth_db
from app.models.user import Principal, UserRole
from app.schemas.message import MessageResponse
from app.schemas.user import RegisterRequest, UserOutput, UserUpdate

logger = logging.getLogger(__name__)

PUBLIC_PROJECTION = {"user_name": 1, "email": 1}


def user_to_output(user_doc: dict) -> UserOutput:
    """Project a user document to its public fields."""
    return UserOutput(
        id=str(user_doc["_id"]),
        user_name=user_doc["user_name"],
        email=user_doc["email"],
    )


class UserService:
    """Service for user directory operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users = db[auth_db.Collections.USERS]

    @translate_store_errors
    async def list_users(self) -> list[UserOutput]:
        """List all users, redacted."""
        cursor = self.users.find({}, PUBLIC_PROJECTION)
        users = await cursor.to_list(length=None)
        return [user_to_output(u) for u in users]

    @translate_store_errors
    async def get_user(self, user_id: str) -> UserOutput:
        """Get one user by ID, redacted."""
        user_doc = await self.users.find_one({"_id": to_object_id(user_id)}, PUBLIC_PROJECTION)
        if not user_doc:
            raise NotFound("No user found")
        return user_to_output(user_doc)

    @translate_store_errors
    async def register_user(self, request: RegisterRequest) -> MessageResponse[UserOutput]:
        """
        Register a new user.

        The role is always "user"; a role sent by the client never reaches
        the store. The password is hashed before insert.

        Raises:
            ValidationFailed: If the email is already registered
        """
        existing = await self.users.find_one({"email": request.email})
        if existing:
            raise ValidationFailed("Email already registered: email")

        user_doc = {
            "user_name": request.user_name,
            "email": request.email,
            "hashed_password": hash_password(request.password),
            "role": UserRole.USER.value,
        }

        try:
            result = await self.users.insert_one(user_doc)
        except DuplicateKeyError:
            raise ValidationFailed("Email already registered: email")

        user_doc["_id"] = result.inserted_id
        logger.info(f"User {result.inserted_id} registered")

        return MessageResponse[UserOutput](message="User added", data=user_to_output(user_doc))

    @translate_store_errors
    async def update_current_user(
        self, principal: Optional[Principal], request: UserUpdate
    ) -> MessageResponse[UserOutput]:
        """
        Update the calling user's own record.

        Raises:
            Unauthenticated: If no principal is given
            ValidationFailed: If the new email is taken
            NotFound: If the user no longer exists
        """
        query = self_filter(principal)
        update_data = request.model_dump(exclude_none=True)

        if "email" in update_data:
            taken = await self.users.find_one(
                {"email": update_data["email"], "_id": {"$ne": query["_id"]}}, {"_id": 1}
            )
            if taken:
                raise ValidationFailed("Email already registered: email")

        if "password" in update_data:
            update_data["hashed_password"] = hash_password(update_data.pop("password"))

        if not update_data:
            user_doc = await self.users.find_one(query, PUBLIC_PROJECTION)
        else:
            try:
                user_doc = await self.users.find_one_and_update(
                    query,
                    {"$set": update_data},
                    projection=PUBLIC_PROJECTION,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError:
                raise ValidationFailed("Email already registered: email")

        if not user_doc:
            raise NotFound("No user found")

        logger.info(f"User {principal.id} updated fields {sorted(update_data)}")
        return MessageResponse[UserOutput](message="User updated", data=user_to_output(user_doc))

    @translate_store_errors
    async def delete_current_user(self, principal: Optional[Principal]) -> MessageResponse[UserOutput]:
        """Delete the calling user's own record and return its snapshot."""
        query = self_filter(principal)

        user_doc = await self.users.find_one_and_delete(query, projection=PUBLIC_PROJECTION)
        if not user_doc:
            raise NotFound("No user found")

        logger.info(f"User {principal.id} deleted")
        return MessageResponse[UserOutput](message="User deleted", data=user_to_output(user_doc))

    @staticmethod
    def check_session(principal: Optional[Principal]) -> Optional[UserOutput]:
        """Project the resolved principal. No store access."""
        if principal is None:
            return None
        return UserOutput(id=principal.id, user_name=principal.user_name, email=principal.email)
