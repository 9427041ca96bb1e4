"""
Cat registry service.

Mutations combine the id and the access-policy predicate into one
find-and-modify call, so there is no read-then-write window.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.core.access_policy import (
    admin_scoped_filter,
    owner_filter,
    owner_scoped_filter,
    require_principal,
    to_object_id,
)
from app.core.errors import (
    NotFound,
    ValidationFailed,
    format_validation_errors,
    translate_store_errors,
)
from app.database.databases import auth_db, pets_db
from app.models.user import Principal
from app.schemas.cat import (
    CatAdminUpdate,
    CatCreate,
    CatRecord,
    CatResponse,
    CatUpdate,
)
from app.schemas.message import MessageResponse
from app.services.upload_service import PhotoUpload
from app.services.user_service import PUBLIC_PROJECTION, user_to_output

logger = logging.getLogger(__name__)


def parse_corner(value: Optional[str]) -> Optional[tuple[float, float]]:
    """Parse a "lng,lat" string. Returns None when it is not two numbers."""
    try:
        lng, lat = (float(part) for part in value.split(","))
    except (AttributeError, ValueError):
        return None
    return lng, lat


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _to_datetime(value: date) -> datetime:
    # BSON has no date type; store midnight UTC
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


class CatService:
    """Service for cat registry operations."""

    def __init__(self, db: AsyncIOMotorDatabase, auth_db_instance: AsyncIOMotorDatabase):
        """Initialize with pets database and the auth database for owner lookups."""
        self.db = db
        self.cats = db[pets_db.Collections.CATS]
        self.users = auth_db_instance[auth_db.Collections.USERS]

    # ==================== Reads ====================

    @translate_store_errors
    async def list_cats(self) -> list[CatResponse]:
        """List every cat with its owner expanded."""
        cats = await self.cats.find({}).to_list(length=None)
        return await self._with_owners(cats)

    @translate_store_errors
    async def list_cats_by_owner(self, principal: Optional[Principal]) -> list[CatResponse]:
        """List the calling user's cats. An empty list is not an error."""
        query = owner_filter(principal)
        cats = await self.cats.find(query).to_list(length=None)
        return await self._with_owners(cats)

    @translate_store_errors
    async def get_cat(self, cat_id: str) -> CatResponse:
        """Get one cat by ID with its owner expanded."""
        cat_doc = await self.cats.find_one({"_id": to_object_id(cat_id)})
        if not cat_doc:
            raise NotFound("No cat found")
        return (await self._with_owners([cat_doc]))[0]

    @translate_store_errors
    async def list_cats_in_box(
        self, top_right: Optional[str], bottom_left: Optional[str]
    ) -> list[CatResponse]:
        """
        List cats whose location lies inside a bounding box.

        Both corners are "lng,lat" strings: LONGITUDE FIRST, then latitude,
        which is the reverse of what most map UIs show. Bounds are inclusive.
        The box is not validated: an inverted box (top_right below or left of
        bottom_left) or an unparsable corner simply matches nothing.
        """
        right = parse_corner(top_right)
        left = parse_corner(bottom_left)
        if right is None or left is None:
            logger.debug(f"Unparsable bounding box {top_right!r} / {bottom_left!r}")
            return []

        query = {
            "location.coordinates.0": {"$gte": left[0], "$lte": right[0]},
            "location.coordinates.1": {"$gte": left[1], "$lte": right[1]},
        }
        cats = await self.cats.find(query).to_list(length=None)
        return await self._with_owners(cats)

    # ==================== Create ====================

    @translate_store_errors
    async def create_cat(
        self,
        principal: Optional[Principal],
        fields: dict[str, Any],
        photo: Optional[PhotoUpload],
    ) -> MessageResponse[CatRecord]:
        """
        Create a cat owned by the calling user.

        The photo is written only after every field has validated, and is
        removed again if the insert fails.

        Args:
            principal: The caller, who becomes the owner
            fields: Raw input values (cat_name, weight, birthdate), usually form text
            photo: Checked photo and location from the upload collaborator

        Raises:
            Unauthenticated: If no principal is given
            ValidationFailed: With every field, photo and location error joined into one message
        """
        principal = require_principal(principal)

        errors = []
        try:
            request = CatCreate.model_validate(fields)
        except ValidationError as e:
            errors.extend(e.errors())
            request = None
        if photo is None:
            errors.append({"loc": ("cat",), "msg": "Photo is required"})
        else:
            errors.extend(photo.errors)
        if errors:
            raise ValidationFailed(format_validation_errors(errors))

        upload = await photo.save()
        cat_doc = {
            "cat_name": request.cat_name,
            "weight": request.weight,
            "owner": to_object_id(principal.id),
            "filename": upload.filename,
            "birthdate": _to_datetime(request.birthdate),
            "location": upload.location.model_dump(),
        }

        try:
            result = await self.cats.insert_one(cat_doc)
        except PyMongoError:
            photo.discard()
            raise
        cat_doc["_id"] = result.inserted_id
        logger.info(f"Cat {result.inserted_id} added by user {principal.id}")

        return MessageResponse[CatRecord](message="Cat added", data=self._doc_to_record(cat_doc))

    # ==================== Owner mutations ====================

    @translate_store_errors
    async def update_cat(
        self, principal: Optional[Principal], cat_id: str, request: CatUpdate
    ) -> MessageResponse[CatRecord]:
        """Update a cat the caller owns. Mismatched id or owner is NotFound."""
        query = owner_scoped_filter(principal, cat_id)
        update_data = self._update_fields(request)

        cat_doc = await self._find_and_set(query, update_data)
        if not cat_doc:
            raise NotFound("Cat not found")

        logger.info(f"Cat {cat_id} modified by owner {principal.id}")
        return MessageResponse[CatRecord](message="Cat modified by owner", data=self._doc_to_record(cat_doc))

    @translate_store_errors
    async def delete_cat(self, principal: Optional[Principal], cat_id: str) -> MessageResponse[CatRecord]:
        """Delete a cat the caller owns and return its snapshot."""
        query = owner_scoped_filter(principal, cat_id)

        cat_doc = await self.cats.find_one_and_delete(query)
        if not cat_doc:
            raise NotFound("Cat not found")

        logger.info(f"Cat {cat_id} deleted by owner {principal.id}")
        return MessageResponse[CatRecord](message="Cat deleted by owner", data=self._doc_to_record(cat_doc))

    # ==================== Admin mutations ====================

    @translate_store_errors
    async def update_cat_as_admin(
        self, principal: Optional[Principal], cat_id: str, request: CatAdminUpdate
    ) -> MessageResponse[CatRecord]:
        """
        Update any cat, including its owner.

        Raises:
            Unauthenticated: If no principal is given
            Forbidden: If the caller is not an admin
            ValidationFailed: If the new owner does not exist
            NotFound: If no cat has this ID
        """
        query = admin_scoped_filter(principal, cat_id)
        update_data = self._update_fields(request)

        if "owner" in update_data:
            owner_id = to_object_id(update_data["owner"])
            if not await self.users.find_one({"_id": owner_id}, {"_id": 1}):
                raise ValidationFailed("Owner not found: owner")
            update_data["owner"] = owner_id

        cat_doc = await self._find_and_set(query, update_data)
        if not cat_doc:
            raise NotFound("Cat not found")

        logger.info(f"Cat {cat_id} modified by admin {principal.id}")
        return MessageResponse[CatRecord](message="Cat modified by admin", data=self._doc_to_record(cat_doc))

    @translate_store_errors
    async def delete_cat_as_admin(self, principal: Optional[Principal], cat_id: str) -> MessageResponse[CatRecord]:
        """Delete any cat and return its snapshot."""
        query = admin_scoped_filter(principal, cat_id)

        cat_doc = await self.cats.find_one_and_delete(query)
        if not cat_doc:
            raise NotFound("Cat not found")

        logger.info(f"Cat {cat_id} deleted by admin {principal.id}")
        return MessageResponse[CatRecord](message="Cat deleted by admin", data=self._doc_to_record(cat_doc))

    # ==================== Helpers ====================

    async def _find_and_set(self, query: dict, update_data: dict) -> Optional[dict]:
        if not update_data:
            return await self.cats.find_one(query)
        return await self.cats.find_one_and_update(
            query,
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )

    @staticmethod
    def _update_fields(request: CatUpdate) -> dict:
        update_data = request.model_dump(exclude_none=True)
        if "birthdate" in update_data:
            update_data["birthdate"] = _to_datetime(update_data["birthdate"])
        return update_data

    async def _with_owners(self, cat_docs: list[dict]) -> list[CatResponse]:
        """Expand owner IDs to the public user projection in one query."""
        owner_ids = list({doc["owner"] for doc in cat_docs})
        owners = {}
        if owner_ids:
            cursor = self.users.find({"_id": {"$in": owner_ids}}, PUBLIC_PROJECTION)
            for user_doc in await cursor.to_list(length=None):
                owners[user_doc["_id"]] = user_to_output(user_doc)

        return [
            CatResponse(
                id=str(doc["_id"]),
                cat_name=doc["cat_name"],
                weight=doc["weight"],
                owner=owners.get(doc["owner"]),
                filename=doc["filename"],
                birthdate=_to_date(doc["birthdate"]),
                location=doc["location"],
            )
            for doc in cat_docs
        ]

    @staticmethod
    def _doc_to_record(doc: dict) -> CatRecord:
        return CatRecord(
            id=str(doc["_id"]),
            cat_name=doc["cat_name"],
            weight=doc["weight"],
            owner=str(doc["owner"]),
            filename=doc["filename"],
            birthdate=_to_date(doc["birthdate"]),
            location=doc["location"],
        )
