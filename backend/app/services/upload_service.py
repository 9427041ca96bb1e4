"""
Upload handling for cat photos and location resolution.

A create form is checked first and the photo is written only once the whole
request has passed validation, so a rejected form leaves nothing in
upload_dir.
"""
import logging
from pathlib import Path
from typing import Optional
from uuid import uuid4

from fastapi import UploadFile
from pydantic import ValidationError

from app.config import Settings
from app.models.location import GeoPoint
from app.schemas.cat import CatUpload

logger = logging.getLogger(__name__)


def is_image(file: UploadFile) -> bool:
    return (file.content_type or "").startswith("image/")


async def save_upload(file: UploadFile, upload_dir: str) -> str:
    """
    Store an uploaded file under upload_dir with a generated name.

    Returns:
        The stored filename (no directory part)
    """
    suffix = Path(file.filename or "").suffix.lower()
    filename = f"{uuid4().hex}{suffix}"

    target_dir = Path(upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / filename).write_bytes(await file.read())

    logger.info(f"Stored upload {file.filename!r} as {filename}")
    return filename


def resolve_location(
    lng: Optional[float], lat: Optional[float], settings: Settings
) -> tuple[Optional[GeoPoint], list[dict]]:
    """
    Build the cat location from the form coordinates.

    No coordinates means the configured default. A single coordinate or an
    out-of-range pair is an error.

    Returns:
        (location, errors) where location is None when errors is not empty
    """
    if lng is None and lat is None:
        return GeoPoint.from_lng_lat(settings.default_lng, settings.default_lat), []
    if lng is None or lat is None:
        missing = "lng" if lng is None else "lat"
        return None, [{"loc": (missing,), "msg": f"{missing} is required"}]

    try:
        return GeoPoint.from_lng_lat(lng, lat), []
    except ValidationError as e:
        return None, [{"loc": ("location",), "msg": error["msg"]} for error in e.errors()]


class PhotoUpload:
    """
    Photo and location from a create form, checked but not yet stored.

    `errors` holds pydantic-style error dicts so they can be reported
    together with the other field errors.
    """

    def __init__(
        self,
        file: Optional[UploadFile],
        location: Optional[GeoPoint],
        upload_dir: str,
        errors: Optional[list[dict]] = None,
    ):
        self.file = file
        self.location = location
        self.upload_dir = upload_dir
        self.errors = errors or []
        self.filename: Optional[str] = None

    @classmethod
    def from_form(
        cls,
        file: Optional[UploadFile],
        lng: Optional[float],
        lat: Optional[float],
        settings: Settings,
    ) -> "PhotoUpload":
        errors = []
        if file is None:
            errors.append({"loc": ("cat",), "msg": "Photo is required"})
        elif not is_image(file):
            errors.append({"loc": ("cat",), "msg": "Only images are allowed"})

        location, location_errors = resolve_location(lng, lat, settings)
        errors.extend(location_errors)

        return cls(file, location, settings.upload_dir, errors)

    async def save(self) -> CatUpload:
        """Write the photo to disk. Only valid once `errors` is empty."""
        self.filename = await save_upload(self.file, self.upload_dir)
        return CatUpload(filename=self.filename, location=self.location)

    def discard(self) -> None:
        """Remove the stored photo, if any."""
        if self.filename is None:
            return
        (Path(self.upload_dir) / self.filename).unlink(missing_ok=True)
        logger.info(f"Removed upload {self.filename}")
        self.filename = None
