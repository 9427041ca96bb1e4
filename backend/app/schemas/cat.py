"""
Cat request/response schemas.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.models.location import GeoPoint
from app.schemas.user import UserOutput


class CatCreate(BaseModel):
    """
    Create cat input. Values arrive as form text; weight and birthdate are
    coerced from strings.
    """
    cat_name: str = Field(..., min_length=1, description="Cat name")
    weight: float = Field(..., gt=0, description="Weight in kilograms")
    birthdate: date = Field(..., description="Date of birth (YYYY-MM-DD)")


class CatUpload(BaseModel):
    """Values resolved by the upload collaborator before creation."""
    filename: str = Field(..., min_length=1, description="Stored photo filename")
    location: GeoPoint = Field(..., description="Resolved location")


class CatUpdate(BaseModel):
    """Owner update request. The owner field cannot be changed here."""
    cat_name: Optional[str] = Field(None, min_length=1, description="Cat name")
    weight: Optional[float] = Field(None, gt=0, description="Weight in kilograms")
    birthdate: Optional[date] = Field(None, description="Date of birth")
    filename: Optional[str] = Field(None, min_length=1, description="Photo filename")
    location: Optional[GeoPoint] = Field(None, description="Location")


class CatAdminUpdate(CatUpdate):
    """Admin update request. May reassign ownership."""
    owner: Optional[str] = Field(None, description="New owner user ID")


class CatRecord(BaseModel):
    """Cat as stored, with the owner as a plain ID. Used in mutation results."""
    id: str = Field(..., description="Cat ID")
    cat_name: str
    weight: float
    owner: str = Field(..., description="Owner user ID")
    filename: str
    birthdate: date
    location: GeoPoint


class CatResponse(BaseModel):
    """Cat with the owner expanded to its public projection."""
    id: str = Field(..., description="Cat ID")
    cat_name: str
    weight: float
    owner: Optional[UserOutput] = Field(None, description="Owner, or null if the user no longer exists")
    filename: str
    birthdate: date
    location: GeoPoint
