"""
Cats router for the pet registry.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.config import Settings, get_settings
from app.database.connections import get_mongo_client
from app.database.databases import auth_db, pets_db
from app.dependencies.auth import OptionalPrincipal
from app.schemas.cat import CatAdminUpdate, CatRecord, CatResponse, CatUpdate
from app.schemas.message import MessageResponse
from app.services.cat_service import CatService
from app.services.upload_service import PhotoUpload

router = APIRouter(prefix="/cats", tags=["Cats"])


async def get_cat_service() -> CatService:
    """Dependency to get CatService instance."""
    client = await get_mongo_client()
    return CatService(client[pets_db.DB_NAME], client[auth_db.DB_NAME])


# ==================== Reads ====================


@router.get(
    "",
    response_model=list[CatResponse],
    summary="List cats",
)
async def list_cats(cat_service: CatService = Depends(get_cat_service)):
    """List all cats with their owners."""
    return await cat_service.list_cats()


@router.get(
    "/area",
    response_model=list[CatResponse],
    summary="List cats in a bounding box",
)
async def list_cats_in_box(
    top_right: Annotated[Optional[str], Query(alias="topRight", description="lng,lat")] = None,
    bottom_left: Annotated[Optional[str], Query(alias="bottomLeft", description="lng,lat")] = None,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    List cats located inside a box.

    **Coordinates are longitude first, then latitude**, e.g.
    `/cats/area?topRight=24.99,60.20&bottomLeft=24.90,60.15`.
    This is the opposite of the lat,lng order most map tools display.

    An inverted or malformed box returns an empty list.
    """
    return await cat_service.list_cats_in_box(top_right, bottom_left)


@router.get(
    "/user",
    response_model=list[CatResponse],
    summary="List my cats",
)
async def list_my_cats(
    principal: OptionalPrincipal,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    List the authenticated user's cats.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await cat_service.list_cats_by_owner(principal)


@router.get(
    "/{cat_id}",
    response_model=CatResponse,
    summary="Get cat",
)
async def get_cat(
    cat_id: str,
    cat_service: CatService = Depends(get_cat_service),
):
    """Get one cat by ID."""
    return await cat_service.get_cat(cat_id)


# ==================== Create ====================


@router.post(
    "",
    response_model=MessageResponse[CatRecord],
    status_code=status.HTTP_201_CREATED,
    summary="Create cat",
)
async def create_cat(
    principal: OptionalPrincipal,
    cat_name: Annotated[Optional[str], Form()] = None,
    weight: Annotated[Optional[str], Form()] = None,
    birthdate: Annotated[Optional[str], Form()] = None,
    lng: Annotated[Optional[float], Form()] = None,
    lat: Annotated[Optional[float], Form()] = None,
    cat: Annotated[Optional[UploadFile], File(description="Cat photo")] = None,
    cat_service: CatService = Depends(get_cat_service),
    settings: Settings = Depends(get_settings),
):
    """
    Create a cat owned by the authenticated user (multipart form).

    - **cat_name**, **weight**, **birthdate** (YYYY-MM-DD): required
    - **cat**: photo file, required
    - **lng**, **lat**: optional location, both or neither; a default is used when omitted

    Requires valid token as query parameter: `?token=xxx`
    """
    photo = PhotoUpload.from_form(cat, lng, lat, settings)
    fields = {
        key: value
        for key, value in {"cat_name": cat_name, "weight": weight, "birthdate": birthdate}.items()
        if value is not None
    }
    return await cat_service.create_cat(principal, fields, photo)


# ==================== Owner mutations ====================


@router.put(
    "/{cat_id}",
    response_model=MessageResponse[CatRecord],
    summary="Update my cat",
)
async def update_cat(
    cat_id: str,
    body: CatUpdate,
    principal: OptionalPrincipal,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    Update a cat owned by the authenticated user. Ownership cannot be changed here.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await cat_service.update_cat(principal, cat_id, body)


@router.delete(
    "/{cat_id}",
    response_model=MessageResponse[CatRecord],
    summary="Delete my cat",
)
async def delete_cat(
    cat_id: str,
    principal: OptionalPrincipal,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    Delete a cat owned by the authenticated user.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await cat_service.delete_cat(principal, cat_id)


# ==================== Admin mutations ====================


@router.put(
    "/admin/{cat_id}",
    response_model=MessageResponse[CatRecord],
    summary="Update any cat (admin)",
)
async def update_cat_as_admin(
    cat_id: str,
    body: CatAdminUpdate,
    principal: OptionalPrincipal,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    Update any cat, including reassigning its owner. Admin only.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await cat_service.update_cat_as_admin(principal, cat_id, body)


@router.delete(
    "/admin/{cat_id}",
    response_model=MessageResponse[CatRecord],
    summary="Delete any cat (admin)",
)
async def delete_cat_as_admin(
    cat_id: str,
    principal: OptionalPrincipal,
    cat_service: CatService = Depends(get_cat_service),
):
    """
    Delete any cat. Admin only.

    Requires valid token as query parameter: `?token=xxx`
    """
    return await cat_service.delete_cat_as_admin(principal, cat_id)
