# routers/properties.py
"""
Property API routes. Only the owner can see or change a property; other
users get 404.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from azure_blob import ObjectStore
from database import get_session
from dependencies import CurrentUser, get_current_user, get_object_store, require_roles
from models.property import MediaType
from routers.media import to_incoming
from schemas.common import ApiListResponse, ApiResponse, MessageResponse
from schemas.property import PropertyCreate, PropertyFilter, PropertyResponse, PropertyUpdate
from services.media_service import validate_file
from services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.post(
     "",
     response_model=ApiResponse[PropertyResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a property listing"
)
def create_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(require_roles("landlord"))
):
     """Landlords only. The caller becomes the owner."""
     prop = PropertyService.create(db, current_user.id, body)
     return ApiResponse(data=PropertyResponse.model_validate(prop))


@router.get("", response_model=ApiListResponse[PropertyResponse], summary="List my properties")
def list_properties(
     filters: Annotated[PropertyFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """
     Filters:
     - **status**: vacant, occupied or maintenance
     - **city**: exact city match
     - **bhk**: 1RK, 1BHK, 2BHK, 3BHK or 4BHK+
     """
     props = PropertyService.list_mine(db, current_user.id, filters)
     return ApiListResponse(count=len(props), data=[PropertyResponse.model_validate(p) for p in props])


@router.get("/{property_id}", response_model=ApiResponse[PropertyResponse], summary="Get a property")
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     prop = PropertyService.get(db, current_user.id, property_id)
     return ApiResponse(data=PropertyResponse.model_validate(prop))


@router.put("/{property_id}", response_model=ApiResponse[PropertyResponse], summary="Update a property")
def update_property(
     property_id: int,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     prop = PropertyService.update(db, current_user.id, property_id, body)
     return ApiResponse(data=PropertyResponse.model_validate(prop))


@router.delete("/{property_id}", response_model=MessageResponse, summary="Delete a property")
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     PropertyService.delete(db, current_user.id, property_id)
     return MessageResponse(message="Property deleted successfully")


@router.post(
     "/{property_id}/media",
     response_model=ApiResponse[PropertyResponse],
     summary="Upload a photo or video for a property"
)
def add_property_media(
     property_id: int,
     file: UploadFile = File(...),
     type: MediaType = Form(MediaType.IMAGE),
     caption: Optional[str] = Form(None),
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user),
     store: ObjectStore = Depends(get_object_store)
):
     incoming = to_incoming(file)
     validate_file(incoming)
     prop = PropertyService.add_media(
          db, store, current_user.id, property_id,
          incoming.data, incoming.filename, incoming.content_type,
          media_type=type.value, caption=caption,
     )
     return ApiResponse(data=PropertyResponse.model_validate(prop))
