# routers/inspections.py
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from azure_blob import ObjectStore
from database import get_session
from dependencies import CurrentUser, get_current_user, get_object_store
from routers.media import to_incoming
from schemas.common import ApiListResponse, ApiResponse
from schemas.inspection import InspectionCreate, InspectionFilter, InspectionResponse
from services.inspection_service import InspectionService
from services.media_service import validate_file

router = APIRouter(prefix="/api/inspections", tags=["inspections"])


@router.post(
     "",
     response_model=ApiResponse[InspectionResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Record an inspection"
)
def create_inspection(
     body: InspectionCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     inspection = InspectionService.create(db, current_user.id, body)
     return ApiResponse(data=InspectionResponse.model_validate(inspection))


@router.get("", response_model=ApiListResponse[InspectionResponse], summary="List inspections")
def list_inspections(
     filters: Annotated[InspectionFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     inspections = InspectionService.list_mine(db, current_user.id, filters)
     return ApiListResponse(
          count=len(inspections),
          data=[InspectionResponse.model_validate(i) for i in inspections]
     )


@router.get("/{inspection_id}", response_model=ApiResponse[InspectionResponse], summary="Get an inspection")
def get_inspection(
     inspection_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     inspection = InspectionService.get(db, current_user.id, inspection_id)
     return ApiResponse(data=InspectionResponse.model_validate(inspection))


@router.post(
     "/{inspection_id}/photos",
     response_model=ApiResponse[InspectionResponse],
     summary="Upload an inspection photo"
)
def add_inspection_photo(
     inspection_id: int,
     file: UploadFile = File(...),
     room: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user),
     store: ObjectStore = Depends(get_object_store)
):
     """**room** defaults to "general"."""
     incoming = to_incoming(file)
     validate_file(incoming)
     inspection = InspectionService.add_photo(
          db, store, current_user.id, inspection_id,
          incoming.data, incoming.filename, incoming.content_type,
          room=room, description=description,
     )
     return ApiResponse(data=InspectionResponse.model_validate(inspection))
