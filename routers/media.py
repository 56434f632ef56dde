# routers/media.py
"""
Media API routes: upload to object storage and delete by public id.
"""
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from azure_blob import ObjectStore
from database import get_session
from dependencies import CurrentUser, get_current_user, get_object_store
from models.document import DocumentType
from schemas.common import ApiResponse
from schemas.media import DeletedFile, DeleteResponse, UploadedFile, UploadManyResult, UploadOptions
from services.media_service import IncomingFile, MediaService

router = APIRouter(prefix="/api/media", tags=["media"])


def upload_options(
     type: Optional[DocumentType] = Form(None),
     category: Optional[str] = Form(None),
     related_model: Optional[str] = Form(None),
     related_id: Optional[int] = Form(None),
     save_to_documents: bool = Form(False),
) -> UploadOptions:
     return UploadOptions(
          type=type,
          category=category or None,
          related_model=related_model or None,
          related_id=related_id,
          save_to_documents=save_to_documents,
     )


def to_incoming(file: UploadFile) -> IncomingFile:
     size = file.size
     if size is None:
          file.file.seek(0, os.SEEK_END)
          size = file.file.tell()
          file.file.seek(0)
     return IncomingFile(
          filename=file.filename or "upload",
          content_type=file.content_type,
          size=size,
          data=file.file,
     )


@router.post("/upload", response_model=ApiResponse[UploadedFile], summary="Upload one file")
def upload_file(
     file: UploadFile = File(...),
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user),
     store: ObjectStore = Depends(get_object_store),
     options: UploadOptions = Depends(upload_options)
):
     """
     Upload a single image, video or PDF (10 MB max).

     - **type** / **category**: choose the storage folder
     - **save_to_documents**: also record a Document entry
     """
     results = MediaService.upload(db, store, current_user.id, [to_incoming(file)], options)
     return ApiResponse(data=UploadedFile.model_validate(results[0], from_attributes=True))


@router.post("/upload-multiple", response_model=ApiResponse[UploadManyResult], summary="Upload up to 10 files")
def upload_files(
     files: List[UploadFile] = File(...),
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user),
     store: ObjectStore = Depends(get_object_store),
     options: UploadOptions = Depends(upload_options)
):
     results = MediaService.upload(db, store, current_user.id, [to_incoming(f) for f in files], options)
     return ApiResponse(data=UploadManyResult(
          files=[UploadedFile.model_validate(r, from_attributes=True) for r in results]
     ))


@router.delete("/delete/{public_id:path}", response_model=DeleteResponse, summary="Delete a stored file")
def delete_file(
     public_id: str,
     delete_from_documents: bool = Query(False),
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user),
     store: ObjectStore = Depends(get_object_store)
):
     """
     Delete a file by its public id. With **delete_from_documents=true** the
     caller's Document entry for the file is removed as well.
     """
     data = MediaService.delete(db, store, current_user.id, public_id, delete_from_documents)
     message = "File and document deleted successfully" if delete_from_documents else "File deleted successfully"
     return DeleteResponse(message=message, data=DeletedFile(**data))
