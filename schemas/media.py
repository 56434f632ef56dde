# schemas/media.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from models.document import DocumentType
from .common import MessageResponse


class UploadOptions(BaseModel):
     """Form fields accepted alongside uploaded files."""
     type: Optional[DocumentType] = None
     category: Optional[str] = None
     related_model: Optional[str] = None
     related_id: Optional[int] = None
     save_to_documents: bool = False


class DocumentResponse(BaseModel):
     id: int
     uploaded_by_id: int
     name: str
     type: str
     category: Optional[str] = None
     storage_url: str
     storage_public_id: str
     file_size: Optional[int] = None
     mime_type: Optional[str] = None
     related_model: Optional[str] = None
     related_id: Optional[int] = None
     status: str
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class UploadedFile(BaseModel):
     url: str
     public_id: str
     name: str
     size: int
     mime_type: str
     document: Optional[DocumentResponse] = None


class UploadManyResult(BaseModel):
     files: List[UploadedFile]


class DeletedFile(BaseModel):
     public_id: str
     document_id: Optional[int] = None


class DeleteResponse(MessageResponse):
     data: DeletedFile
