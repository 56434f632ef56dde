# services/media_service.py
"""
Media Service - pass-through uploads to object storage.

Files go to rentfit/{type}[/{category}] (or rentfit/users/{user_id} when no
type is given). With save_to_documents a Document row records the upload.
A batch is all or nothing: if any file fails, the files already stored
are removed and no Document rows are kept.

A file can be deleted by its uploader, by the owner of the property it
belongs to or by a party to the inspection it belongs to. Plain uploads
without a record can only be deleted from the caller's own folder.

Deleting with delete_from_documents removes the stored file first and the
Document row second. The two steps are not transactional: if the row
delete fails the error is logged with both ids and returned as a 500. A
file that is already gone counts as deleted, so the call can be retried.
"""
import logging
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from azure_blob import ObjectStore
from config import get_settings
from models import Agreement, Document, Inspection, InspectionPhoto, Property, PropertyMedia
from models.document import DocumentStatus, DocumentType
from schemas.media import UploadOptions
from services.access import agreement_participant, document_uploader, owned_property
from utils.errors import InternalError, NotFound, UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)

settings = get_settings()

ALLOWED_MIME_TYPES = {
     "image/jpeg",
     "image/jpg",
     "image/png",
     "image/gif",
     "image/webp",
     "video/mp4",
     "video/quicktime",
     "application/pdf",
}


@dataclass
class IncomingFile:
     filename: str
     content_type: Optional[str]
     size: int
     data: BinaryIO


def validate_file(file: IncomingFile) -> None:
     if file.content_type not in ALLOWED_MIME_TYPES:
          raise ValidationError(
               "Invalid file type. Only images, videos and PDFs are allowed",
               details=[{"field": file.filename, "message": f"Unsupported type {file.content_type}"}],
          )
     if file.size > settings.max_upload_bytes:
          raise ValidationError(
               "File too large",
               details=[{"field": file.filename, "message": f"Maximum size is {settings.max_upload_bytes} bytes"}],
          )


def upload_folder(user_id: int, doc_type: Optional[str], category: Optional[str]) -> str:
     if not doc_type:
          return f"rentfit/users/{user_id}"
     folder = f"rentfit/{doc_type}"
     if category:
          folder = f"{folder}/{category.strip('/')}"
     return folder


def _may_delete(db: Session, user_id: int, public_id: str) -> bool:
     """
     True if `public_id` is the caller's: under their own upload folder or
     attached to a record they can see, and not attached to anyone else's.
     """
     owned = public_id.startswith(f"{upload_folder(user_id, None, None)}/")

     for doc in db.query(Document).filter(Document.storage_public_id == public_id).all():
          if doc.uploaded_by_id != user_id:
               return False
          owned = True

     media = db.query(PropertyMedia).filter(PropertyMedia.public_id == public_id).first()
     if media:
          if not (
               db.query(Property.id)
               .filter(Property.id == media.property_id, owned_property(user_id))
               .first()
          ):
               return False
          owned = True

     photo = db.query(InspectionPhoto).filter(InspectionPhoto.public_id == public_id).first()
     if photo:
          if not (
               db.query(Inspection.id)
               .join(Agreement, Inspection.agreement_id == Agreement.id)
               .filter(Inspection.id == photo.inspection_id, agreement_participant(user_id))
               .first()
          ):
               return False
          owned = True

     return owned


def _discard_uploads(store: ObjectStore, user_id: int, public_ids: List[str]) -> None:
     """Remove files stored before a batch failed."""
     for public_id in public_ids:
          try:
               store.delete(public_id)
          except UpstreamFailure:
               logger.error("Orphaned file left in storage", extra={"user_id": user_id, "public_id": public_id})
          else:
               logger.warning("Partial upload removed", extra={"user_id": user_id, "public_id": public_id})


class MediaService:

     @staticmethod
     def upload(
          db: Session,
          store: ObjectStore,
          user_id: int,
          files: List[IncomingFile],
          options: UploadOptions,
     ) -> List[dict]:
          """
          Upload every file, then record Documents if asked. A failure part way
          through removes the files already stored and records nothing.
          """
          if not files:
               raise ValidationError("No file uploaded")
          if len(files) > settings.max_upload_files:
               raise ValidationError(f"At most {settings.max_upload_files} files per request")
          for f in files:
               validate_file(f)

          doc_type = options.type.value if options.type else None
          folder = upload_folder(user_id, doc_type, options.category)

          stored_files = []
          try:
               for f in files:
                    stored_files.append((f, store.upload(f.data, f.filename, folder, f.content_type)))
          except UpstreamFailure:
               stored_ids = [stored.public_id for _, stored in stored_files]
               logger.error(
                    "Upload batch failed after %d of %d files", len(stored_ids), len(files),
                    extra={"user_id": user_id},
               )
               _discard_uploads(store, user_id, stored_ids)
               raise

          documents = []
          if options.save_to_documents:
               for f, stored in stored_files:
                    document = Document(
                         uploaded_by_id=user_id,
                         name=f.filename,
                         type=doc_type or DocumentType.OTHER.value,
                         category=options.category,
                         storage_url=stored.url,
                         storage_public_id=stored.public_id,
                         file_size=f.size,
                         mime_type=f.content_type,
                         related_model=options.related_model,
                         related_id=options.related_id,
                         is_public=False,
                         access_roles=[],
                         status=DocumentStatus.PENDING.value,
                    )
                    db.add(document)
                    documents.append(document)
               try:
                    db.commit()
               except SQLAlchemyError as exc:
                    db.rollback()
                    logger.error("Document rows not saved for uploaded batch", extra={"user_id": user_id})
                    _discard_uploads(store, user_id, [stored.public_id for _, stored in stored_files])
                    raise InternalError("Files uploaded but document records could not be saved") from exc
               for document in documents:
                    db.refresh(document)

          results = []
          for i, (f, stored) in enumerate(stored_files):
               logger.info("File uploaded", extra={"user_id": user_id, "public_id": stored.public_id})
               results.append({
                    "url": stored.url,
                    "public_id": stored.public_id,
                    "name": f.filename,
                    "size": f.size,
                    "mime_type": f.content_type,
                    "document": documents[i] if documents else None,
               })
          return results

     @staticmethod
     def delete(
          db: Session,
          store: ObjectStore,
          user_id: int,
          public_id: str,
          delete_from_documents: bool = False,
     ) -> dict:
          public_id = public_id.strip()
          if not public_id:
               raise ValidationError("Public ID is required")

          if not delete_from_documents:
               if not _may_delete(db, user_id, public_id):
                    raise NotFound("File not found or access denied")
               store.delete(public_id)
               logger.info("File deleted", extra={"user_id": user_id, "public_id": public_id})
               return {"public_id": public_id}

          document = (
               db.query(Document)
               .filter(Document.storage_public_id == public_id, document_uploader(user_id))
               .first()
          )
          if not document:
               raise NotFound("Document not found or access denied")
          document_id = document.id

          store.delete(public_id)

          try:
               db.delete(document)
               db.commit()
          except SQLAlchemyError as exc:
               db.rollback()
               logger.error(
                    "Stored file deleted but document row was not",
                    extra={"public_id": public_id, "document_id": document_id},
               )
               raise InternalError("File deleted but document record could not be removed") from exc

          logger.info("File and document deleted", extra={"public_id": public_id, "document_id": document_id})
          return {"public_id": public_id, "document_id": document_id}
