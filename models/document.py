# models/document.py
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from .base import Base, TimestampMixin


class DocumentType(str, enum.Enum):
     KYC = "kyc"
     AGREEMENT = "agreement"
     RECEIPT = "receipt"
     INSPECTION = "inspection"
     OTHER = "other"


class DocumentStatus(str, enum.Enum):
     PENDING = "pending"
     VERIFIED = "verified"
     REJECTED = "rejected"


class Document(TimestampMixin, Base):
     """
     Document model - metadata for a file held in external object storage.

     storage_public_id is the handle used to delete the stored file.
     """
     __tablename__ = "documents"

     id = Column(Integer, primary_key=True, autoincrement=True)
     uploaded_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     name = Column(String(255), nullable=False)
     type = Column(String(20), nullable=False, default=DocumentType.OTHER.value)
     category = Column(String(100), nullable=True)
     storage_url = Column(String(1000), nullable=False)
     storage_public_id = Column(String(500), nullable=False, index=True)
     file_size = Column(Integer, nullable=True)
     mime_type = Column(String(100), nullable=True)

     related_model = Column(String(50), nullable=True)
     related_id = Column(Integer, nullable=True)
     is_public = Column(Boolean, nullable=False, default=False)
     access_roles = Column(JSON, nullable=False, default=list)

     status = Column(String(20), nullable=False, default=DocumentStatus.PENDING.value)
     verified_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     verified_at = Column(DateTime, nullable=True)
     rejection_reason = Column(Text, nullable=True)
     expires_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<Document(id={self.id}, name='{self.name}', public_id='{self.storage_public_id}')>"
