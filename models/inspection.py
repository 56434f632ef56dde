# models/inspection.py
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from utils.timeutils import utcnow
from .base import Base, TimestampMixin


class InspectionType(str, enum.Enum):
     MOVE_IN = "move_in"
     MOVE_OUT = "move_out"
     PERIODIC = "periodic"


class OverallCondition(str, enum.Enum):
     EXCELLENT = "excellent"
     GOOD = "good"
     FAIR = "fair"
     POOR = "poor"


class IssueSeverity(str, enum.Enum):
     MINOR = "minor"
     MODERATE = "moderate"
     MAJOR = "major"


class Inspection(TimestampMixin, Base):
     """Inspection model - a move-in, move-out or periodic walkthrough."""
     __tablename__ = "inspections"

     id = Column(Integer, primary_key=True, autoincrement=True)
     agreement_id = Column(
          Integer,
          ForeignKey("agreements.id"),
          nullable=False,
          index=True
     )
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     conducted_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

     type = Column(String(20), nullable=False, index=True)
     inspection_date = Column(DateTime, nullable=False)
     issues = Column(JSON, nullable=False, default=list)
     overall_condition = Column(String(20), nullable=True)
     signatures = Column(JSON, nullable=True)
     ai_summary = Column(Text, nullable=True)
     recommended_deduction = Column(Numeric(12, 2), nullable=False, default=0)
     disputed = Column(Boolean, nullable=False, default=False)
     dispute_reason = Column(Text, nullable=True)

     # Relationships
     agreement = relationship("Agreement")
     photos = relationship(
          "InspectionPhoto",
          back_populates="inspection",
          order_by="InspectionPhoto.id",
          cascade="all, delete-orphan",
          passive_deletes=True,
     )

     def __repr__(self):
          return f"<Inspection(id={self.id}, type='{self.type}', agreement_id={self.agreement_id})>"


class InspectionPhoto(Base):
     __tablename__ = "inspection_photos"

     id = Column(Integer, primary_key=True, autoincrement=True)
     inspection_id = Column(
          Integer,
          ForeignKey("inspections.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     url = Column(String(1000), nullable=False)
     public_id = Column(String(500), nullable=False)
     room = Column(String(100), nullable=False, default="general")
     description = Column(Text, nullable=True)
     uploaded_at = Column(DateTime, default=utcnow, nullable=False)

     inspection = relationship("Inspection", back_populates="photos")
