# services/inspection_service.py
"""
Inspection Service - walkthrough records tied to an agreement.

Inspections have no participant columns of their own; visibility comes
from joining the agreement and applying its participant predicate.
"""
import logging
from typing import BinaryIO, List, Optional

from sqlalchemy.orm import Session, selectinload

from azure_blob import ObjectStore
from models import Agreement, Inspection, InspectionPhoto
from schemas.inspection import InspectionCreate, InspectionFilter
from services.access import agreement_participant
from utils.errors import NotFound
from utils.timeutils import to_naive_utc

logger = logging.getLogger(__name__)


def _visible_inspections(db: Session, user_id: int):
     return (
          db.query(Inspection)
          .join(Agreement, Inspection.agreement_id == Agreement.id)
          .filter(agreement_participant(user_id))
          .options(selectinload(Inspection.photos))
     )


class InspectionService:

     @staticmethod
     def create(db: Session, user_id: int, body: InspectionCreate) -> Inspection:
          agreement = (
               db.query(Agreement)
               .filter(Agreement.id == body.agreement_id, agreement_participant(user_id))
               .first()
          )
          if not agreement:
               raise NotFound("Agreement not found")

          data = body.model_dump(mode="json")
          inspection = Inspection(
               agreement_id=agreement.id,
               property_id=agreement.property_id,
               conducted_by_id=user_id,
               type=body.type.value,
               inspection_date=to_naive_utc(body.inspection_date),
               overall_condition=body.overall_condition.value,
               issues=[{**issue, "resolved": False} for issue in data["issues"]],
               signatures={"landlord_signed": False, "tenant_signed": False},
          )
          db.add(inspection)
          db.commit()
          db.refresh(inspection)
          logger.info("Inspection recorded", extra={"agreement_id": agreement.id, "user_id": user_id})
          return inspection

     @staticmethod
     def list_mine(db: Session, user_id: int, filters: InspectionFilter) -> List[Inspection]:
          query = _visible_inspections(db, user_id)
          if filters.agreement_id:
               query = query.filter(Inspection.agreement_id == filters.agreement_id)
          if filters.type:
               query = query.filter(Inspection.type == filters.type.value)
          return query.order_by(Inspection.inspection_date.desc(), Inspection.id.desc()).all()

     @staticmethod
     def get(db: Session, user_id: int, inspection_id: int) -> Inspection:
          inspection = _visible_inspections(db, user_id).filter(Inspection.id == inspection_id).first()
          if not inspection:
               raise NotFound("Inspection not found")
          return inspection

     @staticmethod
     def add_photo(
          db: Session,
          store: ObjectStore,
          user_id: int,
          inspection_id: int,
          data: BinaryIO,
          filename: str,
          content_type: Optional[str],
          room: Optional[str] = None,
          description: Optional[str] = None,
     ) -> Inspection:
          inspection = InspectionService.get(db, user_id, inspection_id)

          stored = store.upload(data, filename, f"rentfit/inspections/{inspection.id}", content_type)
          db.add(InspectionPhoto(
               inspection_id=inspection.id,
               url=stored.url,
               public_id=stored.public_id,
               room=room or "general",
               description=description,
          ))
          db.commit()
          db.expire(inspection, ["photos"])
          logger.info("Inspection photo added", extra={"public_id": stored.public_id})
          return inspection
