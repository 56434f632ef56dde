# services/agreement_service.py
"""
Agreement Service - draft agreements and the signing workflow.

Lifecycle handled here:
     draft -> pending_signature -> active

Each party signs once (re-signing refreshes the timestamp and IP only).
The signature and the derived status are written by one UPDATE whose
status expression reads the other party's column, so two parties signing
at the same moment cannot leave the agreement in pending_signature.

Property status / current_agreement_id are not changed by signing.
"""
import logging
from typing import List

from sqlalchemy import and_, case, true, update
from sqlalchemy.orm import Session

from models import Agreement, Property, User
from models.agreement import AgreementStatus, SignerRole
from schemas.agreement import AgreementCreate, AgreementFilter, AgreementUpdate
from services.access import agreement_participant, owned_property
from utils.errors import Forbidden, NotFound, ValidationError
from utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def _check_dates(agreement: Agreement) -> None:
     if agreement.end_date <= agreement.start_date:
          raise ValidationError(
               "end_date must be after start_date",
               details=[{"field": "end_date", "message": "end_date must be after start_date"}],
          )


def _check_tenant(db: Session, tenant_id: int) -> None:
     if not db.get(User, tenant_id):
          raise NotFound("Tenant not found")


class AgreementService:
     """Service class for agreement-related business logic."""

     @staticmethod
     def create(db: Session, landlord_id: int, body: AgreementCreate) -> Agreement:
          """
          Create a draft agreement on a property the caller owns.

          Raises:
               NotFound: property missing or owned by someone else
          """
          prop = (
               db.query(Property)
               .filter(Property.id == body.property_id, owned_property(landlord_id))
               .first()
          )
          if not prop:
               raise NotFound("Property not found")
          if body.tenant_id is not None:
               _check_tenant(db, body.tenant_id)

          data = body.model_dump(mode="json", exclude_none=True)
          agreement = Agreement(
               property_id=prop.id,
               landlord_id=landlord_id,
               tenant_id=body.tenant_id,
               agreement_type=body.agreement_type.value,
               start_date=body.start_date,
               end_date=body.end_date,
               rent_amount=body.rent_amount,
               security_deposit=body.security_deposit,
               rent_payment_date=body.rent_payment_date,
               late_penalty_percentage=body.late_penalty_percentage,
               maintenance_terms=data.get("maintenance_terms"),
               lock_in_period=body.lock_in_period,
               notice_period=body.notice_period,
               police_verification_status=body.police_verification_status.value,
               rent_escalation=data.get("rent_escalation"),
               clauses=data.get("clauses", []),
               document_url=body.document_url,
               status=AgreementStatus.DRAFT.value,
               landlord_signed=False,
               tenant_signed=False,
          )
          _check_dates(agreement)

          db.add(agreement)
          db.commit()
          db.refresh(agreement)
          logger.info("Agreement created", extra={"agreement_id": agreement.id, "user_id": landlord_id})
          return agreement

     @staticmethod
     def list_mine(db: Session, user_id: int, filters: AgreementFilter) -> List[Agreement]:
          query = db.query(Agreement)
          if filters.role == SignerRole.LANDLORD:
               query = query.filter(Agreement.landlord_id == user_id)
          elif filters.role == SignerRole.TENANT:
               query = query.filter(Agreement.tenant_id == user_id)
          else:
               query = query.filter(agreement_participant(user_id))

          if filters.status:
               query = query.filter(Agreement.status == filters.status.value)
          return query.order_by(Agreement.created_at.desc(), Agreement.id.desc()).all()

     @staticmethod
     def get(db: Session, user_id: int, agreement_id: int) -> Agreement:
          agreement = (
               db.query(Agreement)
               .filter(Agreement.id == agreement_id, agreement_participant(user_id))
               .first()
          )
          if not agreement:
               raise NotFound("Agreement not found")
          return agreement

     @staticmethod
     def update(db: Session, user_id: int, agreement_id: int, body: AgreementUpdate) -> Agreement:
          """Edit a draft. Anything else (wrong caller, not draft) is reported as not found."""
          agreement = (
               db.query(Agreement)
               .filter(
                    Agreement.id == agreement_id,
                    Agreement.landlord_id == user_id,
                    Agreement.status == AgreementStatus.DRAFT.value,
               )
               .first()
          )
          if not agreement:
               raise NotFound("Agreement not found or cannot be updated")

          # Only fields sent by the client are applied; nested models keep their defaults
          provided = body.model_fields_set
          data = body.model_dump(mode="json")
          if "tenant_id" in provided and body.tenant_id is not None:
               _check_tenant(db, body.tenant_id)
          for field in ("tenant_id", "rent_payment_date", "lock_in_period", "notice_period",
                        "document_url", "maintenance_terms", "rent_escalation", "clauses",
                        "agreement_type", "police_verification_status"):
               if field in provided and data[field] is not None:
                    setattr(agreement, field, data[field])
          for field in ("start_date", "end_date", "rent_amount", "security_deposit", "late_penalty_percentage"):
               value = getattr(body, field)
               if value is not None:
                    setattr(agreement, field, value)

          _check_dates(agreement)

          db.commit()
          db.refresh(agreement)
          logger.info("Agreement updated", extra={"agreement_id": agreement.id, "user_id": user_id})
          return agreement

     @staticmethod
     def sign(db: Session, user_id: int, agreement_id: int, role: SignerRole, ip: str) -> Agreement:
          """
          Record the caller's signature as `role` and recompute status.

          Raises:
               NotFound: agreement does not exist
               Forbidden: caller is not the party named by `role` (an unset
                    tenant never matches)
          """
          agreement = db.get(Agreement, agreement_id)
          if not agreement:
               raise NotFound("Agreement not found")

          if agreement.party_id(role) != user_id:
               logger.warning(
                    "Signature rejected: caller is not the %s", role.value,
                    extra={"agreement_id": agreement_id, "user_id": user_id},
               )
               raise Forbidden(f"Only the {role.value} can sign as {role.value}")

          if role == SignerRole.LANDLORD:
               own_column, other_signed = Agreement.landlord_id, Agreement.tenant_signed
          else:
               own_column, other_signed = Agreement.tenant_id, Agreement.landlord_signed

          new_status = case(
               (other_signed == true(), AgreementStatus.ACTIVE.value),
               else_=AgreementStatus.PENDING_SIGNATURE.value,
          )
          now = utcnow()
          stmt = (
               update(Agreement)
               .where(and_(Agreement.id == agreement_id, own_column == user_id))
               .values({
                    f"{role.value}_signed": True,
                    f"{role.value}_signed_at": now,
                    f"{role.value}_ip": ip,
                    "status": new_status,
                    "updated_at": now,
               })
               .execution_options(synchronize_session=False)
          )
          result = db.execute(stmt)
          if result.rowcount == 0:
               # Party changed between the read and the write
               db.rollback()
               raise NotFound("Agreement not found")

          db.commit()
          db.refresh(agreement)
          logger.info(
               "Agreement signed by %s, status now %s", role.value, agreement.status,
               extra={"agreement_id": agreement.id, "user_id": user_id},
          )
          return agreement
