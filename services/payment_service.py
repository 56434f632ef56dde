# services/payment_service.py
"""
Payment Service - rent and other charges under an agreement.

The receiver is always taken from the agreement's landlord, never from
the request, so a payer cannot redirect money to another user.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from models import Agreement, Payment
from models.agreement import AgreementStatus
from models.payment import PaymentStatus
from schemas.payment import PaymentCreate, PaymentFilter, PaymentStatusUpdate
from services.access import agreement_participant, payment_participant
from utils.errors import Forbidden, NotFound, ValidationError
from utils.timeutils import utcnow

logger = logging.getLogger(__name__)

CLOSED_AGREEMENT_STATUSES = (AgreementStatus.TERMINATED.value, AgreementStatus.DISPUTE.value)


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def create(db: Session, user_id: int, body: PaymentCreate) -> Payment:
          """
          Create a payment as the agreement's tenant.

          Raises:
               NotFound: agreement missing or caller is not a participant
               Forbidden: caller is the landlord, not the tenant
               ValidationError: agreement is terminated or in dispute
          """
          agreement = (
               db.query(Agreement)
               .filter(Agreement.id == body.agreement_id, agreement_participant(user_id))
               .first()
          )
          if not agreement:
               raise NotFound("Agreement not found")
          if agreement.tenant_id != user_id:
               raise Forbidden("Only the tenant can create payments for this agreement")
          if agreement.status in CLOSED_AGREEMENT_STATUSES:
               raise ValidationError(f"Cannot create payments for a {agreement.status} agreement")

          payment = Payment(
               agreement_id=agreement.id,
               payer_id=user_id,
               receiver_id=agreement.landlord_id,
               amount=body.amount,
               type=body.type.value,
               description=body.description,
               due_date=body.due_date,
               payment_method=body.payment_method.value if body.payment_method else None,
               status=PaymentStatus.PENDING.value,
          )
          db.add(payment)
          db.commit()
          db.refresh(payment)
          logger.info(
               "Payment created",
               extra={"payment_id": payment.id, "agreement_id": agreement.id, "user_id": user_id},
          )
          return payment

     @staticmethod
     def list_mine(db: Session, user_id: int, filters: PaymentFilter) -> List[Payment]:
          query = db.query(Payment).filter(payment_participant(user_id))
          if filters.agreement_id:
               query = query.filter(Payment.agreement_id == filters.agreement_id)
          if filters.status:
               query = query.filter(Payment.status == filters.status.value)
          if filters.type:
               query = query.filter(Payment.type == filters.type.value)
          return query.order_by(Payment.due_date.desc(), Payment.id.desc()).all()

     @staticmethod
     def get(db: Session, user_id: int, payment_id: int) -> Payment:
          payment = (
               db.query(Payment)
               .filter(Payment.id == payment_id, payment_participant(user_id))
               .first()
          )
          if not payment:
               raise NotFound("Payment not found")
          return payment

     @staticmethod
     def update_status(db: Session, user_id: int, payment_id: int, body: PaymentStatusUpdate) -> Payment:
          payment = PaymentService.get(db, user_id, payment_id)
          previous = payment.status

          data = body.model_dump(mode="json", exclude_unset=True)
          for field in ("status", "payment_method", "transaction_id",
                        "gateway_order_id", "gateway_payment_id", "gateway_signature"):
               if data.get(field) is not None:
                    setattr(payment, field, data[field])

          if body.status == PaymentStatus.PAID:
               payment.paid_date = utcnow()

          db.commit()
          db.refresh(payment)
          logger.info(
               "Payment status %s -> %s", previous, payment.status,
               extra={"payment_id": payment.id, "user_id": user_id},
          )
          return payment
