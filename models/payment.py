# models/payment.py
import enum

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class PaymentStatus(str, enum.Enum):
     """Enumeration for payment status."""
     PENDING = "pending"
     PROCESSING = "processing"
     PAID = "paid"
     OVERDUE = "overdue"
     FAILED = "failed"
     REFUNDED = "refunded"


class PaymentType(str, enum.Enum):
     RENT = "rent"
     DEPOSIT = "deposit"
     MAINTENANCE = "maintenance"
     PENALTY = "penalty"
     REFUND = "refund"
     OTHER = "other"


class PaymentMethod(str, enum.Enum):
     UPI = "upi"
     BANK_TRANSFER = "bank_transfer"
     CASH = "cash"
     CARD = "card"
     OTHER = "other"


class Payment(TimestampMixin, Base):
     """
     Payment model - money owed or paid under an agreement.

     The receiver is always the agreement's landlord at creation time. The
     gateway_* columns are opaque correlation values from the payment
     provider and are stored as given.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     agreement_id = Column(
          Integer,
          ForeignKey("agreements.id"),
          nullable=False,
          index=True
     )
     payer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Payment details
     amount = Column(Numeric(12, 2), nullable=False)
     type = Column(String(20), nullable=False, index=True)
     description = Column(Text, nullable=True)
     due_date = Column(Date, nullable=False, index=True)
     paid_date = Column(DateTime, nullable=True)
     status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value, index=True)
     payment_method = Column(String(20), nullable=True)
     transaction_id = Column(String(200), nullable=True)

     # Gateway correlation
     gateway_order_id = Column(String(200), nullable=True)
     gateway_payment_id = Column(String(200), nullable=True)
     gateway_signature = Column(String(500), nullable=True)
     payment_link = Column(String(1000), nullable=True)
     gateway_response = Column(JSON, nullable=True)

     receipt_number = Column(String(100), nullable=True)
     receipt_url = Column(String(1000), nullable=True)
     late_fee = Column(Numeric(12, 2), nullable=False, default=0)
     late_days = Column(Integer, nullable=False, default=0)
     refund_details = Column(JSON, nullable=True)
     notes = Column(Text, nullable=True)

     # Relationships
     agreement = relationship("Agreement")

     def __repr__(self):
          return f"<Payment(id={self.id}, amount={self.amount}, status='{self.status}')>"
