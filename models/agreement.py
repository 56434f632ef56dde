# models/agreement.py
import enum

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class AgreementStatus(str, enum.Enum):
     DRAFT = "draft"
     PENDING_SIGNATURE = "pending_signature"
     ACTIVE = "active"
     RENEWING = "renewing"
     TERMINATED = "terminated"
     DISPUTE = "dispute"


class AgreementType(str, enum.Enum):
     ELEVEN_MONTHS = "11_months"
     LONG_TERM = "long_term"


class SignerRole(str, enum.Enum):
     LANDLORD = "landlord"
     TENANT = "tenant"


class Agreement(TimestampMixin, Base):
     """
     Agreement model - a rental contract between a landlord and a tenant.

     Signature state is kept in flat columns so that a single UPDATE can set
     one party's signature and derive the new status from the other party's
     column. `signatures` reassembles them for API responses.
     """
     __tablename__ = "agreements"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     property_id = Column(
          Integer,
          ForeignKey("properties.id"),
          nullable=False,
          index=True
     )
     landlord_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=False,
          index=True
     )
     tenant_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=True,
          index=True
     )

     # Terms
     agreement_type = Column(String(20), nullable=False, default=AgreementType.ELEVEN_MONTHS.value)
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)
     rent_amount = Column(Numeric(12, 2), nullable=False)
     security_deposit = Column(Numeric(12, 2), nullable=False)
     rent_payment_date = Column(Integer, nullable=False, default=5)
     late_penalty_percentage = Column(Numeric(5, 2), nullable=False, default=0)
     maintenance_terms = Column(JSON, nullable=True)
     lock_in_period = Column(Integer, nullable=False, default=6)
     notice_period = Column(Integer, nullable=False, default=1)
     police_verification_status = Column(String(20), nullable=False, default="pending")
     rent_escalation = Column(JSON, nullable=True)
     clauses = Column(JSON, nullable=False, default=list)

     status = Column(String(20), nullable=False, default=AgreementStatus.DRAFT.value, index=True)
     document_url = Column(String(1000), nullable=True)

     # Signatures
     landlord_signed = Column(Boolean, nullable=False, default=False)
     landlord_signed_at = Column(DateTime, nullable=True)
     landlord_ip = Column(String(64), nullable=True)
     tenant_signed = Column(Boolean, nullable=False, default=False)
     tenant_signed_at = Column(DateTime, nullable=True)
     tenant_ip = Column(String(64), nullable=True)

     termination = Column(JSON, nullable=True)

     # Relationships
     listing = relationship("Property", foreign_keys=[property_id])
     landlord = relationship("User", foreign_keys=[landlord_id])
     tenant = relationship("User", foreign_keys=[tenant_id])

     def __repr__(self):
          return f"<Agreement(id={self.id}, property_id={self.property_id}, status='{self.status}')>"

     @property
     def signatures(self) -> dict:
          return {
               "landlord_signed": bool(self.landlord_signed),
               "landlord_signed_at": self.landlord_signed_at,
               "landlord_ip": self.landlord_ip,
               "tenant_signed": bool(self.tenant_signed),
               "tenant_signed_at": self.tenant_signed_at,
               "tenant_ip": self.tenant_ip,
          }

     def party_id(self, role: SignerRole):
          """The user id bound to `role` on this agreement (tenant may be None)."""
          return self.landlord_id if role == SignerRole.LANDLORD else self.tenant_id
