# schemas/agreement.py
"""
Pydantic schemas for Agreement API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.agreement import AgreementStatus, AgreementType, SignerRole
from .common import QueryFilter


class PoliceVerificationStatus(str, Enum):
     PENDING = "pending"
     SUBMITTED = "submitted"
     VERIFIED = "verified"


class ClauseCategory(str, Enum):
     MAINTENANCE = "maintenance"
     PAYMENT = "payment"
     TERMINATION = "termination"
     USAGE = "usage"
     OTHER = "other"


class MaintenanceTerms(BaseModel):
     amount: Optional[float] = Field(None, ge=0)
     frequency: str = Field("monthly", pattern="^(monthly|quarterly|yearly)$")
     included_in_rent: bool = False
     paid_by: str = Field("tenant", pattern="^(tenant|landlord)$")


class RentEscalation(BaseModel):
     enabled: bool = False
     percentage: Optional[float] = Field(None, ge=0, le=100)
     frequency_months: int = 12


class Clause(BaseModel):
     title: str = Field(..., min_length=1)
     content: str = Field(..., min_length=1)
     is_standard: bool = False
     ai_explanation: Optional[str] = None
     category: ClauseCategory = ClauseCategory.OTHER


class AgreementCreate(BaseModel):
     """Schema for creating a draft agreement on one of the caller's properties."""
     property_id: int = Field(..., gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     agreement_type: AgreementType = AgreementType.ELEVEN_MONTHS
     start_date: date
     end_date: date
     rent_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     security_deposit: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     rent_payment_date: int = Field(5, ge=1, le=31)
     late_penalty_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
     maintenance_terms: Optional[MaintenanceTerms] = None
     lock_in_period: int = Field(6, ge=0)
     notice_period: int = Field(1, ge=0)
     police_verification_status: PoliceVerificationStatus = PoliceVerificationStatus.PENDING
     rent_escalation: Optional[RentEscalation] = None
     clauses: List[Clause] = Field(default_factory=list)
     document_url: Optional[str] = None

     @model_validator(mode="after")
     def check_dates(self):
          if self.end_date <= self.start_date:
               raise ValueError("end_date must be after start_date")
          return self

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "tenant_id": 2,
                    "start_date": "2024-01-01",
                    "end_date": "2024-12-01",
                    "rent_amount": 20000,
                    "security_deposit": 60000
               }
          }
     )


class AgreementUpdate(BaseModel):
     """
     Editable fields of a draft agreement. Landlord, status and signatures
     are not editable here.
     """
     tenant_id: Optional[int] = Field(None, gt=0)
     agreement_type: Optional[AgreementType] = None
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     rent_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     security_deposit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     rent_payment_date: Optional[int] = Field(None, ge=1, le=31)
     late_penalty_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
     maintenance_terms: Optional[MaintenanceTerms] = None
     lock_in_period: Optional[int] = Field(None, ge=0)
     notice_period: Optional[int] = Field(None, ge=0)
     police_verification_status: Optional[PoliceVerificationStatus] = None
     rent_escalation: Optional[RentEscalation] = None
     clauses: Optional[List[Clause]] = None
     document_url: Optional[str] = None


class SignRequest(BaseModel):
     role: SignerRole

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"role": "landlord"}
          }
     )


class AgreementFilter(QueryFilter):
     role: Optional[SignerRole] = Field(None, description="Only agreements where the caller holds this role")
     status: Optional[AgreementStatus] = None


class SignaturesResponse(BaseModel):
     landlord_signed: bool
     landlord_signed_at: Optional[datetime] = None
     landlord_ip: Optional[str] = None
     tenant_signed: bool
     tenant_signed_at: Optional[datetime] = None
     tenant_ip: Optional[str] = None


class AgreementResponse(BaseModel):
     """Schema for agreement response."""
     id: int
     property_id: int
     landlord_id: int
     tenant_id: Optional[int] = None
     agreement_type: str
     start_date: date
     end_date: date
     rent_amount: float
     security_deposit: float
     rent_payment_date: int
     late_penalty_percentage: float
     maintenance_terms: Optional[Dict[str, Any]] = None
     lock_in_period: int
     notice_period: int
     police_verification_status: str
     rent_escalation: Optional[Dict[str, Any]] = None
     clauses: List[Dict[str, Any]]
     status: str
     document_url: Optional[str] = None
     signatures: SignaturesResponse
     termination: Optional[Dict[str, Any]] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)
