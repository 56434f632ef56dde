# schemas/auth.py
"""
Pydantic schemas for registration, login, federated sign-in and profile
management.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from models.user import Checkpoint, UserRole


class VerificationStatus(str, Enum):
     PENDING = "pending"
     VERIFIED = "verified"
     REJECTED = "rejected"


class RegisterRequest(BaseModel):
     """Schema for local account registration."""
     name: str = Field(..., min_length=2, max_length=200)
     email: EmailStr
     password: str = Field(..., min_length=6, description="At least 6 characters")
     roles: List[UserRole] = Field(default_factory=list)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "password": "s3cret!",
                    "roles": ["landlord"]
               }
          }
     )


class LoginRequest(BaseModel):
     email: EmailStr
     password: str = Field(..., min_length=1)


class FirebaseAuthRequest(BaseModel):
     id_token: str = Field(..., min_length=1, description="Firebase ID token from the client SDK")


class BankDetails(BaseModel):
     account_number: Optional[str] = None
     ifsc_code: Optional[str] = None
     account_holder_name: Optional[str] = None
     bank_name: Optional[str] = None
     branch_name: Optional[str] = None


class LandlordDocuments(BaseModel):
     pan_document: Optional[str] = None
     aadhaar_document: Optional[str] = None
     bank_statement: Optional[str] = None
     gst_certificate: Optional[str] = None


class LandlordProfile(BaseModel):
     verification_status: Optional[VerificationStatus] = None
     phone: Optional[str] = None
     alternate_phone: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     pincode: Optional[str] = None
     upi_id: Optional[str] = None
     pan_number: Optional[str] = None
     aadhaar_number: Optional[str] = None
     gst_number: Optional[str] = None
     company_name: Optional[str] = None
     company_registration_number: Optional[str] = None
     bank_details: Optional[BankDetails] = None
     documents: Optional[LandlordDocuments] = None


class Gender(str, Enum):
     MALE = "male"
     FEMALE = "female"
     OTHER = "other"
     PREFER_NOT_TO_SAY = "prefer_not_to_say"


class EmploymentType(str, Enum):
     FULL_TIME = "full_time"
     PART_TIME = "part_time"
     CONTRACT = "contract"
     SELF_EMPLOYED = "self_employed"
     UNEMPLOYED = "unemployed"
     STUDENT = "student"


class Contact(BaseModel):
     name: Optional[str] = None
     phone: Optional[str] = None
     email: Optional[EmailStr] = None
     relation: Optional[str] = None
     designation: Optional[str] = None


class TenantDocuments(BaseModel):
     pan_document: Optional[str] = None
     aadhaar_document: Optional[str] = None
     employment_letter_document: Optional[str] = None
     salary_slip: Optional[str] = None
     previous_rent_agreement: Optional[str] = None


class TenantProfile(BaseModel):
     kyc_status: Optional[VerificationStatus] = None
     phone: Optional[str] = None
     alternate_phone: Optional[str] = None
     date_of_birth: Optional[date] = None
     gender: Optional[Gender] = None
     current_employer: Optional[str] = None
     job_title: Optional[str] = None
     employment_type: Optional[EmploymentType] = None
     monthly_income: Optional[float] = Field(None, gt=0)
     permanent_address: Optional[str] = None
     current_address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     pincode: Optional[str] = None
     pan_number: Optional[str] = None
     aadhaar_number: Optional[str] = None
     emergency_contact: Optional[Contact] = None
     previous_landlord_contact: Optional[Contact] = None
     employer_contact: Optional[Contact] = None
     documents: Optional[TenantDocuments] = None


class ProfileUpdate(BaseModel):
     """
     Partial profile update. Sub-profiles are merged field by field into
     what is already stored.
     """
     name: Optional[str] = Field(None, min_length=2, max_length=200)
     image: Optional[str] = Field(None, max_length=1000)
     checkpoint: Optional[Checkpoint] = None
     roles: Optional[List[UserRole]] = None
     landlord_profile: Optional[LandlordProfile] = None
     tenant_profile: Optional[TenantProfile] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "checkpoint": "complete",
                    "roles": ["tenant"],
                    "tenant_profile": {"phone": "9876543210", "city": "Pune"}
               }
          }
     )


class ChangePasswordRequest(BaseModel):
     current_password: str = Field(..., min_length=1)
     new_password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
     """Public view of a user. Never carries the password hash."""
     id: int
     email: str
     name: str
     image: Optional[str] = None
     roles: List[str]
     checkpoint: str
     landlord_profile: Optional[Dict[str, Any]] = None
     tenant_profile: Optional[Dict[str, Any]] = None
     subscription: Optional[Dict[str, Any]] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class AuthPayload(BaseModel):
     token: str
     user: UserResponse
