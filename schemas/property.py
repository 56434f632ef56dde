# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.property import Bhk, PropertyStatus
from .common import QueryFilter


class FurnishingStatus(str, Enum):
     FULLY_FURNISHED = "fully_furnished"
     SEMI_FURNISHED = "semi_furnished"
     UNFURNISHED = "unfurnished"


class MaintenanceFrequency(str, Enum):
     MONTHLY = "monthly"
     QUARTERLY = "quarterly"
     YEARLY = "yearly"


class Address(BaseModel):
     society_name: Optional[str] = None
     street: str = Field(..., min_length=1)
     locality: Optional[str] = None
     city: str = Field(..., min_length=1)
     state: str = Field(..., min_length=1)
     pincode: str = Field(..., min_length=6)
     latitude: Optional[float] = None
     longitude: Optional[float] = None
     map_link: Optional[str] = None


class AddressUpdate(BaseModel):
     society_name: Optional[str] = None
     street: Optional[str] = None
     locality: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     pincode: Optional[str] = None
     latitude: Optional[float] = None
     longitude: Optional[float] = None
     map_link: Optional[str] = None


class Specs(BaseModel):
     bhk: Bhk
     property_type: Optional[str] = None
     bathrooms: int = Field(..., ge=0)
     balconies: Optional[int] = Field(None, ge=0)
     furnishing_status: FurnishingStatus
     size_sq_ft: float = Field(..., ge=1)
     floor_number: Optional[int] = None
     total_floors: Optional[int] = None
     property_age_years: Optional[int] = None


class SpecsUpdate(BaseModel):
     bhk: Optional[Bhk] = None
     property_type: Optional[str] = None
     bathrooms: Optional[int] = Field(None, ge=0)
     balconies: Optional[int] = Field(None, ge=0)
     furnishing_status: Optional[FurnishingStatus] = None
     size_sq_ft: Optional[float] = Field(None, ge=1)
     floor_number: Optional[int] = None
     total_floors: Optional[int] = None
     property_age_years: Optional[int] = None


class MaintenanceDetails(BaseModel):
     amount: Optional[float] = Field(None, ge=0)
     frequency: Optional[MaintenanceFrequency] = None
     included_in_rent: Optional[bool] = None
     description: Optional[str] = None


class PropertyCreate(BaseModel):
     """Schema for creating a new property listing."""
     title: str = Field(..., min_length=1, max_length=200)
     address: Address
     specs: Specs
     amenities: List[str] = Field(default_factory=list)
     expected_rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     expected_deposit: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     description: Optional[str] = None
     maintenance_details: Optional[MaintenanceDetails] = None
     status: PropertyStatus = PropertyStatus.VACANT
     available_from: Optional[date] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Sunny 2BHK near the park",
                    "address": {
                         "street": "12 MG Road",
                         "city": "Pune",
                         "state": "MH",
                         "pincode": "411001"
                    },
                    "specs": {
                         "bhk": "2BHK",
                         "bathrooms": 2,
                         "furnishing_status": "semi_furnished",
                         "size_sq_ft": 950
                    },
                    "amenities": ["lift", "parking"],
                    "expected_rent": 20000,
                    "expected_deposit": 60000
               }
          }
     )


class PropertyUpdate(BaseModel):
     """
     Schema for updating a property. Address and specs are merged into the
     stored values; the owner cannot be changed.
     """
     title: Optional[str] = Field(None, min_length=1, max_length=200)
     address: Optional[AddressUpdate] = None
     specs: Optional[SpecsUpdate] = None
     amenities: Optional[List[str]] = None
     expected_rent: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     expected_deposit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     description: Optional[str] = None
     maintenance_details: Optional[MaintenanceDetails] = None
     status: Optional[PropertyStatus] = None
     available_from: Optional[date] = None


class PropertyFilter(QueryFilter):
     status: Optional[PropertyStatus] = None
     city: Optional[str] = None
     bhk: Optional[Bhk] = None


class MediaResponse(BaseModel):
     id: int
     url: str
     public_id: str
     type: str
     caption: Optional[str] = None
     uploaded_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PropertyResponse(BaseModel):
     """Schema for property response."""
     id: int
     owner_id: int
     title: str
     address: Dict[str, Any]
     specs: Dict[str, Any]
     amenities: List[str]
     media: List[MediaResponse] = []
     expected_rent: float
     expected_deposit: float
     description: Optional[str] = None
     maintenance_details: Optional[Dict[str, Any]] = None
     status: str
     available_from: Optional[date] = None
     current_agreement_id: Optional[int] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)

