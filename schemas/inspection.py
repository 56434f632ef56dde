# schemas/inspection.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.inspection import InspectionType, IssueSeverity, OverallCondition
from .common import QueryFilter


class InspectionIssue(BaseModel):
     description: str = Field(..., min_length=1)
     severity: IssueSeverity
     room: str = Field(..., min_length=1)
     photo_url: Optional[str] = None


class InspectionCreate(BaseModel):
     """Schema for recording an inspection against a visible agreement."""
     agreement_id: int = Field(..., gt=0)
     type: InspectionType
     inspection_date: datetime
     overall_condition: OverallCondition
     issues: List[InspectionIssue] = Field(default_factory=list)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "agreement_id": 1,
                    "type": "move_in",
                    "inspection_date": "2024-01-01T10:00:00",
                    "overall_condition": "good",
                    "issues": [
                         {"description": "Cracked tile", "severity": "minor", "room": "kitchen"}
                    ]
               }
          }
     )


class InspectionFilter(QueryFilter):
     agreement_id: Optional[int] = None
     type: Optional[InspectionType] = None


class PhotoResponse(BaseModel):
     id: int
     url: str
     public_id: str
     room: str
     description: Optional[str] = None
     uploaded_at: datetime

     model_config = ConfigDict(from_attributes=True)


class InspectionResponse(BaseModel):
     id: int
     agreement_id: int
     property_id: int
     conducted_by_id: int
     type: str
     inspection_date: datetime
     photos: List[PhotoResponse] = []
     issues: List[Dict[str, Any]]
     overall_condition: Optional[str] = None
     signatures: Optional[Dict[str, Any]] = None
     ai_summary: Optional[str] = None
     recommended_deduction: float
     disputed: bool
     dispute_reason: Optional[str] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)
