# schemas/ticket.py
"""
Pydantic schemas for Ticket API request/response validation.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.ticket import SenderType, TicketPriority, TicketStatus, TicketType
from .common import QueryFilter


class TicketCreate(BaseModel):
     agreement_id: Optional[int] = Field(None, gt=0)
     assigned_to_id: Optional[int] = Field(None, gt=0)
     type: TicketType
     title: str = Field(..., min_length=1, max_length=200)
     description: str = Field(..., min_length=1)
     priority: TicketPriority = TicketPriority.MEDIUM

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "agreement_id": 1,
                    "type": "maintenance",
                    "title": "Leaking kitchen tap",
                    "description": "The tap has been dripping since Monday.",
                    "priority": "high"
               }
          }
     )


class MessageCreate(BaseModel):
     content: str = Field(..., min_length=1)
     sender_type: SenderType = SenderType.USER


class TicketStatusUpdate(BaseModel):
     status: TicketStatus
     resolution_notes: Optional[str] = None
     escalation_reason: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"status": "resolved", "resolution_notes": "Plumber replaced the washer."}
          }
     )


class TicketFilter(QueryFilter):
     status: Optional[TicketStatus] = None
     type: Optional[TicketType] = None
     agreement_id: Optional[int] = None


class TicketMessageResponse(BaseModel):
     id: int
     sender_id: Optional[int] = None
     sender_type: str
     content: str
     timestamp: datetime

     model_config = ConfigDict(from_attributes=True)


class TicketResponse(BaseModel):
     """Schema for ticket response."""
     id: int
     agreement_id: Optional[int] = None
     author_id: int
     assigned_to_id: Optional[int] = None
     type: str
     title: str
     description: str
     status: str
     priority: str
     messages: List[TicketMessageResponse] = []
     resolved_at: Optional[datetime] = None
     resolved_by_id: Optional[int] = None
     resolution_notes: Optional[str] = None
     escalated_at: Optional[datetime] = None
     escalation_reason: Optional[str] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)
