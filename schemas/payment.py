# schemas/payment.py
"""
Pydantic schemas for Payment API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.payment import PaymentMethod, PaymentStatus, PaymentType
from .common import QueryFilter


class PaymentCreate(BaseModel):
     """
     Schema for creating a payment against an agreement. The receiver is
     always the agreement's landlord; any receiver in the body is ignored.
     """
     agreement_id: int = Field(..., gt=0)
     amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     type: PaymentType
     description: Optional[str] = None
     due_date: date
     payment_method: Optional[PaymentMethod] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "agreement_id": 1,
                    "amount": 20000,
                    "type": "rent",
                    "due_date": "2024-02-05"
               }
          }
     )


class PaymentStatusUpdate(BaseModel):
     """Schema for updating payment status and gateway correlation ids."""
     status: Optional[PaymentStatus] = None
     payment_method: Optional[PaymentMethod] = None
     transaction_id: Optional[str] = None
     gateway_order_id: Optional[str] = None
     gateway_payment_id: Optional[str] = None
     gateway_signature: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "status": "paid",
                    "payment_method": "upi",
                    "transaction_id": "UPI-20240205-0001"
               }
          }
     )


class PaymentFilter(QueryFilter):
     agreement_id: Optional[int] = None
     status: Optional[PaymentStatus] = None
     type: Optional[PaymentType] = None


class PaymentResponse(BaseModel):
     """Schema for payment response."""
     id: int
     agreement_id: int
     payer_id: int
     receiver_id: int
     amount: float
     type: str
     description: Optional[str] = None
     due_date: date
     paid_date: Optional[datetime] = None
     status: str
     payment_method: Optional[str] = None
     transaction_id: Optional[str] = None
     gateway_order_id: Optional[str] = None
     gateway_payment_id: Optional[str] = None
     payment_link: Optional[str] = None
     gateway_response: Optional[Dict[str, Any]] = None
     receipt_number: Optional[str] = None
     receipt_url: Optional[str] = None
     late_fee: float
     late_days: int
     refund_details: Optional[Dict[str, Any]] = None
     notes: Optional[str] = None
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)
