# routers/payments.py
"""
Payment API routes. Visible to the payer and the receiver.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CurrentUser, get_current_user
from schemas.common import ApiListResponse, ApiResponse
from schemas.payment import PaymentCreate, PaymentFilter, PaymentResponse, PaymentStatusUpdate
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "",
     response_model=ApiResponse[PaymentResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a payment"
)
def create_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """
     Create a payment as the agreement's tenant. The receiver is always the
     agreement's landlord.
     """
     payment = PaymentService.create(db, current_user.id, body)
     return ApiResponse(data=PaymentResponse.model_validate(payment))


@router.get("", response_model=ApiListResponse[PaymentResponse], summary="List my payments")
def list_payments(
     filters: Annotated[PaymentFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     payments = PaymentService.list_mine(db, current_user.id, filters)
     return ApiListResponse(count=len(payments), data=[PaymentResponse.model_validate(p) for p in payments])


@router.get("/{payment_id}", response_model=ApiResponse[PaymentResponse], summary="Get a payment")
def get_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     payment = PaymentService.get(db, current_user.id, payment_id)
     return ApiResponse(data=PaymentResponse.model_validate(payment))


@router.put("/{payment_id}", response_model=ApiResponse[PaymentResponse], summary="Update payment status")
def update_payment(
     payment_id: int,
     body: PaymentStatusUpdate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """Setting **status=paid** stamps **paid_date** with the current time."""
     payment = PaymentService.update_status(db, current_user.id, payment_id, body)
     return ApiResponse(data=PaymentResponse.model_validate(payment))
