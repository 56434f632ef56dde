# routers/agreements.py
"""
Agreement API routes.

Role-based access:
- Landlord: creates drafts on own properties, edits them while draft
- Landlord / Tenant: view agreements they are party to, sign as their role
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CurrentUser, client_ip, get_current_user, require_roles
from schemas.agreement import AgreementCreate, AgreementFilter, AgreementResponse, AgreementUpdate, SignRequest
from schemas.common import ApiListResponse, ApiResponse
from services.agreement_service import AgreementService

router = APIRouter(prefix="/api/agreements", tags=["agreements"])


@router.post(
     "",
     response_model=ApiResponse[AgreementResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a draft agreement"
)
def create_agreement(
     body: AgreementCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(require_roles("landlord"))
):
     """
     Create a draft agreement for one of the caller's properties.

     - **property_id**: must be owned by the caller (404 otherwise)
     - **tenant_id**: optional while drafting
     - **end_date**: must be after **start_date**
     """
     agreement = AgreementService.create(db, current_user.id, body)
     return ApiResponse(data=AgreementResponse.model_validate(agreement))


@router.get("", response_model=ApiListResponse[AgreementResponse], summary="List my agreements")
def list_agreements(
     filters: Annotated[AgreementFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """
     - **role=landlord**: only agreements where the caller is the landlord
     - **role=tenant**: only agreements where the caller is the tenant
     - no role: both
     """
     agreements = AgreementService.list_mine(db, current_user.id, filters)
     return ApiListResponse(count=len(agreements), data=[AgreementResponse.model_validate(a) for a in agreements])


@router.get("/{agreement_id}", response_model=ApiResponse[AgreementResponse], summary="Get an agreement")
def get_agreement(
     agreement_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     agreement = AgreementService.get(db, current_user.id, agreement_id)
     return ApiResponse(data=AgreementResponse.model_validate(agreement))


@router.put("/{agreement_id}", response_model=ApiResponse[AgreementResponse], summary="Update a draft agreement")
def update_agreement(
     agreement_id: int,
     body: AgreementUpdate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     agreement = AgreementService.update(db, current_user.id, agreement_id, body)
     return ApiResponse(data=AgreementResponse.model_validate(agreement))


@router.post("/{agreement_id}/sign", response_model=ApiResponse[AgreementResponse], summary="Sign an agreement")
def sign_agreement(
     agreement_id: int,
     body: SignRequest,
     request: Request,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """
     Sign as **landlord** or **tenant**. The agreement becomes active once
     both parties have signed.
     """
     agreement = AgreementService.sign(db, current_user.id, agreement_id, body.role, client_ip(request))
     return ApiResponse(data=AgreementResponse.model_validate(agreement))
