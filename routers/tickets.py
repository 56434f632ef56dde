# routers/tickets.py
"""
Ticket API routes. Visible to the author and the assignee.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CurrentUser, get_current_user
from schemas.common import ApiListResponse, ApiResponse
from schemas.ticket import MessageCreate, TicketCreate, TicketFilter, TicketResponse, TicketStatusUpdate
from services.ticket_service import TicketService

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.post(
     "",
     response_model=ApiResponse[TicketResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Open a ticket"
)
def create_ticket(
     body: TicketCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     ticket = TicketService.create(db, current_user.id, body)
     return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.get("", response_model=ApiListResponse[TicketResponse], summary="List my tickets")
def list_tickets(
     filters: Annotated[TicketFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     tickets = TicketService.list_mine(db, current_user.id, filters)
     return ApiListResponse(count=len(tickets), data=[TicketResponse.model_validate(t) for t in tickets])


@router.get("/{ticket_id}", response_model=ApiResponse[TicketResponse], summary="Get a ticket with its messages")
def get_ticket(
     ticket_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     ticket = TicketService.get(db, current_user.id, ticket_id)
     return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.post(
     "/{ticket_id}/messages",
     response_model=ApiResponse[TicketResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Post a message"
)
def add_message(
     ticket_id: int,
     body: MessageCreate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """Posting to a closed ticket reopens it."""
     ticket = TicketService.add_message(db, current_user.id, ticket_id, body)
     return ApiResponse(data=TicketResponse.model_validate(ticket))


@router.put("/{ticket_id}/status", response_model=ApiResponse[TicketResponse], summary="Change ticket status")
def update_ticket_status(
     ticket_id: int,
     body: TicketStatusUpdate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     ticket = TicketService.update_status(db, current_user.id, ticket_id, body)
     return ApiResponse(data=TicketResponse.model_validate(ticket))
