# services/ticket_service.py
"""
Ticket Service - support threads between an author and an assignee.

Messages are separate rows, so two participants posting at once never
overwrite each other. Posting to a closed ticket reopens it with a
conditional UPDATE.
"""
import logging
from typing import List

from sqlalchemy import update
from sqlalchemy.orm import Session, selectinload

from models import Agreement, Ticket, TicketMessage, User
from models.ticket import TicketStatus
from schemas.ticket import MessageCreate, TicketCreate, TicketFilter, TicketStatusUpdate
from services.access import agreement_participant, ticket_participant
from utils.errors import NotFound
from utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class TicketService:
     """Service class for ticket-related business logic."""

     @staticmethod
     def create(db: Session, user_id: int, body: TicketCreate) -> Ticket:
          if body.agreement_id is not None:
               visible = (
                    db.query(Agreement.id)
                    .filter(Agreement.id == body.agreement_id, agreement_participant(user_id))
                    .first()
               )
               if not visible:
                    raise NotFound("Agreement not found")

          if body.assigned_to_id is not None and not db.get(User, body.assigned_to_id):
               raise NotFound("Assignee not found")

          ticket = Ticket(
               agreement_id=body.agreement_id,
               author_id=user_id,
               assigned_to_id=body.assigned_to_id,
               type=body.type.value,
               title=body.title,
               description=body.description,
               priority=body.priority.value,
               status=TicketStatus.OPEN.value,
          )
          db.add(ticket)
          db.commit()
          db.refresh(ticket)
          logger.info("Ticket opened", extra={"ticket_id": ticket.id, "user_id": user_id})
          return ticket

     @staticmethod
     def list_mine(db: Session, user_id: int, filters: TicketFilter) -> List[Ticket]:
          query = (
               db.query(Ticket)
               .options(selectinload(Ticket.messages))
               .filter(ticket_participant(user_id))
          )
          if filters.status:
               query = query.filter(Ticket.status == filters.status.value)
          if filters.type:
               query = query.filter(Ticket.type == filters.type.value)
          if filters.agreement_id:
               query = query.filter(Ticket.agreement_id == filters.agreement_id)
          return query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()

     @staticmethod
     def get(db: Session, user_id: int, ticket_id: int) -> Ticket:
          ticket = (
               db.query(Ticket)
               .options(selectinload(Ticket.messages))
               .filter(Ticket.id == ticket_id, ticket_participant(user_id))
               .first()
          )
          if not ticket:
               raise NotFound("Ticket not found")
          return ticket

     @staticmethod
     def add_message(db: Session, user_id: int, ticket_id: int, body: MessageCreate) -> Ticket:
          ticket = TicketService.get(db, user_id, ticket_id)

          db.add(TicketMessage(
               ticket_id=ticket.id,
               sender_id=user_id,
               sender_type=body.sender_type.value,
               content=body.content,
          ))
          reopened = db.execute(
               update(Ticket)
               .where(Ticket.id == ticket.id, Ticket.status == TicketStatus.CLOSED.value)
               .values(status=TicketStatus.OPEN.value, updated_at=utcnow())
               .execution_options(synchronize_session=False)
          ).rowcount
          db.commit()
          db.refresh(ticket)
          db.expire(ticket, ["messages"])

          if reopened:
               logger.info("Closed ticket reopened by new message", extra={"ticket_id": ticket.id})
          return ticket

     @staticmethod
     def update_status(db: Session, user_id: int, ticket_id: int, body: TicketStatusUpdate) -> Ticket:
          ticket = TicketService.get(db, user_id, ticket_id)
          previous = ticket.status
          ticket.status = body.status.value

          if body.status == TicketStatus.RESOLVED and body.resolution_notes:
               ticket.resolved_at = utcnow()
               ticket.resolved_by_id = user_id
               ticket.resolution_notes = body.resolution_notes
          elif body.status == TicketStatus.ESCALATED:
               ticket.escalated_at = utcnow()
               ticket.escalation_reason = body.escalation_reason

          db.commit()
          db.refresh(ticket)
          logger.info(
               "Ticket status %s -> %s", previous, ticket.status,
               extra={"ticket_id": ticket.id, "user_id": user_id},
          )
          return ticket
