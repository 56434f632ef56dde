# models/ticket.py
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from utils.timeutils import utcnow
from .base import Base, TimestampMixin


class TicketStatus(str, enum.Enum):
     OPEN = "open"
     IN_PROGRESS = "in_progress"
     RESOLVED = "resolved"
     CLOSED = "closed"
     ESCALATED = "escalated"


class TicketType(str, enum.Enum):
     MAINTENANCE = "maintenance"
     RENT_RECEIPT_ISSUE = "rent_receipt_issue"
     AGREEMENT_RENEWAL = "agreement_renewal"
     EARLY_EXIT = "early_exit"
     DISPUTE = "dispute"
     PAYMENT_ISSUE = "payment_issue"
     GENERAL = "general"


class TicketPriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"
     URGENT = "urgent"


class SenderType(str, enum.Enum):
     USER = "user"
     AI = "ai"
     SYSTEM = "system"


class Ticket(TimestampMixin, Base):
     """
     Ticket model - a support or maintenance thread between an author and
     an optional assignee.
     """
     __tablename__ = "tickets"

     id = Column(Integer, primary_key=True, autoincrement=True)
     agreement_id = Column(Integer, ForeignKey("agreements.id"), nullable=True, index=True)
     author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     assigned_to_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

     type = Column(String(30), nullable=False, index=True)
     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=False)
     status = Column(String(20), nullable=False, default=TicketStatus.OPEN.value, index=True)
     priority = Column(String(10), nullable=False, default=TicketPriority.MEDIUM.value)

     resolved_at = Column(DateTime, nullable=True)
     resolved_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     resolution_notes = Column(Text, nullable=True)
     escalated_at = Column(DateTime, nullable=True)
     escalation_reason = Column(Text, nullable=True)

     # Relationships
     messages = relationship(
          "TicketMessage",
          back_populates="ticket",
          order_by="TicketMessage.id",
          cascade="all, delete-orphan",
          passive_deletes=True,
     )

     def __repr__(self):
          return f"<Ticket(id={self.id}, type='{self.type}', status='{self.status}')>"


class TicketMessage(Base):
     __tablename__ = "ticket_messages"

     id = Column(Integer, primary_key=True, autoincrement=True)
     ticket_id = Column(
          Integer,
          ForeignKey("tickets.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     sender_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     sender_type = Column(String(10), nullable=False, default=SenderType.USER.value)
     content = Column(Text, nullable=False)
     timestamp = Column(DateTime, default=utcnow, nullable=False)

     ticket = relationship("Ticket", back_populates="messages")
