# models/notification.py
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from .base import Base, TimestampMixin


class NotificationType(str, enum.Enum):
     RENT_DUE = "rent_due"
     RENT_OVERDUE = "rent_overdue"
     PAYMENT_RECEIVED = "payment_received"
     AGREEMENT_EXPIRING = "agreement_expiring"
     AGREEMENT_SIGNED = "agreement_signed"
     TICKET_UPDATE = "ticket_update"
     INSPECTION_SCHEDULED = "inspection_scheduled"
     SYSTEM = "system"
     OTHER = "other"


class NotificationPriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"
     URGENT = "urgent"


class Notification(TimestampMixin, Base):
     __tablename__ = "notifications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     type = Column(String(30), nullable=False, index=True)
     title = Column(String(200), nullable=False)
     message = Column(Text, nullable=False)
     is_read = Column(Boolean, nullable=False, default=False, index=True)
     read_at = Column(DateTime, nullable=True)
     scheduled_for = Column(DateTime, nullable=True)
     sent_at = Column(DateTime, nullable=True)

     link_to = Column(String(500), nullable=True)
     related_model = Column(String(50), nullable=True)
     related_id = Column(Integer, nullable=True)

     channels = Column(JSON, nullable=False)
     delivery_status = Column(JSON, nullable=True)
     priority = Column(String(10), nullable=False, default=NotificationPriority.MEDIUM.value)

     def __repr__(self):
          return f"<Notification(id={self.id}, user_id={self.user_id}, type='{self.type}')>"
