# services/notification_service.py
"""
Notification Service - per-user inbox.

Records are created by other parts of the system through notify();
delivery over email/SMS/push is handled elsewhere and only reflected in
delivery_status.
"""
import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from models import Notification
from models.notification import NotificationPriority, NotificationType
from schemas.notification import NotificationFilter
from services.access import notification_recipient
from utils.errors import NotFound
from utils.timeutils import utcnow

logger = logging.getLogger(__name__)

LIST_LIMIT = 50

DEFAULT_CHANNELS = {"in_app": True, "email": False, "sms": False, "push": False}


class NotificationService:

     @staticmethod
     def notify(
          db: Session,
          user_id: int,
          type: NotificationType,
          title: str,
          message: str,
          link_to: Optional[str] = None,
          related_model: Optional[str] = None,
          related_id: Optional[int] = None,
          channels: Optional[dict] = None,
          priority: NotificationPriority = NotificationPriority.MEDIUM,
          scheduled_for=None,
     ) -> Notification:
          """Create a notification for `user_id`. Commits."""
          notification = Notification(
               user_id=user_id,
               type=type.value,
               title=title,
               message=message,
               link_to=link_to,
               related_model=related_model,
               related_id=related_id,
               channels={**DEFAULT_CHANNELS, **(channels or {})},
               delivery_status={},
               priority=priority.value,
               scheduled_for=scheduled_for,
               sent_at=None if scheduled_for else utcnow(),
          )
          db.add(notification)
          db.commit()
          db.refresh(notification)
          logger.info("Notification created", extra={"user_id": user_id})
          return notification

     @staticmethod
     def list_mine(db: Session, user_id: int, filters: NotificationFilter) -> List[Notification]:
          query = db.query(Notification).filter(notification_recipient(user_id))
          if filters.is_read is not None:
               query = query.filter(Notification.is_read == filters.is_read)
          if filters.type:
               query = query.filter(Notification.type == filters.type.value)
          return (
               query.order_by(Notification.created_at.desc(), Notification.id.desc())
               .limit(LIST_LIMIT)
               .all()
          )

     @staticmethod
     def mark_read(db: Session, user_id: int, notification_id: int) -> Notification:
          notification = (
               db.query(Notification)
               .filter(Notification.id == notification_id, notification_recipient(user_id))
               .first()
          )
          if not notification:
               raise NotFound("Notification not found")

          notification.is_read = True
          notification.read_at = utcnow()
          db.commit()
          db.refresh(notification)
          return notification

     @staticmethod
     def mark_all_read(db: Session, user_id: int) -> int:
          now = utcnow()
          count = db.execute(
               update(Notification)
               .where(notification_recipient(user_id), Notification.is_read.is_(False))
               .values(is_read=True, read_at=now, updated_at=now)
               .execution_options(synchronize_session=False)
          ).rowcount
          db.commit()
          return count
