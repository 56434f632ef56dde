# schemas/notification.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from models.notification import NotificationType
from .common import QueryFilter


class NotificationFilter(QueryFilter):
     is_read: Optional[bool] = None
     type: Optional[NotificationType] = None


class NotificationResponse(BaseModel):
     id: int
     user_id: int
     type: str
     title: str
     message: str
     is_read: bool
     read_at: Optional[datetime] = None
     scheduled_for: Optional[datetime] = None
     sent_at: Optional[datetime] = None
     link_to: Optional[str] = None
     related_model: Optional[str] = None
     related_id: Optional[int] = None
     channels: Dict[str, Any]
     delivery_status: Optional[Dict[str, Any]] = None
     priority: str
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class MarkAllReadResponse(BaseModel):
     success: bool = True
     message: str
     updated: int
