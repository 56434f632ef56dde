# routers/notifications.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CurrentUser, get_current_user
from schemas.common import ApiListResponse, ApiResponse
from schemas.notification import MarkAllReadResponse, NotificationFilter, NotificationResponse
from services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=ApiListResponse[NotificationResponse], summary="List my notifications")
def list_notifications(
     filters: Annotated[NotificationFilter, Query()],
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     """Newest first, at most 50."""
     notifications = NotificationService.list_mine(db, current_user.id, filters)
     return ApiListResponse(
          count=len(notifications),
          data=[NotificationResponse.model_validate(n) for n in notifications]
     )


@router.put("/read-all", response_model=MarkAllReadResponse, summary="Mark all as read")
def mark_all_read(
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     updated = NotificationService.mark_all_read(db, current_user.id)
     return MarkAllReadResponse(message="All notifications marked as read", updated=updated)


@router.put("/{notification_id}/read", response_model=ApiResponse[NotificationResponse], summary="Mark one as read")
def mark_read(
     notification_id: int,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     notification = NotificationService.mark_read(db, current_user.id, notification_id)
     return ApiResponse(data=NotificationResponse.model_validate(notification))
