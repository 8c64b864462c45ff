"""Notification inbox endpoints."""

from fastapi import APIRouter, Depends, Query

from aurora.api.dependencies import get_notifier
from aurora.application.dto.responses import (
    ErrorResponse,
    MarkAllReadResponse,
    NotificationListResponse,
)
from aurora.core.entities import Notification
from aurora.core.services import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    user_id: str = Query(..., min_length=1),
    unread_only: bool = Query(default=False),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    notifier: NotificationService = Depends(get_notifier),
) -> NotificationListResponse:
    """List a user's notifications, oldest first."""
    items = await notifier.list_for_user(
        user_id, unread_only=unread_only, limit=limit, offset=offset
    )
    return NotificationListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.post(
    "/{notification_id}/read",
    response_model=Notification,
    responses={404: {"model": ErrorResponse}},
)
async def mark_read(
    notification_id: str,
    notifier: NotificationService = Depends(get_notifier),
) -> Notification:
    return await notifier.mark_read(notification_id)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_id: str = Query(..., min_length=1),
    notifier: NotificationService = Depends(get_notifier),
) -> MarkAllReadResponse:
    """Mark every unread notification of a user as read."""
    marked = await notifier.mark_all_read(user_id)
    return MarkAllReadResponse(user_id=user_id, marked=marked)
