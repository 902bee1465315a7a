"""
Notification API endpoints.
"""

from ninja import Router
from ninja.errors import HttpError

from apps.accounts.models import User
from apps.core.schemas import ErrorResponse, MessageResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest
from apps.notifications import services
from apps.notifications.models import Notification
from apps.notifications.schemas import (
    NotificationCreateRequest,
    NotificationListResponse,
    NotificationResponse,
)

router = Router(tags=["notifications"])
bearer_auth = BearerAuth()


def _to_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.pk,
        target_user=notification.target_user,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        read=notification.read,
        created_at=notification.created_at,
    )


def _get_own_notification_or_404(user: User, notification_id: int) -> Notification:
    notification = services.get_user_notification(user, notification_id)
    if notification is None:
        raise HttpError(404, "Notification not found")
    return notification


@router.get(
    "/",
    response={200: NotificationListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="listNotifications",
    summary="List my notifications",
)
def list_notifications(request: AuthenticatedHttpRequest) -> NotificationListResponse:
    """List notifications addressed to the caller's username or email, newest first."""
    user = get_auth_context(request).require_auth()

    notifications = [_to_response(n) for n in services.notifications_for(user)]
    return NotificationListResponse(
        notifications=notifications,
        unread_count=sum(1 for n in notifications if not n.read),
    )


@router.post(
    "/",
    response={201: NotificationResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="sendNotification",
    summary="Send a notification",
)
def send_notification(
    request: AuthenticatedHttpRequest, payload: NotificationCreateRequest
) -> tuple[int, NotificationResponse]:
    """Notify a user. Admins and supervisors only."""
    get_auth_context(request).require_role(User.Role.ADMIN, User.Role.SUPERVISOR)

    notification = services.add_notification(
        target_user=payload.target_user,
        title=payload.title,
        message=payload.message,
        type=payload.type,
    )
    return 201, _to_response(notification)


@router.post(
    "/{notification_id}/read",
    response={200: NotificationResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    by_alias=True,
    operation_id="markNotificationRead",
    summary="Mark a notification as read",
)
def mark_read(request: AuthenticatedHttpRequest, notification_id: int) -> NotificationResponse:
    user = get_auth_context(request).require_auth()
    notification = services.mark_as_read(_get_own_notification_or_404(user, notification_id))
    return _to_response(notification)


@router.delete(
    "/{notification_id}",
    response={200: MessageResponse, 401: ErrorResponse, 403: ErrorResponse, 404: ErrorResponse},
    auth=bearer_auth,
    operation_id="deleteNotification",
    summary="Delete a notification",
)
def delete_notification(request: AuthenticatedHttpRequest, notification_id: int) -> MessageResponse:
    user = get_auth_context(request).require_auth()
    _get_own_notification_or_404(user, notification_id).delete()
    return MessageResponse(message="Notification deleted")
