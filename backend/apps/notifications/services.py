"""
Notification services.
"""

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.core.logging import get_logger
from apps.notifications.models import Notification

logger = get_logger(__name__)


def add_notification(target_user: str, title: str, message: str, type: str = Notification.Type.INFO) -> Notification:
    """
    Notify a user.

    Args:
        target_user: Recipient username or email
        title: Short headline
        message: Notification body
        type: One of info, success, alert
    """
    notification = Notification.objects.create(
        target_user=target_user,
        title=title,
        message=message,
        type=type,
    )
    logger.info("notification_sent", notification_id=notification.pk, target_user=target_user, type=type)
    return notification


def notifications_for(user: User) -> QuerySet[Notification]:
    """Notifications addressed to the user's username or email, newest first."""
    addresses = [value for value in (user.username, user.email) if value]
    if not addresses:
        return Notification.objects.none()
    return Notification.objects.filter(target_user__in=addresses).order_by("-created_at")


def get_user_notification(user: User, notification_id: int) -> Notification | None:
    """A notification addressed to the user, or None."""
    return notifications_for(user).filter(pk=notification_id).first()


def mark_as_read(notification: Notification) -> Notification:
    if not notification.read:
        notification.read = True
        notification.save(update_fields=["read"])
    return notification
