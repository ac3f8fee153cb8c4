import logging

from django.conf import settings
from django.db import transaction

from workflow.exceptions import NotFound, Unauthorized

from .models import Notification

logger = logging.getLogger(__name__)


def _deliver(user_id, event, payload):
    try:
        Notification.objects.create(
            user_id=user_id,
            event=event,
            title=payload.get('title', event),
            message=payload.get('message', ''),
            link=payload.get('link', ''),
            payload=payload,
        )
    except Exception:
        logger.exception("Failed to deliver %s notification to user %s", event, user_id)


def notify(user_id, event, payload):
    """
    Fire-and-forget notification.

    Delivery runs after the surrounding transaction commits and is skipped
    entirely if it rolls back.
    """
    if not getattr(settings, 'NOTIFICATIONS_ENABLED', True):
        return
    transaction.on_commit(lambda: _deliver(user_id, event, dict(payload)))


class NotificationService:
    """
    Inbox queries and read-state updates for the current user.
    """

    @classmethod
    def for_user(cls, user_id):
        return Notification.objects.filter(user_id=user_id)

    @classmethod
    def unread_count(cls, user_id):
        return Notification.objects.filter(user_id=user_id, read=False).count()

    @classmethod
    def mark_as_read(cls, notification_id, user_id):
        try:
            notification = Notification.objects.get(pk=notification_id)
        except Notification.DoesNotExist:
            raise NotFound("Notification not found.")

        if notification.user_id != user_id:
            raise Unauthorized()

        if not notification.read:
            notification.read = True
            notification.save(update_fields=['read'])
        return notification
