"""
Notification service for the GoldFinch order desk.

Turns order status changes into salesman-facing messages and handles
read state. Callers treat notification delivery as best effort: a failure
here must never undo the order update that triggered it.
"""

import logging

from django.utils import timezone

from orders.models import OrderStatus
from .models import Notification, NotificationType, RecipientType

logger = logging.getLogger(__name__)


# new status -> (title, message template, type)
# Templates take {code}, {for_customer} (" for <name>") and
# {about_customer} (" (<name>)"); both customer parts are empty when the
# order has no customer name.
STATUS_MESSAGES = {
    OrderStatus.CONFIRMED: (
        'Order Confirmed',
        'Your order {code}{for_customer} has been confirmed and is being processed.',
        NotificationType.SUCCESS,
    ),
    OrderStatus.ORDER_VIEW_AND_ACCEPTED: (
        'Order Accepted',
        'Order {code}{for_customer} has been reviewed and accepted by the production team.',
        NotificationType.SUCCESS,
    ),
    OrderStatus.CAD_COMPLETED: (
        'CAD Design Completed',
        'CAD design for order {code}{about_customer} has been completed and approved.',
        NotificationType.SUCCESS,
    ),
    OrderStatus.PRODUCTION_FLOOR: (
        'Production Started',
        'Order {code}{for_customer} is now in production. Manufacturing has begun.',
        NotificationType.INFO,
    ),
    OrderStatus.FINISHED: (
        'Production Completed',
        'Great news! Order {code}{for_customer} has been completed and is ready for dispatch.',
        NotificationType.SUCCESS,
    ),
    OrderStatus.DISPATCHED: (
        'Order Dispatched',
        'Order {code}{for_customer} has been dispatched and is on its way to delivery.',
        NotificationType.SUCCESS,
    ),
    OrderStatus.CANCELLED: (
        'Order Cancelled',
        'Order {code}{for_customer} has been cancelled.',
        NotificationType.ERROR,
    ),
}


class NotificationService:
    """Creates notifications and manages their read state."""

    @classmethod
    def build_status_message(cls, order_code, new_status, customer_name=None, cancel_reason=None):
        """
        Build the notification content for an order entering ``new_status``.

        Returns:
            dict with title, message and notification_type, or None when the
            status has no message
        """
        entry = STATUS_MESSAGES.get(new_status)
        if entry is None:
            return None

        title, template, notification_type = entry
        message = template.format(
            code=order_code,
            for_customer=f' for {customer_name}' if customer_name else '',
            about_customer=f' ({customer_name})' if customer_name else '',
        )

        if new_status == OrderStatus.CANCELLED:
            if cancel_reason:
                message += f' Reason: {cancel_reason}'
            else:
                message += ' Please contact support for more details.'

        return {
            'title': title,
            'message': message,
            'notification_type': notification_type,
        }

    @classmethod
    def notify_order_status_change(cls, order, old_status, new_status, cancel_reason=None):
        """
        Tell the owning salesman that their order moved to ``new_status``.

        Returns the created Notification, or None for a status without a
        message.
        """
        content = cls.build_status_message(
            order.order_code,
            new_status,
            customer_name=order.customer_name,
            cancel_reason=cancel_reason,
        )
        if content is None:
            logger.debug("No notification for status %s on %s", new_status, order.order_code)
            return None

        metadata = {
            'old_status': old_status,
            'new_status': new_status,
            'customer_name': order.customer_name,
        }
        if cancel_reason:
            metadata['cancel_reason'] = cancel_reason

        return cls._create_notification(
            recipient_id=order.salesman_id,
            order=order,
            metadata=metadata,
            **content,
        )

    @classmethod
    def _create_notification(cls, recipient_id, title, message, notification_type,
                             order=None, metadata=None):
        notification = Notification.objects.create(
            recipient_id=recipient_id,
            user_type=RecipientType.SALESMAN,
            title=title,
            message=message,
            notification_type=notification_type,
            order=order,
            order_code=order.order_code if order else '',
            metadata=metadata or {},
        )
        logger.info(
            "Notification %s created for user=%s order=%s",
            notification.id, recipient_id, notification.order_code or '-'
        )
        return notification

    @classmethod
    def for_user(cls, user):
        return Notification.objects.filter(recipient=user, user_type=RecipientType.SALESMAN)

    @classmethod
    def mark_read(cls, user, notification_ids):
        """Mark the given notifications of ``user`` as read. Returns the count changed."""
        return cls.for_user(user).filter(
            id__in=notification_ids,
            is_read=False,
        ).update(is_read=True, read_at=timezone.now(), updated_at=timezone.now())

    @classmethod
    def mark_all_read(cls, user):
        return cls.for_user(user).filter(is_read=False).update(
            is_read=True, read_at=timezone.now(), updated_at=timezone.now()
        )

    @classmethod
    def get_unread_count(cls, user):
        return cls.for_user(user).filter(is_read=False).count()
