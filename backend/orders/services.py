"""
Order workflows for the GoldFinch order desk.

Views validate input with serializers and hand the cleaned data to
OrderService, which applies the change, records status history and fans
out notifications to the owning salesman.

Notification delivery is best effort: the order change is already saved
when notifications are sent, and a failed notification is logged but
never raised.
"""

import logging

from django.db import transaction
from django.utils import timezone

from core.exceptions import EditWindowExpired, OrderAlreadyProcessed
from notifications.services import NotificationService
from .models import Order, OrderStatus, OrderStatusHistory

logger = logging.getLogger(__name__)
orders_logger = logging.getLogger('goldfinch.orders')


ADMIN_UPDATABLE_FIELDS = ['status', 'priority', 'expected_delivery_date', 'cancel_reason']

SALESMAN_EDITABLE_FIELDS = [
    'product_name',
    'customer_name',
    'customization_details',
    'expected_delivery_date',
    'priority',
    'karatage',
    'weight',
    'colour',
    'name',
    'size_type',
    'size_value',
    'stone',
    'enamel',
    'matte',
    'rodium',
    'images',
    'voice_recording',
]


class OrderService:

    @classmethod
    def create_order(cls, salesman, **data):
        """Place a new order for ``salesman``. Status starts at confirmed."""
        with transaction.atomic():
            order = Order(salesman=salesman, status=OrderStatus.CONFIRMED, **data)
            order.save()
            OrderStatusHistory.objects.create(
                order=order,
                from_status='',
                to_status=OrderStatus.CONFIRMED,
                changed_by=salesman,
                reason='Order placed',
            )

        orders_logger.info("Order %s created by salesman=%s", order.order_code, salesman.id)
        return order

    @staticmethod
    def check_salesman_can_edit(order, now=None):
        """
        Raise unless the salesman may still edit ``order``.

        The time gate is checked first, then the status gate.

        Raises:
            EditWindowExpired: more than the edit window has passed since creation
            OrderAlreadyProcessed: production has moved past the editable statuses
        """
        if not order.is_within_edit_window(now):
            raise EditWindowExpired()
        if order.status not in OrderStatus.EDITABLE:
            raise OrderAlreadyProcessed()

    @classmethod
    def update_by_salesman(cls, order, changes, now=None):
        """Apply allow-listed salesman edits after the edit window checks."""
        cls.check_salesman_can_edit(order, now)

        fields = [field for field in SALESMAN_EDITABLE_FIELDS if field in changes]
        for field in fields:
            setattr(order, field, changes[field])

        if fields:
            order.save(update_fields=fields + ['updated_at'])
            orders_logger.info(
                "Order %s edited by salesman=%s fields=%s",
                order.order_code, order.salesman_id, ','.join(fields)
            )
        return order

    @classmethod
    def update_by_admin(cls, order, changes, changed_by):
        """
        Apply an admin update restricted to ADMIN_UPDATABLE_FIELDS.

        ``changes`` is already validated (cancel reason present when
        cancelling). A status change writes a history row and notifies
        the salesman; a same-status update does neither.
        """
        old_status = order.status
        fields = [field for field in ADMIN_UPDATABLE_FIELDS if field in changes]

        for field in fields:
            setattr(order, field, changes[field])

        with transaction.atomic():
            order.save(update_fields=fields + ['updated_at'])
            status_changed = 'status' in fields and order.status != old_status
            if status_changed:
                OrderStatusHistory.objects.create(
                    order=order,
                    from_status=old_status,
                    to_status=order.status,
                    changed_by=changed_by,
                    reason=order.cancel_reason if order.status == OrderStatus.CANCELLED else '',
                )

        orders_logger.info(
            "Order %s updated by admin=%s fields=%s",
            order.order_code, changed_by.id, ','.join(fields)
        )

        if status_changed:
            reason = order.cancel_reason if order.status == OrderStatus.CANCELLED else None
            cls._notify(order, old_status, order.status, reason)

        return order

    @classmethod
    def bulk_update_status(cls, order_ids, new_status, changed_by, cancel_reason=''):
        """
        Move many orders to ``new_status`` in one update.

        Orders are loaded first so each one's previous status is known;
        only orders whose status actually changed get a history row and a
        notification. Returns the number of rows updated.
        """
        orders = list(Order.objects.filter(id__in=order_ids))
        if not orders:
            return 0

        values = {'status': new_status, 'updated_at': timezone.now()}
        if new_status == OrderStatus.CANCELLED:
            values['cancel_reason'] = cancel_reason

        changed = [order for order in orders if order.status != new_status]

        with transaction.atomic():
            updated = Order.objects.filter(id__in=[order.id for order in orders]).update(**values)
            OrderStatusHistory.objects.bulk_create([
                OrderStatusHistory(
                    order=order,
                    from_status=order.status,
                    to_status=new_status,
                    changed_by=changed_by,
                    reason=cancel_reason if new_status == OrderStatus.CANCELLED else '',
                )
                for order in changed
            ])

        orders_logger.info(
            "Bulk status update to %s by admin=%s: %s orders, %s changed",
            new_status, changed_by.id, updated, len(changed)
        )

        failed = 0
        for order in changed:
            if not cls._notify(order, order.status, new_status, cancel_reason):
                failed += 1

        if failed:
            logger.warning("Bulk status update: %s of %s notifications failed", failed, len(changed))

        return updated

    @staticmethod
    def _notify(order, old_status, new_status, cancel_reason=None):
        """Send the status notification. Returns False if it failed."""
        try:
            NotificationService.notify_order_status_change(
                order, old_status, new_status, cancel_reason=cancel_reason or None
            )
        except Exception:
            logger.exception("Failed to notify salesman about order %s", order.order_code)
            return False
        return True

    @staticmethod
    def salesman_stats(salesman, recent=5):
        orders = Order.objects.filter(salesman=salesman)
        return {
            'total': orders.count(),
            'pending': orders.filter(status__in=OrderStatus.IN_PROGRESS).count(),
            'finished': orders.filter(status=OrderStatus.FINISHED).count(),
            'dispatched': orders.filter(status=OrderStatus.DISPATCHED).count(),
            'cancelled': orders.filter(status=OrderStatus.CANCELLED).count(),
            'recent_orders': list(
                orders.select_related('catalog').order_by('-created_at')[:recent]
            ),
        }
