import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from unittest import mock

import pytest
from django.core.management import call_command
from django.db import connection
from django.urls import reverse
from django.utils import timezone

from core.exceptions import EditWindowExpired
from notifications.models import Notification, NotificationType
from .models import Order, OrderCounter, OrderStatus, OrderStatusHistory, generate_order_code
from .services import OrderService

pytestmark = pytest.mark.django_db

ORDER_CODE_RE = re.compile(r'^ORD-\d{8}-\d{5}$')


def _age(order, hours):
    Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(hours=hours))
    order.refresh_from_db()
    return order


# =============================================================================
# ORDER CODES
# =============================================================================

class TestOrderCodes:

    def test_format_uses_local_date(self):
        code = generate_order_code()
        assert ORDER_CODE_RE.match(code)
        assert code.startswith(f"ORD-{timezone.localdate().strftime('%Y%m%d')}-")

    def test_sequence_is_unique_and_increasing(self):
        codes = [generate_order_code() for _ in range(5)]
        seqs = [int(code.rsplit('-', 1)[1]) for code in codes]
        assert len(set(codes)) == 5
        assert seqs == [1, 2, 3, 4, 5]

    @pytest.mark.django_db(transaction=True)
    def test_concurrent_codes_are_unique(self):
        if connection.vendor == 'sqlite':
            pytest.skip('needs row locks')

        def create_code(_):
            try:
                return generate_order_code()
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=8) as pool:
            codes = list(pool.map(create_code, range(20)))

        seqs = sorted(int(code.rsplit('-', 1)[1]) for code in codes)
        assert len(set(codes)) == 20
        assert seqs == list(range(1, 21))

    def test_new_day_starts_a_new_counter(self):
        day_one = timezone.make_aware(datetime(2026, 10, 18, 12, 0))
        day_two = timezone.make_aware(datetime(2026, 10, 19, 12, 0))

        assert generate_order_code(day_one) == 'ORD-20261018-00001'
        assert generate_order_code(day_one) == 'ORD-20261018-00002'
        assert generate_order_code(day_two) == 'ORD-20261019-00001'
        assert OrderCounter.objects.get(name='order-20261018').seq == 2

    def test_orders_get_codes_on_save(self, make_order):
        first = make_order()
        second = make_order()
        assert ORDER_CODE_RE.match(first.order_code)
        assert int(second.order_code[-5:]) == int(first.order_code[-5:]) + 1

    def test_prune_removes_old_counters_only(self):
        old = timezone.now() - timedelta(days=30)
        generate_order_code(old)
        generate_order_code()

        call_command('prune_order_counters', days=7)

        names = list(OrderCounter.all_objects.values_list('name', flat=True))
        assert names == [f"order-{timezone.localdate().strftime('%Y%m%d')}"]

    def test_prune_dry_run_keeps_rows(self):
        generate_order_code(timezone.now() - timedelta(days=30))
        call_command('prune_order_counters', days=7, dry_run=True)
        assert OrderCounter.all_objects.count() == 1


# =============================================================================
# SALESMAN
# =============================================================================

class TestSalesmanOrders:

    def test_create_order(self, salesman_client, salesman, catalog):
        response = salesman_client.post(reverse('orders:salesman-orders'), {
            'product_name': 'Floral Ring',
            'customer_name': 'Priya',
            'catalog': str(catalog.id),
            'priority': 'high',
            'karatage': '22K',
            'weight': '4.250',
            'size': {'type': 'metal', 'value': '12'},
            'stone': True,
            'images': ['https://img.example.com/ref.jpg'],
        }, format='json')

        assert response.status_code == 201
        body = response.data['order']
        assert ORDER_CODE_RE.match(body['order_code'])
        assert body['status'] == OrderStatus.CONFIRMED
        assert body['size'] == {'type': 'metal', 'value': '12'}
        assert body['catalog']['id'] == str(catalog.id)
        assert body['salesman']['id'] == str(salesman.id)

        order = Order.objects.get(order_code=body['order_code'])
        assert order.salesman == salesman
        assert order.status_history.count() == 1

    def test_create_requires_names(self, salesman_client):
        response = salesman_client.post(
            reverse('orders:salesman-orders'), {'product_name': 'Ring'}, format='json'
        )
        assert response.status_code == 400
        assert 'customer_name' in response.data['fields']
        assert Order.objects.count() == 0

    def test_status_in_create_body_is_ignored(self, salesman_client):
        response = salesman_client.post(reverse('orders:salesman-orders'), {
            'product_name': 'Ring',
            'customer_name': 'Priya',
            'status': OrderStatus.DISPATCHED,
        }, format='json')
        assert response.status_code == 201
        assert response.data['order']['status'] == OrderStatus.CONFIRMED

    def test_list_only_own_orders(self, salesman_client, make_order, other_salesman):
        mine = make_order()
        make_order(owner=other_salesman)

        response = salesman_client.get(reverse('orders:salesman-orders'))

        assert response.status_code == 200
        assert [row['id'] for row in response.data['results']] == [str(mine.id)]
        assert response.data['pagination']['total'] == 1

    def test_list_status_filter(self, salesman_client, make_order):
        make_order()
        cancelled = make_order(status=OrderStatus.CANCELLED)

        response = salesman_client.get(reverse('orders:salesman-orders'), {'status': 'cancelled'})
        assert [row['id'] for row in response.data['results']] == [str(cancelled.id)]

        response = salesman_client.get(reverse('orders:salesman-orders'), {'status': 'all'})
        assert response.data['pagination']['total'] == 2

    def test_detail_includes_edit_window(self, salesman_client, order):
        response = salesman_client.get(reverse('orders:salesman-order-detail', args=[order.id]))

        assert response.status_code == 200
        window = response.data['edit_window']
        assert window['can_edit'] is True
        assert 0 < window['remaining_seconds'] <= 48 * 3600

    def test_detail_of_another_salesmans_order_is_404(self, salesman_client, make_order, other_salesman):
        theirs = make_order(owner=other_salesman)
        response = salesman_client.get(reverse('orders:salesman-order-detail', args=[theirs.id]))
        assert response.status_code == 404
        assert response.data == {'error': 'Order not found'}

    def test_edit_within_window(self, salesman_client, order):
        response = salesman_client.put(reverse('orders:salesman-order-detail', args=[order.id]), {
            'customer_name': 'Priya Sharma',
            'colour': 'rose',
            'size': {'type': 'plastic', 'value': '14'},
            'status': OrderStatus.DISPATCHED,
            'order_code': 'ORD-19990101-00001',
        }, format='json')

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.customer_name == 'Priya Sharma'
        assert order.colour == 'rose'
        assert order.size == {'type': 'plastic', 'value': '14'}
        assert order.status == OrderStatus.CONFIRMED
        assert order.order_code != 'ORD-19990101-00001'

    def test_edit_after_49_hours_is_rejected(self, salesman_client, order):
        _age(order, 49)

        response = salesman_client.put(
            reverse('orders:salesman-order-detail', args=[order.id]),
            {'customer_name': 'Changed'},
            format='json',
        )

        assert response.status_code == 403
        assert response.data['edit_window_expired'] is True
        order.refresh_from_db()
        assert order.customer_name == 'Priya'

    def test_edit_after_processing_started_is_rejected(self, salesman_client, make_order):
        order = make_order(status=OrderStatus.CAD_COMPLETED)

        response = salesman_client.put(
            reverse('orders:salesman-order-detail', args=[order.id]),
            {'customer_name': 'Changed'},
            format='json',
        )

        assert response.status_code == 403
        assert response.data['order_processed'] is True
        assert 'edit_window_expired' not in response.data

    def test_accepted_order_is_still_editable(self, salesman_client, make_order):
        order = make_order(status=OrderStatus.ORDER_VIEW_AND_ACCEPTED)
        response = salesman_client.patch(
            reverse('orders:salesman-order-detail', args=[order.id]),
            {'priority': 'urgent'},
            format='json',
        )
        assert response.status_code == 200
        assert response.data['order']['priority'] == 'urgent'

    def test_time_gate_is_checked_before_status_gate(self, make_order):
        order = _age(make_order(status=OrderStatus.FINISHED), 72)
        with pytest.raises(EditWindowExpired):
            OrderService.check_salesman_can_edit(order)

    def test_stats(self, salesman_client, make_order, other_salesman):
        make_order()
        make_order(status=OrderStatus.PRODUCTION_FLOOR)
        make_order(status=OrderStatus.FINISHED)
        make_order(status=OrderStatus.DISPATCHED)
        make_order(status=OrderStatus.CANCELLED)
        make_order(owner=other_salesman)

        response = salesman_client.get(reverse('orders:salesman-order-stats'))

        assert response.status_code == 200
        assert response.data['total'] == 5
        assert response.data['pending'] == 2
        assert response.data['finished'] == 1
        assert response.data['dispatched'] == 1
        assert response.data['cancelled'] == 1
        assert len(response.data['recent_orders']) == 5

    def test_unapproved_salesman_is_refused(self, api_client, make_salesman):
        pending = make_salesman('9000000010', approved=False)
        api_client.force_authenticate(user=pending)

        response = api_client.get(reverse('orders:salesman-orders'))

        assert response.status_code == 403
        assert response.data == {'error': 'Access denied.'}

    def test_admin_cannot_use_salesman_endpoints(self, admin_client):
        response = admin_client.get(reverse('orders:salesman-orders'))
        assert response.status_code == 403

    def test_anonymous_is_401(self, api_client):
        response = api_client.get(reverse('orders:salesman-orders'))
        assert response.status_code == 401


# =============================================================================
# ADMIN SINGLE UPDATE
# =============================================================================

class TestAdminOrderUpdate:

    def url(self, order):
        return reverse('orders:admin-order-detail', args=[order.id])

    def test_cancel_without_reason_is_rejected(self, admin_client, order):
        response = admin_client.put(self.url(order), {'status': 'cancelled'}, format='json')

        assert response.status_code == 400
        assert 'cancel' in response.data['error'].lower()
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED
        assert Notification.objects.count() == 0
        assert order.status_history.count() == 1

    def test_cancel_with_blank_reason_is_rejected(self, admin_client, order):
        response = admin_client.put(
            self.url(order), {'status': 'cancelled', 'cancel_reason': '   '}, format='json'
        )
        assert response.status_code == 400
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED

    def test_production_floor_sends_info_notification(self, admin_client, order, admin_user):
        response = admin_client.put(self.url(order), {'status': 'production_floor'}, format='json')

        assert response.status_code == 200
        assert response.data['status'] == OrderStatus.PRODUCTION_FLOOR
        assert response.data['salesman']['id'] == str(order.salesman_id)

        notification = Notification.objects.get()
        assert notification.recipient_id == order.salesman_id
        assert notification.notification_type == NotificationType.INFO
        assert notification.title == 'Production Started'
        assert order.order_code in notification.message
        assert 'Priya' in notification.message
        assert notification.metadata == {
            'old_status': 'confirmed',
            'new_status': 'production_floor',
            'customer_name': 'Priya',
        }

        history = order.status_history.order_by('created_at').last()
        assert history.from_status == OrderStatus.CONFIRMED
        assert history.to_status == OrderStatus.PRODUCTION_FLOOR
        assert history.changed_by == admin_user

    def test_same_status_sends_no_notification(self, admin_client, order):
        response = admin_client.put(
            self.url(order), {'status': 'confirmed', 'priority': 'urgent'}, format='json'
        )

        assert response.status_code == 200
        assert response.data['priority'] == 'urgent'
        assert Notification.objects.count() == 0
        assert order.status_history.count() == 1

    def test_cancel_with_reason(self, admin_client, order):
        response = admin_client.patch(
            self.url(order),
            {'status': 'cancelled', 'cancel_reason': 'Customer request'},
            format='json',
        )

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.cancel_reason == 'Customer request'
        notification = Notification.objects.get()
        assert notification.notification_type == NotificationType.ERROR
        assert notification.message.endswith('Reason: Customer request')
        assert notification.metadata['cancel_reason'] == 'Customer request'

    def test_cancelled_order_keeps_a_reason(self, admin_client, order):
        admin_client.put(
            self.url(order), {'status': 'cancelled', 'cancel_reason': 'Customer request'}, format='json'
        )

        response = admin_client.put(self.url(order), {'cancel_reason': '   '}, format='json')
        assert response.status_code == 400
        assert 'cancel_reason' in response.data['fields']

        response = admin_client.put(self.url(order), {'priority': 'urgent'}, format='json')
        assert response.status_code == 200

        order.refresh_from_db()
        assert order.cancel_reason == 'Customer request'
        assert order.priority == 'urgent'

    def test_fields_outside_allow_list_are_ignored(self, admin_client, order):
        response = admin_client.put(
            self.url(order),
            {'priority': 'low', 'customer_name': 'Hacked', 'order_code': 'X'},
            format='json',
        )

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.priority == 'low'
        assert order.customer_name == 'Priya'

    def test_no_valid_fields(self, admin_client, order):
        response = admin_client.put(self.url(order), {'customer_name': 'Hacked'}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'No valid fields to update'

    def test_invalid_status(self, admin_client, order):
        response = admin_client.put(self.url(order), {'status': 'shipped'}, format='json')
        assert response.status_code == 400

    def test_missing_order_is_404(self, admin_client):
        response = admin_client.put(
            reverse('orders:admin-order-detail', args=['00000000-0000-0000-0000-000000000000']),
            {'status': 'finished'},
            format='json',
        )
        assert response.status_code == 404

    def test_notification_failure_does_not_fail_update(self, admin_client, order):
        with mock.patch(
            'orders.services.NotificationService.notify_order_status_change',
            side_effect=RuntimeError('db down'),
        ):
            response = admin_client.put(self.url(order), {'status': 'finished'}, format='json')

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.status == OrderStatus.FINISHED

    def test_admin_edits_ignore_the_edit_window(self, admin_client, order):
        _age(order, 200)
        response = admin_client.put(self.url(order), {'status': 'dispatched'}, format='json')
        assert response.status_code == 200

    def test_salesman_cannot_use_admin_update(self, salesman_client, order):
        response = salesman_client.put(self.url(order), {'status': 'finished'}, format='json')
        assert response.status_code == 403

    def test_detail_includes_history(self, admin_client, order):
        admin_client.put(self.url(order), {'status': 'cad_completed'}, format='json')
        response = admin_client.get(self.url(order))

        assert response.status_code == 200
        assert [row['to_status'] for row in response.data['status_history']] == [
            'confirmed', 'cad_completed'
        ]

    def test_delete_removes_the_row(self, admin_client, order):
        admin_client.put(self.url(order), {'status': 'finished'}, format='json')

        response = admin_client.delete(self.url(order))

        assert response.status_code == 200
        assert not Order.all_objects.filter(pk=order.pk).exists()
        assert not OrderStatusHistory.all_objects.filter(order_id=order.pk).exists()
        notification = Notification.objects.get()
        assert notification.order is None
        assert notification.order_code == order.order_code


# =============================================================================
# ADMIN BULK UPDATE
# =============================================================================

class TestBulkUpdate:

    @pytest.fixture(autouse=True)
    def _url(self):
        self.url = reverse('orders:admin-order-bulk-update')

    def test_bulk_cancel_three(self, admin_client, make_order):
        orders = [make_order(customer_name=f'Customer {n}') for n in range(3)]

        response = admin_client.put(self.url, {
            'ids': [str(o.id) for o in orders],
            'status': 'cancelled',
            'cancel_reason': 'Customer request',
        }, format='json')

        assert response.status_code == 200
        assert response.data == {'message': 'Orders updated', 'updated': 3}

        for o in orders:
            o.refresh_from_db()
            assert o.status == OrderStatus.CANCELLED
            assert o.cancel_reason == 'Customer request'

        notifications = Notification.objects.all()
        assert notifications.count() == 3
        for notification in notifications:
            assert notification.notification_type == NotificationType.ERROR
            assert 'Customer request' in notification.message

    def test_bulk_cancel_requires_reason(self, admin_client, order):
        response = admin_client.put(self.url, {'ids': [str(order.id)], 'status': 'cancelled'}, format='json')

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED

    def test_one_notification_attempt_per_changed_order(self, admin_client, make_order):
        orders = [make_order() for _ in range(4)]

        with mock.patch(
            'orders.services.NotificationService.notify_order_status_change',
            side_effect=RuntimeError('notification store unavailable'),
        ) as notify:
            response = admin_client.put(self.url, {
                'ids': [str(o.id) for o in orders],
                'status': 'finished',
            }, format='json')

        assert response.status_code == 200
        assert notify.call_count == 4
        assert Order.objects.filter(status=OrderStatus.FINISHED).count() == 4

    def test_unchanged_orders_are_not_notified(self, admin_client, make_order):
        already = make_order(status=OrderStatus.FINISHED)
        moving = make_order()

        response = admin_client.put(self.url, {
            'ids': [str(already.id), str(moving.id)],
            'status': 'finished',
        }, format='json')

        assert response.data['updated'] == 2
        notification = Notification.objects.get()
        assert notification.order_id == moving.id
        assert notification.metadata['old_status'] == 'confirmed'
        assert OrderStatusHistory.objects.filter(to_status=OrderStatus.FINISHED).count() == 1

    def test_unknown_ids_update_nothing(self, admin_client):
        response = admin_client.put(self.url, {
            'ids': ['00000000-0000-0000-0000-000000000000'],
            'status': 'finished',
        }, format='json')
        assert response.status_code == 200
        assert response.data['updated'] == 0

    def test_empty_ids_rejected(self, admin_client):
        response = admin_client.put(self.url, {'ids': [], 'status': 'finished'}, format='json')
        assert response.status_code == 400


# =============================================================================
# ADMIN LIST
# =============================================================================

class TestAdminOrderList:

    @pytest.fixture(autouse=True)
    def _url(self):
        self.url = reverse('orders:admin-orders')

    def test_defaults_to_confirmed(self, admin_client, make_order):
        new = make_order()
        make_order(status=OrderStatus.FINISHED)

        response = admin_client.get(self.url)

        assert response.status_code == 200
        assert [row['id'] for row in response.data['results']] == [str(new.id)]

    def test_status_all(self, admin_client, make_order):
        make_order()
        make_order(status=OrderStatus.FINISHED)

        response = admin_client.get(self.url, {'status': 'all'})
        assert response.data['pagination']['total'] == 2

    def test_search(self, admin_client, make_order):
        match = make_order(customer_name='Anjali Mehta')
        make_order(customer_name='Kiran', product_name='Bangle')

        response = admin_client.get(self.url, {'status': 'all', 'q': 'anjali'})
        assert [row['id'] for row in response.data['results']] == [str(match.id)]

        response = admin_client.get(self.url, {'status': 'all', 'q': match.order_code[-5:]})
        assert str(match.id) in [row['id'] for row in response.data['results']]

    def test_date_range_covers_whole_days(self, admin_client, make_order):
        today = make_order()
        old = _age(make_order(), 24 * 10)

        date = timezone.localdate().isoformat()
        response = admin_client.get(self.url, {'date_from': date, 'date_to': date})
        ids = [row['id'] for row in response.data['results']]

        assert str(today.id) in ids
        assert str(old.id) not in ids

    def test_sorting(self, admin_client, make_order):
        make_order(customer_name='Bela')
        make_order(customer_name='Aarti')

        response = admin_client.get(self.url, {'sort_field': 'customer_name', 'sort_order': 'asc'})
        assert [row['customer_name'] for row in response.data['results']] == ['Aarti', 'Bela']

    def test_pagination(self, admin_client, make_order):
        for _ in range(3):
            make_order()

        response = admin_client.get(self.url, {'limit': 2, 'page': 2})

        assert response.data['pagination'] == {'page': 2, 'limit': 2, 'total': 3, 'pages': 2}
        assert len(response.data['results']) == 1
