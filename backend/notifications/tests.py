import pytest
from django.urls import reverse

from orders.models import OrderStatus
from .models import Notification, NotificationType
from .services import NotificationService

pytestmark = pytest.mark.django_db


class TestStatusMessages:

    @pytest.mark.parametrize('status, title, notification_type', [
        (OrderStatus.CONFIRMED, 'Order Confirmed', NotificationType.SUCCESS),
        (OrderStatus.ORDER_VIEW_AND_ACCEPTED, 'Order Accepted', NotificationType.SUCCESS),
        (OrderStatus.CAD_COMPLETED, 'CAD Design Completed', NotificationType.SUCCESS),
        (OrderStatus.PRODUCTION_FLOOR, 'Production Started', NotificationType.INFO),
        (OrderStatus.FINISHED, 'Production Completed', NotificationType.SUCCESS),
        (OrderStatus.DISPATCHED, 'Order Dispatched', NotificationType.SUCCESS),
        (OrderStatus.CANCELLED, 'Order Cancelled', NotificationType.ERROR),
    ])
    def test_every_status_has_a_message(self, status, title, notification_type):
        content = NotificationService.build_status_message('ORD-20261019-00007', status, 'Priya')

        assert content['title'] == title
        assert content['notification_type'] == notification_type
        assert 'ORD-20261019-00007' in content['message']
        assert 'Priya' in content['message']

    def test_customer_name_is_optional(self):
        content = NotificationService.build_status_message('ORD-20261019-00007', OrderStatus.DISPATCHED)
        assert content['message'] == (
            'Order ORD-20261019-00007 has been dispatched and is on its way to delivery.'
        )

    def test_cad_completed_wraps_customer_in_parentheses(self):
        content = NotificationService.build_status_message(
            'ORD-20261019-00007', OrderStatus.CAD_COMPLETED, 'Priya'
        )
        assert content['message'] == (
            'CAD design for order ORD-20261019-00007 (Priya) has been completed and approved.'
        )

    def test_cancelled_with_reason(self):
        content = NotificationService.build_status_message(
            'ORD-20261019-00007', OrderStatus.CANCELLED, 'Priya', cancel_reason='Customer request'
        )
        assert content['message'] == (
            'Order ORD-20261019-00007 for Priya has been cancelled. Reason: Customer request'
        )

    def test_cancelled_without_reason(self):
        content = NotificationService.build_status_message('ORD-20261019-00007', OrderStatus.CANCELLED)
        assert content['message'].endswith('Please contact support for more details.')

    def test_unknown_status_has_no_message(self):
        assert NotificationService.build_status_message('ORD-20261019-00007', 'on_hold') is None

    def test_unknown_status_creates_nothing(self, order):
        assert NotificationService.notify_order_status_change(order, 'confirmed', 'on_hold') is None
        assert Notification.objects.count() == 0


@pytest.fixture
def notifications(order, salesman):
    created = [
        NotificationService.notify_order_status_change(order, 'confirmed', status)
        for status in (OrderStatus.ORDER_VIEW_AND_ACCEPTED, OrderStatus.PRODUCTION_FLOOR, OrderStatus.CANCELLED)
    ]
    return created


class TestNotificationApi:

    def test_list_with_unread_count(self, salesman_client, notifications):
        response = salesman_client.get(reverse('notifications:list'))

        assert response.status_code == 200
        assert response.data['unread_count'] == 3
        assert response.data['pagination']['total'] == 3
        assert response.data['results'][0]['order']['order_code'] == notifications[0].order_code

    def test_filters(self, salesman_client, notifications):
        notifications[0].mark_as_read()

        response = salesman_client.get(reverse('notifications:list'), {'is_read': 'false'})
        assert response.data['pagination']['total'] == 2

        response = salesman_client.get(reverse('notifications:list'), {'type': 'info'})
        assert [row['title'] for row in response.data['results']] == ['Production Started']

        response = salesman_client.get(reverse('notifications:list'), {'type': 'all'})
        assert response.data['pagination']['total'] == 3

    def test_unknown_is_read_value_is_ignored(self, salesman_client, notifications):
        notifications[0].mark_as_read()

        response = salesman_client.get(reverse('notifications:list'), {'is_read': 'yes'})
        assert response.data['pagination']['total'] == 3

        response = salesman_client.get(reverse('notifications:list'), {'is_read': 'TRUE'})
        assert response.data['pagination']['total'] == 1

    def test_only_own_notifications(self, api_client, other_salesman, notifications):
        api_client.force_authenticate(user=other_salesman)
        response = api_client.get(reverse('notifications:list'))
        assert response.data['pagination']['total'] == 0
        assert response.data['unread_count'] == 0

    def test_mark_selected_as_read(self, salesman_client, notifications):
        response = salesman_client.put(reverse('notifications:list'), {
            'action': 'mark_as_read',
            'notification_ids': [str(notifications[0].id), str(notifications[1].id)],
        }, format='json')

        assert response.status_code == 200
        assert response.data['modified_count'] == 2
        assert NotificationService.get_unread_count(notifications[0].recipient) == 1
        notifications[0].refresh_from_db()
        assert notifications[0].read_at is not None

    def test_mark_as_read_skips_other_users(self, api_client, other_salesman, notifications):
        api_client.force_authenticate(user=other_salesman)
        response = api_client.put(reverse('notifications:list'), {
            'action': 'mark_as_read',
            'notification_ids': [str(notifications[0].id)],
        }, format='json')

        assert response.data['modified_count'] == 0
        notifications[0].refresh_from_db()
        assert notifications[0].is_read is False

    def test_mark_all_as_read(self, salesman_client, notifications):
        response = salesman_client.put(
            reverse('notifications:list'), {'action': 'mark_all_as_read'}, format='json'
        )
        assert response.status_code == 200
        assert response.data['modified_count'] == 3
        assert Notification.objects.filter(is_read=False).count() == 0

    def test_invalid_action(self, salesman_client, notifications):
        response = salesman_client.put(reverse('notifications:list'), {'action': 'delete'}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Invalid action'

    def test_read_all_endpoint(self, salesman_client, notifications):
        response = salesman_client.post(reverse('notifications:read-all'))
        assert response.data['count'] == 3

    def test_mark_single_read(self, salesman_client, notifications):
        response = salesman_client.post(reverse('notifications:mark-read', args=[notifications[2].id]))

        assert response.status_code == 200
        assert response.data['is_read'] is True

        response = salesman_client.get(reverse('notifications:unread-count'))
        assert response.data == {'unread_count': 2}

    def test_mark_single_read_of_another_user_is_404(self, api_client, other_salesman, notifications):
        api_client.force_authenticate(user=other_salesman)
        response = api_client.post(reverse('notifications:mark-read', args=[notifications[0].id]))
        assert response.status_code == 404

    def test_admins_have_no_inbox(self, admin_client):
        response = admin_client.get(reverse('notifications:list'))
        assert response.status_code == 403
