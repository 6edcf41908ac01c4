from django.core.management import call_command
from django.urls import resolve
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIRequestFactory

from .exceptions import EditWindowExpired, custom_exception_handler
from .utils import get_client_ip


def _handle(exc):
    request = APIRequestFactory().get('/')
    return custom_exception_handler(exc, {'request': request, 'view': None})


class TestExceptionHandler:

    def test_plain_message(self):
        response = _handle(NotFound('Order not found'))
        assert response.status_code == 404
        assert response.data == {'error': 'Order not found'}

    def test_field_errors_keep_the_first_message(self):
        response = _handle(ValidationError({'cancel_reason': ['Cancel reason is required.']}))

        assert response.status_code == 400
        assert response.data['error'] == 'Cancel reason is required.'
        assert response.data['fields'] == {'cancel_reason': ['Cancel reason is required.']}

    def test_domain_flags_are_merged(self):
        response = _handle(EditWindowExpired())

        assert response.status_code == 403
        assert response.data == {
            'error': 'The edit window for this order has expired.',
            'edit_window_expired': True,
        }

    def test_unexpected_errors_are_generic(self):
        response = _handle(RuntimeError('database password is hunter2'))

        assert response.status_code == 500
        assert 'hunter2' not in response.data['error']

    def test_non_field_error(self):
        response = _handle(ValidationError('No valid fields to update'))
        assert response.data == {'error': 'No valid fields to update'}


def test_client_ip_prefers_forwarded_header():
    request = APIRequestFactory().get('/', HTTP_X_FORWARDED_FOR='10.0.0.5, 172.16.0.1')
    assert get_client_ip(request) == '10.0.0.5'


def test_health_check(client):
    response = client.get('/health/')
    assert response.json() == {'status': 'healthy', 'service': 'goldfinch-backend'}


def test_system_checks_pass():
    call_command('check')


def test_api_routes_resolve():
    assert resolve('/api/v1/admin/orders/').view_name == 'orders:admin-orders'
    assert resolve('/api/v1/auth/login/').view_name == 'auth:login'
    assert resolve('/api/v1/salesman/notifications/').view_name == 'notifications:list'
