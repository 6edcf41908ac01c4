"""
Shared pytest fixtures for the GoldFinch order desk.
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from authentication.models import User, UserRole, RequestStatus, Shop
from catalog.models import Catalog
from orders.models import Order
from orders.services import OrderService


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_admin('9000000001', 'Admin@123', name='Asha Admin', email='admin@goldfinch.test')


@pytest.fixture
def make_salesman(db):
    def _make(mobile, name='Ravi Sales', approved=True, **extra):
        user = User.objects.create_salesman(
            mobile,
            'Sales@123',
            name=name,
            shop_name=extra.pop('shop_name', 'Ravi Jewellers'),
            shop_address=extra.pop('shop_address', 'MG Road, Pune'),
            shop_mobile=extra.pop('shop_mobile', '9000000099'),
            **extra
        )
        if approved:
            user.approve()
        return user
    return _make


@pytest.fixture
def salesman(make_salesman):
    return make_salesman('9000000002')


@pytest.fixture
def other_salesman(make_salesman):
    return make_salesman('9000000004', name='Meera Sales')


@pytest.fixture
def shop_owner(db):
    owner = User.objects.create_user(
        '9000000003',
        'Shop@123',
        name='Sunil Owner',
        role=UserRole.SHOP_OWNER,
        request_status=RequestStatus.APPROVED,
        is_approved=True,
    )
    shop = Shop.objects.create(shop_name='Sunil Gold House', owner=owner, address='FC Road, Pune', is_verified=True)
    owner.shop = shop
    owner.save(update_fields=['shop', 'updated_at'])
    return owner


@pytest.fixture
def catalog(db):
    return Catalog.objects.create(
        name='Floral Ring',
        images=['https://img.example.com/floral-ring.jpg'],
        size='12',
        weight='4.250',
        description='Floral band with stone setting',
    )


@pytest.fixture
def make_order(salesman):
    def _make(owner=None, **fields):
        fields.setdefault('product_name', 'Floral Ring')
        fields.setdefault('customer_name', 'Priya')
        status = fields.pop('status', None)
        order = OrderService.create_order(owner or salesman, **fields)
        if status:
            Order.objects.filter(pk=order.pk).update(status=status)
            order.refresh_from_db()
        return order
    return _make


@pytest.fixture
def order(make_order):
    return make_order()


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def salesman_client(salesman):
    client = APIClient()
    client.force_authenticate(user=salesman)
    return client
