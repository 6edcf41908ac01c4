import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework.test import APIClient

from .models import User, UserRole, RequestStatus, Shop

pytestmark = pytest.mark.django_db


def _login(identifier, password):
    return APIClient().post(
        reverse('auth:login'), {'identifier': identifier, 'password': password}, format='json'
    )


class TestLogin:

    def test_login_with_mobile(self, salesman):
        response = _login('9000000002', 'Sales@123')

        assert response.status_code == 200
        assert response.data['role'] == UserRole.SALESMAN
        assert response.data['access']
        assert response.data['refresh']
        salesman.refresh_from_db()
        assert salesman.last_login is not None

    def test_login_with_email(self, admin_user):
        response = _login('ADMIN@goldfinch.test', 'Admin@123')
        assert response.status_code == 200
        assert response.data['role'] == UserRole.ADMIN

    def test_wrong_password(self, salesman):
        response = _login('9000000002', 'nope')
        assert response.status_code == 401
        assert response.data == {'error': 'Invalid credentials'}

    def test_pending_salesman_cannot_log_in(self, make_salesman):
        make_salesman('9000000010', approved=False)
        response = _login('9000000010', 'Sales@123')
        assert response.status_code == 403

    def test_blocked_salesman_cannot_log_in(self, salesman):
        salesman.set_blocked(True)
        response = _login('9000000002', 'Sales@123')
        assert response.status_code == 403
        assert 'blocked' in response.data['error']

    def test_token_works_until_user_is_blocked(self, salesman):
        access = _login('9000000002', 'Sales@123').data['access']
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')

        assert client.get(reverse('auth:current-user')).status_code == 200

        salesman.set_blocked(True)
        assert client.get(reverse('auth:current-user')).status_code == 401


class TestRegistration:

    def test_salesman_registration_is_pending(self, api_client, shop_owner):
        response = api_client.post(reverse('auth:salesman-register'), {
            'name': 'Kiran',
            'mobile': '9000000020',
            'password': 'secret1',
            'shop_name': 'Kiran Gold',
            'shop_address': 'Camp, Pune',
            'shop_mobile': '9000000021',
            'shop': str(shop_owner.shop_id),
        }, format='json')

        assert response.status_code == 201
        user = User.objects.get(mobile='9000000020')
        assert user.role == UserRole.SALESMAN
        assert user.request_status == RequestStatus.PENDING
        assert user.shop_id == shop_owner.shop_id
        assert user.check_password('secret1')

    def test_duplicate_mobile_is_rejected(self, api_client, salesman):
        response = api_client.post(reverse('auth:salesman-register'), {
            'name': 'Dup',
            'mobile': '9000000002',
            'password': 'secret1',
            'shop_name': 'X',
            'shop_address': 'Y',
            'shop_mobile': '1',
        }, format='json')
        assert response.status_code == 400

    def test_shop_owner_registration_creates_shop(self, api_client):
        response = api_client.post(reverse('auth:shop-owner-register'), {
            'name': 'Lata',
            'mobile': '9000000030',
            'email': 'lata@goldfinch.test',
            'password': 'secret1',
            'shop_name': 'Lata Jewels',
            'address': '12 Main Road',
            'city': 'Nashik',
            'state': 'Maharashtra',
            'pincode': '422001',
        }, format='json')

        assert response.status_code == 201
        owner = User.objects.get(mobile='9000000030')
        assert owner.role == UserRole.SHOP_OWNER
        assert owner.is_approved is False
        assert owner.shop.address == '12 Main Road, Nashik, Maharashtra - 422001'

    def test_shop_list_is_public(self, api_client, shop_owner):
        response = api_client.get(reverse('auth:shop-list'))
        assert response.status_code == 200
        assert [row['shop_name'] for row in response.data] == ['Sunil Gold House']


class TestAdminUserManagement:

    def test_pending_requests(self, admin_client, make_salesman):
        pending = make_salesman('9000000040', approved=False)
        make_salesman('9000000041')

        response = admin_client.get(reverse('auth:admin-requests'))

        assert [row['id'] for row in response.data['results']] == [str(pending.id)]

    def test_approve_request(self, admin_client, make_salesman):
        pending = make_salesman('9000000040', approved=False)

        response = admin_client.patch(
            reverse('auth:admin-request-action', args=[pending.id]), {'action': 'approve'}, format='json'
        )

        assert response.status_code == 200
        pending.refresh_from_db()
        assert pending.is_approved is True
        assert pending.request_status == RequestStatus.APPROVED

    def test_approving_shop_owner_verifies_shop(self, admin_client):
        owner = User.objects.create_user(
            '9000000050', 'secret1', name='Owner', role=UserRole.SHOP_OWNER
        )
        shop = Shop.objects.create(shop_name='Pending Shop', owner=owner, address='Somewhere')

        admin_client.patch(
            reverse('auth:admin-request-action', args=[owner.id]), {'action': 'approve'}, format='json'
        )

        shop.refresh_from_db()
        assert shop.is_verified is True

    def test_reject_request(self, admin_client, make_salesman):
        pending = make_salesman('9000000040', approved=False)
        admin_client.patch(
            reverse('auth:admin-request-action', args=[pending.id]), {'action': 'reject'}, format='json'
        )
        pending.refresh_from_db()
        assert pending.request_status == RequestStatus.REJECTED

    def test_block_salesman(self, admin_client, salesman):
        response = admin_client.patch(
            reverse('auth:admin-salesman-detail', args=[salesman.id]), {'is_blocked': True}, format='json'
        )
        assert response.status_code == 200
        salesman.refresh_from_db()
        assert salesman.is_blocked is True

    def test_salesman_list(self, admin_client, salesman, make_salesman):
        make_salesman('9000000040', approved=False)
        response = admin_client.get(reverse('auth:admin-salesmen'))
        assert [row['id'] for row in response.data['results']] == [str(salesman.id)]

    def test_salesman_cannot_manage_users(self, salesman_client):
        response = salesman_client.get(reverse('auth:admin-requests'))
        assert response.status_code == 403


class TestShopOwner:

    def test_owner_sees_and_approves_own_requests(self, api_client, shop_owner, make_salesman):
        mine = make_salesman('9000000060', approved=False, shop=shop_owner.shop)
        make_salesman('9000000061', approved=False)
        api_client.force_authenticate(user=shop_owner)

        response = api_client.get(reverse('auth:shop-salesman-requests'))
        assert [row['id'] for row in response.data['results']] == [str(mine.id)]

        response = api_client.patch(
            reverse('auth:shop-salesman-request-action', args=[mine.id]), {'action': 'approve'}, format='json'
        )
        assert response.status_code == 200
        mine.refresh_from_db()
        assert mine.is_approved is True

    def test_owner_cannot_approve_other_shops(self, api_client, shop_owner, make_salesman):
        other = make_salesman('9000000061', approved=False)
        api_client.force_authenticate(user=shop_owner)

        response = api_client.patch(
            reverse('auth:shop-salesman-request-action', args=[other.id]), {'action': 'approve'}, format='json'
        )
        assert response.status_code == 404


class TestSeedUsers:

    def test_seeds_one_user_per_role(self):
        call_command('seed_users')

        assert set(User.objects.values_list('role', flat=True)) == {
            UserRole.ADMIN, UserRole.SALESMAN, UserRole.SHOP_OWNER
        }
        owner = User.objects.get(role=UserRole.SHOP_OWNER)
        assert owner.shop is not None
        assert all(user.can_log_in for user in User.objects.all())

    def test_second_run_keeps_existing_users(self):
        call_command('seed_users')
        call_command('seed_users')
        assert User.objects.count() == 3
