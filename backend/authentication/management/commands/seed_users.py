"""
Management command to seed demo users for the GoldFinch order desk.

Usage:
    python manage.py seed_users

Creates one approved user per role with known passwords:
    - 9000000001 / Admin@123    (admin)
    - 9000000002 / Sales@123    (salesman)
    - 9000000003 / Shop@123     (shop owner, with a demo shop)
"""

from django.core.management.base import BaseCommand

from authentication.models import User, UserRole, RequestStatus, Shop


DEMO_USERS = [
    {
        'mobile': '9000000001',
        'password': 'Admin@123',
        'role': UserRole.ADMIN,
        'name': 'Demo Admin',
        'email': 'admin@goldfinch.local',
        'is_superuser': True,
        'is_staff': True,
    },
    {
        'mobile': '9000000002',
        'password': 'Sales@123',
        'role': UserRole.SALESMAN,
        'name': 'Demo Salesman',
        'email': 'salesman@goldfinch.local',
        'shop_name': 'Demo Jewellers',
        'shop_address': 'MG Road, Bengaluru',
        'shop_mobile': '9000000099',
    },
    {
        'mobile': '9000000003',
        'password': 'Shop@123',
        'role': UserRole.SHOP_OWNER,
        'name': 'Demo Shop Owner',
        'email': 'shop@goldfinch.local',
    },
]


class Command(BaseCommand):
    help = 'Seed demo users for every GoldFinch role'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Reset passwords even if users already exist',
        )

    def handle(self, *args, **options):
        force = options['force']
        created_count = 0
        updated_count = 0

        for entry in DEMO_USERS:
            user_data = dict(entry)
            mobile = user_data.pop('mobile')
            password = user_data.pop('password')
            role = user_data['role']

            user = User.all_objects.filter(mobile=mobile).first()
            if user and not force:
                self.stdout.write(self.style.NOTICE(
                    f'  Exists:  {mobile} ({user.role}) - use --force to reset'
                ))
                continue

            if user:
                for field, value in user_data.items():
                    setattr(user, field, value)
                updated_count += 1
                label = 'Updated'
            else:
                user = User(mobile=mobile, **user_data)
                created_count += 1
                label = 'Created'

            user.set_password(password)
            user.request_status = RequestStatus.APPROVED
            user.is_approved = True
            user.is_blocked = False
            user.is_active = True
            user.is_deleted = False
            user.save()

            if role == UserRole.SHOP_OWNER and not user.owned_shops.exists():
                shop = Shop.objects.create(
                    shop_name='Demo Jewellers',
                    owner=user,
                    address='MG Road, Bengaluru, Karnataka - 560001',
                    is_verified=True,
                )
                user.shop = shop
                user.save(update_fields=['shop', 'updated_at'])

            self.stdout.write(self.style.SUCCESS(f'  {label}: {mobile} ({role})'))

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(
            f'Done! Created: {created_count}, Updated: {updated_count}'
        ))
