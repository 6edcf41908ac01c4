"""
Authentication models for the GoldFinch order desk.

Contains:
- Custom User model covering admins, salesmen and shop owners
- Shop, owned by a shop owner, that salesmen can be attached to

Salesmen and shop owners register themselves and stay pending until an
admin (or, for salesmen, their shop owner) approves the request.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models import Q

from core.models import BaseModel


class UserRole:
    """User role constants."""
    ADMIN = 'admin'
    SALESMAN = 'salesman'
    SHOP_OWNER = 'shop_owner'

    CHOICES = [
        (ADMIN, 'Admin'),
        (SALESMAN, 'Salesman'),
        (SHOP_OWNER, 'Shop Owner'),
    ]

    # Roles that need an approval before they can log in
    SELF_REGISTERED = [SALESMAN, SHOP_OWNER]


class RequestStatus:
    """Registration request status constants."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    CHOICES = [
        (PENDING, 'Pending'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]


class UserManager(BaseUserManager):
    """
    Manager for the GoldFinch User model.

    Users log in with either their email or their mobile number, so both
    are optional individually but at least one is required.
    """

    def get_queryset(self):
        return super().get_queryset().filter(is_deleted=False)

    def get_by_identifier(self, identifier):
        """Find a user by email when the identifier has an '@', else by mobile."""
        identifier = (identifier or '').strip()
        if '@' in identifier:
            return self.get(email__iexact=identifier)
        return self.get(mobile=identifier)

    def get_by_natural_key(self, username):
        return self.get_by_identifier(username)

    def identifier_taken(self, email=None, mobile=None):
        query = Q()
        if email:
            query |= Q(email__iexact=email)
        if mobile:
            query |= Q(mobile=mobile)
        if not query:
            return False
        return self.model.all_objects.filter(query).exists()

    def create_user(self, mobile=None, password=None, email=None, **extra_fields):
        if not mobile and not email:
            raise ValueError('User must have a mobile number or an email')

        email = self.normalize_email(email) if email else None
        user = self.model(mobile=mobile or None, email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_salesman(self, mobile, password, **extra_fields):
        """Register a salesman. The account stays pending until approved."""
        extra_fields['role'] = UserRole.SALESMAN
        extra_fields.setdefault('request_status', RequestStatus.PENDING)
        extra_fields.setdefault('is_approved', False)
        return self.create_user(mobile, password, **extra_fields)

    def create_admin(self, mobile, password, **extra_fields):
        extra_fields['role'] = UserRole.ADMIN
        extra_fields['request_status'] = RequestStatus.APPROVED
        extra_fields['is_approved'] = True
        extra_fields.setdefault('is_staff', True)
        return self.create_user(mobile, password, **extra_fields)

    def create_superuser(self, mobile, password, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_admin(mobile, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    """
    GoldFinch user.

    Salesman accounts carry the details of the shop they sell for
    (shop_name/shop_address/shop_mobile) and may be linked to a Shop owned
    by a registered shop owner.
    """

    name = models.CharField(max_length=120)

    mobile = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text="Mobile number used for login"
    )

    email = models.EmailField(
        unique=True,
        null=True,
        blank=True,
        help_text="Email used for login"
    )

    role = models.CharField(
        max_length=20,
        choices=UserRole.CHOICES,
        default=UserRole.SALESMAN,
        db_index=True
    )

    request_status = models.CharField(
        max_length=20,
        choices=RequestStatus.CHOICES,
        default=RequestStatus.PENDING,
        db_index=True
    )

    is_approved = models.BooleanField(default=False)
    is_blocked = models.BooleanField(default=False)

    is_staff = models.BooleanField(
        default=False,
        help_text="Designates whether user can access the admin site"
    )
    is_active = models.BooleanField(default=True)

    # Salesman shop details
    shop_name = models.CharField(max_length=200, blank=True)
    shop_address = models.TextField(blank=True)
    shop_mobile = models.CharField(max_length=20, blank=True)

    shop = models.ForeignKey(
        'Shop',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='salesmen'
    )

    objects = UserManager()

    USERNAME_FIELD = 'mobile'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'goldfinch_users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role', 'request_status'], name='user_role_request_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.mobile or self.email})"

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @property
    def is_salesman(self):
        return self.role == UserRole.SALESMAN

    @property
    def is_shop_owner(self):
        return self.role == UserRole.SHOP_OWNER

    @property
    def can_log_in(self):
        """Blocked users never; self-registered roles only once approved."""
        if self.is_blocked or not self.is_active:
            return False
        if self.role in UserRole.SELF_REGISTERED:
            return self.is_approved
        return True

    def approve(self):
        self.request_status = RequestStatus.APPROVED
        self.is_approved = True
        self.save(update_fields=['request_status', 'is_approved', 'updated_at'])

    def reject(self):
        self.request_status = RequestStatus.REJECTED
        self.is_approved = False
        self.save(update_fields=['request_status', 'is_approved', 'updated_at'])

    def set_blocked(self, blocked):
        self.is_blocked = bool(blocked)
        self.save(update_fields=['is_blocked', 'updated_at'])


class Shop(BaseModel):
    """Jewelry shop registered by a shop owner."""

    shop_name = models.CharField(max_length=200)

    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='owned_shops'
    )

    address = models.TextField()
    gst_number = models.CharField(max_length=20, blank=True)
    is_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'goldfinch_shops'
        ordering = ['-created_at']

    def __str__(self):
        return self.shop_name
