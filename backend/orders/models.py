"""
Order models for the GoldFinch order desk.

Contains:
- Order: a custom jewelry order placed by a salesman
- OrderCounter: per-day sequence behind the ORD-YYYYMMDD-##### codes
- OrderStatusHistory: one row per status change

Order lifecycle:
confirmed -> order_view_and_accepted -> cad_completed -> production_floor
-> finished -> dispatched, with cancelled reachable from any status.
Admins may set any status at any time; salesmen never change status.
"""

from datetime import timedelta

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from core.models import BaseModel


class OrderStatus:
    """Order status constants."""
    CONFIRMED = 'confirmed'
    ORDER_VIEW_AND_ACCEPTED = 'order_view_and_accepted'
    CAD_COMPLETED = 'cad_completed'
    PRODUCTION_FLOOR = 'production_floor'
    FINISHED = 'finished'
    DISPATCHED = 'dispatched'
    CANCELLED = 'cancelled'

    CHOICES = [
        (CONFIRMED, 'Confirmed'),
        (ORDER_VIEW_AND_ACCEPTED, 'Viewed & Accepted'),
        (CAD_COMPLETED, 'CAD Completed'),
        (PRODUCTION_FLOOR, 'Production Floor'),
        (FINISHED, 'Finished'),
        (DISPATCHED, 'Dispatched'),
        (CANCELLED, 'Cancelled'),
    ]

    VALUES = [value for value, _ in CHOICES]

    # Salesmen may still edit the order while it sits in one of these
    EDITABLE = [CONFIRMED, ORDER_VIEW_AND_ACCEPTED]

    # Counted as "pending" on the salesman dashboard
    IN_PROGRESS = [CONFIRMED, ORDER_VIEW_AND_ACCEPTED, CAD_COMPLETED, PRODUCTION_FLOOR]


class OrderPriority:
    """Order priority constants."""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    URGENT = 'urgent'

    CHOICES = [
        (LOW, 'Low'),
        (MEDIUM, 'Medium'),
        (HIGH, 'High'),
        (URGENT, 'Urgent'),
    ]


class SizeType:
    PLASTIC = 'plastic'
    METAL = 'metal'

    CHOICES = [
        (PLASTIC, 'Plastic'),
        (METAL, 'Metal'),
    ]


class OrderCounter(BaseModel):
    """
    Named integer sequence.

    Orders use one row per calendar day (``order-20261019``); the row is
    created on first use and incremented under a row lock.
    """

    name = models.CharField(max_length=50, unique=True)
    seq = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'goldfinch_order_counters'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name}: {self.seq}"

    @classmethod
    def next_value(cls, name):
        """Increment the named counter and return the new value."""
        with transaction.atomic():
            counter, _ = cls.all_objects.select_for_update().get_or_create(name=name)
            cls.all_objects.filter(pk=counter.pk).update(
                seq=F('seq') + 1,
                updated_at=timezone.now(),
            )
            counter.refresh_from_db(fields=['seq'])
        return counter.seq


def generate_order_code(now=None):
    """
    Next order code for the local calendar day of ``now``.

    Format: ORD-YYYYMMDD-##### (sequence zero-padded to five digits).
    """
    stamp = timezone.localdate(now).strftime('%Y%m%d')
    seq = OrderCounter.next_value(f'order-{stamp}')
    return f'ORD-{stamp}-{seq:05d}'


class Order(BaseModel):
    """
    Custom jewelry order.

    Images and the voice note are URLs on the external image host. The
    size is stored as two columns and exposed as ``{"type", "value"}``.
    """

    order_code = models.CharField(
        max_length=20,
        unique=True,
        editable=False,
        help_text="ORD-YYYYMMDD-#####"
    )

    product_name = models.CharField(max_length=200)
    customer_name = models.CharField(max_length=200)
    customization_details = models.TextField(blank=True)

    voice_recording = models.URLField(max_length=500, blank=True)
    images = models.JSONField(default=list, blank=True)

    expected_delivery_date = models.DateField(null=True, blank=True)

    catalog = models.ForeignKey(
        'catalog.Catalog',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )

    salesman = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders',
        help_text="Salesman who placed the order"
    )

    # Jewelry attributes
    karatage = models.CharField(max_length=20, blank=True)
    weight = models.DecimalField(max_digits=10, decimal_places=3, null=True, blank=True)
    colour = models.CharField(max_length=50, blank=True)
    name = models.CharField(
        max_length=100,
        blank=True,
        help_text="Name to engrave"
    )
    size_type = models.CharField(max_length=10, choices=SizeType.CHOICES, blank=True)
    size_value = models.CharField(max_length=50, blank=True)
    stone = models.BooleanField(default=False)
    enamel = models.BooleanField(default=False)
    matte = models.BooleanField(default=False)
    rodium = models.BooleanField(default=False)

    status = models.CharField(
        max_length=30,
        choices=OrderStatus.CHOICES,
        default=OrderStatus.CONFIRMED,
        db_index=True
    )

    priority = models.CharField(
        max_length=10,
        choices=OrderPriority.CHOICES,
        default=OrderPriority.MEDIUM,
        db_index=True
    )

    cancel_reason = models.TextField(blank=True)

    class Meta:
        db_table = 'goldfinch_orders'
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['salesman', 'status'], name='order_salesman_status_idx'),
            models.Index(fields=['status', 'created_at'], name='order_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.order_code} ({self.status})"

    def save(self, *args, **kwargs):
        if not self.order_code:
            self.order_code = generate_order_code()
        super().save(*args, **kwargs)

    @property
    def size(self):
        if not self.size_type and not self.size_value:
            return None
        return {'type': self.size_type or None, 'value': self.size_value}

    @property
    def edit_window_expires_at(self):
        return self.created_at + timedelta(hours=settings.ORDER_EDIT_WINDOW_HOURS)

    def is_within_edit_window(self, now=None):
        now = now or timezone.now()
        return now - self.created_at <= timedelta(hours=settings.ORDER_EDIT_WINDOW_HOURS)

    def edit_window_info(self, now=None):
        """Advisory edit window state for display. Never used for enforcement."""
        now = now or timezone.now()
        remaining = (self.edit_window_expires_at - now).total_seconds()
        return {
            'can_edit': self.is_within_edit_window(now) and self.status in OrderStatus.EDITABLE,
            'remaining_seconds': max(int(remaining), 0),
            'expires_at': self.edit_window_expires_at,
        }


class OrderStatusHistory(BaseModel):
    """Audit trail of order status changes."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='status_history'
    )

    from_status = models.CharField(
        max_length=30,
        choices=OrderStatus.CHOICES,
        blank=True
    )

    to_status = models.CharField(
        max_length=30,
        choices=OrderStatus.CHOICES
    )

    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_status_changes'
    )

    reason = models.TextField(blank=True)

    class Meta:
        db_table = 'goldfinch_order_status_history'
        verbose_name = 'Order Status History'
        verbose_name_plural = 'Order Status History'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.order.order_code}: {self.from_status} -> {self.to_status}"
