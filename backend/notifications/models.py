"""
Notification models for the GoldFinch order desk.

Notifications are written as a side effect of an order status change and
addressed to the salesman who owns the order. Salesmen only ever change
their read state.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import BaseModel


class NotificationType:
    """Notification severity, used by the UI for colour and icon."""
    INFO = 'info'
    SUCCESS = 'success'
    WARNING = 'warning'
    ERROR = 'error'

    CHOICES = [
        (INFO, 'Info'),
        (SUCCESS, 'Success'),
        (WARNING, 'Warning'),
        (ERROR, 'Error'),
    ]


class RecipientType:
    SALESMAN = 'salesman'

    CHOICES = [
        (SALESMAN, 'Salesman'),
    ]


class Notification(BaseModel):
    """
    Order update addressed to a salesman.

    ``order_code`` is copied from the order so the message still reads
    correctly after an admin deletes the order.
    """

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )

    user_type = models.CharField(
        max_length=20,
        choices=RecipientType.CHOICES,
        default=RecipientType.SALESMAN
    )

    title = models.CharField(max_length=200)
    message = models.TextField()

    notification_type = models.CharField(
        max_length=10,
        choices=NotificationType.CHOICES,
        default=NotificationType.INFO,
        db_index=True
    )

    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications'
    )

    order_code = models.CharField(max_length=20, blank=True)

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Old/new status, customer name, cancel reason"
    )

    class Meta:
        db_table = 'goldfinch_notifications'
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'created_at'], name='notif_recipient_created_idx'),
            models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
        ]

    def __str__(self):
        return f"{self.title} -> {self.recipient_id}"

    def mark_as_read(self):
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=['is_read', 'read_at', 'updated_at'])
