from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Read-only: notifications only come from order status changes."""

    list_display = ['title', 'recipient', 'order_code', 'notification_type', 'is_read', 'created_at']
    list_filter = ['notification_type', 'is_read', 'created_at']
    search_fields = ['title', 'message', 'order_code', 'recipient__name', 'recipient__mobile']
    readonly_fields = [
        'id', 'recipient', 'user_type', 'title', 'message', 'notification_type',
        'order', 'order_code', 'is_read', 'read_at', 'metadata', 'created_at', 'updated_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
