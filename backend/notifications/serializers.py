"""
Serializers for notifications.
"""

from rest_framework import serializers

from .models import Notification


class NotificationOrderSerializer(serializers.Serializer):
    """Just enough of the order to link back to it."""
    id = serializers.UUIDField()
    order_code = serializers.CharField()
    product_name = serializers.CharField()
    customer_name = serializers.CharField()
    status = serializers.CharField()


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notification list/detail."""

    notification_type_display = serializers.CharField(
        source='get_notification_type_display',
        read_only=True
    )
    order = NotificationOrderSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Notification
        fields = [
            'id',
            'title',
            'message',
            'notification_type',
            'notification_type_display',
            'user_type',
            'order',
            'order_code',
            'is_read',
            'read_at',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields


class NotificationActionSerializer(serializers.Serializer):
    """
    Body of PUT /api/v1/salesman/notifications/

    {"action": "mark_as_read", "notification_ids": ["<uuid>", ...]}
    {"action": "mark_all_as_read"}
    """

    MARK_AS_READ = 'mark_as_read'
    MARK_ALL_AS_READ = 'mark_all_as_read'

    action = serializers.ChoiceField(
        choices=[MARK_AS_READ, MARK_ALL_AS_READ],
        error_messages={'invalid_choice': 'Invalid action', 'required': 'Invalid action'}
    )
    notification_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list
    )

    def validate(self, attrs):
        if attrs['action'] == self.MARK_AS_READ and not attrs['notification_ids']:
            raise serializers.ValidationError({'notification_ids': 'This field is required.'})
        return attrs
