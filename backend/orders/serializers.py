"""
Serializers for orders.

Handles:
- Salesman order create/edit (allow-listed fields only)
- Order list/detail with catalog and salesman embedded
- Admin single and bulk status updates
"""

from rest_framework import serializers

from authentication.serializers import SalesmanSummarySerializer
from catalog.models import Catalog
from catalog.serializers import CatalogSummarySerializer
from .models import Order, OrderStatus, OrderPriority, OrderStatusHistory, SizeType


CANCEL_REASON_REQUIRED = 'Cancel reason is required when cancelling an order'


class OrderSizeSerializer(serializers.Serializer):
    """``{"type": "plastic" | "metal", "value": "12"}`` stored as two columns."""

    type = serializers.ChoiceField(
        source='size_type',
        choices=SizeType.CHOICES,
        required=False,
        allow_blank=True
    )
    value = serializers.CharField(
        source='size_value',
        max_length=50,
        required=False,
        allow_blank=True
    )


class _OrderWriteSerializer(serializers.ModelSerializer):
    size = OrderSizeSerializer(source='*', required=False)
    images = serializers.ListField(child=serializers.URLField(), required=False)


class OrderCreateSerializer(_OrderWriteSerializer):
    """Salesman order placement."""

    catalog = serializers.PrimaryKeyRelatedField(
        queryset=Catalog.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta:
        model = Order
        fields = [
            'product_name',
            'customer_name',
            'customization_details',
            'voice_recording',
            'images',
            'expected_delivery_date',
            'catalog',
            'priority',
            'karatage',
            'weight',
            'colour',
            'name',
            'size',
            'stone',
            'enamel',
            'matte',
            'rodium',
        ]


class SalesmanOrderUpdateSerializer(_OrderWriteSerializer):
    """
    Salesman edits. Only these fields may change; anything else in the
    request body is ignored.
    """

    class Meta:
        model = Order
        fields = [
            'product_name',
            'customer_name',
            'customization_details',
            'expected_delivery_date',
            'priority',
            'karatage',
            'weight',
            'colour',
            'name',
            'size',
            'stone',
            'enamel',
            'matte',
            'rodium',
            'images',
            'voice_recording',
        ]


class OrderSerializer(serializers.ModelSerializer):
    """Order with catalog and salesman populated."""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    size = serializers.SerializerMethodField()
    catalog = CatalogSummarySerializer(read_only=True)
    salesman = SalesmanSummarySerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_code',
            'product_name',
            'customer_name',
            'customization_details',
            'voice_recording',
            'images',
            'expected_delivery_date',
            'catalog',
            'salesman',
            'karatage',
            'weight',
            'colour',
            'name',
            'size',
            'stone',
            'enamel',
            'matte',
            'rodium',
            'status',
            'status_display',
            'priority',
            'cancel_reason',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_size(self, obj):
        return obj.size


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    changed_by_name = serializers.CharField(source='changed_by.name', read_only=True, allow_null=True)

    class Meta:
        model = OrderStatusHistory
        fields = ['id', 'from_status', 'to_status', 'changed_by', 'changed_by_name', 'reason', 'created_at']
        read_only_fields = fields


class SalesmanOrderDetailSerializer(OrderSerializer):
    """Adds the advisory edit window so the app can show a countdown."""

    edit_window = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['edit_window']
        read_only_fields = fields

    def get_edit_window(self, obj):
        info = obj.edit_window_info()
        info['expires_at'] = serializers.DateTimeField().to_representation(info['expires_at'])
        return info


class AdminOrderDetailSerializer(OrderSerializer):
    status_history = OrderStatusHistorySerializer(many=True, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['status_history']
        read_only_fields = fields


def _validate_cancel_reason(status, cancel_reason):
    """A cancelled order must end up with a non-blank reason."""
    if status == OrderStatus.CANCELLED and not (cancel_reason or '').strip():
        raise serializers.ValidationError({'cancel_reason': CANCEL_REASON_REQUIRED})


class AdminOrderUpdateSerializer(serializers.Serializer):
    """
    Admin single-order update.

    Only status, priority, expected_delivery_date and cancel_reason are
    accepted; other keys are dropped. Bound to the order being updated so
    the cancel reason is checked against the resulting status, not just
    the keys in the request.
    """

    status = serializers.ChoiceField(choices=OrderStatus.CHOICES, required=False)
    priority = serializers.ChoiceField(choices=OrderPriority.CHOICES, required=False)
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    cancel_reason = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('No valid fields to update')
        order = self.instance
        status = attrs.get('status', order.status if order else None)
        if 'cancel_reason' in attrs or order is None:
            cancel_reason = attrs.get('cancel_reason')
        else:
            cancel_reason = order.cancel_reason
        _validate_cancel_reason(status, cancel_reason)
        return attrs


class BulkStatusUpdateSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    status = serializers.ChoiceField(choices=OrderStatus.CHOICES)
    cancel_reason = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        _validate_cancel_reason(attrs['status'], attrs.get('cancel_reason'))
        return attrs
