"""
Filters for the admin order list.

    GET /api/v1/admin/orders/?status=all&q=ring&date_from=2026-10-01
        &date_to=2026-10-19&sort_field=created_at&sort_order=desc

``status`` defaults to ``confirmed`` (new incoming orders); ``all``
disables the status filter. Date bounds cover whole local days.
"""

import django_filters
from django.db.models import Q

from .models import Order, OrderPriority, OrderStatus


SORTABLE_FIELDS = {
    'created_at': 'created_at',
    'updated_at': 'updated_at',
    'order_code': 'order_code',
    'product_name': 'product_name',
    'customer_name': 'customer_name',
    'status': 'status',
    'priority': 'priority',
    'expected_delivery_date': 'expected_delivery_date',
}


class AdminOrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(method='filter_status')
    q = django_filters.CharFilter(method='filter_search')
    date_from = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')
    salesman = django_filters.UUIDFilter(field_name='salesman_id')
    priority = django_filters.ChoiceFilter(choices=OrderPriority.CHOICES)
    sort_field = django_filters.CharFilter(method='filter_noop')
    sort_order = django_filters.CharFilter(method='filter_noop')

    class Meta:
        model = Order
        fields = ['status', 'priority', 'salesman']

    def __init__(self, data=None, *args, **kwargs):
        if data is not None:
            data = data.copy()
            if not data.get('status'):
                data['status'] = OrderStatus.CONFIRMED
        super().__init__(data, *args, **kwargs)

    def filter_status(self, queryset, name, value):
        if value == 'all':
            return queryset
        return queryset.filter(status=value)

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(product_name__icontains=value)
            | Q(customer_name__icontains=value)
            | Q(order_code__icontains=value)
        )

    def filter_noop(self, queryset, name, value):
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)

        sort_field = SORTABLE_FIELDS.get(self.data.get('sort_field'), 'created_at')
        prefix = '' if self.data.get('sort_order') == 'asc' else '-'
        return queryset.order_by(f'{prefix}{sort_field}')
