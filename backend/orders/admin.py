"""
Admin configuration for orders.
"""

from django.contrib import admin

from .models import Order, OrderCounter, OrderStatusHistory


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    fields = ['from_status', 'to_status', 'changed_by', 'reason', 'created_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_code', 'product_name', 'customer_name', 'salesman', 'status', 'priority', 'created_at']
    list_filter = ['status', 'priority', 'created_at']
    search_fields = ['order_code', 'product_name', 'customer_name', 'salesman__name', 'salesman__mobile']
    readonly_fields = ['id', 'order_code', 'created_at', 'updated_at', 'deleted_at']
    raw_id_fields = ['salesman', 'catalog']
    inlines = [OrderStatusHistoryInline]


@admin.register(OrderCounter)
class OrderCounterAdmin(admin.ModelAdmin):
    list_display = ['name', 'seq', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['id', 'name', 'seq', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False
