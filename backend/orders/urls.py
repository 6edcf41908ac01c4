"""
URL configuration for orders.

Mounted under /api/v1/:
- salesman/orders/...  (approved salesmen)
- admin/orders/...     (admins)
"""

from django.urls import path

from . import views

app_name = 'orders'

urlpatterns = [
    # Salesman endpoints
    path('salesman/orders/', views.SalesmanOrderListCreateView.as_view(), name='salesman-orders'),
    path('salesman/orders/stats/', views.SalesmanOrderStatsView.as_view(), name='salesman-order-stats'),
    path('salesman/orders/<uuid:order_id>/', views.SalesmanOrderDetailView.as_view(), name='salesman-order-detail'),

    # Admin endpoints
    path('admin/orders/', views.AdminOrderListView.as_view(), name='admin-orders'),
    path('admin/orders/bulk-update/', views.AdminOrderBulkUpdateView.as_view(), name='admin-order-bulk-update'),
    path('admin/orders/<uuid:order_id>/', views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
]
