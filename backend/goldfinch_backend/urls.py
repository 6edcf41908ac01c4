"""
URL configuration for the GoldFinch order desk.

API Structure:
- /api/v1/auth/                   - Login, registration, approvals
- /api/v1/catalogs/               - Catalog designs
- /api/v1/salesman/orders/        - Salesman orders
- /api/v1/salesman/notifications/ - Salesman notifications
- /api/v1/admin/orders/           - Admin order management
- /admin/                         - Django admin
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health_check(request):
    """Health check endpoint for load balancers."""
    return JsonResponse({
        'status': 'healthy',
        'service': 'goldfinch-backend'
    })


def api_root(request):
    return JsonResponse({
        'name': 'GoldFinch Order Desk API',
        'version': 'v1',
        'endpoints': {
            'auth': '/api/v1/auth/',
            'catalogs': '/api/v1/catalogs/',
            'salesman_orders': '/api/v1/salesman/orders/',
            'salesman_notifications': '/api/v1/salesman/notifications/',
            'admin_orders': '/api/v1/admin/orders/',
        }
    })


urlpatterns = [
    path('health/', health_check, name='health-check'),

    path('api/v1/', api_root, name='api-root'),

    path('api/v1/auth/', include('authentication.urls', namespace='auth')),
    path('api/v1/catalogs/', include('catalog.urls', namespace='catalog')),
    path('api/v1/salesman/notifications/', include('notifications.urls', namespace='notifications')),
    path('api/v1/', include('orders.urls', namespace='orders')),

    path('admin/', admin.site.urls),
]
