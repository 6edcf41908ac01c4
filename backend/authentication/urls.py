"""
URL configuration for GoldFinch authentication.

All authentication endpoints are under /api/v1/auth/
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    AdminRequestActionView,
    AdminRequestListView,
    AdminSalesmanBlockView,
    AdminSalesmanListView,
    CurrentUserView,
    LoginView,
    SalesmanRegisterView,
    ShopListView,
    ShopOwnerRegisterView,
    ShopSalesmanRequestActionView,
    ShopSalesmanRequestListView,
)

app_name = 'authentication'

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('me/', CurrentUserView.as_view(), name='current-user'),

    # Registration
    path('salesman/register/', SalesmanRegisterView.as_view(), name='salesman-register'),
    path('shop-owner/register/', ShopOwnerRegisterView.as_view(), name='shop-owner-register'),
    path('shops/', ShopListView.as_view(), name='shop-list'),

    # Admin user management
    path('admin/salesmen/', AdminSalesmanListView.as_view(), name='admin-salesmen'),
    path('admin/salesmen/<uuid:user_id>/', AdminSalesmanBlockView.as_view(), name='admin-salesman-detail'),
    path('admin/requests/', AdminRequestListView.as_view(), name='admin-requests'),
    path('admin/requests/<uuid:user_id>/', AdminRequestActionView.as_view(), name='admin-request-action'),

    # Shop owner
    path('shop/salesman-requests/', ShopSalesmanRequestListView.as_view(), name='shop-salesman-requests'),
    path(
        'shop/salesman-requests/<uuid:user_id>/',
        ShopSalesmanRequestActionView.as_view(),
        name='shop-salesman-request-action'
    ),
]
