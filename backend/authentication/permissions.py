"""
Custom permissions for the GoldFinch order desk.

Role-based access control:
- Admin: full access to orders, catalog and user approvals
- Salesman: own orders and own notifications, once approved
- Shop owner: salesman requests for their own shops

All permissions also reject blocked accounts.
"""

from rest_framework import permissions


def _active(user):
    return bool(user and user.is_authenticated and user.is_active and not user.is_blocked)


class IsAuthenticated(permissions.IsAuthenticated):
    """IsAuthenticated that also rejects blocked or inactive users."""

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return _active(request.user)


class IsAdmin(permissions.BasePermission):
    message = "This action requires admin access."

    def has_permission(self, request, view):
        return _active(request.user) and request.user.is_admin


class IsApprovedSalesman(permissions.BasePermission):
    """
    Approved salesmen only.

    Salesmen register themselves and must wait for approval before they
    can create orders or read notifications.
    """

    message = "Access denied."

    def has_permission(self, request, view):
        user = request.user
        return _active(user) and user.is_salesman and user.is_approved


class IsShopOwner(permissions.BasePermission):
    message = "This action is for shop owners only."

    def has_permission(self, request, view):
        user = request.user
        return _active(user) and user.is_shop_owner and user.is_approved


class IsAdminOrReadOnly(permissions.BasePermission):
    """Any active user may read; only admins may write."""

    def has_permission(self, request, view):
        if not _active(request.user):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_admin
