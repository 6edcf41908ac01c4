"""
Admin configuration for authentication models.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, Shop


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom admin for User model."""

    list_display = ['name', 'mobile', 'email', 'role', 'request_status', 'is_blocked', 'created_at']
    list_filter = ['role', 'request_status', 'is_approved', 'is_blocked', 'created_at']
    search_fields = ['name', 'mobile', 'email', 'shop_name']
    ordering = ['-created_at']
    readonly_fields = ['id', 'created_at', 'updated_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('name', 'mobile', 'email', 'password')}),
        ('Role & Approval', {'fields': ('role', 'request_status', 'is_approved', 'is_blocked')}),
        ('Shop', {'fields': ('shop', 'shop_name', 'shop_address', 'shop_mobile')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Timestamps', {'fields': ('id', 'last_login', 'created_at', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('name', 'mobile', 'email', 'password1', 'password2', 'role'),
        }),
    )


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['shop_name', 'owner', 'gst_number', 'is_verified', 'is_active', 'created_at']
    list_filter = ['is_verified', 'is_active']
    search_fields = ['shop_name', 'owner__name', 'owner__mobile', 'gst_number']
    readonly_fields = ['id', 'created_at', 'updated_at']
