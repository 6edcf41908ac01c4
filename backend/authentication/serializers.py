"""
Serializers for GoldFinch authentication.

Handles:
- Login with email or mobile
- Salesman and shop owner self-registration
- Approval and blocking actions
"""

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from django.db import transaction
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

from core.exceptions import AccountBlocked, AccountPendingApproval
from .models import User, UserRole, RequestStatus, Shop


class ShopSerializer(serializers.ModelSerializer):
    class Meta:
        model = Shop
        fields = ['id', 'shop_name', 'address', 'gst_number', 'is_verified', 'is_active', 'created_at']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id', 'name', 'mobile', 'email', 'role',
            'request_status', 'is_approved', 'is_blocked',
            'shop_name', 'shop_address', 'shop_mobile', 'shop',
            'last_login', 'created_at',
        ]
        read_only_fields = fields


class SalesmanSummarySerializer(serializers.ModelSerializer):
    """Salesman fields embedded in order responses."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'mobile', 'shop_name', 'shop_address', 'shop_mobile']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    """
    Login with an email address or a mobile number.

    Blocked accounts and self-registered accounts still waiting for
    approval are refused with a 403 even when the password is right.
    """

    identifier = serializers.CharField(max_length=255, help_text="Email or mobile number")
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate(self, attrs):
        user = authenticate(
            self.context.get('request'),
            username=attrs['identifier'],
            password=attrs['password'],
        )

        if not user:
            raise AuthenticationFailed('Invalid credentials')

        if user.is_blocked:
            raise AccountBlocked()

        if not user.can_log_in:
            raise AccountPendingApproval()

        attrs['user'] = user
        return attrs

    def create(self, validated_data):
        user = validated_data['user']
        update_last_login(None, user)

        refresh = RefreshToken.for_user(user)
        refresh['role'] = user.role
        refresh['is_approved'] = user.is_approved

        return {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'role': user.role,
            'user': UserSerializer(user).data,
        }


class _RegistrationMixin:

    def validate(self, attrs):
        if User.objects.identifier_taken(email=attrs.get('email'), mobile=attrs.get('mobile')):
            raise serializers.ValidationError('User with this email or mobile already exists.')
        return attrs


class SalesmanRegistrationSerializer(_RegistrationMixin, serializers.Serializer):
    name = serializers.CharField(max_length=120)
    mobile = serializers.CharField(max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    shop_name = serializers.CharField(max_length=200)
    shop_address = serializers.CharField()
    shop_mobile = serializers.CharField(max_length=20)
    shop = serializers.PrimaryKeyRelatedField(
        queryset=Shop.objects.filter(is_active=True),
        required=False,
        allow_null=True
    )

    def create(self, validated_data):
        password = validated_data.pop('password')
        mobile = validated_data.pop('mobile')
        validated_data['email'] = validated_data.get('email') or None
        return User.objects.create_salesman(mobile, password, **validated_data)


class ShopOwnerRegistrationSerializer(_RegistrationMixin, serializers.Serializer):
    """Registers a shop owner together with their shop, both pending approval."""

    name = serializers.CharField(max_length=120)
    mobile = serializers.CharField(max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    shop_name = serializers.CharField(max_length=200)
    gst_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField()
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    pincode = serializers.CharField(max_length=10)

    @transaction.atomic
    def create(self, validated_data):
        owner = User.objects.create_user(
            validated_data['mobile'],
            validated_data['password'],
            email=validated_data.get('email') or None,
            name=validated_data['name'],
            role=UserRole.SHOP_OWNER,
            request_status=RequestStatus.PENDING,
            is_approved=False,
        )
        shop = Shop.objects.create(
            shop_name=validated_data['shop_name'],
            owner=owner,
            address=(
                f"{validated_data['address']}, {validated_data['city']}, "
                f"{validated_data['state']} - {validated_data['pincode']}"
            ),
            gst_number=validated_data.get('gst_number', ''),
        )
        owner.shop = shop
        owner.save(update_fields=['shop', 'updated_at'])
        return owner


class RequestActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=['approve', 'reject'])


class BlockSerializer(serializers.Serializer):
    is_blocked = serializers.BooleanField()
