"""
Authentication views for the GoldFinch order desk.

Provides REST API endpoints for:
- Login (email or mobile + password)
- Salesman and shop owner registration
- Current user
- Admin: salesmen, pending requests, approval and blocking
- Shop owner: salesman requests for their shops
"""

import logging

from django.shortcuts import get_object_or_404
from rest_framework import status, generics, views
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from .models import User, UserRole, RequestStatus, Shop
from .permissions import IsAuthenticated, IsAdmin, IsShopOwner
from .serializers import (
    BlockSerializer,
    LoginSerializer,
    RequestActionSerializer,
    SalesmanRegistrationSerializer,
    ShopOwnerRegistrationSerializer,
    ShopSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class LoginThrottle(ScopedRateThrottle):
    """Rate limiting for login endpoints."""
    scope = 'login'


class LoginView(views.APIView):
    """
    POST /api/v1/auth/login/

    Request:
    {
        "identifier": "salesman@example.com",  // or a mobile number
        "password": "secret"
    }

    Response:
    {
        "refresh": "...",
        "access": "...",
        "role": "salesman",
        "user": { ... }
    }
    """

    permission_classes = [AllowAny]
    throttle_classes = [LoginThrottle]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        result = serializer.save()
        logger.info("Login: user=%s role=%s", result['user']['id'], result['role'])
        return Response(result, status=status.HTTP_200_OK)


class SalesmanRegisterView(views.APIView):
    """POST /api/v1/auth/salesman/register/"""

    permission_classes = [AllowAny]
    throttle_classes = [LoginThrottle]

    def post(self, request):
        serializer = SalesmanRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        salesman = serializer.save()
        return Response({
            'message': 'Salesman registration successful',
            'user_id': str(salesman.id),
        }, status=status.HTTP_201_CREATED)


class ShopOwnerRegisterView(views.APIView):
    """POST /api/v1/auth/shop-owner/register/"""

    permission_classes = [AllowAny]
    throttle_classes = [LoginThrottle]

    def post(self, request):
        serializer = ShopOwnerRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        owner = serializer.save()
        return Response({
            'message': 'Registration successful. Awaiting approval.',
            'user_id': str(owner.id),
            'shop_id': str(owner.shop_id),
        }, status=status.HTTP_201_CREATED)


class ShopListView(generics.ListAPIView):
    """Active shops, for the salesman registration form."""

    permission_classes = [AllowAny]
    serializer_class = ShopSerializer
    pagination_class = None

    def get_queryset(self):
        return Shop.objects.filter(is_active=True).order_by('shop_name')


class CurrentUserView(views.APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


# =============================================================================
# ADMIN
# =============================================================================

class AdminSalesmanListView(generics.ListAPIView):
    """Approved salesmen, newest first."""

    permission_classes = [IsAdmin]
    serializer_class = UserSerializer

    def get_queryset(self):
        return User.objects.filter(role=UserRole.SALESMAN, is_approved=True).order_by('-created_at')


class AdminRequestListView(generics.ListAPIView):
    """
    Pending registration requests.

    GET /api/v1/auth/admin/requests/?role=salesman|shop_owner
    """

    permission_classes = [IsAdmin]
    serializer_class = UserSerializer

    def get_queryset(self):
        role = self.request.query_params.get('role', UserRole.SALESMAN)
        if role not in UserRole.SELF_REGISTERED:
            role = UserRole.SALESMAN
        return User.objects.filter(
            role=role,
            request_status=RequestStatus.PENDING
        ).order_by('-created_at')


class AdminRequestActionView(views.APIView):
    """
    Approve or reject a salesman or shop owner request.

    PATCH /api/v1/auth/admin/requests/{user_id}/
    {"action": "approve" | "reject"}
    """

    permission_classes = [IsAdmin]

    def patch(self, request, user_id):
        user = get_object_or_404(User, id=user_id, role__in=UserRole.SELF_REGISTERED)

        serializer = RequestActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data['action'] == 'approve':
            user.approve()
            if user.is_shop_owner:
                user.owned_shops.update(is_verified=True)
        else:
            user.reject()

        logger.info(
            "Request %s: user=%s by admin=%s",
            serializer.validated_data['action'], user.id, request.user.id
        )
        return Response({'message': 'Request updated', 'user': UserSerializer(user).data})


class AdminSalesmanBlockView(views.APIView):
    """
    Block or unblock a salesman.

    PATCH /api/v1/auth/admin/salesmen/{user_id}/
    {"is_blocked": true}
    """

    permission_classes = [IsAdmin]

    def get(self, request, user_id):
        user = get_object_or_404(User, id=user_id, role=UserRole.SALESMAN)
        return Response(UserSerializer(user).data)

    def patch(self, request, user_id):
        user = get_object_or_404(User, id=user_id, role=UserRole.SALESMAN)

        serializer = BlockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.set_blocked(serializer.validated_data['is_blocked'])

        return Response({
            'message': 'Salesman status updated successfully',
            'salesman': UserSerializer(user).data,
        })


# =============================================================================
# SHOP OWNER
# =============================================================================

class ShopSalesmanRequestListView(generics.ListAPIView):
    """Pending salesmen who registered against one of the owner's shops."""

    permission_classes = [IsShopOwner]
    serializer_class = UserSerializer

    def get_queryset(self):
        return User.objects.filter(
            role=UserRole.SALESMAN,
            request_status=RequestStatus.PENDING,
            shop__owner=self.request.user,
        ).order_by('-created_at')


class ShopSalesmanRequestActionView(views.APIView):
    """PATCH /api/v1/auth/shop/salesman-requests/{user_id}/"""

    permission_classes = [IsShopOwner]

    def patch(self, request, user_id):
        salesman = get_object_or_404(
            User,
            id=user_id,
            role=UserRole.SALESMAN,
            shop__owner=request.user,
        )

        serializer = RequestActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data['action'] == 'approve':
            salesman.approve()
        else:
            salesman.reject()

        return Response({'message': 'Request updated', 'user': UserSerializer(salesman).data})
