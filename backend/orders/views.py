"""
Order views for the GoldFinch order desk.

Provides REST API endpoints for:
- Salesman: place orders, list/view own orders, edit within the edit
  window, dashboard stats
- Admin: list/filter all orders, view, update status and priority,
  bulk status update, delete
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status, views
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from authentication.permissions import IsAdmin, IsApprovedSalesman
from core.pagination import SmallPagination, StandardPagination
from .filters import AdminOrderFilter
from .models import Order
from .serializers import (
    AdminOrderDetailSerializer,
    AdminOrderUpdateSerializer,
    BulkStatusUpdateSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    SalesmanOrderDetailSerializer,
    SalesmanOrderUpdateSerializer,
)
from .services import OrderService

logger = logging.getLogger(__name__)


def _get_order(queryset, order_id):
    order = queryset.select_related('catalog', 'salesman').filter(id=order_id).first()
    if order is None:
        raise NotFound('Order not found')
    return order


# =============================================================================
# SALESMAN
# =============================================================================

class SalesmanOrderListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/v1/salesman/orders/?status=all&page=1&limit=10
    POST /api/v1/salesman/orders/

    Salesmen only ever see their own orders.
    """

    permission_classes = [IsApprovedSalesman]
    pagination_class = SmallPagination

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return OrderCreateSerializer
        return OrderSerializer

    def get_queryset(self):
        queryset = Order.objects.filter(salesman=self.request.user).select_related('catalog', 'salesman')

        order_status = self.request.query_params.get('status')
        if order_status and order_status != 'all':
            queryset = queryset.filter(status=order_status)

        return queryset.order_by('-created_at')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order(request.user, **serializer.validated_data)

        return Response({
            'message': 'Order created successfully',
            'order': OrderSerializer(order).data,
        }, status=status.HTTP_201_CREATED)


class SalesmanOrderDetailView(views.APIView):
    """
    GET       /api/v1/salesman/orders/{id}/
    PUT/PATCH /api/v1/salesman/orders/{id}/

    Edits are refused with 403 once the edit window has closed or the
    order has moved past "order_view_and_accepted".
    """

    permission_classes = [IsApprovedSalesman]

    def get_object(self, order_id):
        return _get_order(Order.objects.filter(salesman=self.request.user), order_id)

    def get(self, request, order_id):
        order = self.get_object(order_id)
        return Response(SalesmanOrderDetailSerializer(order).data)

    def put(self, request, order_id):
        order = self.get_object(order_id)
        OrderService.check_salesman_can_edit(order)

        serializer = SalesmanOrderUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_by_salesman(order, serializer.validated_data)

        return Response({
            'message': 'Order updated successfully',
            'order': SalesmanOrderDetailSerializer(order).data,
        })

    def patch(self, request, order_id):
        return self.put(request, order_id)


class SalesmanOrderStatsView(views.APIView):
    """GET /api/v1/salesman/orders/stats/"""

    permission_classes = [IsApprovedSalesman]

    def get(self, request):
        stats = OrderService.salesman_stats(request.user)
        stats['recent_orders'] = OrderSerializer(stats['recent_orders'], many=True).data
        return Response(stats)


# =============================================================================
# ADMIN
# =============================================================================

class AdminOrderListView(generics.ListAPIView):
    """
    GET /api/v1/admin/orders/

    See AdminOrderFilter for the query parameters. Defaults to new
    (confirmed) orders, newest first.
    """

    permission_classes = [IsAdmin]
    serializer_class = OrderSerializer
    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = AdminOrderFilter

    def get_queryset(self):
        return Order.objects.select_related('catalog', 'salesman')


class AdminOrderDetailView(views.APIView):
    """
    GET       /api/v1/admin/orders/{id}/
    PUT/PATCH /api/v1/admin/orders/{id}/
    DELETE    /api/v1/admin/orders/{id}/

    Request (PUT/PATCH):
    {
        "status": "cancelled",
        "cancel_reason": "Customer request",
        "priority": "high",
        "expected_delivery_date": "2026-11-02"
    }

    Any other keys are ignored.
    """

    permission_classes = [IsAdmin]

    def get_object(self, order_id):
        return _get_order(Order.objects.prefetch_related('status_history__changed_by'), order_id)

    def get(self, request, order_id):
        order = self.get_object(order_id)
        return Response(AdminOrderDetailSerializer(order).data)

    def put(self, request, order_id):
        order = self.get_object(order_id)

        serializer = AdminOrderUpdateSerializer(order, data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_by_admin(order, serializer.validated_data, request.user)
        return Response(OrderSerializer(order).data)

    def patch(self, request, order_id):
        return self.put(request, order_id)

    def delete(self, request, order_id):
        order = self.get_object(order_id)
        order_code = order.order_code
        order.hard_delete()

        logger.info("Order %s deleted by admin=%s", order_code, request.user.id)
        return Response({'message': 'Order deleted successfully'})


class AdminOrderBulkUpdateView(views.APIView):
    """
    PUT /api/v1/admin/orders/bulk-update/

    Request:
    {
        "ids": ["<uuid>", "<uuid>"],
        "status": "cancelled",
        "cancel_reason": "Customer request"   // required for cancelled
    }
    """

    permission_classes = [IsAdmin]

    def put(self, request):
        serializer = BulkStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = OrderService.bulk_update_status(
            serializer.validated_data['ids'],
            serializer.validated_data['status'],
            request.user,
            cancel_reason=serializer.validated_data.get('cancel_reason', ''),
        )

        return Response({'message': 'Orders updated', 'updated': updated})
