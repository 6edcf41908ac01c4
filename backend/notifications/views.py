"""
Notification views for the GoldFinch order desk.

Provides API endpoints for:
- List salesman notifications (with unread count)
- Mark selected or all notifications as read
- Mark a single notification as read
- Get unread count

Notifications are for salesmen only; admins have no inbox.
"""

from rest_framework import generics, views
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from authentication.permissions import IsApprovedSalesman
from .serializers import NotificationActionSerializer, NotificationSerializer
from .services import NotificationService


class NotificationListView(generics.ListAPIView):
    """
    List and update notifications for the authenticated salesman.

    GET /api/v1/salesman/notifications/

    Query parameters:
    - page, limit: pagination
    - is_read: Filter by read status (true/false; other values are ignored)
    - type: Filter by notification type (``all`` for every type)

    Returns: Paginated list of notifications, newest first, plus
    ``unread_count``.

    PUT /api/v1/salesman/notifications/
    {"action": "mark_as_read", "notification_ids": [...]} or
    {"action": "mark_all_as_read"}
    """

    permission_classes = [IsApprovedSalesman]
    serializer_class = NotificationSerializer

    def get_queryset(self):
        queryset = NotificationService.for_user(self.request.user).select_related('order')

        is_read = (self.request.query_params.get('is_read') or '').lower()
        if is_read in ('true', 'false'):
            queryset = queryset.filter(is_read=is_read == 'true')

        notification_type = self.request.query_params.get('type')
        if notification_type and notification_type != 'all':
            queryset = queryset.filter(notification_type=notification_type)

        return queryset.order_by('-created_at')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.paginator.get_paginated_response(
            serializer.data,
            unread_count=NotificationService.get_unread_count(request.user),
        )

    def put(self, request):
        serializer = NotificationActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data['action'] == NotificationActionSerializer.MARK_ALL_AS_READ:
            count = NotificationService.mark_all_read(request.user)
            message = 'All notifications marked as read'
        else:
            count = NotificationService.mark_read(
                request.user, serializer.validated_data['notification_ids']
            )
            message = 'Notifications marked as read'

        return Response({'message': message, 'modified_count': count})


class MarkNotificationReadView(views.APIView):
    """
    Mark a notification as read.

    POST /api/v1/salesman/notifications/{id}/read/
    """

    permission_classes = [IsApprovedSalesman]

    def post(self, request, pk):
        notification = NotificationService.for_user(request.user).filter(id=pk).first()
        if notification is None:
            raise NotFound('Notification not found')

        notification.mark_as_read()

        return Response({
            'id': str(notification.id),
            'is_read': notification.is_read,
            'read_at': notification.read_at.isoformat() if notification.read_at else None,
        })


class MarkAllReadView(views.APIView):
    """POST /api/v1/salesman/notifications/read-all/"""

    permission_classes = [IsApprovedSalesman]

    def post(self, request):
        count = NotificationService.mark_all_read(request.user)

        return Response({
            'message': f'Marked {count} notifications as read.',
            'count': count,
        })


class UnreadCountView(views.APIView):
    """GET /api/v1/salesman/notifications/unread-count/"""

    permission_classes = [IsApprovedSalesman]

    def get(self, request):
        return Response({
            'unread_count': NotificationService.get_unread_count(request.user),
        })
