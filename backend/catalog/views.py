"""
Catalog views for the GoldFinch order desk.

Every signed-in user can browse the catalog; only admins add, change or
remove designs.
"""

import logging

from rest_framework import generics

from authentication.permissions import IsAdminOrReadOnly
from .models import Catalog
from .serializers import CatalogSerializer

logger = logging.getLogger(__name__)


class CatalogListView(generics.ListCreateAPIView):
    """
    GET  /api/v1/catalogs/?q=ring
    POST /api/v1/catalogs/   (admin)
    """

    permission_classes = [IsAdminOrReadOnly]
    serializer_class = CatalogSerializer

    def get_queryset(self):
        queryset = Catalog.objects.all()

        q = self.request.query_params.get('q')
        if q:
            queryset = queryset.filter(name__icontains=q.strip())

        return queryset.order_by('-created_at')

    def perform_create(self, serializer):
        catalog = serializer.save()
        logger.info("Catalog created: %s by admin=%s", catalog.id, self.request.user.id)


class CatalogDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PUT/PATCH/DELETE /api/v1/catalogs/{id}/

    Deleting a design keeps the row (soft delete) so existing orders still
    resolve their catalog reference.
    """

    permission_classes = [IsAdminOrReadOnly]
    serializer_class = CatalogSerializer
    queryset = Catalog.objects.all()

    def perform_destroy(self, instance):
        instance.soft_delete()
        logger.info("Catalog removed: %s by admin=%s", instance.id, self.request.user.id)
