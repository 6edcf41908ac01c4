"""
Core models for the GoldFinch order desk.

Abstract base shared by every persisted model:
- UUID primary keys
- created/updated timestamps
- soft delete with a manager that hides deleted rows
"""

import uuid
from django.db import models
from django.utils import timezone


class SoftDeleteManager(models.Manager):
    """Default manager; soft-deleted rows are reachable through ``all_objects``."""

    def get_queryset(self):
        return super().get_queryset().filter(is_deleted=False)


class BaseModel(models.Model):
    """
    Abstract base model providing a UUID primary key and timestamps.

    created_at doubles as the start of the salesman edit window for orders,
    so it is set once on insert and never touched by regular saves.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=['is_deleted', 'deleted_at', 'updated_at'])

    def hard_delete(self):
        """Permanently remove the row. Only used for explicit admin deletes."""
        super().delete()

    def delete(self, *args, **kwargs):
        """Default delete is a soft delete; see hard_delete()."""
        self.soft_delete()
