"""
Catalog models for the GoldFinch order desk.

Catalog entries are the designs salesmen pick from when they place an
order. Images and 3D files (STL) live on an external image host; only
their URLs are stored here.
"""

from django.db import models

from core.models import BaseModel


class Catalog(BaseModel):
    """A jewelry design offered to salesmen."""

    name = models.CharField(max_length=200)

    images = models.JSONField(
        default=list,
        help_text="Image URLs"
    )

    files = models.JSONField(
        default=list,
        blank=True,
        help_text="STL and other 3D file URLs"
    )

    size = models.CharField(max_length=50)

    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        help_text="Weight in grams"
    )

    description = models.TextField(blank=True)

    class Meta:
        db_table = 'goldfinch_catalogs'
        verbose_name = 'Catalog'
        verbose_name_plural = 'Catalogs'
        ordering = ['-created_at']

    def __str__(self):
        return self.name