"""
Serializers for catalog designs.
"""

from rest_framework import serializers

from .models import Catalog


class CatalogSerializer(serializers.ModelSerializer):
    """Full catalog entry, used for detail and admin writes."""

    images = serializers.ListField(child=serializers.URLField(), allow_empty=False)
    files = serializers.ListField(child=serializers.URLField(), required=False)

    class Meta:
        model = Catalog
        fields = [
            'id',
            'name',
            'images',
            'files',
            'size',
            'weight',
            'description',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_weight(self, value):
        if value <= 0:
            raise serializers.ValidationError("Weight must be greater than zero.")
        return value


class CatalogSummarySerializer(serializers.ModelSerializer):
    """Catalog fields embedded in order responses."""

    class Meta:
        model = Catalog
        fields = ['id', 'name', 'images', 'size', 'weight']
        read_only_fields = fields
