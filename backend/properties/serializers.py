from rest_framework import serializers

from legal_documents.models import LegalDocument
from .models import Property


class DefaultDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = LegalDocument
        fields = ['id', 'name', 'type', 'fields_configured', 'is_active']
        read_only_fields = fields


class PropertySerializer(serializers.ModelSerializer):
    """Property with its default lease document and setup warning."""
    default_lease_document = DefaultDocumentSerializer(read_only=True)
    needs_field_setup = serializers.BooleanField(read_only=True)

    class Meta:
        model = Property
        fields = [
            'id', 'name', 'address', 'default_lease_document',
            'needs_field_setup', 'revision', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'revision', 'created_at', 'updated_at']


class PropertyCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    default_lease_document_id = serializers.IntegerField(
        required=False, allow_null=True, min_value=1
    )
