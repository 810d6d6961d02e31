import math

from rest_framework import serializers

from .models import LegalDocument, SignatureField, DocumentType, FieldType, SignerRole

# Upper bound of a PositiveIntegerField column
MAX_PAGE_NUMBER = 2147483647

# Float noise allowance for x + width <= 1 style checks
BOUNDS_TOLERANCE = 1e-9


class FractionField(serializers.FloatField):
    """A finite float between 0 and 1."""

    def __init__(self, **kwargs):
        kwargs.setdefault('min_value', 0.0)
        kwargs.setdefault('max_value', 1.0)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        try:
            value = super().to_internal_value(data)
        except OverflowError:
            self.fail('invalid')
        if not math.isfinite(value):
            self.fail('invalid')
        return value


class SignatureFieldInputSerializer(serializers.Serializer):
    """
    One candidate field from the editor.

    Pass `page_count` in the context to bound `page_number` by the
    document's length.
    """
    key = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    field_type = serializers.ChoiceField(choices=FieldType.choices)
    role = serializers.ChoiceField(
        choices=SignerRole.choices,
        error_messages={
            'required': 'Each field must be assigned to a tenant or landlord',
            'null': 'Each field must be assigned to a tenant or landlord',
        }
    )
    page_number = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_NUMBER)
    x_pct = FractionField()
    y_pct = FractionField()
    width_pct = FractionField()
    height_pct = FractionField()
    label = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    required = serializers.BooleanField(default=True)

    def validate_width_pct(self, value):
        if value <= 0.0:
            raise serializers.ValidationError('Must be greater than 0')
        return value

    def validate_height_pct(self, value):
        if value <= 0.0:
            raise serializers.ValidationError('Must be greater than 0')
        return value

    def validate(self, data):
        """Ensure the box lies on the page and the page exists."""
        errors = {}
        page_count = self.context.get('page_count')
        if page_count and data['page_number'] > page_count:
            errors['page_number'] = f'Document only has {page_count} page(s)'
        if data['x_pct'] + data['width_pct'] > 1.0 + BOUNDS_TOLERANCE:
            errors['width_pct'] = 'Field extends past the right edge of the page'
        if data['y_pct'] + data['height_pct'] > 1.0 + BOUNDS_TOLERANCE:
            errors['height_pct'] = 'Field extends past the bottom edge of the page'
        if errors:
            raise serializers.ValidationError(errors)
        return data


class SignatureFieldSerializer(serializers.ModelSerializer):
    """Serializer for SignatureField in the shape the editor saves it."""

    class Meta:
        model = SignatureField
        fields = [
            'key', 'field_type', 'role', 'page_number',
            'x_pct', 'y_pct', 'width_pct', 'height_pct',
            'label', 'required'
        ]
        read_only_fields = fields


class AssignedPropertySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)


class LegalDocumentListSerializer(serializers.ModelSerializer):
    """Serializer for document list view."""
    lifecycle_state = serializers.CharField(read_only=True)
    needs_setup = serializers.BooleanField(read_only=True)
    is_assigned = serializers.SerializerMethodField()
    field_count = serializers.SerializerMethodField()
    file_url = serializers.SerializerMethodField()

    class Meta:
        model = LegalDocument
        fields = [
            'id', 'name', 'type', 'category', 'state', 'description',
            'file_url', 'file_type', 'file_size', 'page_count',
            'is_template', 'is_active', 'fields_configured', 'needs_setup',
            'lifecycle_state', 'is_assigned', 'field_count', 'revision',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_is_assigned(self, obj):
        # Uses the prefetched relation when the list query provided one
        return len(obj.default_for_properties.all()) > 0

    def get_field_count(self, obj):
        return len(obj.fields.all())

    def get_file_url(self, obj):
        """Return the absolute file URL when a request is available."""
        if obj.file:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.file.url)
            return obj.file.url
        return None


class LegalDocumentDetailSerializer(LegalDocumentListSerializer):
    """Document with its field list and the properties using it."""
    fields = SignatureFieldSerializer(many=True, read_only=True)
    properties = serializers.SerializerMethodField()

    class Meta(LegalDocumentListSerializer.Meta):
        fields = LegalDocumentListSerializer.Meta.fields + [
            'fields_saved_at', 'fields', 'properties'
        ]
        read_only_fields = fields

    def get_properties(self, obj):
        return AssignedPropertySerializer(
            obj.default_for_properties.order_by('name'), many=True
        ).data


class LegalDocumentCreateSerializer(serializers.Serializer):
    """Multipart upload payload."""
    file = serializers.FileField()
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=DocumentType.choices, default=DocumentType.LEASE)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=50, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    is_template = serializers.BooleanField(default=True)

    def validate(self, data):
        if not data.get('name'):
            data['name'] = data['file'].name
        return data


class LegalDocumentUpdateSerializer(serializers.ModelSerializer):
    """Metadata-only update; file and field list are not editable here."""

    class Meta:
        model = LegalDocument
        fields = ['name', 'type', 'category', 'state', 'description', 'is_template', 'is_active']


class FieldListSaveSerializer(serializers.Serializer):
    """
    Body of PUT /fields/.

    Individual fields are validated by the field service so that errors
    carry the index and key of the offending field.
    """
    fields = serializers.ListField(child=serializers.JSONField(), allow_empty=True)
    expected_revision = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AssignPropertiesSerializer(serializers.Serializer):
    property_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False
    )


class SetDefaultSerializer(serializers.Serializer):
    property_id = serializers.IntegerField(min_value=1)
    document_id = serializers.IntegerField(min_value=1, allow_null=True)
    expected_revision = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ClearDefaultSerializer(serializers.Serializer):
    property_id = serializers.IntegerField(min_value=1)
    expected_revision = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AssignmentResultSerializer(serializers.Serializer):
    """Outcome of a set-default / clear-default / assign call."""
    property_id = serializers.IntegerField(source='prop.id')
    property_name = serializers.CharField(source='prop.name')
    property_revision = serializers.IntegerField(source='prop.revision')
    document_id = serializers.IntegerField(source='document.id', allow_null=True, default=None)
    warnings = serializers.ListField(child=serializers.CharField())
    message = serializers.CharField()
