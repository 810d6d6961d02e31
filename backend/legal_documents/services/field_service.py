"""
Signature field persistence.

Responsibilities:
- Validate candidate field lists (type, signer role, bounds, page number)
- Atomically replace a document's field list
- Keep `fields_configured` equal to "the saved list is non-empty"
- Serve the stored list back in the same shape it was saved
"""

import logging

from django.db import transaction
from django.utils import timezone

from ..exceptions import FieldLayoutError, RevisionConflict
from ..models import LegalDocument, SignatureField, SignerRole
from ..serializers import SignatureFieldInputSerializer

logger = logging.getLogger(__name__)

FIELD_ATTRIBUTES = (
    'key', 'field_type', 'role', 'page_number',
    'x_pct', 'y_pct', 'width_pct', 'height_pct',
    'label', 'required',
)


def _flatten_errors(errors):
    """Serializer errors as {field name: message}."""
    flat = {}
    for name, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            flat[name] = ' '.join(str(message) for message in messages)
        else:
            flat[name] = str(messages)
    return flat


class FieldService:
    """Service for validating and storing signature field layouts."""

    @staticmethod
    def validate_field(data, index, page_count=None):
        """
        Validate and normalize one candidate field.

        Returns:
            dict: normalized field

        Raises:
            FieldLayoutError: naming this field's index, key and problems
        """
        serializer = SignatureFieldInputSerializer(data=data, context={'page_count': page_count})
        if not serializer.is_valid():
            key = data.get('key') if isinstance(data, dict) else None
            raise FieldLayoutError(
                f'Field {index + 1} is invalid',
                field_index=index,
                field_key=key if isinstance(key, str) else None,
                errors=_flatten_errors(serializer.errors),
            )

        validated = serializer.validated_data
        normalized = {attribute: validated.get(attribute) for attribute in FIELD_ATTRIBUTES}
        if not normalized['key'] or not normalized['key'].strip():
            normalized['key'] = f'field_{index + 1}'
        normalized['label'] = normalized['label'] or ''
        return normalized

    @staticmethod
    def validate_fields(document, fields):
        """
        Validate a whole candidate list; stops at the first invalid field.

        Returns:
            list[dict]: normalized fields in the submitted order
        """
        if not isinstance(fields, (list, tuple)):
            raise FieldLayoutError('Fields must be a list', errors={'fields': 'Expected a list'})

        normalized = []
        seen_keys = set()
        for index, data in enumerate(fields):
            field = FieldService.validate_field(data, index, document.page_count)
            if field['key'] in seen_keys:
                raise FieldLayoutError(
                    f'Field {index + 1} is invalid',
                    field_index=index,
                    field_key=field['key'],
                    errors={'key': 'Field keys must be unique within a document'},
                )
            seen_keys.add(field['key'])
            normalized.append(field)
        return normalized

    @staticmethod
    def get_fields(document):
        """Stored field list, in order, in the shape it was saved."""
        return [
            {attribute: getattr(field, attribute) for attribute in FIELD_ATTRIBUTES}
            for field in document.fields.order_by('position')
        ]

    @staticmethod
    def fields_for_role(document, role):
        """Fields a single signer (tenant or landlord) is responsible for."""
        if role not in SignerRole.values:
            raise FieldLayoutError(
                f'Unknown signer role: {role}',
                errors={'role': f'Must be one of {", ".join(SignerRole.values)}'},
            )
        return [field for field in FieldService.get_fields(document) if field['role'] == role]

    @staticmethod
    def save_fields(document, fields, expected_revision=None):
        """
        Replace a document's field list.

        Behavior:
        - Validates every field before writing anything
        - Replaces the stored list in full (no merge) inside one transaction
        - Recomputes fields_configured as len(fields) > 0
        - Saving the list that is already stored changes nothing
        - Assigned properties are not notified

        Args:
            document: LegalDocument instance
            fields: list of field dicts
            expected_revision: optional int; when given, must match the
                stored revision or RevisionConflict is raised

        Returns:
            LegalDocument: the refreshed document
        """
        normalized = FieldService.validate_fields(document, fields)

        with transaction.atomic():
            locked = LegalDocument.objects.select_for_update().get(pk=document.pk)

            if expected_revision is not None and expected_revision != locked.revision:
                logger.warning(
                    "Field save for document %s rejected: revision %s, expected %s",
                    locked.id, locked.revision, expected_revision
                )
                raise RevisionConflict(expected_revision, locked.revision)

            if locked.fields_saved_at is not None and FieldService.get_fields(locked) == normalized:
                logger.info("Field list for document %s unchanged, nothing to save", locked.id)
                return locked

            locked.fields.all().delete()
            SignatureField.objects.bulk_create([
                SignatureField(document=locked, position=position, **field)
                for position, field in enumerate(normalized)
            ])

            locked.fields_configured = len(normalized) > 0
            locked.fields_saved_at = timezone.now()
            locked.revision += 1
            locked.save(update_fields=[
                'fields_configured', 'fields_saved_at', 'revision', 'updated_at'
            ])

        logger.info(
            "Saved %d signature field(s) for document %s (revision %d)",
            len(normalized), locked.id, locked.revision
        )
        return locked


# Singleton instance
_field_service = None


def get_field_service() -> FieldService:
    """Get singleton instance of field service."""
    global _field_service
    if _field_service is None:
        _field_service = FieldService()
    return _field_service
