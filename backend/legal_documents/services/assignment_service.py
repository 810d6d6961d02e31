"""
Property -> default lease document assignment map.

Responsibilities:
- Set / clear the default lease document of a property (last write wins)
- Assign one document to several properties at once
- Answer "which properties use document X"

Assignments are deliberately independent of field configuration: a
property may point at a document whose fields are not set up yet. That is
reported back as a warning, never as an error.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from django.db import transaction
from rest_framework.exceptions import NotFound

from properties.models import Property
from ..exceptions import RevisionConflict
from ..models import LegalDocument, DocumentType

logger = logging.getLogger(__name__)

WARNING_NOT_A_LEASE = 'not_a_lease'
WARNING_NEEDS_FIELD_SETUP = 'needs_field_setup'
WARNING_INACTIVE = 'inactive'


@dataclass
class AssignmentResult:
    prop: Property
    document: LegalDocument = None
    warnings: List[str] = field(default_factory=list)

    @property
    def message(self):
        if self.document is None:
            return f'Default lease cleared for {self.prop.name}'
        return f'{self.document.name} is now the default lease for {self.prop.name}'


class AssignmentService:
    """Service for property default-document bookkeeping."""

    @staticmethod
    def warnings_for(document):
        """Advisory states of a document about to become a default lease."""
        warnings = []
        if document is None:
            return warnings
        if document.type != DocumentType.LEASE:
            warnings.append(WARNING_NOT_A_LEASE)
        if not document.fields_configured:
            warnings.append(WARNING_NEEDS_FIELD_SETUP)
        if not document.is_active:
            warnings.append(WARNING_INACTIVE)
        return warnings

    @staticmethod
    def _get_property(landlord, property_id, lock=False):
        queryset = Property.objects.filter(landlord=landlord)
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=property_id)
        except (Property.DoesNotExist, ValueError, TypeError):
            raise NotFound(f'Property {property_id} not found')

    @staticmethod
    def _get_document(landlord, document_id, lock=False):
        queryset = LegalDocument.objects.filter(landlord=landlord)
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=document_id)
        except (LegalDocument.DoesNotExist, ValueError, TypeError):
            raise NotFound(f'Document {document_id} not found')

    @staticmethod
    @transaction.atomic
    def set_default(landlord, property_id, document_id, expected_revision=None):
        """
        Point a property at a default lease document (or at nothing).

        Overwrites any previous assignment; no history is kept.

        Raises:
            NotFound: the property or the (non-null) document does not exist
                for this landlord
            RevisionConflict: expected_revision given and stale
        """
        prop = AssignmentService._get_property(landlord, property_id, lock=True)
        document = None
        if document_id is not None:
            document = AssignmentService._get_document(landlord, document_id, lock=True)

        if expected_revision is not None and expected_revision != prop.revision:
            logger.warning(
                "Assignment for property %s rejected: revision %s, expected %s",
                prop.id, prop.revision, expected_revision
            )
            raise RevisionConflict(expected_revision, prop.revision)

        previous_id = prop.default_lease_document_id
        prop.default_lease_document = document
        prop.revision += 1
        prop.save(update_fields=['default_lease_document', 'revision', 'updated_at'])

        logger.info(
            "Property %s default lease document: %s -> %s",
            prop.id, previous_id, document.id if document else None
        )
        return AssignmentResult(
            prop=prop,
            document=document,
            warnings=AssignmentService.warnings_for(document),
        )

    @staticmethod
    def clear_default(landlord, property_id, expected_revision=None):
        """Remove the default lease document of a property."""
        return AssignmentService.set_default(
            landlord, property_id, None, expected_revision=expected_revision
        )

    @staticmethod
    @transaction.atomic
    def assign_to_properties(landlord, document_id, property_ids):
        """
        Make one document the default for several properties.

        Either every property is updated or, when any id fails to resolve,
        none is.
        """
        document = AssignmentService._get_document(landlord, document_id, lock=True)
        unique_ids = list(dict.fromkeys(property_ids))
        properties = list(
            Property.objects.select_for_update()
            .filter(landlord=landlord, pk__in=unique_ids)
        )
        found = {prop.id for prop in properties}
        missing = [pid for pid in unique_ids if pid not in found]
        if missing:
            raise NotFound(f'Properties not found: {", ".join(str(pid) for pid in missing)}')

        warnings = AssignmentService.warnings_for(document)
        results = []
        for prop in properties:
            prop.default_lease_document = document
            prop.revision += 1
            prop.save(update_fields=['default_lease_document', 'revision', 'updated_at'])
            results.append(AssignmentResult(prop=prop, document=document, warnings=warnings))

        logger.info(
            "Document %s assigned as default lease for properties %s",
            document.id, sorted(found)
        )
        return results

    @staticmethod
    def find_properties_using(document):
        """Properties whose default lease document is `document`."""
        return Property.objects.filter(default_lease_document=document).order_by('name')

    @staticmethod
    @transaction.atomic
    def clear_document_everywhere(document):
        """Null out every assignment pointing at `document`. Returns the count."""
        properties = list(
            Property.objects.select_for_update().filter(default_lease_document=document)
        )
        for prop in properties:
            prop.default_lease_document = None
            prop.revision += 1
            prop.save(update_fields=['default_lease_document', 'revision', 'updated_at'])
        return len(properties)

    @staticmethod
    def property_assignments(landlord):
        """
        One row per property of the landlord with its default document and
        whether that document still needs field setup.
        """
        rows = []
        for prop in Property.objects.filter(landlord=landlord).select_related('default_lease_document'):
            rows.append({
                'property': prop,
                'document': prop.default_lease_document,
                'needs_field_setup': prop.needs_field_setup,
            })
        return rows


# Singleton instance
_assignment_service = None


def get_assignment_service() -> AssignmentService:
    """Get singleton instance of assignment service."""
    global _assignment_service
    if _assignment_service is None:
        _assignment_service = AssignmentService()
    return _assignment_service
