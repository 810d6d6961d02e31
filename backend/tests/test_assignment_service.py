"""Tests for property -> default lease document assignments."""

import pytest
from rest_framework.exceptions import NotFound

from legal_documents.exceptions import RevisionConflict
from legal_documents.models import DocumentType
from legal_documents.services import AssignmentService, FieldService
from legal_documents.services.assignment_service import (
    WARNING_NOT_A_LEASE, WARNING_NEEDS_FIELD_SETUP, WARNING_INACTIVE,
)
from properties.models import Property

from factories import make_field

pytestmark = pytest.mark.django_db


class TestSetDefault:

    def test_assigns_and_reports_setup_warning(self, landlord, lease, make_property):
        prop = make_property()

        result = AssignmentService.set_default(landlord, prop.id, lease.id)

        prop.refresh_from_db()
        assert prop.default_lease_document == lease
        assert prop.needs_field_setup is True
        assert result.warnings == [WARNING_NEEDS_FIELD_SETUP]
        assert lease.name in result.message

    def test_configured_lease_has_no_warnings(self, landlord, lease, make_property):
        FieldService.save_fields(lease, [make_field()])
        lease.refresh_from_db()
        prop = make_property()

        result = AssignmentService.set_default(landlord, prop.id, lease.id)

        assert result.warnings == []
        prop.refresh_from_db()
        assert prop.needs_field_setup is False

    def test_non_lease_document_is_allowed_with_warning(self, landlord, make_document, make_property):
        notice = make_document(name='Entry Notice', type=DocumentType.NOTICE)
        notice.is_active = False
        notice.save()
        prop = make_property()

        result = AssignmentService.set_default(landlord, prop.id, notice.id)

        assert WARNING_NOT_A_LEASE in result.warnings
        assert WARNING_INACTIVE in result.warnings

    def test_last_write_wins(self, landlord, make_document, make_property):
        first = make_document(name='2024 Lease')
        second = make_document(name='2025 Lease')
        prop = make_property()

        AssignmentService.set_default(landlord, prop.id, first.id)
        AssignmentService.set_default(landlord, prop.id, second.id)

        prop.refresh_from_db()
        assert prop.default_lease_document == second
        assert prop.revision == 3

    def test_clear_default(self, landlord, lease, make_property):
        prop = make_property(document=lease)

        result = AssignmentService.clear_default(landlord, prop.id)

        prop.refresh_from_db()
        assert prop.default_lease_document is None
        assert result.document is None
        assert result.warnings == []

    def test_unknown_document_is_not_found(self, landlord, make_property):
        prop = make_property()
        with pytest.raises(NotFound):
            AssignmentService.set_default(landlord, prop.id, 999999)
        prop.refresh_from_db()
        assert prop.default_lease_document is None

    def test_other_landlords_records_are_not_found(self, landlord, other_landlord,
                                                   lease, make_property, make_document):
        foreign_property = make_property(owner=other_landlord)
        foreign_document = make_document(owner=other_landlord)
        own_property = make_property(name='1 Own St')

        with pytest.raises(NotFound):
            AssignmentService.set_default(landlord, foreign_property.id, lease.id)
        with pytest.raises(NotFound):
            AssignmentService.set_default(landlord, own_property.id, foreign_document.id)

    def test_stale_revision_is_rejected(self, landlord, make_document, make_property):
        first = make_document(name='A')
        second = make_document(name='B')
        prop = make_property()
        AssignmentService.set_default(landlord, prop.id, first.id, expected_revision=1)

        with pytest.raises(RevisionConflict):
            AssignmentService.set_default(landlord, prop.id, second.id, expected_revision=1)

        prop.refresh_from_db()
        assert prop.default_lease_document == first


class TestAssignToProperties:

    def test_assigns_every_property(self, landlord, lease, make_property):
        props = [make_property(name=f'{n} Main St') for n in (1, 2, 3)]

        results = AssignmentService.assign_to_properties(
            landlord, lease.id, [p.id for p in props]
        )

        assert len(results) == 3
        assert Property.objects.filter(default_lease_document=lease).count() == 3

    def test_unknown_property_assigns_nothing(self, landlord, lease, make_property):
        prop = make_property()

        with pytest.raises(NotFound):
            AssignmentService.assign_to_properties(landlord, lease.id, [prop.id, 424242])

        prop.refresh_from_db()
        assert prop.default_lease_document is None


class TestQueries:

    def test_find_properties_using(self, lease, make_document, make_property):
        other = make_document(name='Pet Agreement', type=DocumentType.PET_AGREEMENT)
        make_property(name='B St', document=lease)
        make_property(name='A St', document=lease)
        make_property(name='C St', document=other)
        make_property(name='D St')

        names = [p.name for p in AssignmentService.find_properties_using(lease)]

        assert names == ['A St', 'B St']

    def test_property_assignments(self, landlord, lease, make_property):
        make_property(name='Assigned', document=lease)
        make_property(name='Vacant')

        rows = {row['property'].name: row for row in AssignmentService.property_assignments(landlord)}

        assert rows['Assigned']['document'] == lease
        assert rows['Assigned']['needs_field_setup'] is True
        assert rows['Vacant']['document'] is None
        assert rows['Vacant']['needs_field_setup'] is False
