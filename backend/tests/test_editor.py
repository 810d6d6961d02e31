"""Tests for the in-memory field layout editor."""

import pytest

from legal_documents.editor import (
    FieldLayoutEditor, EditorClosed, default_lease_layout,
    DEFAULT_SIZES, NEW_FIELD_X, NEW_FIELD_Y, MAX_WIDTH, MIN_HEIGHT, STATE_CLOSED,
)
from legal_documents.exceptions import FieldLayoutError
from legal_documents.models import FieldType, LifecycleState
from legal_documents.services import FieldService


class TestAddField:

    def test_new_field_uses_type_default_size_and_current_page(self):
        editor = FieldLayoutEditor(page_count=3)
        editor.go_to_page(2)
        key = editor.add_field('initial')

        added = editor.fields_on_page(2)[0]
        assert added.key == key
        assert added.page_number == 2
        assert (added.width_pct, added.height_pct) == DEFAULT_SIZES[FieldType.INITIAL]
        assert (added.x_pct, added.y_pct) == (NEW_FIELD_X, NEW_FIELD_Y)

    def test_new_field_takes_selected_role(self):
        editor = FieldLayoutEditor(page_count=1)
        editor.select_role('landlord')
        editor.add_field('signature')
        assert editor.fields[0].role == 'landlord'

    def test_unknown_type_is_rejected(self):
        editor = FieldLayoutEditor(page_count=1)
        with pytest.raises(FieldLayoutError):
            editor.add_field('checkbox')

    def test_page_outside_document_is_rejected(self):
        editor = FieldLayoutEditor(page_count=2)
        with pytest.raises(FieldLayoutError):
            editor.go_to_page(3)

    def test_page_zero_is_rejected(self):
        editor = FieldLayoutEditor(page_count=2)
        with pytest.raises(FieldLayoutError):
            editor.add_field('signature', page=0)
        assert editor.fields == []

    def test_non_integer_page_is_rejected(self):
        editor = FieldLayoutEditor(page_count=2)
        with pytest.raises(FieldLayoutError):
            editor.go_to_page('2')
        assert editor.current_page == 1

    def test_duplicate_key_is_rejected(self):
        editor = FieldLayoutEditor(page_count=1)
        editor.add_field('date', key='move_in_date')
        with pytest.raises(FieldLayoutError):
            editor.add_field('date', key='move_in_date')


class TestMoveAndResize:

    def test_move_is_clamped_to_page(self):
        editor = FieldLayoutEditor(page_count=1)
        key = editor.add_field('signature')
        editor.move_field(key, 1.5, -0.3)

        moved = editor.fields[0]
        assert moved.y_pct == 0.0
        assert moved.x_pct + moved.width_pct <= 1.0

    def test_resize_is_clamped(self):
        editor = FieldLayoutEditor(page_count=1)
        key = editor.add_field('text')
        editor.resize_field(key, 0.9, 0.001)

        resized = editor.fields[0]
        assert resized.width_pct == MAX_WIDTH
        assert resized.height_pct == MIN_HEIGHT

    def test_resize_keeps_box_on_page(self):
        editor = FieldLayoutEditor(page_count=1)
        key = editor.add_field('text')
        editor.move_field(key, 0.80, 0.5)
        editor.resize_field(key, 0.5, 0.05)

        resized = editor.fields[0]
        assert resized.x_pct + resized.width_pct == pytest.approx(1.0)

    def test_unknown_key_raises_key_error(self):
        editor = FieldLayoutEditor(page_count=1)
        with pytest.raises(KeyError):
            editor.move_field('missing', 0.1, 0.1)


class TestClosing:

    def test_save_returns_candidate_list(self):
        editor = FieldLayoutEditor(page_count=1)
        assert editor.state == LifecycleState.FIELDS_CONFIGURING
        key = editor.add_field('signature', role='tenant')
        editor.relabel_field(key, 'Tenant')

        result = editor.save()

        assert result.saved
        assert result.fields[0]['key'] == key
        assert result.fields[0]['label'] == 'Tenant'
        assert editor.state == STATE_CLOSED

    def test_save_requires_role_on_every_field(self):
        editor = FieldLayoutEditor(page_count=1, initial_fields=[
            {'key': 'a', 'field_type': 'signature', 'role': None},
        ])
        with pytest.raises(FieldLayoutError) as exc_info:
            editor.save()
        assert exc_info.value.field_key == 'a'
        assert 'role' in exc_info.value.errors

    def test_cancel_produces_nothing(self):
        editor = FieldLayoutEditor(page_count=1)
        editor.add_field('signature')
        result = editor.cancel()
        assert result.cancelled
        assert result.fields is None

    def test_closed_editor_refuses_edits(self):
        editor = FieldLayoutEditor(page_count=1)
        editor.cancel()
        with pytest.raises(EditorClosed):
            editor.add_field('signature')

    def test_initial_fields_are_loaded_and_deletable(self):
        editor = FieldLayoutEditor(page_count=2, initial_fields=[
            {'key': 'one', 'field_type': 'date', 'role': 'tenant', 'page_number': 2,
             'x_pct': 0.2, 'y_pct': 0.3, 'width_pct': 0.1, 'height_pct': 0.05},
            {'field_type': 'signature', 'role': 'landlord'},
        ])
        assert [f.key for f in editor.fields] == ['one', 'field_2']

        editor.delete_field('one')
        editor.reassign_role('field_2', 'tenant')
        editor.retype_field('field_2', 'name')

        fields = editor.save().fields
        assert len(fields) == 1
        assert fields[0]['role'] == 'tenant'
        assert fields[0]['field_type'] == 'name'


class TestDefaultLeaseLayout:

    def test_layout_is_on_last_page_with_both_roles(self):
        fields = default_lease_layout(page_count=4)

        assert len(fields) == 4
        assert {f['page_number'] for f in fields} == {4}
        assert [f['role'] for f in fields] == ['landlord', 'landlord', 'tenant', 'tenant']
        assert [f['field_type'] for f in fields] == ['signature', 'date', 'signature', 'date']

    def test_layout_is_stable(self):
        assert default_lease_layout(2) == default_lease_layout(2)

    def test_unknown_page_count_uses_first_page(self):
        fields = default_lease_layout(None)
        assert {f['page_number'] for f in fields} == {1}


@pytest.mark.django_db
class TestSavingThroughFieldService:

    def test_edited_layout_persists_unchanged(self, lease):
        editor = FieldLayoutEditor(page_count=lease.page_count)
        editor.go_to_page(2)
        signature = editor.add_field('signature')
        editor.move_field(signature, 0.6, 0.7)
        editor.resize_field(signature, 0.3, 0.08)
        editor.reassign_role(signature, 'landlord')
        date = editor.add_field('date', role='tenant', page=1)
        editor.move_field(date, 0.95, 0.99)
        fields = editor.save().fields

        saved = FieldService.save_fields(lease, fields)

        assert saved.fields_configured is True
        assert FieldService.get_fields(lease) == fields

    def test_default_lease_layout_persists_unchanged(self, lease):
        fields = default_lease_layout(lease.page_count)

        saved = FieldService.save_fields(lease, fields)

        assert saved.fields_configured is True
        assert FieldService.get_fields(lease) == fields
