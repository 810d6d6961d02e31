"""
backend/legal_documents/editor.py

Purpose:
- In-memory model of the signature-field layout editor.

The editor is a plain object built from (page count, initial fields). The
operator adds, moves, resizes, retypes and reassigns fields, then either
saves (producing a new candidate field list for the field persistence
service) or cancels (producing nothing). It never touches the database.
"""

import secrets
from dataclasses import dataclass, field as dc_field, asdict
from typing import List, Optional

from .exceptions import FieldLayoutError
from .models import FieldType, SignerRole, LifecycleState


# Default box size per field type, as fractions of the page
DEFAULT_SIZES = {
    FieldType.SIGNATURE: (0.20, 0.06),
    FieldType.INITIAL: (0.08, 0.05),
    FieldType.DATE: (0.12, 0.04),
    FieldType.NAME: (0.18, 0.04),
    FieldType.TEXT: (0.18, 0.04),
}

# Where a freshly added field lands (near the bottom of the page)
NEW_FIELD_X = 0.10
NEW_FIELD_Y = 0.80

# Drag and resize limits
MAX_X = 0.90
MAX_Y = 0.95
MIN_WIDTH, MAX_WIDTH = 0.05, 0.50
MIN_HEIGHT, MAX_HEIGHT = 0.03, 0.20

STATE_CLOSED = 'closed'


class EditorClosed(Exception):
    """Raised when editing after the editor was saved or cancelled."""


def _clamp(value, low, high):
    return max(low, min(high, value))


def generate_field_key():
    return f'field_{secrets.token_hex(5)}'


@dataclass
class EditorField:
    key: str
    field_type: Optional[str]
    role: Optional[str]
    page_number: int
    x_pct: float
    y_pct: float
    width_pct: float
    height_pct: float
    label: str = ''
    required: bool = True

    @classmethod
    def from_dict(cls, data, index):
        return cls(
            key=data.get('key') or f'field_{index + 1}',
            field_type=data.get('field_type'),
            role=data.get('role'),
            page_number=data.get('page_number', 1),
            x_pct=data.get('x_pct', NEW_FIELD_X),
            y_pct=data.get('y_pct', NEW_FIELD_Y),
            width_pct=data.get('width_pct', MIN_WIDTH),
            height_pct=data.get('height_pct', MIN_HEIGHT),
            label=data.get('label') or '',
            required=data.get('required', True),
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class EditorResult:
    saved: bool
    fields: Optional[List[dict]] = dc_field(default=None)

    @property
    def cancelled(self):
        return not self.saved


class FieldLayoutEditor:
    """
    Operator-facing field placement session for one document.

    Usage:
        editor = FieldLayoutEditor(page_count=3, initial_fields=document_fields)
        key = editor.add_field('signature', role='tenant')
        editor.move_field(key, 0.1, 0.7)
        result = editor.save()
    """

    def __init__(self, page_count=None, initial_fields=None):
        self.page_count = page_count
        self.fields = [
            EditorField.from_dict(data, index)
            for index, data in enumerate(initial_fields or [])
        ]
        self.current_page = 1
        self.selected_role = SignerRole.TENANT.value
        self.selected_key = None
        self.state = LifecycleState.FIELDS_CONFIGURING

    # ----------------------------
    # Navigation & selection
    # ----------------------------
    def go_to_page(self, page):
        self._ensure_open()
        self._check_page(page)
        self.current_page = page

    def select_role(self, role):
        self._ensure_open()
        self._check_role(role)
        self.selected_role = role

    # ----------------------------
    # Field operations
    # ----------------------------
    def add_field(self, field_type, role=None, page=None, key=None):
        """Add a field of the given type on the current page and return its key."""
        self._ensure_open()
        if key and any(f.key == key for f in self.fields):
            raise FieldLayoutError(
                f'Duplicate field key: {key}',
                field_key=key,
                errors={'key': 'Field keys must be unique'},
            )
        self._check_type(field_type)
        role = role or self.selected_role
        self._check_role(role)
        if page is None:
            page = self.current_page
        self._check_page(page)

        width, height = DEFAULT_SIZES[FieldType(field_type)]
        new_field = EditorField(
            key=key or generate_field_key(),
            field_type=field_type,
            role=role,
            page_number=page,
            x_pct=NEW_FIELD_X,
            y_pct=NEW_FIELD_Y,
            width_pct=width,
            height_pct=height,
        )
        self.fields.append(new_field)
        self.selected_key = new_field.key
        return new_field.key

    def move_field(self, key, x, y):
        self._ensure_open()
        target = self._get(key)
        target.x_pct = _clamp(x, 0.0, min(MAX_X, 1.0 - target.width_pct))
        target.y_pct = _clamp(y, 0.0, min(MAX_Y, 1.0 - target.height_pct))
        self.selected_key = key

    def resize_field(self, key, width, height):
        self._ensure_open()
        target = self._get(key)
        target.width_pct = _clamp(width, MIN_WIDTH, MAX_WIDTH)
        target.height_pct = _clamp(height, MIN_HEIGHT, MAX_HEIGHT)
        # Keep the box on the page by pulling it back from the edge
        if target.x_pct + target.width_pct > 1.0:
            target.x_pct = 1.0 - target.width_pct
        if target.y_pct + target.height_pct > 1.0:
            target.y_pct = 1.0 - target.height_pct
        self.selected_key = key

    def retype_field(self, key, field_type):
        self._ensure_open()
        self._check_type(field_type)
        self._get(key).field_type = field_type

    def reassign_role(self, key, role):
        self._ensure_open()
        self._check_role(role)
        self._get(key).role = role

    def relabel_field(self, key, label):
        self._ensure_open()
        self._get(key).label = label or ''

    def delete_field(self, key):
        self._ensure_open()
        target = self._get(key)
        self.fields.remove(target)
        if self.selected_key == key:
            self.selected_key = None

    def fields_on_page(self, page=None):
        page = self.current_page if page is None else page
        return [f for f in self.fields if f.page_number == page]

    # ----------------------------
    # Closing the editor
    # ----------------------------
    def save(self):
        """
        Commit the layout and close the editor.

        Every field must carry a type and a signer role; the full bounds and
        page checks happen in the field persistence service.
        """
        self._ensure_open()
        for index, candidate in enumerate(self.fields):
            errors = {}
            if not candidate.field_type:
                errors['field_type'] = 'Field type is required'
            if not candidate.role:
                errors['role'] = 'Each field must be assigned to a tenant or landlord'
            if errors:
                raise FieldLayoutError(
                    'Every field needs a type and a signer role',
                    field_index=index,
                    field_key=candidate.key,
                    errors=errors,
                )
        self.state = STATE_CLOSED
        return EditorResult(saved=True, fields=[f.to_dict() for f in self.fields])

    def cancel(self):
        self._ensure_open()
        self.state = STATE_CLOSED
        return EditorResult(saved=False)

    # ----------------------------
    # Helpers
    # ----------------------------
    def _ensure_open(self):
        if self.state == STATE_CLOSED:
            raise EditorClosed('Editor has already been saved or cancelled')

    def _get(self, key):
        for candidate in self.fields:
            if candidate.key == key:
                return candidate
        raise KeyError(key)

    def _check_type(self, field_type):
        if field_type not in FieldType.values:
            raise FieldLayoutError(
                f'Unknown field type: {field_type}',
                errors={'field_type': f'Must be one of {", ".join(FieldType.values)}'},
            )

    def _check_role(self, role):
        if role not in SignerRole.values:
            raise FieldLayoutError(
                f'Unknown signer role: {role}',
                errors={'role': f'Must be one of {", ".join(SignerRole.values)}'},
            )

    def _check_page(self, page):
        if not isinstance(page, int) or isinstance(page, bool) \
                or page < 1 or (self.page_count and page > self.page_count):
            raise FieldLayoutError(
                f'Page {page} does not exist',
                errors={'page_number': f'Must be between 1 and {self.page_count or page}'},
            )


def default_lease_layout(page_count=None):
    """
    Suggested layout for a lease whose fields were never configured:
    landlord signature and date, then tenant signature and date, stacked on
    the last page.
    """
    editor = FieldLayoutEditor(page_count=page_count)
    editor.go_to_page(page_count or 1)

    placements = [
        (SignerRole.LANDLORD, FieldType.SIGNATURE, 'Landlord Signature', 0.35, (0.25, 0.05)),
        (SignerRole.LANDLORD, FieldType.DATE, 'Date', 0.42, (0.15, 0.03)),
        (SignerRole.TENANT, FieldType.SIGNATURE, 'Tenant Signature', 0.50, (0.25, 0.05)),
        (SignerRole.TENANT, FieldType.DATE, 'Date', 0.57, (0.15, 0.03)),
    ]
    for role, field_type, label, y, (width, height) in placements:
        # Stable keys so repeated suggestions compare equal
        key = editor.add_field(
            field_type.value, role=role.value, key=f'{role.value}_{field_type.value}'
        )
        editor.resize_field(key, width, height)
        editor.move_field(key, 0.10, y)
        editor.relabel_field(key, label)
    return editor.save().fields
