"""
Error taxonomy for the legal documents API.

Not-found errors use DRF's NotFound / Http404 directly; everything else
that needs its own status code or payload lives here. Payloads are kept as
plain dicts so integers and nulls reach the client unchanged.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class FieldLayoutError(APIException):
    """
    A candidate field list failed validation.

    Carries the index and key of the first offending field so the editor can
    highlight it. Nothing is persisted when this is raised.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid signature field.'
    default_code = 'invalid_field'

    def __init__(self, message=None, field_index=None, field_key=None, errors=None):
        self.message = message or self.default_detail
        self.field_index = field_index
        self.field_key = field_key
        self.errors = errors or {}
        super().__init__(self.message)
        self.detail = {
            'error': self.message,
            'field_index': field_index,
            'field_key': field_key,
            'errors': self.errors,
        }


class DocumentInUse(APIException):
    """Deleting a document that properties still use as their default lease."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Document is the default lease for one or more properties.'
    default_code = 'document_in_use'

    def __init__(self, properties):
        self.properties = list(properties)
        super().__init__()
        self.detail = {
            'error': self.default_detail,
            'properties': [
                {'id': prop.id, 'name': prop.name} for prop in self.properties
            ],
        }


class RevisionConflict(APIException):
    """The record changed since the caller last read it."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This record was changed by someone else. Reload and try again.'
    default_code = 'revision_conflict'

    def __init__(self, expected, current):
        self.expected = expected
        self.current = current
        super().__init__()
        self.detail = {
            'error': self.default_detail,
            'expected_revision': expected,
            'current_revision': current,
        }


class StorageFailure(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Document storage failed. Please try again.'
    default_code = 'storage_failure'
