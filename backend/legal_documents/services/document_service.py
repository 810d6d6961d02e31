"""
Document store business logic.

Responsibilities:
- Accept uploads and record file metadata (MIME type, size, PDF page count)
- List documents for a landlord with the "needs setup" filters
- Update descriptive metadata
- Delete documents, refusing while properties still use them
"""

import logging
import mimetypes

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import ProtectedError
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from ..exceptions import DocumentInUse, StorageFailure
from ..models import LegalDocument, DocumentType

logger = logging.getLogger(__name__)

EDITABLE_ATTRIBUTES = (
    'name', 'type', 'category', 'state', 'description', 'is_template', 'is_active'
)


class DocumentService:
    """Service for legal document storage and bookkeeping."""

    @staticmethod
    def detect_file_type(uploaded_file):
        """
        MIME type of an uploaded file.

        Prefers what the client declared, falls back to the file extension.
        """
        content_type = getattr(uploaded_file, 'content_type', None)
        if content_type and content_type != 'application/octet-stream':
            return content_type
        guessed, _ = mimetypes.guess_type(uploaded_file.name)
        return guessed or 'application/octet-stream'

    @staticmethod
    def count_pdf_pages(file_obj):
        """
        Count pages of a PDF file object.

        Returns:
            int or None: page count, or None when the file cannot be parsed
        """
        try:
            file_obj.seek(0)
            reader = PdfReader(file_obj)
            return len(reader.pages)
        except (PdfReadError, ValueError, OSError) as e:
            logger.warning("Could not read PDF page count for %s: %s", file_obj.name, e)
            return None
        finally:
            # Rewind so storage can read the file again when saving
            file_obj.seek(0)

    @staticmethod
    def upload_document(landlord, uploaded_file, name, type=DocumentType.LEASE,
                        description='', is_template=True, category=None, state=None):
        """
        Store an uploaded document.

        The new document starts with an empty field list and
        `fields_configured=False`, i.e. in the "needs setup" list.

        Raises:
            ValidationError: file too large or of a disallowed type
            StorageFailure: the file could not be written to storage
        """
        file_type = DocumentService.detect_file_type(uploaded_file)
        if file_type not in settings.LEGAL_DOCUMENTS_ALLOWED_TYPES:
            raise ValidationError({'file': f'Unsupported file type: {file_type}'})

        max_size = settings.LEGAL_DOCUMENTS_MAX_UPLOAD_SIZE
        if uploaded_file.size > max_size:
            raise ValidationError({
                'file': f'File is too large ({uploaded_file.size} bytes, limit {max_size})'
            })

        page_count = None
        if file_type == 'application/pdf':
            page_count = DocumentService.count_pdf_pages(uploaded_file)

        document = LegalDocument(
            landlord=landlord,
            name=name,
            type=type,
            description=description,
            is_template=is_template,
            category=category or None,
            state=state or None,
            file_type=file_type,
            file_size=uploaded_file.size,
            page_count=page_count,
        )

        try:
            with transaction.atomic():
                document.file = uploaded_file
                document.save()
        except OSError as e:
            logger.exception("Storing upload '%s' for landlord %s failed", name, landlord.id)
            raise StorageFailure() from e

        logger.info(
            "Uploaded legal document %s '%s' (%s, %s pages) for landlord %s",
            document.id, document.name, file_type, page_count, landlord.id
        )
        return document

    @staticmethod
    def list_documents(landlord, type=None, needs_setup=None, is_template=None, is_active=None):
        """Documents of a landlord, newest first, optionally filtered."""
        queryset = LegalDocument.objects.filter(landlord=landlord)
        if type:
            queryset = queryset.filter(type=type)
        if needs_setup is not None:
            queryset = queryset.filter(fields_configured=not needs_setup)
        if is_template is not None:
            queryset = queryset.filter(is_template=is_template)
        if is_active is not None:
            queryset = queryset.filter(is_active=is_active)
        return queryset.prefetch_related('fields', 'default_for_properties')

    @staticmethod
    def update_document(document, **changes):
        """Update descriptive metadata. The field list is not touched here."""
        update_fields = []
        for attribute, value in changes.items():
            if attribute not in EDITABLE_ATTRIBUTES:
                raise ValidationError({attribute: 'This attribute cannot be changed'})
            setattr(document, attribute, value)
            update_fields.append(attribute)

        if update_fields:
            document.save(update_fields=update_fields + ['updated_at'])
        return document

    @staticmethod
    def delete_document(document, force=False):
        """
        Delete a document.

        A document that is the default lease of any property is not deleted
        unless `force` is set; with `force` those assignments are cleared in
        the same transaction, so no property is left pointing at nothing.

        Raises:
            DocumentInUse: properties still use the document and force is False
                or gained an assignment after the check
        """
        from .assignment_service import AssignmentService

        with transaction.atomic():
            # Assignment takes the same row lock, so the check below holds until commit
            LegalDocument.objects.select_for_update().filter(pk=document.pk).first()
            in_use = list(AssignmentService.find_properties_using(document))
            if in_use and not force:
                logger.warning(
                    "Refused to delete legal document %s: default lease for %d properties",
                    document.id, len(in_use)
                )
                raise DocumentInUse(in_use)

            if in_use:
                AssignmentService.clear_document_everywhere(document)

            document_id = document.id
            stored_name = document.file.name if document.file else None
            try:
                document.delete()
            except ProtectedError as e:
                raise DocumentInUse(e.protected_objects)

        if stored_name:
            try:
                document.file.storage.delete(stored_name)
            except OSError as e:
                logger.warning("Failed to delete stored file %s: %s", stored_name, e)

        logger.info(
            "Deleted legal document %s (%d property assignments cleared)",
            document_id, len(in_use)
        )
        return in_use


# Singleton instance
_document_service = None


def get_document_service() -> DocumentService:
    """Get singleton instance of document service."""
    global _document_service
    if _document_service is None:
        _document_service = DocumentService()
    return _document_service
