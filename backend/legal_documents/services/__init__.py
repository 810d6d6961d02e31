from .document_service import DocumentService, get_document_service
from .field_service import FieldService, get_field_service
from .assignment_service import AssignmentService, AssignmentResult, get_assignment_service
from .pdf_preview import PDFPreviewService, PreviewUnavailable, get_pdf_preview_service

__all__ = [
    'DocumentService',
    'get_document_service',
    'FieldService',
    'get_field_service',
    'AssignmentService',
    'AssignmentResult',
    'get_assignment_service',
    'PDFPreviewService',
    'PreviewUnavailable',
    'get_pdf_preview_service',
]
