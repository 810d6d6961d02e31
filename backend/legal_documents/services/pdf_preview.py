"""
Field layout preview.

Draws every configured signature field of a document as a labelled,
role-coloured box on top of the original PDF, so an operator can check
placement without opening the editor.
"""

import logging
from io import BytesIO

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from reportlab.pdfgen import canvas
from reportlab.lib.colors import HexColor

from ..exceptions import StorageFailure
from ..models import SignerRole

logger = logging.getLogger(__name__)


class PreviewUnavailable(Exception):
    """Raised when a document has no PDF that could be previewed."""


class PDFCoordinateConverter:
    """Convert between UI coordinates (top-left origin) and PDF coordinates (bottom-left origin)."""

    @staticmethod
    def ui_to_pdf(field, page_width: float, page_height: float) -> tuple:
        """
        Convert a field's fractional box to a PDF rectangle.

        Returns:
            (x, y_bottom, width, height) tuple in points
        """
        width = field['width_pct'] * page_width
        height = field['height_pct'] * page_height
        x = field['x_pct'] * page_width
        y_bottom = page_height - field['y_pct'] * page_height - height
        return (x, y_bottom, width, height)

    @staticmethod
    def compute_font_size(height: float, min_size: int = 6, max_size: int = 12) -> int:
        return max(min_size, min(int(height * 0.5), max_size))


class PDFOverlayRenderer:
    """Render field boxes onto a PDF canvas."""

    ROLE_COLORS = {
        SignerRole.TENANT: HexColor('#2563eb'),
        SignerRole.LANDLORD: HexColor('#16a34a'),
    }
    FALLBACK_COLOR = HexColor('#6b7280')

    def __init__(self):
        self.converter = PDFCoordinateConverter()

    def render_field(self, canvas_obj, field, page_width, page_height) -> None:
        x, y, width, height = self.converter.ui_to_pdf(field, page_width, page_height)
        color = self.ROLE_COLORS.get(field['role'], self.FALLBACK_COLOR)

        canvas_obj.setStrokeColor(color)
        canvas_obj.setFillColor(color, alpha=0.12)
        canvas_obj.setLineWidth(1)
        canvas_obj.rect(x, y, width, height, stroke=1, fill=1)

        label = field['label'] or f"{field['role']} {field['field_type']}".title()
        font_size = self.converter.compute_font_size(height)
        canvas_obj.setFillColor(color)
        canvas_obj.setFont('Helvetica', font_size)
        canvas_obj.drawString(x + 2, y + (height - font_size) / 2, label[:60])


class PDFPreviewService:
    """Service for rendering field-layout previews."""

    def __init__(self):
        self.renderer = PDFOverlayRenderer()

    def render_field_preview(self, document, fields=None) -> bytes:
        """
        Original PDF with the field layout drawn on top.

        Args:
            document: LegalDocument instance
            fields: optional field dicts to draw instead of the stored list

        Raises:
            PreviewUnavailable: the document is not a PDF or cannot be parsed
            StorageFailure: the stored file cannot be read
        """
        if not document.file or not document.is_pdf:
            raise PreviewUnavailable('Only PDF documents can be previewed')

        if fields is None:
            from .field_service import FieldService
            fields = FieldService.get_fields(document)

        try:
            with document.file.open('rb') as handle:
                reader = PdfReader(BytesIO(handle.read()))
        except OSError as e:
            logger.exception("Reading stored file of document %s failed", document.id)
            raise StorageFailure() from e
        except PdfReadError as e:
            raise PreviewUnavailable(f'PDF could not be parsed: {e}') from e

        writer = PdfWriter()
        for page_num, original_page in enumerate(reader.pages, start=1):
            page_fields = [f for f in fields if f['page_number'] == page_num]
            if page_fields:
                page_width = float(original_page.mediabox.width)
                page_height = float(original_page.mediabox.height)
                overlay = self._create_overlay_page(page_fields, page_width, page_height)
                original_page.merge_page(PdfReader(overlay).pages[0])
            writer.add_page(original_page)

        output_buffer = BytesIO()
        writer.write(output_buffer)
        logger.info(
            "Rendered preview of document %s with %d field(s)", document.id, len(fields)
        )
        return output_buffer.getvalue()

    def _create_overlay_page(self, fields, page_width, page_height) -> BytesIO:
        overlay_buffer = BytesIO()
        overlay_canvas = canvas.Canvas(overlay_buffer, pagesize=(page_width, page_height))
        for field in fields:
            self.renderer.render_field(overlay_canvas, field, page_width, page_height)
        overlay_canvas.save()
        overlay_buffer.seek(0)
        return overlay_buffer


# Singleton instance
_preview_service = None


def get_pdf_preview_service() -> PDFPreviewService:
    """Get singleton instance of PDF preview service."""
    global _preview_service
    if _preview_service is None:
        _preview_service = PDFPreviewService()
    return _preview_service
