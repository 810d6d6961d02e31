"""Tests for the field layout preview renderer."""

from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PyPDF2 import PdfReader

from legal_documents.services import DocumentService, FieldService, PDFPreviewService, PreviewUnavailable
from legal_documents.services.pdf_preview import PDFCoordinateConverter

from factories import make_field


def test_top_left_fractions_map_to_bottom_left_points():
    field = make_field(x_pct=0.1, y_pct=0.25, width_pct=0.5, height_pct=0.25)

    x, y, width, height = PDFCoordinateConverter.ui_to_pdf(field, 600, 800)

    assert (x, width, height) == pytest.approx((60, 300, 200))
    assert y == 400


@pytest.mark.django_db
class TestRenderFieldPreview:

    def test_keeps_page_count(self, lease):
        FieldService.save_fields(lease, [
            make_field(key='a', page_number=1),
            make_field(key='b', role='landlord', page_number=2, label='Owner'),
        ])

        pdf_bytes = PDFPreviewService().render_field_preview(lease)

        assert len(PdfReader(BytesIO(pdf_bytes)).pages) == 2

    def test_accepts_unsaved_fields(self, lease):
        pdf_bytes = PDFPreviewService().render_field_preview(
            lease, fields=[make_field(page_number=2)]
        )
        assert pdf_bytes.startswith(b'%PDF')

    def test_non_pdf_document_is_unavailable(self, landlord):
        upload = SimpleUploadedFile('lease.doc', b'\xd0\xcf\x11\xe0', content_type='application/msword')
        document = DocumentService.upload_document(landlord, upload, name='Word lease')

        with pytest.raises(PreviewUnavailable):
            PDFPreviewService().render_field_preview(document)
