"""Plain builders for test data that is not tied to the database."""

from io import BytesIO

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import letter


def make_pdf_bytes(pages=1):
    """A small letter-size PDF with `pages` pages."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    for number in range(1, pages + 1):
        pdf.drawString(72, 720, f'Residential Lease - page {number}')
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_field(key='tenant_sig', field_type='signature', role='tenant', page_number=1,
               x_pct=0.1, y_pct=0.5, width_pct=0.2, height_pct=0.06, label='', required=True):
    return {
        'key': key,
        'field_type': field_type,
        'role': role,
        'page_number': page_number,
        'x_pct': x_pct,
        'y_pct': y_pct,
        'width_pct': width_pct,
        'height_pct': height_pct,
        'label': label,
        'required': required,
    }
