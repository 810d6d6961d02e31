"""
backend/legal_documents/models.py

Purpose:
- Define the legal document store (uploaded leases, addenda, disclosures...)
  and the positioned signature fields placed on each document.

Design intent:
- A document exclusively owns its ordered field list; the list is only ever
  replaced as a whole by the field persistence service.
- `fields_configured` mirrors "the last saved list was non-empty".
"""

# ----------------------------
# Standard library imports
# ----------------------------
import os

# ----------------------------
# Django imports
# ----------------------------
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator


# ----------------------------
# File upload helpers
# ----------------------------
def legal_document_upload_path(instance, filename):
    """
    Generate upload path for legal document files.

    Files are grouped per landlord so one tenant's uploads never share a
    directory with another's.
    """
    return f'legal-documents/{instance.landlord_id}/{os.path.basename(filename)}'


class DocumentType(models.TextChoices):
    LEASE = 'lease', 'Lease Agreement'
    ADDENDUM = 'addendum', 'Lease Addendum'
    DISCLOSURE = 'disclosure', 'Disclosure Form'
    NOTICE = 'notice', 'Notice'
    MOVE_IN = 'move_in', 'Move-In Checklist'
    MOVE_OUT = 'move_out', 'Move-Out Checklist'
    RULES = 'rules', 'Rules & Regulations'
    PET_AGREEMENT = 'pet_agreement', 'Pet Agreement'
    OTHER = 'other', 'Other'


class FieldType(models.TextChoices):
    SIGNATURE = 'signature', 'Signature'
    INITIAL = 'initial', 'Initial'
    DATE = 'date', 'Date'
    TEXT = 'text', 'Text'
    NAME = 'name', 'Full Name'


class SignerRole(models.TextChoices):
    TENANT = 'tenant', 'Tenant'
    LANDLORD = 'landlord', 'Landlord'


class LifecycleState:
    UPLOADED = 'uploaded'
    FIELDS_CONFIGURING = 'fields_configuring'
    FIELDS_CONFIGURED = 'fields_configured'
    FIELDS_UNCONFIGURED = 'fields_unconfigured'


# ----------------------------
# Core models
# ----------------------------
class LegalDocument(models.Model):
    """
    LegalDocument is an uploaded lease or other legal form.

    What:
    - Stores the file reference (storage path, MIME type, size, page count)
      plus descriptive metadata.
    - Owns the ordered list of SignatureFields.

    Why:
    - Properties point at a lease document as their default; the signing
      workflow reads the stored fields to know where each party signs.
    """
    landlord = models.ForeignKey(
        'properties.Landlord',
        on_delete=models.CASCADE,
        related_name='legal_documents'
    )
    name = models.CharField(max_length=255)
    type = models.CharField(
        max_length=20,
        choices=DocumentType.choices,
        default=DocumentType.LEASE
    )
    category = models.CharField(max_length=100, blank=True, null=True)
    state = models.CharField(
        max_length=50,
        blank=True,
        null=True,
        help_text="Jurisdiction the document was written for (e.g. 'CA')"
    )
    description = models.TextField(blank=True, null=True)

    # File reference
    file = models.FileField(upload_to=legal_document_upload_path)
    file_type = models.CharField(max_length=255, blank=True)
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    page_count = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Known for PDFs only"
    )

    is_template = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)

    # Field configuration state
    fields_configured = models.BooleanField(default=False)
    fields_saved_at = models.DateTimeField(null=True, blank=True)
    revision = models.PositiveIntegerField(
        default=1,
        help_text="Incremented on every field list write (optimistic concurrency)"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['landlord', 'type'], name='legal_doc_landlord_type_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def file_url(self):
        return self.file.url if self.file else None

    @property
    def is_pdf(self):
        return self.file_type == 'application/pdf'

    @property
    def lifecycle_state(self):
        """
        Field-configuration state of the document.

        `fields_configuring` only exists while an editor is open on the
        client, so it is never a stored state.
        """
        if self.fields_saved_at is None:
            return LifecycleState.UPLOADED
        if self.fields_configured:
            return LifecycleState.FIELDS_CONFIGURED
        return LifecycleState.FIELDS_UNCONFIGURED

    @property
    def needs_setup(self):
        return not self.fields_configured

    @property
    def is_assigned(self):
        return self.default_for_properties.exists()


class SignatureField(models.Model):
    """
    A positioned, typed placeholder where a signer must sign, initial, date
    or write on the document.

    Position and size are fractions of the page (0.0 to 1.0) with the origin
    at the top-left corner of the page.
    """
    document = models.ForeignKey(
        LegalDocument,
        on_delete=models.CASCADE,
        related_name='fields'
    )
    key = models.CharField(
        max_length=100,
        help_text="Client-side identifier of the field"
    )
    position = models.PositiveIntegerField(help_text="Order within the document's field list")
    field_type = models.CharField(max_length=20, choices=FieldType.choices)
    role = models.CharField(max_length=20, choices=SignerRole.choices)
    label = models.CharField(max_length=255, blank=True)
    required = models.BooleanField(default=True)

    # Page number (1-indexed)
    page_number = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # Position and size as percentages (0.0 to 1.0)
    x_pct = models.FloatField(
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)],
        help_text="X position as percentage of page width"
    )
    y_pct = models.FloatField(
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)],
        help_text="Y position as percentage of page height"
    )
    width_pct = models.FloatField(
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)],
        help_text="Width as percentage of page width"
    )
    height_pct = models.FloatField(
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)],
        help_text="Height as percentage of page height"
    )

    class Meta:
        ordering = ['document', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['document', 'position'],
                name='unique_field_position_per_document'
            )
        ]

    def __str__(self):
        return f"{self.get_field_type_display()} ({self.role}) - Page {self.page_number}"
