"""
backend/properties/models.py

Purpose:
- Landlords (tenancy boundary) and the properties they own.
- Each property carries its default lease document reference, which is the
  property -> document assignment map.
"""

from django.conf import settings
from django.db import models


class Landlord(models.Model):
    """
    Landlord is the tenancy boundary.

    Every legal document and property belongs to exactly one landlord and
    API requests only ever see the landlord of the signed-in user.
    """
    owner_user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='landlord'
    )
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Property(models.Model):
    """
    A rental property.

    `default_lease_document` is the document used when a new tenant's lease
    is generated. Many properties may share one document; the document's
    lifetime does not depend on them (PROTECT keeps the reference valid).
    """
    landlord = models.ForeignKey(
        Landlord,
        on_delete=models.CASCADE,
        related_name='properties'
    )
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True)
    default_lease_document = models.ForeignKey(
        'legal_documents.LegalDocument',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='default_for_properties'
    )
    revision = models.PositiveIntegerField(
        default=1,
        help_text="Incremented on every assignment change (optimistic concurrency)"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'Properties'

    def __str__(self):
        return self.name

    @property
    def needs_field_setup(self):
        """True when the assigned default document has no configured fields."""
        document = self.default_lease_document
        return document is not None and not document.fields_configured
