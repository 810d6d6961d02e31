"""
Shared test fixtures: users, landlords, properties, generated PDFs and an
authenticated API client.
"""

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from legal_documents.models import LegalDocument, DocumentType
from legal_documents.services import DocumentService
from properties.models import Landlord, Property

from factories import make_pdf_bytes


# =============================================================================
# Environment
# =============================================================================

@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded files inside a per-test temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    return settings.MEDIA_ROOT


@pytest.fixture
def pdf_file():
    """Factory for uploaded PDF files."""
    def _make(pages=1, name='lease.pdf'):
        return SimpleUploadedFile(name, make_pdf_bytes(pages), content_type='application/pdf')
    return _make


# =============================================================================
# Tenancy fixtures
# =============================================================================

@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username='owner', password='secret-pass')


@pytest.fixture
def landlord(user):
    return Landlord.objects.create(owner_user=user, name='Maple Rentals')


@pytest.fixture
def other_landlord(db):
    other_user = get_user_model().objects.create_user(username='other', password='secret-pass')
    return Landlord.objects.create(owner_user=other_user, name='Oak Holdings')


@pytest.fixture
def make_property(landlord):
    def _make(name='12 Elm St', owner=None, document=None):
        return Property.objects.create(
            landlord=owner or landlord, name=name, default_lease_document=document
        )
    return _make


@pytest.fixture
def make_document(landlord, pdf_file):
    """Upload a PDF document through the document service."""
    def _make(name='Standard Lease', pages=1, type=DocumentType.LEASE, owner=None):
        return DocumentService.upload_document(
            owner or landlord, pdf_file(pages), name=name, type=type
        )
    return _make


@pytest.fixture
def lease(make_document) -> LegalDocument:
    return make_document(pages=2)


# =============================================================================
# API client
# =============================================================================

@pytest.fixture
def api_client(user, landlord):
    client = APIClient()
    client.force_authenticate(user=user)
    return client
