"""The admin must not bypass the field persistence service."""

import pytest
from django.contrib import admin
from django.contrib.auth import get_user_model
from django.test import RequestFactory

from legal_documents.admin import SignatureFieldInline
from legal_documents.models import LegalDocument


@pytest.mark.django_db
def test_signature_field_inline_is_read_only(lease):
    superuser = get_user_model().objects.create_superuser(
        username='staff', email='staff@example.com', password='secret-pass'
    )
    request = RequestFactory().get('/admin/')
    request.user = superuser
    inline = SignatureFieldInline(LegalDocument, admin.site)

    assert inline.has_add_permission(request, lease) is False
    assert inline.has_change_permission(request, lease) is False
    assert inline.has_delete_permission(request, lease) is False
    assert set(inline.get_readonly_fields(request, lease)) == set(inline.fields)
