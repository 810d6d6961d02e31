"""
backend/legal_documents/urls.py

"""

# ----------------------------
# Django imports
# ----------------------------
from django.urls import path

# ----------------------------
# Local view imports
# ----------------------------
from .views import LegalDocumentViewSet

# App namespace for reverse() lookups
app_name = 'legal_documents'

# ----------------------------
# Legal document routes
# ----------------------------
urlpatterns = [
    # Document store
    path('', LegalDocumentViewSet.as_view({
        'get': 'list',
        'post': 'create'
    }), name='document-list'),
    # List the landlord's documents (filters: type, needs_setup, is_template,
    # is_active) or upload a new one as multipart form data.

    # Property assignment (must come before <int:pk>/ routes)
    path('set-default/', LegalDocumentViewSet.as_view({
        'post': 'set_default'
    }), name='document-set-default'),
    # Point a property at a default lease document; document_id null clears it.

    path('clear-default/', LegalDocumentViewSet.as_view({
        'post': 'clear_default'
    }), name='document-clear-default'),

    path('<int:pk>/', LegalDocumentViewSet.as_view({
        'get': 'retrieve',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name='document-detail'),
    # Retrieve, update metadata, or delete a document.
    # DELETE answers 409 while properties use the document unless ?force=true.

    # Field layout
    path('<int:pk>/fields/', LegalDocumentViewSet.as_view({
        'get': 'fields',
        'put': 'fields'
    }), name='document-fields'),
    # Read the stored field list, or replace it in full.

    # Default layout MUST come before the per-role route
    path('<int:pk>/fields/default/', LegalDocumentViewSet.as_view({
        'get': 'default_fields'
    }), name='document-fields-default'),
    # Suggested landlord/tenant signature layout; nothing is persisted.

    path('<int:pk>/fields/<str:role>/', LegalDocumentViewSet.as_view({
        'get': 'role_fields'
    }), name='document-fields-role'),
    # Fields of one signer role, in the order they were saved.

    path('<int:pk>/properties/', LegalDocumentViewSet.as_view({
        'get': 'properties'
    }), name='document-properties'),
    # Properties using the document as their default lease.

    path('<int:pk>/assign/', LegalDocumentViewSet.as_view({
        'post': 'assign'
    }), name='document-assign'),
    # Assign the document to several properties at once (all or nothing).

    path('<int:pk>/preview/', LegalDocumentViewSet.as_view({
        'get': 'preview'
    }), name='document-preview'),
    # PDF preview with the field boxes drawn on top.
]
