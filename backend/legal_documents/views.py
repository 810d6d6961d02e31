from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.pagination import PageNumberPagination

from properties.services import get_landlord_for_user
from .editor import default_lease_layout
from .models import LegalDocument
from .serializers import (
    LegalDocumentListSerializer, LegalDocumentDetailSerializer,
    LegalDocumentCreateSerializer, LegalDocumentUpdateSerializer,
    FieldListSaveSerializer, AssignPropertiesSerializer,
    SetDefaultSerializer, ClearDefaultSerializer,
    AssignmentResultSerializer, AssignedPropertySerializer
)
from .services import (
    get_document_service, get_field_service,
    get_assignment_service, get_pdf_preview_service, PreviewUnavailable
)


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 1000


def _query_bool(value):
    """Parse a ?flag=true query parameter; None when absent."""
    if value is None or value == '':
        return None
    return value.lower() in ('1', 'true', 'yes')


class LegalDocumentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the landlord's legal document store.

    Every lookup is scoped to the landlord of the signed-in user, so another
    landlord's documents resolve as 404.
    """
    pagination_class = StandardResultsSetPagination

    def get_parsers(self):
        """Multipart for uploads, JSON for everything else."""
        # self.action is only assigned after the parsers are built
        action = self.action_map.get(self.request.method.lower())
        if action == 'create':
            self.parser_classes = (MultiPartParser, FormParser)
        else:
            self.parser_classes = (JSONParser,)
        return super().get_parsers()

    def get_landlord(self):
        if not hasattr(self, '_landlord'):
            self._landlord = get_landlord_for_user(self.request.user)
        return self._landlord

    def get_queryset(self):
        landlord = self.get_landlord()
        if self.action == 'list':
            params = self.request.query_params
            return get_document_service().list_documents(
                landlord,
                type=params.get('type') or None,
                needs_setup=_query_bool(params.get('needs_setup')),
                is_template=_query_bool(params.get('is_template')),
                is_active=_query_bool(params.get('is_active')),
            )
        return LegalDocument.objects.filter(landlord=landlord)

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'create':
            return LegalDocumentCreateSerializer
        elif self.action == 'partial_update':
            return LegalDocumentUpdateSerializer
        elif self.action == 'list':
            return LegalDocumentListSerializer
        return LegalDocumentDetailSerializer

    def _detail(self, document):
        return LegalDocumentDetailSerializer(document, context={'request': self.request}).data

    def create(self, request, *args, **kwargs):
        """Upload a new document; it starts out needing field setup."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        document = get_document_service().upload_document(
            self.get_landlord(),
            data['file'],
            name=data['name'],
            type=data['type'],
            description=data.get('description', ''),
            is_template=data['is_template'],
            category=data.get('category'),
            state=data.get('state'),
        )
        return Response(self._detail(document), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update document metadata (name, type, description...)."""
        document = self.get_object()
        serializer = LegalDocumentUpdateSerializer(
            document, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        document = get_document_service().update_document(document, **serializer.validated_data)
        return Response(self._detail(document))

    def destroy(self, request, *args, **kwargs):
        """
        Delete a document.

        Refused with 409 while properties use it as their default lease,
        unless `?force=true` is given.
        """
        document = self.get_object()
        force = _query_bool(request.query_params.get('force')) or False
        cleared = get_document_service().delete_document(document, force=force)
        if cleared:
            return Response({
                'cleared_properties': AssignedPropertySerializer(cleared, many=True).data
            })
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ----------------------------
    # Field layout
    # ----------------------------
    @action(detail=True, methods=['get', 'put'])
    def fields(self, request, pk=None):
        """Read or replace the document's field list."""
        document = self.get_object()
        field_service = get_field_service()

        if request.method == 'PUT':
            serializer = FieldListSaveSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            document = field_service.save_fields(
                document,
                serializer.validated_data['fields'],
                expected_revision=serializer.validated_data.get('expected_revision'),
            )

        return Response({
            'document_id': document.id,
            'fields': field_service.get_fields(document),
            'fields_configured': document.fields_configured,
            'lifecycle_state': document.lifecycle_state,
            'revision': document.revision,
        })

    @action(detail=True, methods=['get'], url_path='fields/default')
    def default_fields(self, request, pk=None):
        """Suggested landlord/tenant layout for a document with no fields yet."""
        document = self.get_object()
        return Response({
            'document_id': document.id,
            'fields': default_lease_layout(document.page_count),
            'persisted': False,
        })

    @action(detail=True, methods=['get'], url_path='fields/(?P<role>[a-z_]+)')
    def role_fields(self, request, pk=None, role=None):
        """Fields one signer role is responsible for."""
        document = self.get_object()
        return Response({
            'document_id': document.id,
            'role': role,
            'fields': get_field_service().fields_for_role(document, role),
        })

    @action(detail=True, methods=['get'])
    def preview(self, request, pk=None):
        """PDF with the field layout drawn as coloured boxes."""
        document = self.get_object()
        try:
            pdf_bytes = get_pdf_preview_service().render_field_preview(document)
        except PreviewUnavailable as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(pdf_bytes, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="preview_{document.id}.pdf"'
        return response

    # ----------------------------
    # Property assignment
    # ----------------------------
    @action(detail=True, methods=['get'])
    def properties(self, request, pk=None):
        """Properties using this document as their default lease."""
        document = self.get_object()
        properties = get_assignment_service().find_properties_using(document)
        return Response({
            'document_id': document.id,
            'properties': AssignedPropertySerializer(properties, many=True).data,
        })

    @action(detail=True, methods=['post'])
    def assign(self, request, pk=None):
        """Make this document the default lease for several properties."""
        document = self.get_object()
        serializer = AssignPropertiesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        results = get_assignment_service().assign_to_properties(
            self.get_landlord(), document.id, serializer.validated_data['property_ids']
        )
        return Response({
            'document_id': document.id,
            'assigned': AssignmentResultSerializer(results, many=True).data,
            'warnings': results[0].warnings if results else [],
        })

    @action(detail=False, methods=['post'], url_path='set-default')
    def set_default(self, request):
        """Set (or, with document_id null, clear) a property's default lease."""
        serializer = SetDefaultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = get_assignment_service().set_default(
            self.get_landlord(),
            data['property_id'],
            data['document_id'],
            expected_revision=data.get('expected_revision'),
        )
        return Response(AssignmentResultSerializer(result).data)

    @action(detail=False, methods=['post'], url_path='clear-default')
    def clear_default(self, request):
        serializer = ClearDefaultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = get_assignment_service().clear_default(
            self.get_landlord(),
            data['property_id'],
            expected_revision=data.get('expected_revision'),
        )
        return Response(AssignmentResultSerializer(result).data)
