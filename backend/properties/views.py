from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.response import Response

from legal_documents.models import LegalDocument
from legal_documents.services import get_assignment_service
from .models import Property
from .serializers import PropertySerializer, PropertyCreateSerializer
from .services import get_landlord_for_user, PropertyService


class PropertyViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Property directory of the signed-in landlord.

    Each row carries the default lease document and whether that document
    still needs its signature fields set up.
    """
    serializer_class = PropertySerializer
    pagination_class = None

    def get_landlord(self):
        if not hasattr(self, '_landlord'):
            self._landlord = get_landlord_for_user(self.request.user)
        return self._landlord

    def get_queryset(self):
        return Property.objects.filter(
            landlord=self.get_landlord()
        ).select_related('default_lease_document')

    def list(self, request, *args, **kwargs):
        rows = get_assignment_service().property_assignments(self.get_landlord())
        serializer = PropertySerializer([row['property'] for row in rows], many=True)
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):
        """Add a property, optionally with a default lease document."""
        landlord = self.get_landlord()
        serializer = PropertyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        document = None
        if data.get('default_lease_document_id'):
            document = get_object_or_404(
                LegalDocument, pk=data['default_lease_document_id'], landlord=landlord
            )

        prop = PropertyService.create_property(
            landlord,
            name=data['name'],
            address=data.get('address', ''),
            default_lease_document=document,
        )
        return Response(PropertySerializer(prop).data, status=status.HTTP_201_CREATED)
