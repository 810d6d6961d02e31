"""
backend/properties/urls.py

"""

from django.urls import path

from .views import PropertyViewSet

app_name = 'properties'

urlpatterns = [
    path('', PropertyViewSet.as_view({
        'get': 'list',
        'post': 'create'
    }), name='property-list'),
    # Properties with their default lease document and needs_field_setup flag.

    path('<int:pk>/', PropertyViewSet.as_view({
        'get': 'retrieve'
    }), name='property-detail'),
]
