"""
backend/properties/services.py

Purpose:
- Resolve the landlord behind an authenticated request.
- Create properties for a landlord.
"""

import logging

from django.db import transaction
from rest_framework.exceptions import NotFound

from .models import Landlord, Property

logger = logging.getLogger(__name__)


def get_landlord_for_user(user):
    """
    Landlord owned by `user`.

    Raises:
        NotFound: the user has no landlord record
    """
    try:
        return Landlord.objects.get(owner_user=user)
    except (Landlord.DoesNotExist, TypeError):
        raise NotFound('Landlord not found')


class PropertyService:

    @staticmethod
    @transaction.atomic
    def create_property(landlord, name, address='', default_lease_document=None):
        prop = Property.objects.create(
            landlord=landlord,
            name=name,
            address=address,
            default_lease_document=default_lease_document,
        )
        logger.info("Created property %s '%s' for landlord %s", prop.id, prop.name, landlord.id)
        return prop
