"""
Project-wide DRF exception handler.

Services raise Django's ValidationError for business-rule violations; DRF
only understands its own exception types, so those are translated here.
Anything DRF cannot map is logged and left for Django to turn into a 500.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'error_dict'):
            detail = exc.message_dict
        else:
            detail = {'error': exc.messages[0] if len(exc.messages) == 1 else exc.messages}
        return Response(detail, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view'
        )
    return response
