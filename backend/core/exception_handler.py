"""
Project-wide exception handler for Django REST Framework.

Renders every error as ``{"error": <message>}`` (plus ``"details"`` for
validation failures) with the matching HTTP status. Unexpected exceptions
become a generic 500; their traceback only goes to the server log.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError, PermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException, PermissionDenied as DRFPermissionDenied, ValidationError as DRFValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import ServiceError, DataIntegrityError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Internal server error'


def api_exception_handler(exc, context):
    request = context.get('request')
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'Unknown'
    path = request.path if request else 'unknown'

    if isinstance(exc, DataIntegrityError):
        logger.error(f"Data integrity failure in {view_name} ({path}): {exc.detail}")
        return Response({'error': GENERIC_ERROR_MESSAGE}, status=exc.status_code)

    if isinstance(exc, ServiceError):
        body = {'error': str(exc.detail)}
        if exc.details:
            body['details'] = exc.details
        logger.info(f"{view_name} rejected {path}: {type(exc).__name__}: {exc.detail}")
        return Response(body, status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        details = exc.message_dict if hasattr(exc, 'error_dict') else {'non_field_errors': exc.messages}
        return Response(
            {'error': 'Invalid data.', 'details': details},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        return Response({'error': 'Resource not found.'}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, PermissionDenied):
        exc = DRFPermissionDenied()

    response = drf_exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, DRFValidationError):
            response.data = {'error': 'Invalid data.', 'details': exc.detail}
        elif isinstance(exc, APIException):
            response.data = {'error': str(exc.detail)}
        return response

    logger.exception(f"Unhandled exception in {view_name} ({path}): {type(exc).__name__}")
    return Response({'error': GENERIC_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
