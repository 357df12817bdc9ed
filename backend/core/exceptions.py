"""
API exception taxonomy.

Every business-rule failure raised by a service is one of these. They are
DRF ``APIException`` subclasses so views can let them propagate and the
project exception handler renders them as ``{"error": ..., "details": ...}``.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class ServiceError(APIException):
    """Base class for the project's API errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed.'
    default_code = 'error'

    def __init__(self, detail=None, code=None, details=None):
        super().__init__(detail=detail, code=code)
        self.details = details


class ValidationError(ServiceError):
    """A required field is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid data.'
    default_code = 'validation_error'


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource state conflicts with the request.'
    default_code = 'conflict'


class ActiveTimerExists(Conflict):
    # Timer clients treat a double start as a bad request.
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'An active timer already exists for this task.'
    default_code = 'active_timer_exists'


class InvalidTimerState(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Timer not found or already stopped.'
    default_code = 'invalid_timer_state'


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'


class DataIntegrityError(ServiceError):
    """Stored data violates an invariant; the operation is refused."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error.'
    default_code = 'data_integrity_error'


def require_fields(data, *fields):
    """
    Raise ValidationError listing every field of ``fields`` that is absent
    (or None) in ``data``.
    """
    missing = {field: 'This field is required.' for field in fields if data.get(field) is None}
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            details=missing,
        )
