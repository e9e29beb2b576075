"""
DRF exception handler that answers framework errors in the API envelope.
"""

import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

from utils.service_base import ResultError, ServiceResult

from .responses import to_response

logger = logging.getLogger(__name__)


def _first_message(detail) -> str:
    """First human readable message of a (possibly nested) DRF error detail."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            return f"{field}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def _error_for(exc: Exception, status_code: int) -> ResultError:
    message = _first_message(getattr(exc, "detail", str(exc)))
    if isinstance(exc, exceptions.UnsupportedMediaType):
        return ResultError.unsupported_media_type(message)
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed, exceptions.PermissionDenied)):
        return ResultError.access_denied(message)
    if isinstance(exc, exceptions.NotFound):
        return ResultError.not_found(message)
    if 400 <= status_code < 500:
        return ResultError.bad_request(message)
    return ResultError.internal_server_error(message)


def envelope_exception_handler(exc, context):
    """
    Wrap DRF's default handler.

    Exceptions DRF does not handle (returns None for) are left to Django.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    error = _error_for(exc, response.status_code)
    view = context.get("view")
    logger.warning(f"{type(exc).__name__} in {type(view).__name__ if view else 'unknown view'}: {error.message}")

    wrapped = to_response(ServiceResult.failure(error))
    for header in ("Allow", "Retry-After", "WWW-Authenticate"):
        if header in response:
            wrapped[header] = response[header]
    return wrapped
