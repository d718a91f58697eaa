"""Exception handling at the API boundary.

Every failure leaves the API as ``{"success": false, "error": "<message>"}``;
the message is shown to the user verbatim.
"""

import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from accounts.permissions import AccessDenied, Unauthorized
from core.exceptions import ActionError

logger = logging.getLogger("pililokal")

GENERIC_ERROR = "Something went wrong. Please try again."


def _flatten_detail(detail) -> str:
    """First human-readable message out of a DRF error detail structure."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _flatten_detail(value)
            if key in ("detail", "non_field_errors"):
                return message
            return f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _flatten_detail(detail[0]) if detail else ""
    return str(detail)


def _error(message: str, status_code: int) -> Response:
    return Response({"success": False, "error": message}, status=status_code)


def action_exception_handler(exc, context):
    if isinstance(exc, AccessDenied):
        code = status.HTTP_401_UNAUTHORIZED if isinstance(exc, Unauthorized) else status.HTTP_403_FORBIDDEN
        return _error(exc.message, code)

    if isinstance(exc, ActionError):
        set_rollback()
        return _error(str(exc), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, (ObjectDoesNotExist, Http404)):
        set_rollback()
        return _error("Not found", status.HTTP_404_NOT_FOUND)

    if isinstance(exc, DjangoValidationError):
        set_rollback()
        return _error("; ".join(exc.messages), status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            response.data = {"success": False, "error": _flatten_detail(exc.detail)}
            return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "API")
    set_rollback()
    return _error(GENERIC_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)
