"""Mapping of domain errors to HTTP responses.

Installed as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Only the error code and
the user-safe message leave the process; anything that is not a domain
error goes to DRF's default handler.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from ticketing.domain.errors import (
    AlreadyRedeemedError,
    DomainError,
    ErrorCode,
    InsufficientInventoryError,
)

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_REFERENCE: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SEAT_COUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_INVENTORY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_CANCELLED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TICKET_USED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TICKET_CANCELLED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_REDEEMED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def domain_error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "error": error.message}
    if isinstance(error, InsufficientInventoryError):
        body["available"] = error.available
    if isinstance(error, AlreadyRedeemedError) and error.checked_in_at is not None:
        body["checkedInAt"] = error.checked_in_at.isoformat()
    return Response(
        body, status=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)
    )


def exception_handler(exc, context):
    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.info(
            "%s rejected with %s",
            view.__class__.__name__ if view else "request",
            exc.code.value,
        )
        return domain_error_response(exc)
    return drf_exception_handler(exc, context)
