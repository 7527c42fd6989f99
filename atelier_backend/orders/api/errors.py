# orders/api/errors.py

"""
Domain error -> HTTP response mapping.

Body shape: {"detail": <message>, "details": <structured context or null>}
"""

from rest_framework import status
from rest_framework.response import Response

from common.cache import to_plain
from orders.services.exceptions import (
    ForbiddenError,
    NotFoundError,
    OrderNumberGenerationError,
    OrderServiceError,
    OrderValidationError,
    PaymentExceedsBalanceError,
    UnauthorizedError,
)

STATUS_BY_ERROR = (
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (OrderValidationError, status.HTTP_400_BAD_REQUEST),
    (PaymentExceedsBalanceError, status.HTTP_400_BAD_REQUEST),
    (OrderNumberGenerationError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: OrderServiceError) -> int:
    for error_class, code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_response(exc: OrderServiceError) -> Response:
    return Response(
        {"detail": exc.message or str(exc), "details": to_plain(exc.details)},
        status=status_for(exc),
    )
