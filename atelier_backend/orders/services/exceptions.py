# orders/services/exceptions.py

"""
ORDER & PAYMENT SERVICE ERRORS

Centralized domain errors for the order ledger. The API layer maps each
family to one HTTP status (see orders.api.errors).
"""


class OrderServiceError(Exception):
    """Base exception for all order / payment service failures."""

    def __init__(self, message: str = "", details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class UnauthorizedError(OrderServiceError):
    """Raised when no admin identity is supplied."""


# ---------------- NOT FOUND ----------------
class NotFoundError(OrderServiceError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class ClientNotFoundError(NotFoundError):
    pass


class ProjectNotFoundError(NotFoundError):
    pass


class EventNotFoundError(NotFoundError):
    pass


class PaymentNotFoundError(NotFoundError):
    pass


# ---------------- FORBIDDEN ----------------
class ForbiddenError(OrderServiceError):
    """Raised when an entity belongs to another admin."""


class PaymentLockedError(ForbiddenError):
    """Raised when price/deposit change is attempted on an order with payments."""


# ---------------- VALIDATION ----------------
class OrderValidationError(OrderServiceError):
    pass


class InvalidPriceError(OrderValidationError):
    pass


class InvalidDateFormatError(OrderValidationError):
    def __init__(self, value):
        super().__init__(
            "Invalid date format. Expected YYYY-MM-DD",
            details={"value": value},
        )
        self.value = value


class InvalidDateComponentsError(OrderValidationError):
    def __init__(self, value):
        super().__init__(
            "Invalid date: day or month out of range",
            details={"value": value},
        )
        self.value = value


class InvalidDueDateError(OrderValidationError):
    pass


class InvalidOrderStatusError(OrderValidationError):
    pass


class InvalidDepositError(OrderValidationError):
    pass


class InvalidPaymentAmountError(OrderValidationError):
    pass


class ClientNotInEventError(OrderValidationError):
    pass


# ---------------- LEDGER ----------------
class PaymentExceedsBalanceError(OrderServiceError):
    """
    Raised when a payment would push the cumulative total above the price.

    details = {orderTotal, totalPaid, remainingBalance, attemptedPayment}
    """


class OrderNumberGenerationError(OrderServiceError):
    """Raised when no unique order number was found within the attempt budget."""
