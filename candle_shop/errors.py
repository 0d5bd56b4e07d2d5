"""
Exception hierarchy for the storefront.

Every error raised by the service layer carries the HTTP status it maps to;
the handlers in ``candle_shop.main`` turn them into the JSON error envelope.
"""


class StoreError(Exception):
    """Base exception for storefront errors"""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(StoreError):
    """Missing or invalid input"""
    status_code = 400


class NotAuthorizedError(StoreError):
    """Missing credentials or caller does not own the resource"""
    status_code = 401


class ForbiddenError(StoreError):
    """Caller lacks the required role"""
    status_code = 403


class NotFoundError(StoreError):
    """Requested resource does not exist"""
    status_code = 404


class PaymentVerificationError(BadRequestError):
    """Payment confirmation did not pass verification"""
    pass


class PaymentGatewayError(StoreError):
    """Payment provider is unavailable or rejected the request"""
    status_code = 500
