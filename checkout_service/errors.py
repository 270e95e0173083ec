"""Typed checkout failures.

Every failure the checkout can surface to a caller is one of the classes
below. Each carries a machine-readable ``code`` and the HTTP status it maps
to, so the API layer never has to inspect messages.
"""

AUTH_ERROR = "AUTH_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"


class CheckoutError(Exception):
    """Base exception for all checkout errors."""

    code = INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"success": False, "code": self.code, "message": self.message}


class AuthError(CheckoutError):
    """Raised when the caller is not an authenticated buyer."""

    code = AUTH_ERROR
    status_code = 401

    def __init__(self, message: str = "You must be logged in to check out."):
        super().__init__(message)


class ValidationError(CheckoutError):
    """Raised when the payload, a product line or a coupon fails a rule.

    ``field`` names the offending input (``products[0].quantity``,
    ``couponCode``...) and ``reason`` is a stable identifier such as
    ``insufficient_stock`` or ``coupon_expired``.
    """

    code = VALIDATION_ERROR
    status_code = 400

    def __init__(self, field: str, reason: str, message: str, product_id: int | None = None):
        self.field = field
        self.reason = reason
        self.product_id = product_id
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        data["reason"] = self.reason
        if self.product_id is not None:
            data["productId"] = self.product_id
        return data


class NotFoundError(CheckoutError):
    """Raised when a referenced record does not exist."""

    code = NOT_FOUND
    status_code = 404

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource.capitalize()} {resource_id} not found.")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["resource"] = self.resource
        data["resourceId"] = self.resource_id
        return data


class InternalError(CheckoutError):
    """Raised for unexpected failures. The cause is logged, never returned."""

    code = INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str = "Internal error while processing checkout."):
        super().__init__(message)
