from django.core.exceptions import ImproperlyConfigured


class RazorpayError(Exception):
    """Common base class for django-razorpay exceptions"""

    pass


class ConfigurationError(RazorpayError, ImproperlyConfigured):
    """A required secret or credential is not configured."""

    pass


class RequestValidationError(RazorpayError):
    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ProductNotFound(RazorpayError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class SignatureInvalid(RazorpayError):
    pass


class ProcessingFailure(RazorpayError):
    def __init__(self, event_id: str, event_type: str):
        super().__init__(f"Failed to process {event_type} event {event_id}")
        self.event_id = event_id
        self.event_type = event_type


class GatewayError(RazorpayError):
    pass
