# storefront/domain/errors.py
"""
Domain errors. Each one subclasses the builtin the routers already map to a
status code (PermissionError, LookupError, ValueError, RuntimeError).
"""


class Unauthorized(PermissionError):
    pass


class Forbidden(PermissionError):
    pass


class NotFound(LookupError):
    pass


class ValidationError(ValueError):
    pass


class EmptyCart(ValidationError):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class PaymentFailure(RuntimeError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PersistenceFailure(RuntimeError):
    def __init__(self, message: str = "Failed to create order"):
        super().__init__(message)


class CheckoutInProgress(RuntimeError):
    def __init__(self, message: str = "Checkout already in progress"):
        super().__init__(message)


class Conflict(RuntimeError):
    pass
