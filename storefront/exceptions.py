"""
Exceptions raised by the catalog and cart services.

Hierarchy:
    StorefrontException
    ├── ValidationError        -> 400
    ├── NotFound               -> 404
    │   ├── ProductNotFound
    │   ├── CartLineNotFound
    │   └── EmptyCart
    └── StoreError             -> 500

Services raise these; ``storefront.main`` maps them to HTTP responses.
"""


class StorefrontException(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message, safe to return to clients
        details: Optional dict with additional context for logs
    """

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationError(StorefrontException):
    """Missing or malformed input."""

    status_code = 400


class NotFound(StorefrontException):
    """The queried entity or aggregate does not exist."""

    status_code = 404


class ProductNotFound(NotFound):

    def __init__(self, product_id: int):
        super().__init__("Product not found", details={'product_id': product_id})
        self.product_id = product_id


class CartLineNotFound(NotFound):

    def __init__(self, product_id: int):
        super().__init__(
            "Product not found in the cart",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class EmptyCart(NotFound):
    """The cart has no lines, so there is nothing to list or total."""

    def __init__(self):
        super().__init__("Cart is empty")


class StoreError(StorefrontException):
    """Connectivity failure, query failure or unclassified constraint violation.

    ``message`` stays generic; the underlying cause is chained and logged.
    """

    status_code = 500

    def __init__(self, operation: str, details: dict | None = None):
        super().__init__(f"Error {operation}", details=details)
        self.operation = operation
