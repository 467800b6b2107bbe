"""Domain exceptions.

All domain-level errors that represent catalog rule violations or
failed lookups. The catalog service reports them inside a
``ServiceResult`` rather than raising them across the API boundary.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product-related errors."""

    pass


class ProductNotFoundError(ProductError):
    """Raised when a referenced product id does not exist."""

    def __init__(self, product_id: int) -> None:
        """Initialize product not found error.

        Args:
            product_id: ID of the missing product.
        """
        super().__init__(
            f"Product not found with id: {product_id}",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class ProductValidationError(ProductError):
    """Raised when input violates product invariants.

    Carries one message per offending field, keyed by the field's
    wire name (e.g. ``inventoryCount``).
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        """Initialize validation error.

        Args:
            field_errors: Mapping of field name to error message.
        """
        fields = ", ".join(sorted(field_errors))
        super().__init__(
            f"Invalid product data: {fields}",
            details={"field_errors": dict(field_errors)},
        )
        self.field_errors = dict(field_errors)


# ============================================================================
# Infrastructure Errors
# ============================================================================


class StoreFailureError(DomainError):
    """Raised when the product store cannot complete an operation.

    Wraps the underlying database error; never retried by the service.
    """

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        """Initialize store failure error.

        Args:
            operation: Name of the catalog operation that failed.
            cause: Original exception raised by the store.
        """
        super().__init__(
            f"Product store unavailable during {operation}",
            details={
                "operation": operation,
                "cause": type(cause).__name__ if cause else None,
            },
        )
        self.operation = operation
        self.cause = cause
