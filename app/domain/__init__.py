"""Domain layer - catalog errors.

Example usage:
    from app.domain import ProductNotFoundError

    error = ProductNotFoundError(42)
    print(error.message)  # Product not found with id: 42
"""

from app.domain.exceptions import (
    DomainError,
    ProductError,
    ProductNotFoundError,
    ProductValidationError,
    StoreFailureError,
)

__all__ = [
    "DomainError",
    "ProductError",
    "ProductNotFoundError",
    "ProductValidationError",
    "StoreFailureError",
]
