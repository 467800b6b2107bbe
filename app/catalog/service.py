"""Catalog service for product operations.

High-level service that combines repository operations with the
catalog's business rules: validation, not-found handling, full-replace
updates, inventory changes and pagination.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.catalog.mapper import ProductMapper
from app.catalog.models import utcnow
from app.catalog.pagination import PaginationParams
from app.catalog.repository import ProductRepository
from app.catalog.schemas import (
    MAX_INVENTORY_COUNT,
    ProductPage,
    ProductRequest,
    ProductResponse,
)
from app.domain.exceptions import (
    DomainError,
    ProductNotFoundError,
    ProductValidationError,
    StoreFailureError,
)

logger = structlog.get_logger()

T = TypeVar("T")


# ============================================================================
# Service Result Types
# ============================================================================


class ResultStatus(str, Enum):
    """Outcome kinds of a catalog operation."""

    OK = "ok"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    STORE_FAILURE = "store_failure"


@dataclass
class ServiceResult(Generic[T]):
    """Result of a catalog operation.

    Expected failures (missing product, invalid input, store outage)
    are reported here instead of being raised.
    """

    status: ResultStatus = ResultStatus.OK
    value: T | None = None
    error: DomainError | None = None

    @property
    def success(self) -> bool:
        """Whether the operation succeeded."""
        return self.status is ResultStatus.OK

    @property
    def field_errors(self) -> dict[str, str]:
        """Per-field messages for validation failures."""
        if isinstance(self.error, ProductValidationError):
            return self.error.field_errors
        return {}

    @classmethod
    def ok(cls, value: T | None = None) -> "ServiceResult[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def not_found(cls, product_id: int) -> "ServiceResult[T]":
        return cls(
            status=ResultStatus.NOT_FOUND,
            error=ProductNotFoundError(product_id),
        )

    @classmethod
    def invalid(cls, field_errors: dict[str, str]) -> "ServiceResult[T]":
        return cls(
            status=ResultStatus.VALIDATION_ERROR,
            error=ProductValidationError(field_errors),
        )

    @classmethod
    def store_failure(
        cls, operation: str, cause: Exception | None = None
    ) -> "ServiceResult[T]":
        return cls(
            status=ResultStatus.STORE_FAILURE,
            error=StoreFailureError(operation, cause),
        )


# ============================================================================
# Validation
# ============================================================================


def _field_name(loc: tuple[Any, ...]) -> str:
    """Wire name of the field a pydantic error points at."""
    parts = [str(part) for part in loc if not isinstance(part, int)]
    return ".".join(parts) or "request"


def validate_product_request(
    data: ProductRequest | Mapping[str, Any],
) -> tuple[ProductRequest | None, dict[str, str]]:
    """Coerce and check a product request.

    Accepts an already-parsed ``ProductRequest`` or a raw mapping
    (camelCase or snake_case keys). Invariants are re-checked on parsed
    requests too, since ``model_construct`` skips validation.

    Args:
        data: Request model or raw mapping.

    Returns:
        The parsed request (None when the shape is malformed) and a
        mapping of field name to message.
    """
    if not isinstance(data, ProductRequest):
        try:
            data = ProductRequest.model_validate(data)
        except ValidationError as e:
            errors: dict[str, str] = {}
            for error in e.errors():
                errors.setdefault(_field_name(error["loc"]), error["msg"])
            return None, errors

    errors = {}
    if not isinstance(data.name, str) or not data.name.strip():
        errors["name"] = "must not be blank"
    if data.price is None:
        errors["price"] = "must not be null"
    elif data.price < 0:
        errors["price"] = "must be greater than or equal to 0"
    if data.inventory_count is None:
        errors["inventoryCount"] = "must not be null"
    elif data.inventory_count < 0:
        errors["inventoryCount"] = "must be greater than or equal to 0"
    elif data.inventory_count > MAX_INVENTORY_COUNT:
        errors["inventoryCount"] = f"must be less than or equal to {MAX_INVENTORY_COUNT}"

    return data, errors


def _quantity_error(quantity: int | None) -> str | None:
    """Message for an inventory quantity the store cannot hold, if any."""
    if quantity is None or quantity < 0:
        return "must be greater than or equal to 0"
    if quantity > MAX_INVENTORY_COUNT:
        return f"must be less than or equal to {MAX_INVENTORY_COUNT}"
    return None


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Stateless: everything lives in the product store. Construct one per
    unit of work with an explicit repository and mapper.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(ProductRepository(session), ProductMapper())

            result = await service.create(
                ProductRequest(name="Widget", price=Decimal("9.99"),
                               category="Tools", inventory_count=3)
            )
            if result.success:
                print(result.value.id)
    """

    def __init__(
        self,
        repository: ProductRepository,
        mapper: ProductMapper,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            repository: Product store handle.
            mapper: Entity/schema mapper.
            request_id: Request ID for log correlation.
        """
        self.repository = repository
        self.mapper = mapper
        self.request_id = request_id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_all(self, pagination: PaginationParams) -> ServiceResult[ProductPage]:
        """List every product, sorted as requested.

        Args:
            pagination: Page, size, sort field and direction.

        Returns:
            Page of products; empty page for an empty catalog.
        """
        return await self._page("list_all", pagination)

    async def get_by_id(self, product_id: int) -> ServiceResult[ProductResponse]:
        """Get a product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product, or NOT_FOUND.
        """
        try:
            product = await self.repository.get_by_id(product_id)
        except SQLAlchemyError as e:
            return await self._store_failure("get_by_id", e, product_id=product_id)

        if product is None:
            return ServiceResult.not_found(product_id)

        return ServiceResult.ok(self.mapper.to_response(product))

    async def list_by_category(
        self,
        category: str,
        pagination: PaginationParams,
    ) -> ServiceResult[ProductPage]:
        """List products whose category equals ``category`` exactly."""
        return await self._page("list_by_category", pagination, category=category)

    async def search_by_name(
        self,
        term: str,
        pagination: PaginationParams,
    ) -> ServiceResult[ProductPage]:
        """Case-insensitive substring search on product names.

        An empty term matches every product.
        """
        return await self._page("search_by_name", pagination, name_contains=term or None)

    async def list_available(self, pagination: PaginationParams) -> ServiceResult[ProductPage]:
        """List products with inventory on hand."""
        return await self._page("list_available", pagination, min_inventory=1)

    async def list_categories(self) -> ServiceResult[list[str]]:
        """List distinct category labels in use."""
        try:
            categories = await self.repository.get_categories()
        except SQLAlchemyError as e:
            return await self._store_failure("list_categories", e)

        return ServiceResult.ok(categories)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self,
        request: ProductRequest | Mapping[str, Any],
    ) -> ServiceResult[ProductResponse]:
        """Create a product.

        Args:
            request: Product fields.

        Returns:
            Created product with store-assigned id; VALIDATION_ERROR
            without touching the store if the request is invalid.
        """
        parsed, errors = validate_product_request(request)
        if errors or parsed is None:
            return self._invalid("create", errors)

        product = self.mapper.to_entity(parsed)
        now = utcnow()
        product.created_at = now
        product.updated_at = now

        try:
            await self.repository.add(product)
            response = self.mapper.to_response(product)
            await self.repository.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("create", e)

        logger.info(
            "Product created",
            product_id=response.id,
            category=response.category,
            request_id=self.request_id,
        )
        return ServiceResult.ok(response)

    async def update(
        self,
        product_id: int,
        request: ProductRequest | Mapping[str, Any],
    ) -> ServiceResult[ProductResponse]:
        """Replace every mutable field of a product.

        Args:
            product_id: Product ID.
            request: New values for all mutable fields.

        Returns:
            Updated product, NOT_FOUND or VALIDATION_ERROR.
        """
        parsed, errors = validate_product_request(request)
        if errors or parsed is None:
            return self._invalid("update", errors, product_id=product_id)

        try:
            product = await self.repository.get_by_id(product_id, for_update=True)
            if product is None:
                await self.repository.rollback()
                return ServiceResult.not_found(product_id)

            self.mapper.update_entity(product, parsed)
            product.touch()
            await self.repository.flush()
            response = self.mapper.to_response(product)
            await self.repository.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("update", e, product_id=product_id)

        logger.info("Product updated", product_id=product_id, request_id=self.request_id)
        return ServiceResult.ok(response)

    async def update_inventory(
        self,
        product_id: int,
        quantity: int,
    ) -> ServiceResult[ProductResponse]:
        """Set the inventory count of a product.

        Args:
            product_id: Product ID.
            quantity: New inventory count, 0 to MAX_INVENTORY_COUNT.

        Returns:
            Updated product, NOT_FOUND or VALIDATION_ERROR.
        """
        quantity_error = _quantity_error(quantity)
        if quantity_error:
            return self._invalid(
                "update_inventory",
                {"quantity": quantity_error},
                product_id=product_id,
            )

        try:
            product = await self.repository.get_by_id(product_id, for_update=True)
            if product is None:
                await self.repository.rollback()
                return ServiceResult.not_found(product_id)

            previous = product.inventory_count
            product.inventory_count = quantity
            product.touch()
            await self.repository.flush()
            response = self.mapper.to_response(product)
            await self.repository.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("update_inventory", e, product_id=product_id)

        logger.info(
            "Product inventory updated",
            product_id=product_id,
            previous=previous,
            quantity=quantity,
            request_id=self.request_id,
        )
        return ServiceResult.ok(response)

    async def delete(self, product_id: int) -> ServiceResult[None]:
        """Permanently delete a product.

        Existence is checked with a locked read before deleting.

        Args:
            product_id: Product ID.

        Returns:
            Empty OK result, or NOT_FOUND.
        """
        try:
            product = await self.repository.get_by_id(product_id, for_update=True)
            if product is None:
                await self.repository.rollback()
                return ServiceResult.not_found(product_id)

            await self.repository.delete(product)
            await self.repository.commit()
        except SQLAlchemyError as e:
            return await self._store_failure("delete", e, product_id=product_id)

        logger.info("Product deleted", product_id=product_id, request_id=self.request_id)
        return ServiceResult.ok()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _page(
        self,
        operation: str,
        pagination: PaginationParams,
        **filters: Any,
    ) -> ServiceResult[ProductPage]:
        """Fetch one page plus the total for the given filters."""
        errors = pagination.errors()
        if errors:
            return self._invalid(operation, errors)

        try:
            products = await self.repository.find(
                sort_by=pagination.sort_attribute,
                descending=pagination.descending,
                limit=pagination.limit,
                offset=pagination.offset,
                **filters,
            )
            total = await self.repository.count(**filters)
        except SQLAlchemyError as e:
            return await self._store_failure(operation, e)

        return ServiceResult.ok(self.mapper.to_page(products, total, pagination))

    def _invalid(
        self,
        operation: str,
        errors: dict[str, str],
        **context: Any,
    ) -> ServiceResult[Any]:
        logger.info(
            "Product validation failed",
            operation=operation,
            fields=sorted(errors),
            request_id=self.request_id,
            **context,
        )
        return ServiceResult.invalid(errors or {"request": "malformed request"})

    async def _store_failure(
        self,
        operation: str,
        error: SQLAlchemyError,
        **context: Any,
    ) -> ServiceResult[Any]:
        logger.exception(
            "Product store failure",
            operation=operation,
            error=str(error),
            request_id=self.request_id,
            **context,
        )
        try:
            await self.repository.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after store failure failed", operation=operation)
        return ServiceResult.store_failure(operation, error)
