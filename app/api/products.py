"""Product API endpoints.

Provides the catalog HTTP surface:
- GET    /api/v1/products - list products (paginated, sortable)
- GET    /api/v1/products/{id} - product details
- GET    /api/v1/products/categories - distinct category labels
- GET    /api/v1/products/category/{category} - products in a category
- GET    /api/v1/products/search?name= - search products by name
- GET    /api/v1/products/available - products with inventory on hand
- POST   /api/v1/products - create a product
- PUT    /api/v1/products/{id} - replace a product
- PATCH  /api/v1/products/{id}/inventory?quantity= - set inventory
- DELETE /api/v1/products/{id} - delete a product
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import ErrorResponse, FieldErrorsResponse
from app.catalog.mapper import ProductMapper
from app.catalog.pagination import DEFAULT_SORT_FIELD, PaginationParams
from app.catalog.repository import ProductRepository
from app.catalog.schemas import ProductPage, ProductRequest, ProductResponse
from app.catalog.service import CatalogService, ResultStatus, ServiceResult
from app.infrastructure.config import settings
from app.infrastructure.database import get_session

router = APIRouter(prefix=settings.api_prefix, tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to this request's session."""
    request_id = getattr(request.state, "request_id", None)
    return CatalogService(
        ProductRepository(session),
        ProductMapper(),
        request_id=request_id,
    )


def get_page(
    page: int = Query(default=0, description="Page number (0-based)"),
    size: int = Query(default=settings.default_page_size, description="Items per page"),
) -> PaginationParams:
    """Page and size, unsorted queries (ordered by id)."""
    return PaginationParams(page=page, size=size)


def get_sorted_page(
    page: int = Query(default=0, description="Page number (0-based)"),
    size: int = Query(default=settings.default_page_size, description="Items per page"),
    sort_by: str = Query(default=DEFAULT_SORT_FIELD, alias="sortBy", description="Sort field"),
    direction: str = Query(default="asc", description="Sort direction (asc/desc)"),
) -> PaginationParams:
    """Page, size and sort parameters."""
    return PaginationParams(page=page, size=size, sort_by=sort_by, direction=direction)


# ============================================================================
# Converters
# ============================================================================


def unwrap(result: ServiceResult[Any]) -> Any:
    """Return the result value or raise the matching HTTP error.

    Args:
        result: Catalog service result.

    Returns:
        The result value on success.

    Raises:
        HTTPException: 404, 400 or 500 depending on the result status.
    """
    if result.success:
        return result.value

    if result.status is ResultStatus.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "status": status.HTTP_404_NOT_FOUND,
                "message": result.error.message if result.error else "Product not found",
            },
        )

    if result.status is ResultStatus.VALIDATION_ERROR:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.field_errors,
        )

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": "An internal error occurred",
        },
    )


# ============================================================================
# Query Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductPage,
    responses={400: {"model": FieldErrorsResponse}},
    summary="List products",
    description="Get all products, paginated and sorted.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_service)],
    pagination: Annotated[PaginationParams, Depends(get_sorted_page)],
) -> ProductPage:
    """List all products.

    Unknown sort fields fall back to ``id``; any direction other than
    ``desc`` sorts ascending.
    """
    return unwrap(await service.list_all(pagination))


@router.get(
    "/categories",
    response_model=list[str],
    summary="List categories",
    description="Get the distinct category labels in use.",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[str]:
    return unwrap(await service.list_categories())


@router.get(
    "/category/{category}",
    response_model=ProductPage,
    responses={400: {"model": FieldErrorsResponse}},
    summary="List products by category",
    description="Get products whose category matches exactly (case-sensitive).",
)
async def list_products_by_category(
    category: str,
    service: Annotated[CatalogService, Depends(get_service)],
    pagination: Annotated[PaginationParams, Depends(get_page)],
) -> ProductPage:
    return unwrap(await service.list_by_category(category, pagination))


@router.get(
    "/search",
    response_model=ProductPage,
    responses={400: {"model": FieldErrorsResponse}},
    summary="Search products by name",
    description="Case-insensitive substring search on product names.",
)
async def search_products(
    service: Annotated[CatalogService, Depends(get_service)],
    pagination: Annotated[PaginationParams, Depends(get_page)],
    name: str = Query(..., description="Search term"),
) -> ProductPage:
    return unwrap(await service.search_by_name(name, pagination))


@router.get(
    "/available",
    response_model=ProductPage,
    responses={400: {"model": FieldErrorsResponse}},
    summary="List available products",
    description="Get products with inventory greater than zero.",
)
async def list_available_products(
    service: Annotated[CatalogService, Depends(get_service)],
    pagination: Annotated[PaginationParams, Depends(get_page)],
) -> ProductPage:
    return unwrap(await service.list_available(pagination))


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
    description="Get a product by ID.",
)
async def get_product(
    product_id: int,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Get a product by ID.

    Raises:
        HTTPException: If product not found.
    """
    return unwrap(await service.get_by_id(product_id))


# ============================================================================
# Mutation Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": FieldErrorsResponse}},
    summary="Create product",
    description="Create a new product.",
)
async def create_product(
    request: ProductRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Create a product.

    Args:
        request: Product fields.
        service: Catalog service.

    Returns:
        Created product with its assigned id.
    """
    return unwrap(await service.create(request))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": FieldErrorsResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Replace all mutable fields of a product.",
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Replace a product.

    Every mutable field is overwritten; omitted optional fields are
    cleared, not kept.
    """
    return unwrap(await service.update(product_id, request))


@router.patch(
    "/{product_id}/inventory",
    response_model=ProductResponse,
    responses={
        400: {"model": FieldErrorsResponse},
        404: {"model": ErrorResponse},
    },
    summary="Update product inventory",
    description="Set the inventory count of a product.",
)
async def update_product_inventory(
    product_id: int,
    service: Annotated[CatalogService, Depends(get_service)],
    quantity: int = Query(..., description="New inventory count"),
) -> ProductResponse:
    return unwrap(await service.update_inventory(product_id, quantity))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
    description="Permanently delete a product.",
)
async def delete_product(
    product_id: int,
    service: Annotated[CatalogService, Depends(get_service)],
) -> Response:
    unwrap(await service.delete(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
