"""Product Catalog Service.

Provides the product store, mapper and catalog service behind the
catalog HTTP API.
"""

from app.catalog.mapper import ProductMapper
from app.catalog.models import Product
from app.catalog.pagination import PaginationParams
from app.catalog.repository import ProductRepository
from app.catalog.schemas import ProductPage, ProductRequest, ProductResponse
from app.catalog.service import CatalogService, ResultStatus, ServiceResult

__all__ = [
    # Models
    "Product",
    # Schemas
    "ProductPage",
    "ProductRequest",
    "ProductResponse",
    # Mapper
    "ProductMapper",
    # Repository
    "ProductRepository",
    # Service
    "CatalogService",
    "PaginationParams",
    "ResultStatus",
    "ServiceResult",
]
