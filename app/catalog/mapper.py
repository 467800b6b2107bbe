"""Translation between Product rows and catalog schemas.

Pure functions only: no I/O and no validation. Malformed input is
rejected by the service before it gets here.
"""

from collections.abc import Sequence

from app.catalog.models import Product, as_utc
from app.catalog.pagination import PaginationParams
from app.catalog.schemas import ProductPage, ProductRequest, ProductResponse


class ProductMapper:
    """Stateless mapper for products."""

    def to_response(self, product: Product) -> ProductResponse:
        """Convert a Product row to its response shape.

        Args:
            product: Persisted product.

        Returns:
            Response with every field, identity and timestamps included.
        """
        return ProductResponse(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            inventory_count=product.inventory_count,
            image_url=product.image_url,
            created_at=as_utc(product.created_at),
            updated_at=as_utc(product.updated_at),
        )

    def to_entity(self, request: ProductRequest) -> Product:
        """Build a new, unsaved Product from a request.

        Identity and timestamps are left unset for the store.

        Args:
            request: Validated product request.

        Returns:
            Transient Product.
        """
        return Product(
            name=request.name,
            description=request.description,
            price=request.price,
            category=request.category,
            inventory_count=request.inventory_count,
            image_url=request.image_url,
        )

    def update_entity(self, product: Product, request: ProductRequest) -> Product:
        """Overwrite every mutable field of ``product`` in place.

        ``id`` and ``created_at`` are never touched.

        Args:
            product: Existing product.
            request: Validated product request.

        Returns:
            The same product instance.
        """
        product.name = request.name
        product.description = request.description
        product.price = request.price
        product.category = request.category
        product.inventory_count = request.inventory_count
        product.image_url = request.image_url
        return product

    def to_page(
        self,
        products: Sequence[Product],
        total: int,
        pagination: PaginationParams,
    ) -> ProductPage:
        """Wrap a slice of products with page metadata.

        Args:
            products: Products on the requested page.
            total: Matching products across all pages.
            pagination: Parameters the page was fetched with.

        Returns:
            Page response.
        """
        content = [self.to_response(p) for p in products]
        total_pages = (total + pagination.size - 1) // pagination.size
        return ProductPage(
            content=content,
            total_elements=total,
            total_pages=total_pages,
            number=pagination.page,
            size=pagination.size,
            number_of_elements=len(content),
            first=pagination.page == 0,
            last=pagination.page >= total_pages - 1,
            empty=not content,
        )
