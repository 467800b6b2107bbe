"""Product repository for database operations.

Provides keyed lookup, filtered/sorted/paginated queries and
single-row writes for products.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product

LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class ProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering, sorting, and pagination.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find(
                category="Tools",
                min_inventory=1,
                limit=20,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def add(self, product: Product) -> Product:
        """Insert a new product.

        Args:
            product: Transient product.

        Returns:
            The product with its store-assigned id.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(
        self,
        product_id: int,
        for_update: bool = False,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            for_update: Lock the row until the transaction ends so a
                check-then-write on this id cannot interleave with
                another writer.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if for_update:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find(
        self,
        category: str | None = None,
        name_contains: str | None = None,
        min_inventory: int | None = None,
        sort_by: str = "id",
        descending: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            category: Exact, case-sensitive category match.
            name_contains: Case-insensitive substring of the name.
            min_inventory: Minimum inventory count (inclusive).
            sort_by: Product attribute to sort on.
            descending: Sort order.
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products.
        """
        query = select(Product)

        conditions = self._conditions(category, name_contains, min_inventory)
        if conditions:
            query = query.where(and_(*conditions))

        # Sorting, id breaks ties so pages stay stable
        sort_column = self._get_sort_column(sort_by)
        order = sort_column.desc() if descending else sort_column.asc()
        if sort_column is Product.id:
            query = query.order_by(order)
        else:
            tie_breaker = Product.id.desc() if descending else Product.id.asc()
            query = query.order_by(order, tie_breaker)

        # Pagination
        query = query.limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(
        self,
        category: str | None = None,
        name_contains: str | None = None,
        min_inventory: int | None = None,
    ) -> int:
        """Count products matching filters.

        Args:
            category: Exact category match.
            name_contains: Case-insensitive substring of the name.
            min_inventory: Minimum inventory count (inclusive).

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        conditions = self._conditions(category, name_contains, min_inventory)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete(self, product: Product) -> None:
        """Delete a product row.

        Args:
            product: Persistent product.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def get_categories(self) -> list[str]:
        """Get list of distinct category labels.

        Returns:
            Sorted category labels.
        """
        query = select(Product.category).distinct().order_by(Product.category)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def ping(self) -> None:
        """Round-trip a trivial query to check connectivity."""
        await self.session.execute(text("SELECT 1"))

    async def flush(self) -> None:
        """Flush pending changes."""
        await self.session.flush()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self.session.rollback()

    def _conditions(
        self,
        category: str | None,
        name_contains: str | None,
        min_inventory: int | None,
    ) -> list[Any]:
        """Build WHERE conditions shared by find and count."""
        conditions = []

        if category is not None:
            conditions.append(Product.category == category)

        if name_contains:
            pattern = f"%{_escape_like(name_contains)}%"
            conditions.append(Product.name.ilike(pattern, escape=LIKE_ESCAPE))

        if min_inventory is not None:
            conditions.append(Product.inventory_count >= min_inventory)

        return conditions

    def _get_sort_column(self, sort_by: str) -> Any:
        """Get SQLAlchemy column for sorting.

        Args:
            sort_by: Product attribute name.

        Returns:
            SQLAlchemy column, id when the name is unknown.
        """
        columns = {
            "id": Product.id,
            "name": Product.name,
            "description": Product.description,
            "price": Product.price,
            "category": Product.category,
            "inventory_count": Product.inventory_count,
            "image_url": Product.image_url,
            "created_at": Product.created_at,
            "updated_at": Product.updated_at,
        }
        return columns.get(sort_by, Product.id)
