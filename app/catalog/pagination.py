"""Pagination parameters for catalog queries."""

from dataclasses import dataclass

DEFAULT_SORT_FIELD = "id"

# LIMIT and OFFSET are bound as signed 64-bit integers
MAX_ROW_OFFSET = 2**63 - 1

# Wire name or attribute name -> Product attribute
SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "inventoryCount": "inventory_count",
    "inventory_count": "inventory_count",
    "imageUrl": "image_url",
    "image_url": "image_url",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (0-indexed).
        size: Items per page.
        sort_by: Sort field, wire or attribute name.
        direction: Sort direction, ``asc`` or ``desc`` (case-insensitive).
    """

    page: int = 0
    size: int = 10
    sort_by: str = DEFAULT_SORT_FIELD
    direction: str = "asc"

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        """Get limit (alias for size)."""
        return self.size

    @property
    def descending(self) -> bool:
        """Whether results are sorted in descending order.

        Anything other than ``desc`` sorts ascending.
        """
        return (self.direction or "").strip().lower() == "desc"

    @property
    def sort_attribute(self) -> str:
        """Product attribute to sort by; unknown fields fall back to id."""
        return SORT_FIELDS.get((self.sort_by or "").strip(), DEFAULT_SORT_FIELD)

    def errors(self) -> dict[str, str]:
        """Validate page and size.

        Returns:
            Field errors, empty when the parameters are usable.
        """
        errors: dict[str, str] = {}
        if self.page < 0:
            errors["page"] = "must be greater than or equal to 0"
        if self.size < 1:
            errors["size"] = "must be greater than 0"
        elif self.size > MAX_ROW_OFFSET:
            errors["size"] = f"must be less than or equal to {MAX_ROW_OFFSET}"
        elif self.page > 0 and self.offset > MAX_ROW_OFFSET:
            errors["page"] = "is beyond the last addressable page"
        return errors
