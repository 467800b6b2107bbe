"""Catalog request/response schemas.

Pydantic models for the product wire format. Fields are snake_case in
Python and camelCase on the wire; both spellings are accepted on input.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Largest value the int4 inventory column holds
MAX_INVENTORY_COUNT = 2**31 - 1

# Decimal in Python, plain JSON number on the wire (99.99, not "99.99")
Price = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Product Schemas
# ============================================================================


class ProductRequest(CamelModel):
    """Inbound product shape used for both create and full update."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Price = Field(
        ...,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Unit price, two decimal places",
    )
    category: str = Field(..., max_length=100, description="Category label")
    inventory_count: int = Field(
        ..., ge=0, le=MAX_INVENTORY_COUNT, description="Units on hand"
    )
    image_url: str | None = Field(default=None, max_length=1000, description="Image URL")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        """Reject whitespace-only names."""
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ProductResponse(CamelModel):
    """Outbound product shape."""

    id: int
    name: str
    description: str | None = None
    price: Price
    category: str
    inventory_count: int
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductPage(CamelModel):
    """One page of products plus totals across all pages."""

    content: list[ProductResponse] = Field(default_factory=list)
    total_elements: int = Field(..., description="Matching products across all pages")
    total_pages: int = Field(..., description="Number of pages at this size")
    number: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    number_of_elements: int = Field(..., description="Products on this page")
    first: bool
    last: bool
    empty: bool
