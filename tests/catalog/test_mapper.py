"""Tests for the product mapper."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.catalog.mapper import ProductMapper
from app.catalog.models import Product
from app.catalog.pagination import PaginationParams
from app.catalog.schemas import ProductRequest


@pytest.fixture
def mapper() -> ProductMapper:
    """Create mapper."""
    return ProductMapper()


@pytest.fixture
def product() -> Product:
    """A persisted-looking product."""
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    return Product(
        id=1,
        name="Test Product",
        description="Test Description",
        price=Decimal("99.99"),
        category="Test Category",
        inventory_count=10,
        image_url="http://example.com/test.jpg",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def new_request() -> ProductRequest:
    """Request with values different from the product fixture."""
    return ProductRequest(
        name="New Product",
        description="New Description",
        price=Decimal("149.99"),
        category="New Category",
        inventory_count=20,
        image_url="http://example.com/new.jpg",
    )


class TestToResponse:
    """Tests for ProductMapper.to_response."""

    def test_copies_every_field(self, mapper: ProductMapper, product: Product) -> None:
        """Response carries identity, data fields and timestamps."""
        response = mapper.to_response(product)

        assert response.id == product.id
        assert response.name == product.name
        assert response.description == product.description
        assert response.price == product.price
        assert response.category == product.category
        assert response.inventory_count == product.inventory_count
        assert response.image_url == product.image_url
        assert response.created_at == product.created_at
        assert response.updated_at == product.updated_at

    def test_naive_timestamps_become_utc(self, mapper: ProductMapper, product: Product) -> None:
        """Naive timestamps read back from SQLite are treated as UTC."""
        product.created_at = datetime(2026, 1, 1, 12, 0)
        product.updated_at = datetime(2026, 1, 2, 12, 0)

        response = mapper.to_response(product)

        assert response.created_at.utcoffset() == timedelta(0)
        assert response.updated_at == datetime(2026, 1, 2, 12, 0, tzinfo=timezone.utc)

    def test_serializes_camel_case_with_numeric_price(
        self, mapper: ProductMapper, product: Product
    ) -> None:
        """Wire format uses camelCase keys and a JSON number for price."""
        data = mapper.to_response(product).model_dump(mode="json", by_alias=True)

        assert data["inventoryCount"] == 10
        assert data["imageUrl"] == "http://example.com/test.jpg"
        assert data["price"] == 99.99
        assert "createdAt" in data
        assert "updatedAt" in data


class TestToEntity:
    """Tests for ProductMapper.to_entity."""

    def test_copies_mutable_fields_only(
        self, mapper: ProductMapper, new_request: ProductRequest
    ) -> None:
        """Identity and timestamps are left for the store."""
        entity = mapper.to_entity(new_request)

        assert entity.id is None
        assert entity.name == new_request.name
        assert entity.description == new_request.description
        assert entity.price == new_request.price
        assert entity.category == new_request.category
        assert entity.inventory_count == new_request.inventory_count
        assert entity.image_url == new_request.image_url
        assert entity.created_at is None
        assert entity.updated_at is None


class TestUpdateEntity:
    """Tests for ProductMapper.update_entity."""

    def test_overwrites_mutable_fields_in_place(
        self,
        mapper: ProductMapper,
        product: Product,
        new_request: ProductRequest,
    ) -> None:
        """Every mutable field is replaced; id and created_at are kept."""
        created_at = product.created_at

        result = mapper.update_entity(product, new_request)

        assert result is product
        assert product.id == 1
        assert product.created_at == created_at
        assert product.name == "New Product"
        assert product.description == "New Description"
        assert product.price == Decimal("149.99")
        assert product.category == "New Category"
        assert product.inventory_count == 20
        assert product.image_url == "http://example.com/new.jpg"

    def test_clears_omitted_optional_fields(
        self, mapper: ProductMapper, product: Product
    ) -> None:
        """Full replace: missing optional fields become None."""
        request = ProductRequest(
            name="Bare", price=Decimal("1.00"), category="C", inventory_count=0
        )

        mapper.update_entity(product, request)

        assert product.description is None
        assert product.image_url is None


class TestToPage:
    """Tests for ProductMapper.to_page."""

    def test_page_metadata(self, mapper: ProductMapper, product: Product) -> None:
        """Totals and flags are computed from total and page size."""
        page = mapper.to_page([product], total=5, pagination=PaginationParams(page=1, size=2))

        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.number == 1
        assert page.size == 2
        assert page.number_of_elements == 1
        assert page.first is False
        assert page.last is False
        assert page.empty is False

    def test_empty_page(self, mapper: ProductMapper) -> None:
        """An empty catalog yields an empty first-and-last page."""
        page = mapper.to_page([], total=0, pagination=PaginationParams())

        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0
        assert page.first is True
        assert page.last is True
        assert page.empty is True

    def test_page_wire_format(self, mapper: ProductMapper, product: Product) -> None:
        """Page body uses the camelCase keys clients read."""
        data = mapper.to_page(
            [product], total=1, pagination=PaginationParams()
        ).model_dump(mode="json", by_alias=True)

        assert set(data) >= {"content", "totalElements", "totalPages", "number", "size"}
        assert data["content"][0]["id"] == 1
