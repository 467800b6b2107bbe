"""SQLAlchemy models for the product catalog.

Defines the Product table backing the catalog store.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from the store.

    SQLite drops tzinfo on DateTime(timezone=True) columns, PostgreSQL
    keeps it; callers always get an aware value.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Store-assigned identifier, never reused after deletion.
        name: Product name (non-empty).
        description: Free-text description.
        price: Fixed-point price, two decimal places.
        category: Free-form category label, matched exactly.
        inventory_count: Units on hand, within the int4 column range.
        image_url: Product image URL.
        created_at: Creation timestamp.
        updated_at: Last mutation timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    inventory_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, index=True
    )
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("inventory_count >= 0", name="ck_products_inventory_non_negative"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]}, category={self.category})>"

    def touch(self, now: datetime | None = None) -> None:
        """Refresh ``updated_at`` without ever moving it backwards.

        Args:
            now: Timestamp to apply, defaults to the current UTC time.
        """
        now = now or utcnow()
        previous = as_utc(self.updated_at) if self.updated_at else None
        created = as_utc(self.created_at) if self.created_at else None
        self.updated_at = max(t for t in (previous, created, now) if t is not None)
