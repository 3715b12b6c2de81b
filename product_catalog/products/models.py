"""SQLAlchemy models for the product catalog.

Defines Product and ProductImage tables for persistent storage.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from product_catalog.infrastructure.database import Base
from product_catalog.products.validators import slugify


class Product(Base):
    """Product entity in the catalog.

    A product owns its images: deleting the product deletes them.

    Attributes:
        id: Unique product identifier (UUID).
        title: Product title, matched case-insensitively on lookup.
        slug: Unique URL-safe identifier, normalized on assignment.
        price: Unit price.
        description: Free-form description.
        stock: Units available.
        sizes: Available sizes.
        gender: Target audience (men, women, kid, unisex).
        tags: Free-form tags.
        created_at: Creation timestamp, used for default ordering.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sizes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    gender: Mapped[str] = mapped_column(String(20), nullable=False, default="unisex")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    @validates("slug")
    def _normalize_slug(self, key: str, value: str) -> str:
        return slugify(value)

    def to_dict(self) -> dict[str, Any]:
        """Convert scalar fields to dictionary.

        Images are left out; callers attach the flattened URL list.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "price": self.price,
            "description": self.description,
            "stock": self.stock,
            "sizes": list(self.sizes or []),
            "gender": self.gender,
            "tags": list(self.tags or []),
        }


class ProductImage(Base):
    """Image URL attached to exactly one product."""

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    product_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="images")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductImage(id={self.id}, url={self.url})>"
