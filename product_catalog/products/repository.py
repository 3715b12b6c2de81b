"""Product repository for database operations.

Thin query layer over an AsyncSession. Transactions are owned by the
caller; the repository only flushes.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from product_catalog.products.models import Product, ProductImage


class ProductRepository:
    """Repository for Product and ProductImage database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(limit=20, offset=0)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def add_images(self, product_id: str, urls: list[str]) -> list[ProductImage]:
        """Attach new image rows to a product, preserving URL order.

        Args:
            product_id: Owning product ID.
            urls: Image URLs.

        Returns:
            Created images.
        """
        images = [ProductImage(product_id=product_id, url=url) for url in urls]
        self.session.add_all(images)
        await self.session.flush()
        return images

    async def delete_images(self, product_id: str) -> int:
        """Delete every image owned by a product.

        Args:
            product_id: Owning product ID.

        Returns:
            Number of deleted rows.
        """
        result = await self.session.execute(
            delete(ProductImage).where(ProductImage.product_id == product_id)
        )
        return result.rowcount

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID with images loaded.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.images))
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_title_or_slug(self, term: str) -> Product | None:
        """Get product whose title matches case-insensitively or slug exactly.

        Args:
            term: Title or slug.

        Returns:
            First matching product, None otherwise.
        """
        query = (
            select(Product)
            .where(
                or_(
                    func.lower(Product.title) == term.lower(),
                    Product.slug == term,
                )
            )
            .options(selectinload(Product.images))
            .order_by(Product.created_at, Product.id)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def preload(self, product_id: str, fields: dict[str, Any]) -> Product | None:
        """Load a product and merge partial fields onto it.

        Images are not loaded; they are replaced through
        ``delete_images``/``add_images``.

        Args:
            product_id: Product ID.
            fields: Scalar attributes to assign.

        Returns:
            Merged (unflushed) product, None if it does not exist.
        """
        product = await self.session.get(Product, product_id)
        if product is None:
            return None
        for name, value in fields.items():
            setattr(product, name, value)
        return product

    async def find_all(self, limit: int = 10, offset: int = 0) -> Sequence[Product]:
        """Find products in creation order with images loaded.

        Args:
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of products.
        """
        query = (
            select(Product)
            .options(selectinload(Product.images))
            .order_by(Product.created_at, Product.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, product: Product) -> None:
        """Delete a product; loaded images go with it.

        Args:
            product: Product to delete.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def delete_all(self) -> int:
        """Delete every image and product.

        Returns:
            Number of deleted products.
        """
        await self.session.execute(delete(ProductImage))
        result = await self.session.execute(delete(Product))
        return result.rowcount
