"""Products service.

High-level operations over the product catalog. Each public method is its
own unit of work: it opens a session from the injected factory and closes
it on every exit path. Driver errors on the write paths are translated by
a single classifier into DuplicateKeyError or InternalError.
"""

from typing import Any, NoReturn

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from product_catalog.domain.exceptions import (
    DomainError,
    DuplicateKeyError,
    InternalError,
    ProductNotFoundError,
)
from product_catalog.infrastructure.database import async_session_factory
from product_catalog.products.models import Product
from product_catalog.products.repository import ProductRepository
from product_catalog.products.schemas import (
    DeleteAllResult,
    PaginationParams,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from product_catalog.products.validators import is_uuid, slugify

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: Exception) -> bool:
    if not isinstance(error, IntegrityError):
        return False
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION:
        return True
    # SQLite reports no SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


def _violation_detail(error: IntegrityError) -> str:
    orig = error.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        detail = getattr(source, "detail", None)
        if detail:
            return str(detail)
    return str(orig)


def flatten(product: Product, urls: list[str] | None = None) -> ProductOut:
    """Convert a product into the flattened response shape.

    Args:
        product: Product entity. Its images must be loaded unless urls is given.
        urls: Image URLs to use instead of the loaded images.

    Returns:
        ProductOut with images reduced to URL strings.
    """
    if urls is None:
        urls = [image.url for image in product.images]
    return ProductOut(**product.to_dict(), images=list(urls))


class ProductsService:
    """Service for product catalog operations.

    Example usage:
        service = ProductsService(async_session_factory)
        created = await service.create(ProductCreate(title="Desk", images=["a.jpg"]))
        same = await service.find_one_plain(created.slug)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        logger: Any = None,
    ) -> None:
        """Initialize service.

        Args:
            session_factory: Factory for the sessions each operation opens.
            logger: Logger for unexpected failures. Defaults to a structlog logger.
        """
        self.session_factory = session_factory
        self.logger = logger or structlog.get_logger().bind(service="ProductsService")

    async def create(self, data: ProductCreate) -> ProductOut:
        """Create a product together with its images.

        Args:
            data: Product fields and image URLs.

        Returns:
            Created product, flattened.

        Raises:
            DuplicateKeyError: If the slug is already taken.
            InternalError: On any other persistence failure.
        """
        fields = data.model_dump(mode="json")
        urls = fields.pop("images")
        fields["slug"] = fields.get("slug") or slugify(fields["title"])

        async with self.session_factory() as session:
            repo = ProductRepository(session)
            try:
                product = await repo.save(Product(**fields))
                await repo.add_images(product.id, urls)
                await session.commit()
            except Exception as e:
                await session.rollback()
                self._handle_db_exception(e)

        self.logger.info("Product created", product_id=product.id, image_count=len(urls))
        return flatten(product, urls)

    async def find_all(self, pagination: PaginationParams | None = None) -> list[ProductOut]:
        """List products in creation order.

        Args:
            pagination: Limit and offset, defaults when omitted.

        Returns:
            Page of flattened products.
        """
        pagination = pagination or PaginationParams()
        async with self.session_factory() as session:
            products = await ProductRepository(session).find_all(
                limit=pagination.limit,
                offset=pagination.offset,
            )
            return [flatten(product) for product in products]

    async def find_one(self, term: str) -> Product:
        """Find a product by id, title or slug.

        A UUID term is looked up by id; anything else matches the title
        case-insensitively or the slug exactly.

        Args:
            term: Lookup term.

        Returns:
            Product with images loaded.

        Raises:
            ProductNotFoundError: If nothing matches.
        """
        async with self.session_factory() as session:
            return await self._find_one(ProductRepository(session), term)

    async def find_one_plain(self, term: str) -> ProductOut:
        """Find a product and flatten its images.

        Raises:
            ProductNotFoundError: If nothing matches.
        """
        return flatten(await self.find_one(term))

    async def update(self, product_id: str, data: ProductUpdate) -> ProductOut:
        """Apply a partial update, optionally replacing all images.

        Scalar fields are merged first. Image deletion, the product save and
        the new image rows then commit or roll back together. The session is
        released exactly once whatever happens.

        Args:
            product_id: Product ID.
            data: Fields to change; ``images`` replaces the full image set.

        Returns:
            Updated product, flattened.

        Raises:
            ProductNotFoundError: If the product does not exist.
            DuplicateKeyError: If the new slug is already taken.
            InternalError: On any other persistence failure.
        """
        fields, urls = data.changes()
        if not is_uuid(product_id):
            raise ProductNotFoundError(product_id)

        session = self.session_factory()
        try:
            repo = ProductRepository(session)
            product = await repo.preload(product_id.lower(), fields)
            if product is None:
                raise ProductNotFoundError(product_id)

            try:
                if urls is not None:
                    await repo.delete_images(product.id)
                await repo.save(product)
                if urls is not None:
                    await repo.add_images(product.id, urls)
                await session.commit()
            except Exception as e:
                await session.rollback()
                self._handle_db_exception(e)
        finally:
            await session.close()

        self.logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(fields),
            images_replaced=urls is not None,
        )
        return await self.find_one_plain(product_id)

    async def remove(self, product_id: str) -> None:
        """Delete a product and its images.

        Raises:
            ProductNotFoundError: If nothing matches.
        """
        async with self.session_factory() as session:
            repo = ProductRepository(session)
            product = await self._find_one(repo, product_id)
            await repo.delete(product)
            await session.commit()

        self.logger.info("Product removed", product_id=product_id)

    async def delete_all_products(self) -> DeleteAllResult:
        """Delete every product and image.

        Administrative operation; the HTTP layer gates access to it.

        Returns:
            Number of deleted products.

        Raises:
            InternalError: On persistence failure.
        """
        async with self.session_factory() as session:
            try:
                deleted = await ProductRepository(session).delete_all()
                await session.commit()
            except Exception as e:
                await session.rollback()
                self._handle_db_exception(e)

        self.logger.warning("All products deleted", deleted=deleted)
        return DeleteAllResult(deleted=deleted)

    async def _find_one(self, repo: ProductRepository, term: str) -> Product:
        if is_uuid(term):
            product = await repo.get_by_id(term.lower())
        else:
            product = await repo.get_by_title_or_slug(term)

        if product is None:
            raise ProductNotFoundError(term)
        return product

    def _handle_db_exception(self, error: Exception) -> NoReturn:
        """Translate a persistence failure into a domain error.

        Uniqueness violations become DuplicateKeyError carrying the database
        detail. Everything else is logged and surfaces as a generic
        InternalError.
        """
        if isinstance(error, DomainError):
            raise error

        if _is_unique_violation(error):
            raise DuplicateKeyError(_violation_detail(error)) from error

        self.logger.error(
            "Unexpected database error",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )
        raise InternalError() from error


def get_products_service() -> ProductsService:
    """Get products service bound to the application session factory.

    Returns:
        ProductsService instance.
    """
    return ProductsService(async_session_factory)
