"""Product schemas.

Pydantic models for service inputs and the flattened product shape
returned by every operation.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from product_catalog.infrastructure.config import settings
from product_catalog.products.validators import slugify


class Gender(str, Enum):
    """Target audience of a product."""

    MEN = "men"
    WOMEN = "women"
    KID = "kid"
    UNISEX = "unisex"


class PaginationParams(BaseModel):
    """Pagination parameters."""

    limit: int = Field(default=settings.default_page_size, ge=1, description="Maximum items to return")
    offset: int = Field(default=0, ge=0, description="Items to skip")


class ProductCreate(BaseModel):
    """Input for creating a product."""

    title: str = Field(..., min_length=1, description="Product title")
    price: float = Field(default=0, ge=0, description="Unit price")
    description: str | None = Field(default=None, description="Product description")
    slug: str | None = Field(
        default=None, min_length=1, description="URL-safe identifier, derived from title when omitted"
    )
    stock: int = Field(default=0, ge=0, description="Units available")
    sizes: list[str] = Field(default_factory=list, description="Available sizes")
    gender: Gender = Field(default=Gender.UNISEX, description="Target audience")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    images: list[str] = Field(default_factory=list, description="Image URLs, in display order")

    @model_validator(mode="after")
    def require_usable_slug(self) -> "ProductCreate":
        if not self.title.strip():
            raise ValueError("title cannot be blank")
        source = self.title if self.slug is None else self.slug
        if not slugify(source):
            raise ValueError("slug cannot be empty after normalization")
        return self


class ProductUpdate(BaseModel):
    """Partial update of a product.

    Only explicitly set fields are applied. Supplying ``images`` (even an
    empty list) replaces the whole image set; omitting it leaves images as
    they are.
    """

    title: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    slug: str | None = Field(default=None, min_length=1)
    stock: int | None = Field(default=None, ge=0)
    sizes: list[str] | None = None
    gender: Gender | None = None
    tags: list[str] | None = None
    images: list[str] | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProductUpdate":
        nullable = {"description", "images"}
        for name in self.model_fields_set - nullable:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    @model_validator(mode="after")
    def reject_blank_identifiers(self) -> "ProductUpdate":
        if self.title is not None and not self.title.strip():
            raise ValueError("title cannot be blank")
        if self.slug is not None and not slugify(self.slug):
            raise ValueError("slug cannot be empty after normalization")
        return self

    def changes(self) -> tuple[dict, list[str] | None]:
        """Split the update into scalar changes and the image replacement.

        Returns:
            Tuple of (explicitly set scalar fields, image URLs or None when
            images should stay untouched).
        """
        fields = self.model_dump(exclude_unset=True, mode="json")
        images = fields.pop("images", None)
        return fields, images


class ProductOut(BaseModel):
    """Flattened product: scalar fields plus image URLs."""

    id: str
    title: str
    slug: str
    price: float
    description: str | None = None
    stock: int
    sizes: list[str] = Field(default_factory=list)
    gender: Gender
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class DeleteAllResult(BaseModel):
    """Result of bulk product deletion."""

    deleted: int = Field(..., description="Number of products removed")
