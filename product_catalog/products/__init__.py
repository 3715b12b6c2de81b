"""Product catalog.

Products with owned image URLs: models, schemas, repository and service.
"""

from product_catalog.products.models import Product, ProductImage
from product_catalog.products.repository import ProductRepository
from product_catalog.products.schemas import (
    DeleteAllResult,
    Gender,
    PaginationParams,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from product_catalog.products.service import ProductsService, flatten, get_products_service

__all__ = [
    # Models
    "Product",
    "ProductImage",
    # Schemas
    "DeleteAllResult",
    "Gender",
    "PaginationParams",
    "ProductCreate",
    "ProductOut",
    "ProductUpdate",
    # Repository
    "ProductRepository",
    # Service
    "ProductsService",
    "flatten",
    "get_products_service",
]
