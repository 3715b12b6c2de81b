"""Product API endpoints.

Maps HTTP routes onto ProductsService. Domain errors raised by the service
are turned into responses by the handlers registered in ``main``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from product_catalog.api.schemas import ErrorResponse
from product_catalog.domain.exceptions import BulkDeleteDisabledError
from product_catalog.infrastructure.config import settings
from product_catalog.products.schemas import (
    DeleteAllResult,
    PaginationParams,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from product_catalog.products.service import ProductsService, get_products_service

router = APIRouter(prefix="/products", tags=["Products"])

Service = Annotated[ProductsService, Depends(get_products_service)]


@router.post(
    "",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(data: ProductCreate, service: Service) -> ProductOut:
    """Create a product with its image URLs."""
    return await service.create(data)


@router.get(
    "",
    response_model=list[ProductOut],
    summary="List products",
)
async def list_products(
    service: Service,
    limit: Annotated[int, Query(ge=1)] = settings.default_page_size,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[ProductOut]:
    """List products in creation order."""
    return await service.find_all(PaginationParams(limit=limit, offset=offset))


@router.get(
    "/{term}",
    response_model=ProductOut,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
    description="Look up a product by id, title (case-insensitive) or slug.",
)
async def get_product(term: str, service: Service) -> ProductOut:
    """Get a product by id, title or slug."""
    return await service.find_one_plain(term)


@router.patch(
    "/{product_id}",
    response_model=ProductOut,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    service: Service,
) -> ProductOut:
    """Partially update a product.

    Sending ``images`` replaces every existing image.
    """
    return await service.update(str(product_id), data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(product_id: UUID, service: Service) -> Response:
    """Delete a product and its images."""
    await service.remove(str(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "",
    response_model=DeleteAllResult,
    responses={
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete all products",
    description="Maintenance operation. Requires ALLOW_BULK_DELETE and confirm=true.",
)
async def delete_all_products(
    service: Service,
    confirm: Annotated[bool, Query()] = False,
) -> DeleteAllResult:
    """Delete every product.

    Raises:
        BulkDeleteDisabledError: If the gate is closed or confirm is missing.
    """
    if not settings.allow_bulk_delete:
        raise BulkDeleteDisabledError("Bulk delete is disabled on this deployment")
    if not confirm:
        raise BulkDeleteDisabledError("Pass confirm=true to delete all products")
    return await service.delete_all_products()
