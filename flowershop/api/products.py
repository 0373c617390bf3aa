"""Product API endpoints.

Provides endpoints for building a store's catalog:
- POST /products - create a flower, bouquet, basket or package
- POST /products/{id}/flowers - add flowers to a bouquet, basket or package

The acting administrator is identified by the X-Admin-ID header.
"""

from collections.abc import AsyncGenerator
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Path, Request, status

from flowershop.api.schemas import (
    AddFlowersRequest,
    CompositionSchema,
    ErrorResponse,
    FlowerAttributesSchema,
    PackagingSchema,
    ProductCreateRequest,
    ProductResponse,
)
from flowershop.application.product_service import ProductService
from flowershop.domain.entities import Product
from flowershop.domain.exceptions import ErrorCode
from flowershop.domain.value_objects import AdminId, FlowerQuantity, ProductDraft, ProductId
from flowershop.infrastructure.config import settings
from flowershop.infrastructure.database import async_session_factory
from flowershop.infrastructure.memory import (
    InMemoryAdminDirectory,
    InMemoryProductStore,
    get_memory_catalog,
)
from flowershop.infrastructure.repositories import SqlAdminDirectory, SqlProductStore

router = APIRouter(prefix="/products", tags=["Products"])
logger = structlog.get_logger()

# Ids must contain a non-whitespace character
NON_BLANK = r"\S"

AdminHeader = Annotated[str, Header(alias="X-Admin-ID", pattern=NON_BLANK)]


ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.ADMIN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ADMIN_HAS_NO_STORE: status.HTTP_403_FORBIDDEN,
    ErrorCode.PARENT_PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FLOWER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


# ============================================================================
# Dependencies
# ============================================================================


async def get_service(request: Request) -> AsyncGenerator[ProductService, None]:
    """Get product service with request ID, bound to the configured storage."""
    request_id = getattr(request.state, "request_id", None)

    if settings.catalog_backend == "memory":
        catalog = get_memory_catalog()
        yield ProductService(
            InMemoryAdminDirectory(catalog),
            InMemoryProductStore(catalog),
            logger=logger,
            request_id=request_id,
        )
        return

    async with async_session_factory() as session:
        yield ProductService(
            SqlAdminDirectory(session),
            SqlProductStore(session),
            logger=logger,
            request_id=request_id,
        )


# ============================================================================
# Converters
# ============================================================================


def request_to_draft(request: ProductCreateRequest) -> ProductDraft:
    """Convert ProductCreateRequest to a ProductDraft."""
    return ProductDraft(
        shape=request.shape,
        name=request.name,
        description=request.description,
        price_cents=request.price,
        variety=request.variety,
        colors=frozenset(request.colors) if request.colors is not None else None,
        origin_country=request.origin_country,
        fragrance_intensity=request.fragrance_intensity,
        flowers_count=request.flowers_count,
        is_packaging_required=request.is_packaging_required,
        packaging_mode=request.packaging_mode,
        packaging_color=request.packaging_color,
    )


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product entity to response schema."""
    flower_attributes = None
    if product.flower_attributes is not None:
        attributes = product.flower_attributes
        flower_attributes = FlowerAttributesSchema(
            variety=attributes.variety,
            colors=sorted(attributes.colors, key=lambda c: c.value),
            origin_country=attributes.origin_country,
            fragrance_intensity=attributes.fragrance_intensity,
        )

    return ProductResponse(
        id=str(product.id),
        store_id=str(product.store_id),
        shape=product.shape,
        name=product.name,
        description=product.description,
        price=product.price_cents,
        flower_attributes=flower_attributes,
        flowers_count=product.flowers_count,
        packaging=PackagingSchema(
            is_required=product.packaging.is_required,
            mode=product.packaging.mode,
            color=product.packaging.color,
        ),
        compositions=[
            CompositionSchema(flower_id=str(edge.child_id), quantity=edge.quantity)
            for edge in product.compositions
        ],
        total_flowers=product.total_flowers(),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def rejection(
    error_code: ErrorCode | None,
    message: str | None,
    details: dict[str, Any],
) -> HTTPException:
    """Build the HTTPException for a failed service result."""
    code = error_code or ErrorCode.PERSISTENCE_ERROR
    return HTTPException(
        status_code=ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST),
        detail={
            "error_code": code.value,
            "message": message or "Request rejected",
            "details": [
                {"field": name, "message": message or ""}
                for name in details.get("fields", [])
            ],
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Create a flower, bouquet, basket or package in the admin's store.",
)
async def create_product(
    request: ProductCreateRequest,
    service: Annotated[ProductService, Depends(get_service)],
    admin_id: AdminHeader,
) -> ProductResponse:
    """Create a product.

    Args:
        request: Product creation request.
        service: Product service.
        admin_id: Acting administrator.

    Returns:
        Created product.

    Raises:
        HTTPException: If the admin is unknown or the product breaks a shape rule.
    """
    result = await service.create_product(AdminId(admin_id), request_to_draft(request))

    if not result.success or not result.product:
        raise rejection(result.error_code, result.error, result.details)

    return product_to_response(result.product)


@router.post(
    "/{product_id}/flowers",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Add flowers to product",
    description=(
        "Add flowers with quantities to a bouquet, basket or package. "
        "Either every flower is added or none is."
    ),
)
async def add_flowers(
    product_id: Annotated[str, Path(pattern=NON_BLANK)],
    request: AddFlowersRequest,
    service: Annotated[ProductService, Depends(get_service)],
    admin_id: AdminHeader,
) -> ProductResponse:
    """Add flowers to a composite product.

    Args:
        product_id: Composite product identifier.
        request: Flowers with quantities.
        service: Product service.
        admin_id: Acting administrator.

    Returns:
        The product with its full composition.

    Raises:
        HTTPException: If the product or a flower is not found in the admin's store.
    """
    flowers = [
        FlowerQuantity(flower_id=ProductId(item.flower_id), quantity=item.quantity)
        for item in request.flowers
    ]

    result = await service.add_flowers_to_product(AdminId(admin_id), ProductId(product_id), flowers)

    if not result.success or not result.product:
        raise rejection(result.error_code, result.error, result.details)

    return product_to_response(result.product)
