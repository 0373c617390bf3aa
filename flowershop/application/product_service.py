"""Product application service.

Orchestrates the two catalog use cases:
- Creating a product of one of the four shapes for the admin's store
- Adding flowers (with quantities) to a bouquet, basket or package

Rule violations come back as result objects carrying an error code;
only storage failures are raised.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Self

import structlog
from structlog.typing import FilteringBoundLogger

from flowershop.application.ports import AdminDirectory, ProductStore
from flowershop.domain.entities import Administrator, Product
from flowershop.domain.exceptions import (
    AdminHasNoStoreError,
    AdminNotFoundError,
    DomainError,
    ErrorCode,
    FlowerNotFoundError,
    InvalidParentShapeError,
    InvalidQuantityError,
    ParentProductNotFoundError,
    PersistenceError,
)
from flowershop.domain.tenancy import scoped_lookup
from flowershop.domain.validation import validate_draft
from flowershop.domain.value_objects import (
    AdminId,
    FlowerQuantity,
    ProductDraft,
    ProductId,
    ProductShape,
)


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class CreateProductResult:
    """Result of creating a product."""

    product: Product | None = None
    success: bool = True
    error: str | None = None
    error_code: ErrorCode | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: DomainError) -> Self:
        return cls(
            success=False,
            error=error.message,
            error_code=error.code,
            details=error.details,
        )


@dataclass
class AddFlowersResult:
    """Result of adding flowers to a composite product."""

    product: Product | None = None
    added: int = 0
    success: bool = True
    error: str | None = None
    error_code: ErrorCode | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: DomainError) -> Self:
        return cls(
            success=False,
            error=error.message,
            error_code=error.code,
            details=error.details,
        )


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Application service for the store catalog.

    Handles:
    - Product creation with per-shape field and packaging rules
    - Composition of flowers into composite products, all-or-nothing
    """

    def __init__(
        self,
        admins: AdminDirectory,
        products: ProductStore,
        logger: FilteringBoundLogger | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            admins: Administrator directory.
            products: Product store.
            logger: Logger receiving the service's events.
            request_id: Request ID for correlation.
        """
        self.admins = admins
        self.products = products
        self.request_id = request_id
        self.logger = (logger or structlog.get_logger()).bind(request_id=request_id)

    async def create_product(
        self,
        admin_id: AdminId,
        draft: ProductDraft,
    ) -> CreateProductResult:
        """Create a product in the acting admin's store.

        Args:
            admin_id: Acting administrator.
            draft: Proposed product.

        Returns:
            CreateProductResult with the stored product.

        Raises:
            PersistenceError: If the product could not be stored.
        """
        log = self.logger.bind(operation="create_product", admin_id=str(admin_id))

        admin, error = await self._resolve_admin(admin_id, log)
        if error is None:
            error = validate_draft(draft)
        if error is not None:
            log.warning(
                "Product creation rejected",
                shape=draft.shape,
                error_code=error.code.value,
                error=error.message,
            )
            return CreateProductResult.from_error(error)

        shape = ProductShape.parse(draft.shape)
        product = Product.create(
            store_id=admin.store.id,
            shape=shape,
            name=draft.name,
            description=draft.description,
            price_cents=draft.price_cents,
            flower_attributes=draft.flower_attributes() if shape is ProductShape.FLOWER else None,
            flowers_count=draft.flowers_count,
            packaging=draft.packaging(),
        )

        try:
            async with self.products.transaction():
                stored = await self.products.create_product(product)
        except PersistenceError as e:
            log.error(
                "Failed to create product",
                store_id=str(admin.store.id),
                error_code=e.code.value,
                error=e.message,
            )
            raise

        events = product.collect_events()
        log.info(
            "Product created",
            product_id=str(stored.id),
            store_id=str(stored.store_id),
            shape=stored.shape.value,
            events=[event.event_type for event in events],
        )
        return CreateProductResult(product=stored)

    async def add_flowers_to_product(
        self,
        admin_id: AdminId,
        product_id: ProductId,
        flowers: Sequence[FlowerQuantity],
    ) -> AddFlowersResult:
        """Add flowers to a bouquet, basket or package.

        Every flower must belong to the admin's store. One edge is created
        per requested entry, in request order; repeated flower ids are not
        merged. If any flower cannot be resolved nothing is stored.

        Args:
            admin_id: Acting administrator.
            product_id: Composite product to add flowers to.
            flowers: Flower ids with quantities.

        Returns:
            AddFlowersResult with the updated product.

        Raises:
            PersistenceError: If the edges could not be stored.
        """
        log = self.logger.bind(
            operation="add_flowers_to_product",
            admin_id=str(admin_id),
            product_id=str(product_id),
        )

        def reject(error: DomainError) -> AddFlowersResult:
            log.warning(
                "Adding flowers rejected",
                error_code=error.code.value,
                error=error.message,
            )
            return AddFlowersResult.from_error(error)

        admin, error = await self._resolve_admin(admin_id, log)
        if error is not None:
            return reject(error)

        for item in flowers:
            if item.quantity <= 0:
                return reject(InvalidQuantityError(item.quantity, flower_id=str(item.flower_id)))

        try:
            async with self.products.transaction():
                parent = await self.products.find_product(scoped_lookup(admin, product_id))
                if parent is None:
                    return reject(ParentProductNotFoundError(str(product_id)))

                if not parent.is_composite:
                    return reject(InvalidParentShapeError(str(parent.id), parent.shape.value))

                children = []
                for item in flowers:
                    child = await self.products.find_product(
                        scoped_lookup(admin, item.flower_id, shape=ProductShape.FLOWER)
                    )
                    if child is None:
                        return reject(FlowerNotFoundError(str(item.flower_id)))
                    children.append((child, item.quantity))

                edges = parent.add_flowers(children)
                await self.products.save_composition_edges(edges)
        except PersistenceError as e:
            log.error(
                "Failed to add flowers to product",
                store_id=str(admin.store.id),
                error_code=e.code.value,
                error=e.message,
            )
            raise

        events = parent.collect_events()
        log.info(
            "Flowers added to product",
            store_id=str(parent.store_id),
            added=len(edges),
            compositions=len(parent.compositions),
            events=[event.event_type for event in events],
        )
        return AddFlowersResult(product=parent, added=len(edges))

    async def _resolve_admin(
        self,
        admin_id: AdminId,
        log: FilteringBoundLogger,
    ) -> tuple[Administrator | None, DomainError | None]:
        """Fetch the acting admin and make sure they have a store.

        Raises:
            PersistenceError: If the directory could not be read.
        """
        try:
            admin = await self.admins.find_admin_with_store(admin_id)
        except PersistenceError as e:
            log.error(
                "Failed to look up admin",
                error_code=e.code.value,
                error=e.message,
            )
            raise

        if admin is None:
            return None, AdminNotFoundError(str(admin_id))
        if admin.store is None:
            return admin, AdminHasNoStoreError(str(admin_id))
        return admin, None
