"""SQLAlchemy repositories for the catalog.

Implements the AdminDirectory and ProductStore ports on top of an async
session. Store scoping is part of every product query; driver errors are
wrapped in PersistenceError.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from sqlalchemy import Select, and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flowershop.domain.entities import Administrator, CompositionEdge, Product, Store
from flowershop.domain.exceptions import PersistenceError
from flowershop.domain.tenancy import ProductLookup
from flowershop.domain.value_objects import (
    AdminId,
    Color,
    FlowerAttributes,
    FragranceIntensity,
    Packaging,
    PackagingMode,
    ProductId,
    ProductShape,
    StoreId,
)
from flowershop.infrastructure.models import (
    AdminModel,
    ProductCompositionModel,
    ProductModel,
    StoreModel,
)


# ============================================================================
# Mappers
# ============================================================================


def store_from_model(model: StoreModel) -> Store:
    return Store(id=StoreId(model.id), name=model.name)


def admin_from_model(model: AdminModel) -> Administrator:
    return Administrator(
        id=AdminId(model.id),
        store=store_from_model(model.store) if model.store else None,
    )


def edge_from_model(model: ProductCompositionModel) -> CompositionEdge:
    return CompositionEdge(
        parent_id=ProductId(model.parent_id),
        child_id=ProductId(model.child_id),
        store_id=StoreId(model.store_id),
        quantity=model.quantity,
    )


def edge_to_model(edge: CompositionEdge) -> ProductCompositionModel:
    return ProductCompositionModel(
        parent_id=str(edge.parent_id),
        child_id=str(edge.child_id),
        store_id=str(edge.store_id),
        quantity=edge.quantity,
    )


def product_from_model(model: ProductModel) -> Product:
    """Rebuild a Product aggregate from its row and composition rows."""
    shape = ProductShape(model.shape)

    flower_attributes = None
    if shape is ProductShape.FLOWER:
        flower_attributes = FlowerAttributes(
            variety=model.variety,
            colors=frozenset(Color(c) for c in model.colors or ()),
            origin_country=model.origin_country,
            fragrance_intensity=(
                FragranceIntensity(model.fragrance_intensity)
                if model.fragrance_intensity
                else None
            ),
        )

    return Product(
        id=ProductId(model.id),
        shape=shape,
        store_id=StoreId(model.store_id),
        name=model.name,
        description=model.description,
        price_cents=model.price_cents,
        flower_attributes=flower_attributes,
        flowers_count=model.flowers_count,
        packaging=Packaging(
            is_required=model.is_packaging_required,
            mode=PackagingMode(model.packaging_mode),
            color=Color(model.packaging_color) if model.packaging_color else None,
        ),
        compositions=[edge_from_model(row) for row in model.compositions],
        version=model.version,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def product_to_model(product: Product) -> ProductModel:
    """Build a new row for a product that has not been stored yet."""
    attributes = product.flower_attributes
    return ProductModel(
        id=str(product.id),
        store_id=str(product.store_id),
        shape=product.shape.value,
        name=product.name,
        description=product.description,
        price_cents=product.price_cents,
        variety=attributes.variety if attributes else None,
        colors=sorted(c.value for c in attributes.colors) if attributes else None,
        origin_country=attributes.origin_country if attributes else None,
        fragrance_intensity=(
            attributes.fragrance_intensity.value
            if attributes and attributes.fragrance_intensity
            else None
        ),
        flowers_count=product.flowers_count,
        is_packaging_required=product.packaging.is_required,
        packaging_mode=product.packaging.mode.value,
        packaging_color=product.packaging.color.value if product.packaging.color else None,
        version=product.version,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ============================================================================
# Queries
# ============================================================================


def product_query(lookup: ProductLookup) -> Select[tuple[ProductModel]]:
    """Select the product a lookup names, compositions included.

    A lookup carrying a store id never matches another store's row.
    """
    conditions = [ProductModel.id == str(lookup.product_id)]

    if lookup.store_id is not None:
        conditions.append(ProductModel.store_id == str(lookup.store_id))

    if lookup.shape is not None:
        conditions.append(ProductModel.shape == lookup.shape.value)

    return (
        select(ProductModel)
        .where(and_(*conditions))
        .options(selectinload(ProductModel.compositions))
    )


# ============================================================================
# Repositories
# ============================================================================


class SqlAdminDirectory:
    """Administrator lookups backed by the ``admins`` table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_admin_with_store(self, admin_id: AdminId) -> Administrator | None:
        """Get an admin by ID with their store eagerly loaded.

        Args:
            admin_id: Admin ID.

        Returns:
            Administrator if found, None otherwise.
        """
        query = (
            select(AdminModel)
            .where(AdminModel.id == str(admin_id))
            .options(selectinload(AdminModel.store))
        )
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise PersistenceError("find_admin_with_store", str(e)) from e

        model = result.scalar_one_or_none()
        return admin_from_model(model) if model else None


class SqlProductStore:
    """Product persistence backed by ``products`` and ``product_compositions``.

    Example usage:
        async with async_session_factory() as session:
            store = SqlProductStore(session)
            async with store.transaction():
                product = await store.find_product(lookup)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_product(self, lookup: ProductLookup) -> Product | None:
        """Get a product matching the lookup, with its compositions.

        Args:
            lookup: Product id plus optional store and shape restrictions.

        Returns:
            Product if found, None otherwise.
        """
        try:
            result = await self.session.execute(product_query(lookup))
        except SQLAlchemyError as e:
            raise PersistenceError("find_product", str(e)) from e

        model = result.scalar_one_or_none()
        return product_from_model(model) if model else None

    async def create_product(self, product: Product) -> Product:
        """Insert a new product.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product_to_model(product))
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError("create_product", str(e)) from e
        return product

    async def save_composition_edges(self, edges: Sequence[CompositionEdge]) -> None:
        """Insert composition edges in the given order.

        Args:
            edges: Edges to save.
        """
        self.session.add_all([edge_to_model(edge) for edge in edges])
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError("save_composition_edges", str(e)) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit everything written in the block, or roll it all back."""
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError("commit", str(e)) from e
        except Exception:
            await self.session.rollback()
            raise
