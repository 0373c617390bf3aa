"""Domain entities for the catalog.

Entities are domain objects with identity that persists across state
changes. ``Product`` is the aggregate root; it exclusively owns its
composition edges, which only ever grow.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from flowershop.domain.base import AggregateRoot, Entity, ValueObject
from flowershop.domain.events import FlowersAddedToProduct, ProductCreated
from flowershop.domain.exceptions import (
    FieldNotAllowedError,
    FlowerNotFoundError,
    ForbiddenFieldsForShapeError,
    InvalidPackagingError,
    InvalidParentShapeError,
    InvalidQuantityError,
    MissingMandatoryPackagingError,
)
from flowershop.domain.value_objects import (
    FLOWER_ONLY_FIELDS,
    AdminId,
    FlowerAttributes,
    Packaging,
    ProductId,
    ProductShape,
    StoreId,
)


# ============================================================================
# Store and Administrator
# ============================================================================


@dataclass(eq=False)
class Store(Entity[StoreId]):
    """A tenant of the catalog. Every product belongs to exactly one store."""

    id: StoreId
    name: str = ""


@dataclass(eq=False)
class Administrator(Entity[AdminId]):
    """A store administrator acting on the catalog.

    Attributes:
        id: Administrator identifier.
        store: Store the administrator manages, None if unassigned.
    """

    id: AdminId
    store: Store | None = None

    @property
    def store_id(self) -> StoreId | None:
        return self.store.id if self.store else None


# ============================================================================
# Composition Edge
# ============================================================================


@dataclass(frozen=True)
class CompositionEdge(ValueObject):
    """Quantity-weighted link from a composite product to one flower.

    Edges hold the ids of their parent and child; they do not own them.

    Attributes:
        parent_id: The composite product.
        child_id: The flower product.
        store_id: Store shared by parent, child and edge.
        quantity: How many of the flower go into the parent.
    """

    parent_id: ProductId
    child_id: ProductId
    store_id: StoreId
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise InvalidQuantityError(self.quantity, flower_id=str(self.child_id))


# ============================================================================
# Product Aggregate
# ============================================================================


@dataclass(eq=False, kw_only=True)
class Product(AggregateRoot[ProductId]):
    """Product aggregate root.

    Shape and store are fixed at creation. Composition edges are only
    appended, never removed or modified.

    Attributes:
        id: Unique product identifier.
        shape: One of the closed product shapes.
        store_id: Owning store.
        name: Display name.
        description: Optional long description.
        price_cents: Price in cents.
        flower_attributes: Set if and only if the product is a flower.
        flowers_count: Advertised flower count, composites only.
        packaging: Packaging group.
        compositions: Edges to the flowers this product is made of.
    """

    id: ProductId
    shape: ProductShape
    store_id: StoreId
    name: str
    description: str | None = None
    price_cents: int = 0
    flower_attributes: FlowerAttributes | None = None
    flowers_count: int | None = None
    packaging: Packaging = field(default_factory=Packaging.none)
    compositions: list[CompositionEdge] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._check_invariants()

    @classmethod
    def create(
        cls,
        store_id: StoreId,
        shape: ProductShape,
        name: str,
        packaging: Packaging,
        description: str | None = None,
        price_cents: int = 0,
        flower_attributes: FlowerAttributes | None = None,
        flowers_count: int | None = None,
        product_id: ProductId | None = None,
    ) -> "Product":
        """Create a new product and record the creation event.

        Flowers always get an attribute group, even an empty one.

        Raises:
            DomainError: If the fields break one of the shape invariants.
        """
        if shape is ProductShape.FLOWER and flower_attributes is None:
            flower_attributes = FlowerAttributes()

        product = cls(
            id=product_id or ProductId.generate(),
            shape=shape,
            store_id=store_id,
            name=name,
            description=description,
            price_cents=price_cents,
            flower_attributes=flower_attributes,
            flowers_count=flowers_count,
            packaging=packaging,
        )
        product.record(ProductCreated(product_id=product.id, store_id=store_id, shape=shape))
        return product

    def _check_invariants(self) -> None:
        if self.shape is ProductShape.FLOWER:
            if self.flower_attributes is None:
                raise ValueError(f"Flower product {self.id} has no flower attributes")
            if self.flowers_count is not None:
                raise FieldNotAllowedError("flowers_count", self.shape.value)
            if self.compositions:
                raise InvalidParentShapeError(str(self.id), self.shape.value)
        elif self.flower_attributes is not None:
            raise ForbiddenFieldsForShapeError(list(FLOWER_ONLY_FIELDS), self.shape.value)

        if self.shape.requires_packaging() and not self.packaging.is_required:
            raise MissingMandatoryPackagingError(["is_packaging_required"], self.shape.value)

        if not self.packaging.is_consistent():
            raise InvalidPackagingError(
                ["packaging_mode", "packaging_color"], self.packaging.is_required
            )

    @property
    def is_composite(self) -> bool:
        return self.shape.is_composite()

    def add_flowers(self, flowers: Iterable[tuple["Product", int]]) -> list[CompositionEdge]:
        """Append one composition edge per (flower, quantity) pair.

        Pairs are kept in the given order and duplicates become distinct
        edges. Either every edge is appended or none is.

        Args:
            flowers: Resolved flower products with their quantities.

        Returns:
            The newly created edges.

        Raises:
            InvalidParentShapeError: If this product is a flower.
            FlowerNotFoundError: If a child is not a flower of this store.
            InvalidQuantityError: If a quantity is not positive.
        """
        if not self.is_composite:
            raise InvalidParentShapeError(str(self.id), self.shape.value)

        edges = []
        for flower, quantity in flowers:
            if flower.shape is not ProductShape.FLOWER or flower.store_id != self.store_id:
                raise FlowerNotFoundError(str(flower.id))
            edges.append(
                CompositionEdge(
                    parent_id=self.id,
                    child_id=flower.id,
                    store_id=self.store_id,
                    quantity=quantity,
                )
            )

        if not edges:
            return edges

        self.compositions.extend(edges)
        self.mark_changed()
        self.record(
            FlowersAddedToProduct(
                product_id=self.id,
                store_id=self.store_id,
                flowers=tuple((e.child_id, e.quantity) for e in edges),
            )
        )
        return edges

    def total_flowers(self) -> int:
        """Sum of quantities over all composition edges."""
        return sum(edge.quantity for edge in self.compositions)
