"""Events recorded by the Product aggregate.

The service collects them after a successful commit and names them in
its log lines, so a rolled back change never shows up as an event.
"""

from dataclasses import dataclass
from typing import ClassVar

from flowershop.domain.base import DomainEvent
from flowershop.domain.value_objects import ProductId, ProductShape, StoreId


@dataclass(frozen=True, kw_only=True)
class ProductEvent(DomainEvent):
    """Event about one product in one store."""

    product_id: ProductId
    store_id: StoreId


@dataclass(frozen=True, kw_only=True)
class ProductCreated(ProductEvent):
    event_type: ClassVar[str] = "product.created"

    shape: ProductShape


@dataclass(frozen=True, kw_only=True)
class FlowersAddedToProduct(ProductEvent):
    """Composition edges were appended to a bouquet, basket or package.

    ``flowers`` holds ``(flower id, quantity)`` pairs in request order.
    """

    event_type: ClassVar[str] = "product.flowers_added"

    flowers: tuple[tuple[ProductId, int], ...]
