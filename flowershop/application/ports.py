"""Collaborator contracts used by the application services.

The services only talk to persistence through these protocols. The
SQLAlchemy implementations live in ``flowershop.infrastructure.repositories``
and the in-memory ones in ``flowershop.infrastructure.memory``.
"""

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from flowershop.domain.entities import Administrator, CompositionEdge, Product
from flowershop.domain.tenancy import ProductLookup
from flowershop.domain.value_objects import AdminId


class AdminDirectory(Protocol):
    """Looks up administrators together with their store."""

    async def find_admin_with_store(self, admin_id: AdminId) -> Administrator | None:
        ...


class ProductStore(Protocol):
    """Reads and writes products and composition edges.

    Writes issued inside ``transaction()`` become durable together when the
    block exits normally and are discarded when it raises.
    """

    async def find_product(self, lookup: ProductLookup) -> Product | None:
        ...

    async def create_product(self, product: Product) -> Product:
        ...

    async def save_composition_edges(self, edges: Sequence[CompositionEdge]) -> None:
        ...

    def transaction(self) -> AbstractAsyncContextManager[None]:
        ...
