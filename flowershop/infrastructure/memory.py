"""In-memory catalog storage.

Implements the AdminDirectory and ProductStore ports with plain
dictionaries, for tests and for running the API without a database.
Writes made inside ``transaction()`` are staged and only applied when
the block exits without an error.
"""

from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace

from flowershop.domain.entities import Administrator, CompositionEdge, Product, Store
from flowershop.domain.tenancy import ProductLookup
from flowershop.domain.value_objects import AdminId, ProductId, StoreId


@dataclass
class InMemoryCatalog:
    """Shared state behind the in-memory directory and product store."""

    stores: dict[StoreId, Store] = field(default_factory=dict)
    admins: dict[AdminId, Administrator] = field(default_factory=dict)
    products: dict[ProductId, Product] = field(default_factory=dict)
    edges: list[CompositionEdge] = field(default_factory=list)

    def add_store(self, name: str = "", store_id: str | None = None) -> Store:
        """Register a store."""
        store = Store(id=StoreId(store_id) if store_id else StoreId.generate(), name=name)
        self.stores[store.id] = store
        return store

    def add_admin(self, store: Store | None = None, admin_id: str | None = None) -> Administrator:
        """Register an administrator, optionally attached to a store."""
        admin = Administrator(
            id=AdminId(admin_id) if admin_id else AdminId.generate(),
            store=store,
        )
        self.admins[admin.id] = admin
        return admin

    def add_product(self, product: Product) -> Product:
        """Store a product row. Its compositions are kept as separate edges."""
        self.products[product.id] = replace(product, compositions=[])
        self.edges.extend(product.compositions)
        return product

    def compositions_of(self, product_id: ProductId) -> list[CompositionEdge]:
        """Edges owned by a product, in insertion order."""
        return [edge for edge in self.edges if edge.parent_id == product_id]

    def load_product(self, product_id: ProductId) -> Product | None:
        """Return a detached copy of a product with its compositions."""
        row = self.products.get(product_id)
        if row is None:
            return None
        return replace(row, compositions=self.compositions_of(product_id))


class InMemoryAdminDirectory:
    """Administrator lookups over an InMemoryCatalog."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    async def find_admin_with_store(self, admin_id: AdminId) -> Administrator | None:
        return self.catalog.admins.get(admin_id)


class InMemoryProductStore:
    """Product persistence over an InMemoryCatalog."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog
        self._pending: list[Callable[[], None]] | None = None

    async def find_product(self, lookup: ProductLookup) -> Product | None:
        row = self.catalog.products.get(lookup.product_id)
        if row is None or not lookup.matches(row.id, row.store_id, row.shape):
            return None
        return self.catalog.load_product(row.id)

    async def create_product(self, product: Product) -> Product:
        self._write(lambda: self.catalog.add_product(product))
        return product

    async def save_composition_edges(self, edges: Sequence[CompositionEdge]) -> None:
        batch = list(edges)
        self._write(lambda: self.catalog.edges.extend(batch))

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Apply the writes staged in the block only if it succeeds."""
        self._pending = []
        try:
            yield
        except Exception:
            self._pending = None
            raise

        pending, self._pending = self._pending, None
        for write in pending:
            write()

    def _write(self, write: Callable[[], None]) -> None:
        if self._pending is None:
            write()
        else:
            self._pending.append(write)


# Global catalog instance
_catalog: InMemoryCatalog | None = None


def get_memory_catalog() -> InMemoryCatalog:
    """Get in-memory catalog singleton."""
    global _catalog
    if _catalog is None:
        _catalog = InMemoryCatalog()
    return _catalog


def reset_memory_catalog() -> None:
    """Reset in-memory catalog (for testing)."""
    global _catalog
    _catalog = InMemoryCatalog()
