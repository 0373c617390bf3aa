"""Store isolation.

Every product lookup made on behalf of an administrator is scoped to the
administrator's store. The store id travels inside the lookup itself so
the persistence layer filters on it; a product of another store looks
exactly like a product that does not exist.
"""

from dataclasses import dataclass

from flowershop.domain.base import ValueObject
from flowershop.domain.entities import Administrator
from flowershop.domain.exceptions import AdminHasNoStoreError
from flowershop.domain.value_objects import ProductId, ProductShape, StoreId


@dataclass(frozen=True)
class ProductLookup(ValueObject):
    """Filter for a single product lookup.

    Attributes:
        product_id: Product to fetch.
        store_id: Restrict the lookup to this store.
        shape: Restrict the lookup to this shape.
    """

    product_id: ProductId
    store_id: StoreId | None = None
    shape: ProductShape | None = None

    def matches(self, product_id: ProductId, store_id: StoreId, shape: ProductShape) -> bool:
        """Check a stored product's identity, store and shape against the filter."""
        if product_id != self.product_id:
            return False
        if self.store_id is not None and store_id != self.store_id:
            return False
        if self.shape is not None and shape is not self.shape:
            return False
        return True


def is_visible_to(store_id: StoreId, admin: Administrator) -> bool:
    """Check if an entity owned by ``store_id`` is visible to ``admin``."""
    return admin.store is not None and admin.store.id == store_id


def scoped_lookup(
    admin: Administrator,
    product_id: ProductId,
    shape: ProductShape | None = None,
) -> ProductLookup:
    """Build a lookup restricted to the administrator's store.

    Raises:
        AdminHasNoStoreError: If the administrator has no store to scope to.
    """
    if admin.store is None:
        raise AdminHasNoStoreError(str(admin.id))
    return ProductLookup(product_id=product_id, store_id=admin.store.id, shape=shape)
