"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from flowershop.application.ports import AdminDirectory, ProductStore
from flowershop.application.product_service import (
    AddFlowersResult,
    CreateProductResult,
    ProductService,
)

__all__ = [
    "AddFlowersResult",
    "AdminDirectory",
    "CreateProductResult",
    "ProductService",
    "ProductStore",
]
