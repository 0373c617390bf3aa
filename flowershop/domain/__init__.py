"""Domain layer - Entities, value objects, validation rules, domain events.

This module exports the catalog's domain building blocks:

- **Entities**: Product (aggregate root), Store, Administrator
- **Value Objects**: typed IDs, Packaging, FlowerAttributes, ProductDraft
- **Validation**: shape and packaging rules returning errors as values
- **Tenancy**: store-scoped product lookups
- **Exceptions**: the catalog error taxonomy

Example usage:
    from flowershop.domain import ProductDraft, validate_draft

    draft = ProductDraft(shape="basket", name="Spring basket")
    error = validate_draft(draft)
    print(error.code)  # ErrorCode.MISSING_MANDATORY_PACKAGING
"""

# Base classes
from flowershop.domain.base import AggregateRoot, DomainEvent, Entity, ValueObject

# Entities
from flowershop.domain.entities import Administrator, CompositionEdge, Product, Store

# Domain Events
from flowershop.domain.events import FlowersAddedToProduct, ProductCreated, ProductEvent

# Exceptions
from flowershop.domain.exceptions import (
    AdminHasNoStoreError,
    AdminNotFoundError,
    DomainError,
    ErrorCode,
    FieldNotAllowedError,
    FlowerNotFoundError,
    ForbiddenFieldsForShapeError,
    InvalidPackagingError,
    InvalidParentShapeError,
    InvalidQuantityError,
    MissingMandatoryPackagingError,
    ParentProductNotFoundError,
    PersistenceError,
    UnknownShapeError,
)

# Tenancy
from flowershop.domain.tenancy import ProductLookup, is_visible_to, scoped_lookup

# Validation
from flowershop.domain.validation import (
    check_composite_fields,
    check_flower_fields,
    check_packaging,
    validate_draft,
)

# Value Objects
from flowershop.domain.value_objects import (
    COMPOSITE_SHAPES,
    FLOWER_ONLY_FIELDS,
    PACKAGED_SHAPES,
    AdminId,
    Color,
    FlowerAttributes,
    FlowerQuantity,
    FragranceIntensity,
    Packaging,
    PackagingMode,
    ProductDraft,
    ProductId,
    ProductShape,
    StoreId,
)

__all__ = [
    # Base classes
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    # Entities
    "Administrator",
    "CompositionEdge",
    "Product",
    "Store",
    # Value Objects
    "AdminId",
    "Color",
    "FlowerAttributes",
    "FlowerQuantity",
    "FragranceIntensity",
    "Packaging",
    "PackagingMode",
    "ProductDraft",
    "ProductId",
    "ProductShape",
    "StoreId",
    "COMPOSITE_SHAPES",
    "FLOWER_ONLY_FIELDS",
    "PACKAGED_SHAPES",
    # Domain Events
    "ProductEvent",
    "ProductCreated",
    "FlowersAddedToProduct",
    # Tenancy
    "ProductLookup",
    "is_visible_to",
    "scoped_lookup",
    # Validation
    "check_composite_fields",
    "check_flower_fields",
    "check_packaging",
    "validate_draft",
    # Exceptions
    "DomainError",
    "ErrorCode",
    "AdminNotFoundError",
    "AdminHasNoStoreError",
    "UnknownShapeError",
    "FieldNotAllowedError",
    "ForbiddenFieldsForShapeError",
    "InvalidPackagingError",
    "MissingMandatoryPackagingError",
    "ParentProductNotFoundError",
    "FlowerNotFoundError",
    "InvalidParentShapeError",
    "InvalidQuantityError",
    "PersistenceError",
]
