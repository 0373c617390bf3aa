"""Domain exceptions.

The catalog error taxonomy. Validators hand these back as values so the
application layer can turn them into result objects; entities raise them
when one of their invariants would be broken.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable error codes exposed to callers."""

    ADMIN_NOT_FOUND = "ADMIN_NOT_FOUND"
    ADMIN_HAS_NO_STORE = "ADMIN_HAS_NO_STORE"
    UNKNOWN_SHAPE = "UNKNOWN_SHAPE"
    FIELD_NOT_ALLOWED = "FIELD_NOT_ALLOWED"
    FORBIDDEN_FIELDS_FOR_SHAPE = "FORBIDDEN_FIELDS_FOR_SHAPE"
    INVALID_PACKAGING = "INVALID_PACKAGING"
    MISSING_MANDATORY_PACKAGING = "MISSING_MANDATORY_PACKAGING"
    PARENT_PRODUCT_NOT_FOUND = "PARENT_PRODUCT_NOT_FOUND"
    FLOWER_NOT_FOUND = "FLOWER_NOT_FOUND"
    INVALID_PARENT_SHAPE = "INVALID_PARENT_SHAPE"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class DomainError(Exception):
    """Base class for all domain exceptions.

    Attributes:
        code: Error code shared by every instance of the subclass.
        message: Human-readable error message.
        details: Additional error context (offending fields, ids).
    """

    code: ClassVar[ErrorCode]

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def fields(self) -> list[str]:
        """Names of the request fields this error is about."""
        return list(self.details.get("fields", []))


def _join(names: list[str]) -> str:
    return ", ".join(names)


# ============================================================================
# Administrator Errors
# ============================================================================


class AdminNotFoundError(DomainError):
    """Raised when the acting administrator does not exist."""

    code = ErrorCode.ADMIN_NOT_FOUND

    def __init__(self, admin_id: str) -> None:
        super().__init__(
            f"Admin {admin_id} not found",
            details={"admin_id": admin_id},
        )


class AdminHasNoStoreError(DomainError):
    """Raised when the acting administrator is not attached to a store."""

    code = ErrorCode.ADMIN_HAS_NO_STORE

    def __init__(self, admin_id: str) -> None:
        super().__init__(
            f"Admin {admin_id} has no associated store",
            details={"admin_id": admin_id},
        )


# ============================================================================
# Product Shape and Field Errors
# ============================================================================


class UnknownShapeError(DomainError):
    """Raised when a product request carries a shape tag outside the catalog."""

    code = ErrorCode.UNKNOWN_SHAPE

    def __init__(self, shape: str, allowed: list[str]) -> None:
        super().__init__(
            f"Unknown product shape '{shape}'. Allowed shapes: {allowed}",
            details={"shape": shape, "allowed": allowed, "fields": ["shape"]},
        )


class FieldNotAllowedError(DomainError):
    """Raised when a flower request carries a composite-only field."""

    code = ErrorCode.FIELD_NOT_ALLOWED

    def __init__(self, field_name: str, shape: str) -> None:
        super().__init__(
            f"Field {field_name} is not allowed for {shape}",
            details={"shape": shape, "fields": [field_name]},
        )


class ForbiddenFieldsForShapeError(DomainError):
    """Raised when a composite request carries flower-only fields.

    Every offending field is reported, not only the first one found.
    """

    code = ErrorCode.FORBIDDEN_FIELDS_FOR_SHAPE

    def __init__(self, field_names: list[str], shape: str) -> None:
        super().__init__(
            f"Fields [{_join(field_names)}] are not allowed for {shape}",
            details={"shape": shape, "fields": list(field_names)},
        )


# ============================================================================
# Packaging Errors
# ============================================================================


class InvalidPackagingError(DomainError):
    """Raised when packaging fields disagree with the packaging flag."""

    code = ErrorCode.INVALID_PACKAGING

    def __init__(self, field_names: list[str], is_required: bool) -> None:
        if is_required:
            message = (
                f"Packaging [{_join(field_names)}] required when "
                "is_packaging_required is true"
            )
        else:
            message = (
                f"Packaging [{_join(field_names)}] not allowed when "
                "is_packaging_required is false"
            )
        super().__init__(
            message,
            details={"fields": list(field_names), "is_packaging_required": is_required},
        )


class MissingMandatoryPackagingError(DomainError):
    """Raised when a shape that must be packaged is missing packaging data."""

    code = ErrorCode.MISSING_MANDATORY_PACKAGING

    def __init__(self, field_names: list[str], shape: str) -> None:
        super().__init__(
            f"Packaging [{_join(field_names)}] required for {shape}",
            details={"shape": shape, "fields": list(field_names)},
        )


# ============================================================================
# Composition Errors
# ============================================================================


class ParentProductNotFoundError(DomainError):
    """Raised when the product to compose into is not visible to the admin."""

    code = ErrorCode.PARENT_PRODUCT_NOT_FOUND

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Parent product {product_id} not found",
            details={"product_id": product_id},
        )


class FlowerNotFoundError(DomainError):
    """Raised when a requested child flower is not visible to the admin."""

    code = ErrorCode.FLOWER_NOT_FOUND

    def __init__(self, flower_id: str) -> None:
        super().__init__(
            f"Flower with ID {flower_id} not found",
            details={"flower_id": flower_id, "fields": ["flower_id"]},
        )


class InvalidParentShapeError(DomainError):
    """Raised when flowers are added to a product that is not a composite."""

    code = ErrorCode.INVALID_PARENT_SHAPE

    def __init__(self, product_id: str, shape: str) -> None:
        super().__init__(
            f"Can only add flowers to bouquet, basket or package, "
            f"product {product_id} is a {shape}",
            details={"product_id": product_id, "shape": shape},
        )


class InvalidQuantityError(DomainError):
    """Raised when an invalid quantity is provided."""

    code = ErrorCode.INVALID_QUANTITY

    def __init__(
        self,
        quantity: int,
        flower_id: str | None = None,
        reason: str = "Quantity must be positive",
    ) -> None:
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            details={
                "quantity": quantity,
                "flower_id": flower_id,
                "reason": reason,
                "fields": ["quantity"],
            },
        )


# ============================================================================
# Infrastructure Errors
# ============================================================================


class PersistenceError(DomainError):
    """Raised when the storage collaborator fails.

    The original driver error is kept as ``__cause__``.
    """

    code = ErrorCode.PERSISTENCE_ERROR

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistence failure during {operation}: {reason}",
            details={"operation": operation},
        )
