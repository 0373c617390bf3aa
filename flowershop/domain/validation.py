"""Product draft validation.

Pure checks deciding whether a proposed product is structurally valid for
its shape. Each check returns the error it found, or None; nothing here
raises for a rejected draft.

Order of checks per shape:

    flower     packaging → composite-only fields
    bouquet    flower-only fields → packaging
    basket     flower-only fields → mandatory packaging → packaging
    package    flower-only fields → mandatory packaging → packaging
"""

from flowershop.domain.exceptions import (
    DomainError,
    FieldNotAllowedError,
    ForbiddenFieldsForShapeError,
    InvalidPackagingError,
    MissingMandatoryPackagingError,
    UnknownShapeError,
)
from flowershop.domain.value_objects import (
    COMPOSITE_ONLY_FIELDS,
    FLOWER_ONLY_FIELDS,
    PackagingMode,
    ProductDraft,
    ProductShape,
)


def _has_mode(mode: PackagingMode | None) -> bool:
    return mode is not None and mode is not PackagingMode.NONE


def check_packaging(draft: ProductDraft) -> InvalidPackagingError | None:
    """Check that packaging mode and color agree with the packaging flag.

    When packaging is required both a concrete mode and a color must be
    given; when it is not, neither may be. The error names every element
    that is missing or illegally present.

    Args:
        draft: Proposed product.

    Returns:
        InvalidPackagingError, or None if the packaging group is consistent.
    """
    if draft.is_packaging_required:
        missing = []
        if not _has_mode(draft.packaging_mode):
            missing.append("packaging_mode")
        if draft.packaging_color is None:
            missing.append("packaging_color")
        if missing:
            return InvalidPackagingError(missing, is_required=True)
        return None

    present = []
    if _has_mode(draft.packaging_mode):
        present.append("packaging_mode")
    if draft.packaging_color is not None:
        present.append("packaging_color")
    if present:
        return InvalidPackagingError(present, is_required=False)
    return None


def check_flower_fields(draft: ProductDraft) -> FieldNotAllowedError | None:
    """Check that a flower draft carries no composite-only field."""
    present = draft.present_fields(COMPOSITE_ONLY_FIELDS)
    if present:
        return FieldNotAllowedError(present[0], ProductShape.FLOWER.value)
    return None


def check_composite_fields(
    draft: ProductDraft,
    shape: ProductShape,
) -> ForbiddenFieldsForShapeError | MissingMandatoryPackagingError | None:
    """Check the rules that only apply to composite shapes.

    Flower-only fields are rejected all at once. Baskets and packages must
    additionally be packaged with a concrete mode and a color.

    Args:
        draft: Proposed product.
        shape: Parsed composite shape of the draft.

    Returns:
        The first rule violation found, or None.
    """
    forbidden = draft.present_fields(FLOWER_ONLY_FIELDS)
    if forbidden:
        return ForbiddenFieldsForShapeError(forbidden, shape.value)

    if shape.requires_packaging():
        missing = []
        if not draft.is_packaging_required:
            missing.append("is_packaging_required")
        if not _has_mode(draft.packaging_mode):
            missing.append("packaging_mode")
        if draft.packaging_color is None:
            missing.append("packaging_color")
        if missing:
            return MissingMandatoryPackagingError(missing, shape.value)

    return None


def validate_draft(draft: ProductDraft) -> DomainError | None:
    """Run every check that applies to the draft's shape.

    Args:
        draft: Proposed product.

    Returns:
        The first error found, or None if the draft may be created.
    """
    shape = ProductShape.parse(draft.shape)

    match shape:
        case ProductShape.FLOWER:
            return check_packaging(draft) or check_flower_fields(draft)
        case ProductShape.BOUQUET | ProductShape.BASKET | ProductShape.PACKAGE:
            return check_composite_fields(draft, shape) or check_packaging(draft)
        case _:
            return UnknownShapeError(str(draft.shape), ProductShape.values())
