"""Tests for product draft validation.

Tests the per-shape creation rules including:
- Flower-only and composite-only fields
- Packaging consistency
- Mandatory packaging for baskets and packages
- Unknown shapes
"""

import pytest

from flowershop.domain.exceptions import (
    ErrorCode,
    FieldNotAllowedError,
    ForbiddenFieldsForShapeError,
    InvalidPackagingError,
    MissingMandatoryPackagingError,
    UnknownShapeError,
)
from flowershop.domain.validation import (
    check_composite_fields,
    check_flower_fields,
    check_packaging,
    validate_draft,
)
from flowershop.domain.value_objects import (
    Color,
    FragranceIntensity,
    PackagingMode,
    ProductDraft,
    ProductShape,
)


PACKAGED = {
    "is_packaging_required": True,
    "packaging_mode": PackagingMode.BOX,
    "packaging_color": Color.RED,
}


def draft(shape: str, **fields) -> ProductDraft:
    """Build a draft with a default name."""
    return ProductDraft(shape=shape, name=fields.pop("name", "Test product"), **fields)


# ============================================================================
# Test: Flower Rules
# ============================================================================


class TestFlowerRules:
    """Tests for flower drafts."""

    def test_plain_rose_is_valid(self):
        """A red rose without packaging passes every check."""
        rose = draft("flower", variety="Rose", colors=frozenset({Color.RED}))

        assert validate_draft(rose) is None

    def test_flower_with_all_attributes_and_packaging(self):
        """Flowers may be packaged and carry every flower attribute."""
        tulip = draft(
            "flower",
            variety="Tulip",
            colors=frozenset({Color.WHITE, Color.PINK}),
            origin_country="Netherlands",
            fragrance_intensity=FragranceIntensity.LIGHT,
            **PACKAGED,
        )

        assert validate_draft(tulip) is None

    def test_flower_with_flowers_count_rejected(self):
        """Composite-only fields are not allowed on a flower."""
        error = validate_draft(draft("flower", variety="Rose", flowers_count=3))

        assert isinstance(error, FieldNotAllowedError)
        assert error.code == ErrorCode.FIELD_NOT_ALLOWED
        assert error.fields == ["flowers_count"]

    def test_flowers_count_zero_counts_as_present(self):
        """Zero is a value; only None means absent."""
        error = check_flower_fields(draft("flower", flowers_count=0))

        assert isinstance(error, FieldNotAllowedError)

    def test_flower_packaging_checked_before_fields(self):
        """A flower breaking both rules reports the packaging error."""
        error = validate_draft(
            draft("flower", flowers_count=3, packaging_color=Color.RED)
        )

        assert isinstance(error, InvalidPackagingError)


# ============================================================================
# Test: Composite Rules
# ============================================================================


class TestCompositeRules:
    """Tests for bouquet, basket and package drafts."""

    @pytest.mark.parametrize("shape", ["bouquet", "basket", "package"])
    def test_every_flower_only_field_is_named(self, shape):
        """All flower-only fields present are reported together."""
        error = validate_draft(
            draft(
                shape,
                variety="Rose",
                colors=frozenset({Color.RED}),
                origin_country="Kenya",
                fragrance_intensity=FragranceIntensity.STRONG,
                **PACKAGED,
            )
        )

        assert isinstance(error, ForbiddenFieldsForShapeError)
        assert error.fields == [
            "variety",
            "colors",
            "origin_country",
            "fragrance_intensity",
        ]
        assert error.details["shape"] == shape

    def test_bouquet_with_variety_rejected(self):
        """A packaged bouquet naming a variety is rejected for that field only."""
        error = validate_draft(draft("bouquet", variety="Rose", **PACKAGED))

        assert isinstance(error, ForbiddenFieldsForShapeError)
        assert error.fields == ["variety"]
        assert "variety" in error.message

    def test_empty_colors_counts_as_present(self):
        """An empty color set is still a value."""
        error = check_composite_fields(
            draft("bouquet", colors=frozenset()), ProductShape.BOUQUET
        )

        assert isinstance(error, ForbiddenFieldsForShapeError)
        assert error.fields == ["colors"]

    def test_unpackaged_bouquet_is_valid(self):
        """Bouquets do not have to be packaged."""
        assert validate_draft(draft("bouquet", flowers_count=11)) is None

    def test_packaged_bouquet_is_valid(self):
        """Bouquets may be packaged."""
        assert validate_draft(draft("bouquet", **PACKAGED)) is None

    @pytest.mark.parametrize("shape", ["basket", "package"])
    def test_unpackaged_basket_and_package_rejected(self, shape):
        """Baskets and packages must always be packaged."""
        error = validate_draft(draft(shape, flowers_count=5))

        assert isinstance(error, MissingMandatoryPackagingError)
        assert error.code == ErrorCode.MISSING_MANDATORY_PACKAGING
        assert error.fields == [
            "is_packaging_required",
            "packaging_mode",
            "packaging_color",
        ]

    def test_unpackaged_basket_with_packaging_data_reports_mandatory(self):
        """The mandatory packaging check runs before the consistency check."""
        error = validate_draft(
            draft(
                "basket",
                packaging_mode=PackagingMode.BASKET,
                packaging_color=Color.GREEN,
            )
        )

        assert isinstance(error, MissingMandatoryPackagingError)
        assert error.fields == ["is_packaging_required"]

    def test_package_missing_color(self):
        """A required package without a color names the color."""
        error = validate_draft(
            draft(
                "package",
                is_packaging_required=True,
                packaging_mode=PackagingMode.FILM,
            )
        )

        assert isinstance(error, MissingMandatoryPackagingError)
        assert error.fields == ["packaging_color"]

    @pytest.mark.parametrize("shape", ["basket", "package"])
    def test_packaged_basket_and_package_valid(self, shape):
        """Fully packaged baskets and packages pass."""
        assert validate_draft(draft(shape, flowers_count=7, **PACKAGED)) is None

    def test_forbidden_fields_reported_before_packaging(self):
        """Flower-only fields win over missing packaging."""
        error = validate_draft(draft("basket", variety="Rose"))

        assert isinstance(error, ForbiddenFieldsForShapeError)


# ============================================================================
# Test: Packaging Consistency
# ============================================================================


class TestPackagingConsistency:
    """Tests for check_packaging."""

    def test_required_with_mode_and_color(self):
        assert check_packaging(draft("flower", **PACKAGED)) is None

    def test_not_required_without_mode_or_color(self):
        assert check_packaging(draft("flower")) is None

    def test_not_required_with_explicit_none_mode(self):
        """Mode NONE is the same as no mode."""
        assert check_packaging(draft("flower", packaging_mode=PackagingMode.NONE)) is None

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({}, ["packaging_mode", "packaging_color"]),
            ({"packaging_color": Color.RED}, ["packaging_mode"]),
            ({"packaging_mode": PackagingMode.BOX}, ["packaging_color"]),
            (
                {"packaging_mode": PackagingMode.NONE, "packaging_color": Color.RED},
                ["packaging_mode"],
            ),
        ],
    )
    def test_required_missing_parts(self, fields, expected):
        """Every missing part of required packaging is named."""
        error = check_packaging(draft("flower", is_packaging_required=True, **fields))

        assert isinstance(error, InvalidPackagingError)
        assert error.fields == expected
        assert error.details["is_packaging_required"] is True

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"packaging_mode": PackagingMode.BOX}, ["packaging_mode"]),
            ({"packaging_color": Color.BLUE}, ["packaging_color"]),
            (
                {"packaging_mode": PackagingMode.BAG, "packaging_color": Color.BLUE},
                ["packaging_mode", "packaging_color"],
            ),
        ],
    )
    def test_not_required_with_extra_parts(self, fields, expected):
        """Packaging data without the flag is rejected."""
        error = check_packaging(draft("bouquet", **fields))

        assert isinstance(error, InvalidPackagingError)
        assert error.fields == expected
        assert error.details["is_packaging_required"] is False


# ============================================================================
# Test: Shapes
# ============================================================================


class TestShapes:
    """Tests for shape parsing during validation."""

    @pytest.mark.parametrize("shape", ["vase", "", "flowers"])
    def test_unknown_shape_rejected(self, shape):
        """Anything outside the four shapes is rejected."""
        error = validate_draft(draft(shape))

        assert isinstance(error, UnknownShapeError)
        assert error.code == ErrorCode.UNKNOWN_SHAPE

    def test_shape_tag_is_case_insensitive(self):
        """Shape tags are normalized before matching."""
        assert validate_draft(draft("Bouquet")) is None
