"""Tests for domain value objects."""

import dataclasses
from datetime import timedelta

import pytest

from flowershop.domain.events import FlowersAddedToProduct, ProductCreated
from flowershop.domain.value_objects import (
    Color,
    FlowerAttributes,
    FragranceIntensity,
    Packaging,
    PackagingMode,
    ProductDraft,
    ProductId,
    ProductShape,
    StoreId,
)


class TestIdentifiers:
    """Tests for typed identifiers."""

    def test_generate_is_unique(self):
        assert ProductId.generate() != ProductId.generate()

    def test_str_returns_value(self):
        assert str(StoreId("store-a")) == "store-a"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_id_rejected(self, value):
        with pytest.raises(ValueError, match="cannot be empty"):
            ProductId(value)


class TestProductShape:
    """Tests for ProductShape."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("flower", ProductShape.FLOWER),
            (" BASKET ", ProductShape.BASKET),
            (ProductShape.PACKAGE, ProductShape.PACKAGE),
            ("vase", None),
        ],
    )
    def test_parse(self, raw, expected):
        assert ProductShape.parse(raw) is expected

    def test_composite_and_packaged_shapes(self):
        assert not ProductShape.FLOWER.is_composite()
        assert ProductShape.BOUQUET.is_composite()
        assert not ProductShape.BOUQUET.requires_packaging()
        assert ProductShape.BASKET.requires_packaging()
        assert ProductShape.PACKAGE.requires_packaging()

    def test_values(self):
        assert ProductShape.values() == ["flower", "bouquet", "basket", "package"]


class TestPackaging:
    """Tests for the Packaging group."""

    def test_none_is_consistent(self):
        packaging = Packaging.none()

        assert packaging.mode is PackagingMode.NONE
        assert packaging.color is None
        assert packaging.is_consistent()

    def test_required_needs_mode_and_color(self):
        assert Packaging(True, PackagingMode.BOX, Color.RED).is_consistent()
        assert not Packaging(True, PackagingMode.BOX).is_consistent()
        assert not Packaging(True, PackagingMode.NONE, Color.RED).is_consistent()

    def test_not_required_rejects_color(self):
        assert not Packaging(False, color=Color.RED).is_consistent()


class TestProductDraft:
    """Tests for ProductDraft helpers."""

    def test_present_fields_keeps_order_and_falsy_values(self):
        draft = ProductDraft(
            shape="bouquet",
            name="Test",
            origin_country="",
            colors=frozenset(),
        )

        assert draft.present_fields(("variety", "colors", "origin_country")) == [
            "colors",
            "origin_country",
        ]

    def test_flower_attributes(self):
        draft = ProductDraft(
            shape="flower",
            name="Peony",
            variety="Peony",
            colors=frozenset({Color.PINK}),
            fragrance_intensity=FragranceIntensity.STRONG,
        )

        assert draft.flower_attributes() == FlowerAttributes(
            variety="Peony",
            colors=frozenset({Color.PINK}),
            fragrance_intensity=FragranceIntensity.STRONG,
        )

    def test_packaging_normalized_when_not_required(self):
        draft = ProductDraft(shape="bouquet", name="Test", packaging_mode=PackagingMode.NONE)

        assert draft.packaging() == Packaging.none()

    def test_packaging_when_required(self):
        draft = ProductDraft(
            shape="basket",
            name="Test",
            is_packaging_required=True,
            packaging_mode=PackagingMode.BASKET,
            packaging_color=Color.GREEN,
        )

        assert draft.packaging() == Packaging(True, PackagingMode.BASKET, Color.GREEN)


class TestEvents:
    """Tests for product events."""

    def test_event_types(self):
        assert ProductCreated.event_type == "product.created"
        assert FlowersAddedToProduct.event_type == "product.flowers_added"

    def test_event_is_immutable(self):
        event = ProductCreated(
            product_id=ProductId("p-1"),
            store_id=StoreId("s-1"),
            shape=ProductShape.FLOWER,
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            event.shape = ProductShape.BOUQUET  # type: ignore[misc]

    def test_fields_are_keyword_only(self):
        with pytest.raises(TypeError):
            ProductCreated(ProductId("p-1"), StoreId("s-1"), ProductShape.FLOWER)  # type: ignore[misc]

    def test_occurred_at_is_utc(self):
        event = FlowersAddedToProduct(
            product_id=ProductId("b-1"),
            store_id=StoreId("s-1"),
            flowers=((ProductId("r-1"), 3),),
        )

        assert event.occurred_at.utcoffset() == timedelta(0)
