"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. This module holds the typed identifiers, the closed
catalog enumerations and the request-side ``ProductDraft``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self
from uuid import uuid4

from flowershop.domain.base import ValueObject


# ============================================================================
# Typed Identifiers
# ============================================================================


@dataclass(frozen=True)
class ProductId(ValueObject):
    """Strongly-typed product identifier."""

    value: str

    @classmethod
    def generate(cls) -> Self:
        """Generate a new product ID.

        Returns:
            New ProductId with random UUID.
        """
        return cls(value=str(uuid4()))

    def __str__(self) -> str:
        return self.value

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Product ID cannot be empty")


@dataclass(frozen=True)
class StoreId(ValueObject):
    """Strongly-typed store (tenant) identifier."""

    value: str

    @classmethod
    def generate(cls) -> Self:
        return cls(value=str(uuid4()))

    def __str__(self) -> str:
        return self.value

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Store ID cannot be empty")


@dataclass(frozen=True)
class AdminId(ValueObject):
    """Strongly-typed administrator identifier."""

    value: str

    @classmethod
    def generate(cls) -> Self:
        return cls(value=str(uuid4()))

    def __str__(self) -> str:
        return self.value

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Admin ID cannot be empty")


# ============================================================================
# Catalog Enumerations
# ============================================================================


class ProductShape(str, Enum):
    """Closed set of product shapes.

    ``FLOWER`` is the atomic shape; the other three are composites built
    out of flowers.
    """

    FLOWER = "flower"
    BOUQUET = "bouquet"
    BASKET = "basket"
    PACKAGE = "package"

    @classmethod
    def parse(cls, value: "str | ProductShape") -> "ProductShape | None":
        """Parse a raw shape tag.

        Args:
            value: Shape tag as received from the transport.

        Returns:
            The matching shape, or None for an unknown tag.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

    @classmethod
    def values(cls) -> list[str]:
        return [shape.value for shape in cls]

    def is_composite(self) -> bool:
        """Check if products of this shape are built out of flowers."""
        return self in COMPOSITE_SHAPES

    def requires_packaging(self) -> bool:
        """Check if products of this shape must always be packaged."""
        return self in PACKAGED_SHAPES


COMPOSITE_SHAPES: frozenset[ProductShape] = frozenset(
    {ProductShape.BOUQUET, ProductShape.BASKET, ProductShape.PACKAGE}
)

PACKAGED_SHAPES: frozenset[ProductShape] = frozenset(
    {ProductShape.BASKET, ProductShape.PACKAGE}
)


class PackagingMode(str, Enum):
    """Packaging styles. ``NONE`` means the product is not packaged."""

    NONE = "none"
    BOX = "box"
    WRAPPING_PAPER = "wrapping_paper"
    FILM = "film"
    CRAFT_PAPER = "craft_paper"
    BAG = "bag"
    BASKET = "basket"


class Color(str, Enum):
    """Colors shared by flowers and packaging."""

    RED = "red"
    WHITE = "white"
    PINK = "pink"
    YELLOW = "yellow"
    ORANGE = "orange"
    PURPLE = "purple"
    BLUE = "blue"
    GREEN = "green"
    BLACK = "black"
    CREAM = "cream"
    MIXED = "mixed"


class FragranceIntensity(str, Enum):
    """How strongly a flower smells."""

    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    STRONG = "strong"


# ============================================================================
# Product Attribute Groups
# ============================================================================


@dataclass(frozen=True)
class Packaging(ValueObject):
    """Packaging group of a product.

    Attributes:
        is_required: Whether the product is sold packaged.
        mode: Packaging style, ``PackagingMode.NONE`` when not packaged.
        color: Packaging color, only set when packaged.
    """

    is_required: bool
    mode: PackagingMode = PackagingMode.NONE
    color: Color | None = None

    @classmethod
    def none(cls) -> Self:
        """Packaging of a product that is sold unpackaged."""
        return cls(is_required=False)

    def is_consistent(self) -> bool:
        """Check that mode and color agree with the required flag."""
        if self.is_required:
            return self.mode is not PackagingMode.NONE and self.color is not None
        return self.mode is PackagingMode.NONE and self.color is None


@dataclass(frozen=True)
class FlowerAttributes(ValueObject):
    """Attributes only a flower product carries.

    Attributes:
        variety: Botanical or trade variety (e.g. "Rose").
        colors: Colors the flower comes in.
        origin_country: Country the flower is grown in.
        fragrance_intensity: How strongly the flower smells.
    """

    variety: str | None = None
    colors: frozenset[Color] = field(default_factory=frozenset)
    origin_country: str | None = None
    fragrance_intensity: FragranceIntensity | None = None


# ============================================================================
# Product Draft
# ============================================================================


FLOWER_ONLY_FIELDS: tuple[str, ...] = (
    "variety",
    "colors",
    "origin_country",
    "fragrance_intensity",
)

COMPOSITE_ONLY_FIELDS: tuple[str, ...] = ("flowers_count",)


@dataclass(frozen=True)
class ProductDraft(ValueObject):
    """A proposed product as delivered by the transport layer.

    Fields are already type-checked but not yet validated against the
    shape rules. A field is considered present when it is not None.

    Attributes:
        shape: Raw shape tag, parsed during validation.
        name: Display name.
        description: Optional long description.
        price_cents: Price in cents.
        variety: Flower-only field.
        colors: Flower-only field.
        origin_country: Flower-only field.
        fragrance_intensity: Flower-only field.
        flowers_count: Composite-only field.
        is_packaging_required: Packaging flag.
        packaging_mode: Packaging style.
        packaging_color: Packaging color.
    """

    shape: str
    name: str
    description: str | None = None
    price_cents: int = 0
    variety: str | None = None
    colors: frozenset[Color] | None = None
    origin_country: str | None = None
    fragrance_intensity: FragranceIntensity | None = None
    flowers_count: int | None = None
    is_packaging_required: bool = False
    packaging_mode: PackagingMode | None = None
    packaging_color: Color | None = None

    def present_fields(self, names: tuple[str, ...]) -> list[str]:
        """Return the given field names that carry a value, in order."""
        return [name for name in names if getattr(self, name) is not None]

    def flower_attributes(self) -> FlowerAttributes:
        """Build the flower attribute group from the draft."""
        return FlowerAttributes(
            variety=self.variety,
            colors=frozenset(self.colors or ()),
            origin_country=self.origin_country,
            fragrance_intensity=self.fragrance_intensity,
        )

    def packaging(self) -> Packaging:
        """Build the normalized packaging group from the draft."""
        if not self.is_packaging_required:
            return Packaging.none()
        return Packaging(
            is_required=True,
            mode=self.packaging_mode or PackagingMode.NONE,
            color=self.packaging_color,
        )


@dataclass(frozen=True)
class FlowerQuantity(ValueObject):
    """One requested child of a composite: a flower id and how many."""

    flower_id: ProductId
    quantity: int
