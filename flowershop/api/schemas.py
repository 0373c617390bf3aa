"""API schemas for the Flowershop catalog API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from flowershop.domain.value_objects import (
    Color,
    FragranceIntensity,
    PackagingMode,
    ProductShape,
)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Request to create a product.

    The shape is accepted as free text and checked by the catalog rules,
    so an unknown shape is reported as UNKNOWN_SHAPE rather than a schema
    error.
    """

    shape: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Product shape: flower, bouquet, basket or package",
    )
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    description: str | None = Field(default=None, description="Long description")
    price: int = Field(default=0, ge=0, description="Price in cents")

    # Flower-only fields
    variety: str | None = Field(default=None, max_length=100, description="Flower variety")
    colors: list[Color] | None = Field(default=None, description="Flower colors")
    origin_country: str | None = Field(
        default=None, max_length=100, description="Country the flower is grown in"
    )
    fragrance_intensity: FragranceIntensity | None = Field(
        default=None, description="Flower fragrance intensity"
    )

    # Composite-only fields
    flowers_count: int | None = Field(
        default=None, ge=0, description="Advertised number of flowers (composites only)"
    )

    # Packaging
    is_packaging_required: bool = Field(
        default=False, description="Whether the product is sold packaged"
    )
    packaging_mode: PackagingMode | None = Field(
        default=None, description="Packaging style"
    )
    packaging_color: Color | None = Field(default=None, description="Packaging color")


class FlowerQuantitySchema(BaseModel):
    """One flower to add to a composite product."""

    flower_id: str = Field(..., pattern=r"\S", description="Flower product ID")
    quantity: int = Field(..., description="How many of this flower to add")


class AddFlowersRequest(BaseModel):
    """Request to add flowers to a bouquet, basket or package."""

    flowers: list[FlowerQuantitySchema] = Field(
        ..., description="Flowers with quantities, stored in this order"
    )


class PackagingSchema(BaseModel):
    """Packaging representation."""

    is_required: bool = Field(..., description="Whether the product is packaged")
    mode: PackagingMode = Field(..., description="Packaging style")
    color: Color | None = Field(default=None, description="Packaging color")


class FlowerAttributesSchema(BaseModel):
    """Flower attribute group."""

    variety: str | None = None
    colors: list[Color] = Field(default_factory=list)
    origin_country: str | None = None
    fragrance_intensity: FragranceIntensity | None = None


class CompositionSchema(BaseModel):
    """Composition edge representation."""

    flower_id: str = Field(..., description="Flower product ID")
    quantity: int = Field(..., description="Number of this flower in the product")


class ProductResponse(BaseModel):
    """Response for a product."""

    id: str = Field(..., description="Unique product identifier")
    store_id: str = Field(..., description="Owning store")
    shape: ProductShape = Field(..., description="Product shape")
    name: str = Field(..., description="Display name")
    description: str | None = Field(default=None, description="Long description")
    price: int = Field(..., description="Price in cents")
    flower_attributes: FlowerAttributesSchema | None = Field(
        default=None, description="Flower attributes (flowers only)"
    )
    flowers_count: int | None = Field(default=None, description="Advertised flower count")
    packaging: PackagingSchema = Field(..., description="Packaging")
    compositions: list[CompositionSchema] = Field(
        default_factory=list, description="Flowers this product is made of"
    )
    total_flowers: int = Field(default=0, description="Sum of composition quantities")
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last updated")
