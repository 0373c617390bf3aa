"""SQLAlchemy models for the catalog tables.

Defines stores, admins, products and product_compositions. Domain
entities are mapped to and from these rows by the repositories.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flowershop.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoreModel(Base):
    """A store (tenant) owning products and administrators."""

    __tablename__ = "stores"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<StoreModel(id={self.id}, name={self.name})>"


class AdminModel(Base):
    """A store administrator."""

    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True, unique=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    store_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("stores.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    store: Mapped[StoreModel | None] = relationship("StoreModel")

    def __repr__(self) -> str:
        return f"<AdminModel(id={self.id}, store_id={self.store_id})>"


class ProductModel(Base):
    """Product row.

    Flower-only columns (variety, colors, origin_country,
    fragrance_intensity) are null for composites; flowers_count is null
    for flowers.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    store_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shape: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Flower attributes
    variety: Mapped[str | None] = mapped_column(String(100), nullable=True)
    colors: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    origin_country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fragrance_intensity: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Composite attributes
    flowers_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Packaging
    is_packaging_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    packaging_mode: Mapped[str] = mapped_column(String(30), nullable=False, default="none")
    packaging_color: Mapped[str | None] = mapped_column(String(20), nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    compositions: Mapped[list["ProductCompositionModel"]] = relationship(
        "ProductCompositionModel",
        foreign_keys="ProductCompositionModel.parent_id",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="ProductCompositionModel.id",
    )

    def __repr__(self) -> str:
        return f"<ProductModel(id={self.id}, shape={self.shape}, store_id={self.store_id})>"


class ProductCompositionModel(Base):
    """Composition edge row: ``quantity`` of flower ``child_id`` in ``parent_id``.

    Rows are only inserted; the serial id keeps insertion order.
    """

    __tablename__ = "product_compositions"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_product_compositions_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    parent_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    child_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    store_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    parent: Mapped[ProductModel] = relationship(
        "ProductModel",
        foreign_keys=[parent_id],
        back_populates="compositions",
    )

    def __repr__(self) -> str:
        return (
            f"<ProductCompositionModel(parent_id={self.parent_id}, "
            f"child_id={self.child_id}, quantity={self.quantity})>"
        )
