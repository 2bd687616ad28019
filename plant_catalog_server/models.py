"""Data models for plant catalog entities."""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryRecord(BaseModel):
    """Represents a plant category from the catalog API."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Category ID (absent means not selectable)")
    label: str = Field(description="Category display label")

    @property
    def selectable(self) -> bool:
        """Whether plants can be queried for this category."""
        return self.id is not None


class ItemRecord(BaseModel):
    """Represents a plant from the catalog API."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Plant ID (absent means no detail view)")
    name: str = Field(description="Plant name")
    image_url: str = Field(default="", description="Plant image URL")
    description: str = Field(default="", description="Plant description")
    category: str = Field(default="", description="Category name")
    price: Decimal = Field(default=Decimal("0"), description="Plant price in USD")


class CartLineItem(BaseModel):
    """Represents a single entry in the shopping cart."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal


class CartState(BaseModel):
    """Snapshot of the shopping cart."""

    model_config = ConfigDict(frozen=True)

    items: tuple[CartLineItem, ...] = Field(default=(), description="Cart items in insertion order")
    total: Decimal = Field(default=Decimal("0"), description="Total cart value")

    @property
    def item_count(self) -> int:
        return len(self.items)


class TreePledge(BaseModel):
    """A pledge to plant trees."""

    name: str = Field(min_length=1, description="Name of the person pledging")
    email: str = Field(description="Contact email")
    count: int = Field(default=1, ge=1, description="Number of trees pledged")

    @classmethod
    def from_form(cls, name: Any, email: Any, count: Any = None) -> "TreePledge":
        """
        Build a pledge from loosely typed form input.

        Name and email are stripped; a missing, non-numeric, infinite or
        non-positive count means one tree.

        Raises:
            ValidationError: If the name is empty
        """
        try:
            trees = int(count)
        except (TypeError, ValueError, OverflowError):
            trees = 1
        return cls(
            name=str(name or "").strip(),
            email=str(email or "").strip(),
            count=trees if trees >= 1 else 1,
        )


class DetailResult(BaseModel):
    """Outcome of a plant detail lookup."""

    model_config = ConfigDict(frozen=True)

    record: Optional[ItemRecord] = None

    @property
    def found(self) -> bool:
        return self.record is not None
