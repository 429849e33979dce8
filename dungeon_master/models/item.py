"""
Inventory item models.

Items stack by name inside an inventory; an item whose quantity
drops to zero is removed from the list.
"""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    CONSUMABLE = "consumable"
    TREASURE = "treasure"
    TOOL = "tool"
    MISC = "misc"


class Rarity(str, Enum):
    """Rarity tiers, from most to least common."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ItemStats(BaseModel):
    """Optional combat properties of an item."""

    damage: str | None = Field(default=None, description="Damage dice, e.g. '1d8+1'")
    armor: int | None = Field(default=None, ge=0, description="Armor class bonus")
    bonus: str | None = Field(default=None, description="Free-form bonus text")


class InventoryItem(BaseModel):
    """A stackable item owned by a single session."""

    id: str = Field(default_factory=lambda: f"item-{uuid4().hex[:12]}")
    name: str = Field(min_length=1)
    type: ItemType
    description: str = ""
    quantity: int = Field(default=1, ge=1)
    value: int = Field(default=0, ge=0, description="Cost in gold")
    rarity: Rarity = Rarity.COMMON
    weight: float = Field(default=0.0, ge=0)
    stats: ItemStats | None = None

    @property
    def is_healing(self) -> bool:
        lowered = self.name.lower()
        return self.type == ItemType.CONSUMABLE and ("healing" in lowered or "health" in lowered)


def create_item(
    name: str,
    item_type: ItemType,
    *,
    description: str = "",
    quantity: int = 1,
    value: int = 0,
    rarity: Rarity = Rarity.COMMON,
    weight: float = 0.0,
    damage: str | None = None,
    armor: int | None = None,
    bonus: str | None = None,
) -> InventoryItem:
    """
    Factory function to create an inventory item.

    Combat stats are only attached when at least one of damage,
    armor or bonus is given.
    """
    stats = None
    if damage is not None or armor is not None or bonus is not None:
        stats = ItemStats(damage=damage, armor=armor, bonus=bonus)

    return InventoryItem(
        name=name,
        type=item_type,
        description=description,
        quantity=quantity,
        value=value,
        rarity=rarity,
        weight=weight,
        stats=stats,
    )
