"""
Combat log and result models.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from dungeon_master.models.item import InventoryItem


class CombatEventType(str, Enum):
    ATTACK = "attack"
    DEFEND = "defend"
    SPELL = "spell"
    ITEM = "item"


class CombatOutcome(str, Enum):
    """How an encounter ended."""

    PLAYER_VICTORY = "player_victory"
    ENEMY_VICTORY = "enemy_victory"
    TIMEOUT = "timeout"  # Round cap reached with both sides standing


class CombatEvent(BaseModel):
    """One logged action within a combat."""

    id: str = Field(default_factory=lambda: f"combat-{uuid4().hex[:12]}")
    type: CombatEventType = CombatEventType.ATTACK
    attacker: str
    target: str
    damage: int | None = Field(default=None, ge=0)
    result: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CombatResult(BaseModel):
    """Summary of a resolved encounter."""

    outcome: CombatOutcome
    rounds: int = Field(ge=0)
    events: list[CombatEvent] = Field(default_factory=list)
    experience_gained: int = Field(default=0, ge=0)
    gold_gained: int = Field(default=0, ge=0)
    items_gained: list[InventoryItem] = Field(default_factory=list)
    damage_taken: int = Field(default=0, ge=0)
    player_hp_remaining: int = 0
    enemy_hp_remaining: int = 0

    @property
    def victory(self) -> bool:
        return self.outcome == CombatOutcome.PLAYER_VICTORY

    @property
    def is_timeout(self) -> bool:
        return self.outcome == CombatOutcome.TIMEOUT
