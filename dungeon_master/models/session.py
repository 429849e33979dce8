"""
Game session model - the aggregate root of one player's game.

A GameSession owns the character, inventory, quest journal, map
progress, met NPCs, combat log and the narrated history.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from dungeon_master.models.character import Character
from dungeon_master.models.combat import CombatEvent
from dungeon_master.models.item import InventoryItem
from dungeon_master.models.npc import NPC
from dungeon_master.models.quest import Quest


class HistoryEntryType(str, Enum):
    """Kinds of entries in the narrated history."""

    PLAYER = "player"
    DM = "dm"
    ROLL = "roll"
    LEVELUP = "levelup"
    COMBAT = "combat"


class HistoryEntry(BaseModel):
    """One line of the chronological chat history."""

    type: HistoryEntryType
    content: str
    roll: int | None = Field(default=None, ge=1, le=20)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class GameSession(BaseModel):
    """
    One player's complete in-memory game state.

    ``version`` is bumped by the session store on every successful
    update and lets writers detect concurrent modification.
    """

    id: str
    character: Character
    inventory: list[InventoryItem] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)
    visited_locations: list[str] = Field(default_factory=list)
    current_location: str
    encountered_npcs: list[NPC] = Field(default_factory=list)
    combat_log: list[CombatEvent] = Field(default_factory=list)
    history: list[HistoryEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: int = Field(default=0, ge=0)

    # History

    def add_history(
        self,
        entry_type: HistoryEntryType,
        content: str,
        roll: int | None = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(type=entry_type, content=content, roll=roll)
        self.history.append(entry)
        return entry

    def last_dm_line(self) -> str | None:
        """Most recent Dungeon Master narration, if any."""
        for entry in reversed(self.history):
            if entry.type == HistoryEntryType.DM:
                return entry.content
        return None

    # Inventory

    def find_item(self, item_id: str) -> InventoryItem | None:
        return next((i for i in self.inventory if i.id == item_id), None)

    def find_item_by_name(self, name: str) -> InventoryItem | None:
        lowered = name.lower()
        return next((i for i in self.inventory if i.name.lower() == lowered), None)

    def add_item(self, item: InventoryItem) -> InventoryItem:
        """
        Add an item, stacking onto an existing item of the same name.

        Returns the inventory entry that now holds the item.
        """
        existing = self.find_item_by_name(item.name)
        if existing is not None and existing.type == item.type:
            existing.quantity += item.quantity
            return existing
        stored = item.model_copy(deep=True)
        self.inventory.append(stored)
        return stored

    def remove_item(self, item_id: str, quantity: int = 1) -> InventoryItem:
        """
        Remove a quantity of an item, dropping it when none are left.

        Raises:
            ValueError: If the item is missing or there are not enough of it
        """
        item = self.find_item(item_id)
        if item is None:
            raise ValueError(f"No item {item_id} in inventory")
        if quantity < 1 or quantity > item.quantity:
            raise ValueError(f"Cannot remove {quantity} of {item.name} (have {item.quantity})")

        if quantity == item.quantity:
            self.inventory.remove(item)
            return item
        item.quantity -= quantity
        return item

    # Quests

    def find_quest(self, quest_id: str) -> Quest | None:
        return next((q for q in self.quests if q.id == quest_id), None)

    # Map

    def visit(self, location_id: str) -> bool:
        """
        Move to a location, recording it as visited.

        Returns True if the location was newly discovered.
        """
        is_new = location_id not in self.visited_locations
        if is_new:
            self.visited_locations.append(location_id)
        self.current_location = location_id
        return is_new

    # NPCs and combat

    def meet_npc(self, npc: NPC) -> None:
        if all(known.id != npc.id for known in self.encountered_npcs):
            self.encountered_npcs.append(npc)

    def find_npc(self, npc_id: str) -> NPC | None:
        return next((n for n in self.encountered_npcs if n.id == npc_id), None)

    def log_combat(self, events: list[CombatEvent]) -> None:
        self.combat_log.extend(events)
