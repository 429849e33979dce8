"""
NPC Models for the Dungeon Master.

Defines non-player characters, their dialogue lines, and the voice
archetypes used to flavor narrative text.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from dungeon_master.models.item import InventoryItem


class Relationship(str, Enum):
    """An NPC's stance toward the player."""

    FRIENDLY = "friendly"
    NEUTRAL = "neutral"
    HOSTILE = "hostile"
    ROMANTIC = "romantic"


class VoiceId(str, Enum):
    """The twelve voice archetypes."""

    NOBLE = "noble"
    MERCHANT = "merchant"
    GUARD = "guard"
    PEASANT = "peasant"
    SCHOLAR = "scholar"
    ROGUE = "rogue"
    PRIEST = "priest"
    BARBARIAN = "barbarian"
    CHILD = "child"
    ELDER = "elder"
    INNKEEPER = "innkeeper"
    VILLAIN = "villain"


class VoiceArchetype(BaseModel):
    """A named speech-style profile."""

    id: VoiceId
    name: str
    description: str
    speech_pattern: str
    vocabulary: list[str]
    """Characteristic words, also used as detection keywords."""

    examples: list[str]

    model_config = {"frozen": True}


class DialogueEntry(BaseModel):
    """A line an NPC says when a trigger keyword comes up."""

    trigger: str
    response: str
    conditions: list[str] = Field(default_factory=list)


class NPCStats(BaseModel):
    """Combat stats, used only if the encounter turns hostile."""

    level: int = Field(default=1, ge=1)
    hp: int = Field(ge=1)
    ac: int = Field(default=10, ge=0)
    damage: str = "1d6"
    experience: int = Field(default=0, ge=0, description="XP value of defeating this NPC")


class NPC(BaseModel):
    """A non-player character surfaced to the player."""

    id: str = Field(default_factory=lambda: f"npc-{uuid4().hex[:12]}")
    name: str
    race: str
    occupation: str
    personality: list[str] = Field(default_factory=list)
    appearance: str = ""
    voice: VoiceId = VoiceId.PEASANT
    location: str = ""
    relationship: Relationship = Relationship.NEUTRAL
    quest_giver: bool = False
    merchant: bool = False
    stats: NPCStats | None = None
    dialogue: list[DialogueEntry] = Field(default_factory=list)
    inventory: list[InventoryItem] | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_hostile(self) -> bool:
        return self.relationship == Relationship.HOSTILE

    def get_dialogue(self, trigger: str) -> str | None:
        """Return the response for a trigger keyword, if any."""
        for entry in self.dialogue:
            if entry.trigger == trigger:
                return entry.response
        return None
