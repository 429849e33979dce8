"""
Engine Data Models for the Dungeon Master.

Defines the engine configuration and the results returned to callers:
- SessionView: Read-only snapshot of a session
- ActionResult: Narration and roll for a free-text action
- *Result: Outcomes of the structured game operations
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dungeon_master.content.world import STARTING_LOCATION_ID
from dungeon_master.models import (
    GameSession,
    Location,
    Quest,
    QuestReward,
    VoiceId,
)
from dungeon_master.skills.combat import MAX_COMBAT_ROUNDS
from dungeon_master.skills.progression import LevelUpReward


class EngineConfig(BaseModel):
    """Engine configuration."""

    # New characters
    starting_gold: int = Field(default=100, ge=0)
    starting_skill_points: int = Field(default=2, ge=0)
    starting_location: str = STARTING_LOCATION_ID

    # Combat
    max_combat_rounds: int = Field(default=MAX_COMBAT_ROUNDS, ge=1)

    # Narration
    last_event_limit: int = Field(default=150, ge=1, description="Chars of the last DM line sent")
    action_limit: int = Field(default=500, ge=1, description="Chars of the player action sent")
    max_tokens: int = 600
    temperature: float = 0.8


class SessionView(BaseModel):
    """A session as shown to the player, with derived map and level info."""

    session: GameSession
    current_location: Location | None = None
    accessible_locations: list[Location] = Field(default_factory=list)
    can_level_up: bool = False


class ActionResult(BaseModel):
    """Result of a free-text player action."""

    narrative: str = Field(description="The Dungeon Master's response")
    dice_roll: int = Field(ge=1, le=20)
    voices: list[VoiceId] = Field(
        default_factory=list, description="NPC voices heard in the narrative"
    )


class LevelUpResult(BaseModel):
    level: int
    reward: LevelUpReward


class ItemUseResult(BaseModel):
    item_name: str
    healed: int = 0
    remaining: int = Field(default=0, ge=0, description="How many are left after use")
    message: str


class TravelResult(BaseModel):
    location: Location
    newly_discovered: bool


class QuestUpdateResult(BaseModel):
    quest: Quest
    reward_granted: QuestReward | None = None
