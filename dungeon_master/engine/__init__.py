"""
Core Engine for the Dungeon Master.

The engine serves the session API:
- Session creation (character, inventory, quests, opening scene)
- Free-text actions (d20 roll + narration)
- Structured operations (level-up, training, items, travel, NPCs,
  combat, quests)
"""

from __future__ import annotations

from dungeon_master.engine.errors import ActionValidationError, SessionNotFoundError
from dungeon_master.engine.game import GameEngine
from dungeon_master.engine.models import (
    ActionResult,
    EngineConfig,
    ItemUseResult,
    LevelUpResult,
    QuestUpdateResult,
    SessionView,
    TravelResult,
)

__all__ = [
    # Engine
    "GameEngine",
    "EngineConfig",
    # Results
    "ActionResult",
    "ItemUseResult",
    "LevelUpResult",
    "QuestUpdateResult",
    "SessionView",
    "TravelResult",
    # Errors
    "ActionValidationError",
    "SessionNotFoundError",
]
