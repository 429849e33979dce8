"""
Core Data Models for the Dungeon Master.

These models define the game state held in a session:
characters, items, quests, NPCs, combat, locations.
"""

from dungeon_master.models.character import (
    MAX_LEVEL,
    MAX_SKILL_RANK,
    SKILL_ABILITIES,
    Ability,
    AbilityScores,
    Character,
    CharacterClass,
    Skill,
    SkillRanks,
)
from dungeon_master.models.combat import (
    CombatEvent,
    CombatEventType,
    CombatOutcome,
    CombatResult,
)
from dungeon_master.models.item import (
    InventoryItem,
    ItemStats,
    ItemType,
    Rarity,
    create_item,
)
from dungeon_master.models.location import Location, LocationType
from dungeon_master.models.npc import (
    NPC,
    DialogueEntry,
    NPCStats,
    Relationship,
    VoiceArchetype,
    VoiceId,
)
from dungeon_master.models.quest import (
    Quest,
    QuestObjective,
    QuestReward,
    QuestStatus,
    create_quest,
)
from dungeon_master.models.session import GameSession, HistoryEntry, HistoryEntryType

__all__ = [
    # Character
    "Character",
    "CharacterClass",
    "Ability",
    "AbilityScores",
    "Skill",
    "SkillRanks",
    "SKILL_ABILITIES",
    "MAX_LEVEL",
    "MAX_SKILL_RANK",
    # Items
    "InventoryItem",
    "ItemStats",
    "ItemType",
    "Rarity",
    "create_item",
    # Quests
    "Quest",
    "QuestObjective",
    "QuestReward",
    "QuestStatus",
    "create_quest",
    # NPCs
    "NPC",
    "NPCStats",
    "DialogueEntry",
    "Relationship",
    "VoiceArchetype",
    "VoiceId",
    # Combat
    "CombatEvent",
    "CombatEventType",
    "CombatOutcome",
    "CombatResult",
    # World
    "Location",
    "LocationType",
    # Session
    "GameSession",
    "HistoryEntry",
    "HistoryEntryType",
]
