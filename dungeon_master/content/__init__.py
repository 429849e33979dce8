"""
Static game content for the Dungeon Master.

World map, starting equipment, starter quests, opening scenarios,
voice archetypes and the fallback narration pools.
"""

from dungeon_master.content.fallback import (
    ActionCategory,
    classify_action,
    generate_fallback,
)
from dungeon_master.content.voices import (
    VOICES,
    detect_voices,
    get_voice,
    random_voice,
    select_voice_by_context,
)
from dungeon_master.content.world import (
    STARTING_LOCATION_ID,
    WORLD_LOCATIONS,
    Scenario,
    get_accessible_locations,
    get_common_starting_items,
    get_location,
    get_random_scenario,
    get_starter_quests,
    get_starting_items,
    is_location_accessible,
)

__all__ = [
    # World
    "STARTING_LOCATION_ID",
    "WORLD_LOCATIONS",
    "Scenario",
    "get_accessible_locations",
    "get_common_starting_items",
    "get_location",
    "get_random_scenario",
    "get_starter_quests",
    "get_starting_items",
    "is_location_accessible",
    # Voices
    "VOICES",
    "detect_voices",
    "get_voice",
    "random_voice",
    "select_voice_by_context",
    # Fallback narration
    "ActionCategory",
    "classify_action",
    "generate_fallback",
]
