"""
Service layer for the Dungeon Master.

Services sit between the pure skills and the engine: narration through
a language model, and NPC generation.
"""

from __future__ import annotations

from dungeon_master.services.llm import (
    GenerationError,
    GenerationResult,
    LLMProvider,
    MockLLMProvider,
    OpenRouterProvider,
    create_llm_provider,
)
from dungeon_master.services.narrative import (
    NarrativeAdapter,
    build_action_prompt,
    describe_roll,
    finalize_narrative,
)
from dungeon_master.services.npc import (
    NPCCategory,
    generate_combat_encounter,
    generate_contextual_npc,
    generate_random_npc,
)

__all__ = [
    "GenerationError",
    "GenerationResult",
    "LLMProvider",
    "MockLLMProvider",
    "NPCCategory",
    "NarrativeAdapter",
    "OpenRouterProvider",
    "build_action_prompt",
    "create_llm_provider",
    "describe_roll",
    "finalize_narrative",
    "generate_combat_encounter",
    "generate_contextual_npc",
    "generate_random_npc",
]
