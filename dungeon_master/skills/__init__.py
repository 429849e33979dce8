"""
Stateless Skills for the Dungeon Master.

Skills are pure functions that:
- Take structured input (Pydantic models)
- Execute game logic (dice, rules, combat)
- Return structured output
- NEVER maintain state between calls
- NEVER call LLMs directly
"""

from dungeon_master.skills.character_creation import (
    CLASS_BASE_STATS,
    CLASS_DESCRIPTIONS,
    CLASS_RECOMMENDATIONS,
    MAX_POINT_BUY_POINTS,
    MAX_STAT_VALUE,
    MIN_STAT_VALUE,
    STAT_DESCRIPTIONS,
    STAT_NAMES,
    StatRecommendation,
    generate_balanced_stats,
    get_class_base_stats,
    get_point_buy_stats,
    get_remaining_points,
    get_stat_cost,
    get_total_point_cost,
    is_valid_point_buy,
)
from dungeon_master.skills.combat import (
    MAX_COMBAT_ROUNDS,
    AttackRoll,
    apply_combat_result,
    generate_loot,
    resolve_combat,
    roll_attack,
)
from dungeon_master.skills.dice import DiceResult, roll_d20, roll_damage, roll_dice
from dungeon_master.skills.progression import (
    EXPERIENCE_TABLE,
    ClassAbility,
    LevelUpReward,
    SkillCheckResult,
    can_level_up,
    get_ability_modifier,
    get_experience_for_next_level,
    get_proficiency_bonus,
    get_skill_modifier,
    level_up,
    roll_skill_check,
    spend_skill_point,
)

__all__ = [
    # Dice
    "roll_dice",
    "roll_d20",
    "roll_damage",
    "DiceResult",
    # Progression
    "EXPERIENCE_TABLE",
    "ClassAbility",
    "LevelUpReward",
    "SkillCheckResult",
    "can_level_up",
    "get_ability_modifier",
    "get_experience_for_next_level",
    "get_proficiency_bonus",
    "get_skill_modifier",
    "level_up",
    "roll_skill_check",
    "spend_skill_point",
    # Character creation
    "CLASS_BASE_STATS",
    "CLASS_DESCRIPTIONS",
    "CLASS_RECOMMENDATIONS",
    "MAX_POINT_BUY_POINTS",
    "MAX_STAT_VALUE",
    "MIN_STAT_VALUE",
    "STAT_DESCRIPTIONS",
    "STAT_NAMES",
    "StatRecommendation",
    "generate_balanced_stats",
    "get_class_base_stats",
    "get_point_buy_stats",
    "get_remaining_points",
    "get_stat_cost",
    "get_total_point_cost",
    "is_valid_point_buy",
    # Combat
    "MAX_COMBAT_ROUNDS",
    "AttackRoll",
    "apply_combat_result",
    "generate_loot",
    "resolve_combat",
    "roll_attack",
]
