"""
Character Creation Skills.

Point-buy costs, class presets and stat generation used when a
player builds a new character.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dungeon_master.models.character import Ability, AbilityScores, CharacterClass
from dungeon_master.skills.dice import roll_dice

MAX_POINT_BUY_POINTS = 11
MIN_STAT_VALUE = 8
MAX_STAT_VALUE = 15

# Cost of a stat value, relative to the free base of 8
POINT_BUY_COSTS: dict[int, int] = {
    8: 0,
    9: 1,
    10: 2,
    11: 3,
    12: 4,
    13: 5,
    14: 7,
    15: 9,
}

STAT_NAMES: dict[Ability, str] = {
    Ability.STR: "Strength",
    Ability.DEX: "Dexterity",
    Ability.CON: "Constitution",
    Ability.INT: "Intelligence",
    Ability.WIS: "Wisdom",
    Ability.CHA: "Charisma",
}

STAT_DESCRIPTIONS: dict[Ability, str] = {
    Ability.STR: "Physical power, affects melee attacks and carrying capacity",
    Ability.DEX: "Agility and reflexes, affects AC, initiative, and ranged attacks",
    Ability.CON: "Health and stamina, affects hit points and fortitude saves",
    Ability.INT: "Reasoning ability, affects skill points and knowledge",
    Ability.WIS: "Awareness and insight, affects perception and will saves",
    Ability.CHA: "Force of personality, affects social interactions and leadership",
}


def _scores(strength: int, dex: int, con: int, intel: int, wis: int, cha: int) -> AbilityScores:
    return AbilityScores(STR=strength, DEX=dex, CON=con, INT=intel, WIS=wis, CHA=cha)


CLASS_BASE_STATS: dict[CharacterClass, AbilityScores] = {
    CharacterClass.FIGHTER: _scores(15, 12, 14, 8, 10, 9),
    CharacterClass.WIZARD: _scores(8, 12, 13, 15, 11, 9),
    CharacterClass.ROGUE: _scores(9, 15, 12, 11, 13, 8),
    CharacterClass.CLERIC: _scores(10, 9, 13, 8, 15, 12),
    CharacterClass.RANGER: _scores(11, 14, 12, 9, 13, 8),
    CharacterClass.BARBARIAN: _scores(15, 11, 14, 8, 10, 9),
    CharacterClass.BARD: _scores(8, 12, 11, 10, 9, 15),
    CharacterClass.PALADIN: _scores(14, 9, 13, 8, 10, 13),
}

CLASS_DESCRIPTIONS: dict[CharacterClass, str] = {
    CharacterClass.FIGHTER: (
        "A master of martial combat, skilled with a variety of weapons and armor. "
        "Fighters excel in direct combat and can withstand heavy damage."
    ),
    CharacterClass.WIZARD: (
        "A scholarly magic-user capable of manipulating the structures of spells. "
        "Wizards have access to the most diverse selection of spells."
    ),
    CharacterClass.ROGUE: (
        "A scoundrel who uses stealth and trickery to achieve goals. "
        "Rogues excel at skills, sneak attacks, and avoiding danger."
    ),
    CharacterClass.CLERIC: (
        "A priestly champion who wields divine magic in service of a higher power. "
        "Clerics can heal allies and turn undead."
    ),
    CharacterClass.RANGER: (
        "A warrior of the wilderness, skilled in tracking, survival, and combat. "
        "Rangers are excellent scouts and archers."
    ),
    CharacterClass.BARBARIAN: (
        "A fierce warrior of primitive background who can enter a battle rage. "
        "Barbarians are tough and deal massive damage."
    ),
    CharacterClass.BARD: (
        "A master of song, speech, and the magic they contain. "
        "Bards are versatile supporters with many skills and spells."
    ),
    CharacterClass.PALADIN: (
        "A holy warrior bound to a sacred oath. Paladins combine martial prowess "
        "with divine magic and strong moral convictions."
    ),
}


class StatRecommendation(BaseModel):
    """Which abilities a class should raise and which it can neglect."""

    primary: list[Ability] = Field(default_factory=list)
    secondary: list[Ability] = Field(default_factory=list)
    dump: list[Ability] = Field(default_factory=list)


CLASS_RECOMMENDATIONS: dict[CharacterClass, StatRecommendation] = {
    CharacterClass.FIGHTER: StatRecommendation(
        primary=[Ability.STR, Ability.CON], secondary=[Ability.DEX], dump=[Ability.INT, Ability.CHA]
    ),
    CharacterClass.WIZARD: StatRecommendation(
        primary=[Ability.INT], secondary=[Ability.DEX, Ability.CON], dump=[Ability.STR, Ability.CHA]
    ),
    CharacterClass.ROGUE: StatRecommendation(
        primary=[Ability.DEX], secondary=[Ability.INT, Ability.CHA], dump=[Ability.STR, Ability.WIS]
    ),
    CharacterClass.CLERIC: StatRecommendation(
        primary=[Ability.WIS], secondary=[Ability.CON, Ability.STR], dump=[Ability.INT, Ability.CHA]
    ),
    CharacterClass.RANGER: StatRecommendation(
        primary=[Ability.DEX, Ability.WIS], secondary=[Ability.CON], dump=[Ability.INT, Ability.CHA]
    ),
    CharacterClass.BARBARIAN: StatRecommendation(
        primary=[Ability.STR, Ability.CON], secondary=[Ability.DEX], dump=[Ability.INT, Ability.WIS]
    ),
    CharacterClass.BARD: StatRecommendation(
        primary=[Ability.CHA], secondary=[Ability.DEX, Ability.CON], dump=[Ability.STR, Ability.WIS]
    ),
    CharacterClass.PALADIN: StatRecommendation(
        primary=[Ability.STR, Ability.CHA], secondary=[Ability.CON], dump=[Ability.INT, Ability.WIS]
    ),
}


def get_stat_cost(value: int) -> int:
    """
    Point-buy cost of a single stat value.

    Raises:
        ValueError: If the value is outside the purchasable range
    """
    if value not in POINT_BUY_COSTS:
        raise ValueError(
            f"Point-buy stats must be between {MIN_STAT_VALUE} and {MAX_STAT_VALUE}, got {value}"
        )
    return POINT_BUY_COSTS[value]


def get_total_point_cost(stats: AbilityScores) -> int:
    """Sum of point-buy costs across all six abilities."""
    return sum(get_stat_cost(stats.get(ability)) for ability in Ability)


def is_valid_point_buy(stats: AbilityScores, budget: int = MAX_POINT_BUY_POINTS) -> bool:
    """A stat array is valid if every stat is purchasable and the total fits the budget."""
    try:
        return get_total_point_cost(stats) <= budget
    except ValueError:
        return False


def get_remaining_points(stats: AbilityScores, budget: int = MAX_POINT_BUY_POINTS) -> int:
    return budget - get_total_point_cost(stats)


def get_point_buy_stats() -> AbilityScores:
    """Starting array for point buy: every stat at the free base."""
    return _scores(*([MIN_STAT_VALUE] * 6))


def get_class_base_stats(char_class: CharacterClass) -> AbilityScores:
    """Preset stats for a class (a copy, safe to modify)."""
    return CLASS_BASE_STATS[char_class].model_copy()


def generate_balanced_stats() -> AbilityScores:
    """Roll each ability with 4d6, dropping the lowest die."""
    return _scores(*(roll_dice("4d6kh3").total for _ in Ability))
