"""
Character Progression Skills.

Pure rules for ability modifiers, proficiency, experience thresholds,
level-ups, skill checks and skill training. Functions never mutate the
character they are given; updated characters are returned as copies.
"""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, Field

from dungeon_master.models.character import (
    MAX_LEVEL,
    MAX_SKILL_RANK,
    SKILL_ABILITIES,
    Ability,
    Character,
    CharacterClass,
    Skill,
)
from dungeon_master.skills.dice import roll_d20, roll_die

logger = logging.getLogger(__name__)

DEFAULT_SKILL_DC = 15

# Experience required to reach each level (SRD 5e table)
EXPERIENCE_TABLE: dict[int, int] = {
    1: 0,
    2: 300,
    3: 900,
    4: 2700,
    5: 6500,
    6: 14000,
    7: 23000,
    8: 34000,
    9: 48000,
    10: 64000,
    11: 85000,
    12: 100000,
    13: 120000,
    14: 140000,
    15: 165000,
    16: 195000,
    17: 225000,
    18: 265000,
    19: 305000,
    20: 355000,
}


class ClassAbility(BaseModel):
    """A cosmetic feature unlocked at a given level."""

    level: int = Field(ge=2, le=MAX_LEVEL)
    name: str
    description: str

    def __str__(self) -> str:
        return f"{self.name} - {self.description}"


CLASS_ABILITIES: dict[CharacterClass, list[ClassAbility]] = {
    CharacterClass.FIGHTER: [
        ClassAbility(level=2, name="Action Surge", description="one extra action in combat"),
        ClassAbility(level=3, name="Martial Archetype", description="choose a fighting style"),
        ClassAbility(level=4, name="Ability Score Improvement", description="+2 to abilities"),
        ClassAbility(level=5, name="Extra Attack", description="attack twice per turn"),
    ],
    CharacterClass.WIZARD: [
        ClassAbility(level=2, name="Arcane Recovery", description="recover spell slots"),
        ClassAbility(level=3, name="Arcane Tradition", description="choose a school of magic"),
        ClassAbility(level=4, name="Cantrip Improvement", description="stronger cantrips"),
        ClassAbility(level=5, name="3rd Level Spells", description="access to 3rd level spells"),
    ],
    CharacterClass.ROGUE: [
        ClassAbility(level=2, name="Cunning Action", description="dash, disengage or hide"),
        ClassAbility(level=3, name="Roguish Archetype", description="choose a specialty"),
        ClassAbility(level=4, name="Ability Score Improvement", description="+2 to abilities"),
        ClassAbility(level=5, name="Uncanny Dodge", description="halve an attack's damage"),
    ],
    CharacterClass.CLERIC: [
        ClassAbility(level=2, name="Channel Divinity", description="channel divine power"),
        ClassAbility(level=3, name="Divine Domain Feature", description="a domain feature"),
        ClassAbility(level=4, name="Ability Score Improvement", description="+2 to abilities"),
        ClassAbility(level=5, name="Destroy Undead", description="turn undead destroys them"),
    ],
}


class LevelUpReward(BaseModel):
    """What a level-up granted."""

    hp_increase: int = Field(default=0, ge=0)
    skill_points: int = Field(default=0, ge=0)
    new_abilities: list[ClassAbility] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.hp_increase == 0 and self.skill_points == 0 and not self.new_abilities

    def describe(self) -> str:
        text = f"Level Up! +{self.hp_increase} HP, +{self.skill_points} skill points"
        if self.new_abilities:
            text += ", new abilities: " + ", ".join(str(a) for a in self.new_abilities)
        return text


class SkillCheckResult(BaseModel):
    """Result of a skill check."""

    skill: Skill
    roll: int = Field(ge=1, le=20)
    modifier: int
    total: int
    difficulty: int
    success: bool


def get_ability_modifier(score: int) -> int:
    """Ability modifier: floor((score - 10) / 2)."""
    return (score - 10) // 2


def get_proficiency_bonus(level: int) -> int:
    """Proficiency bonus: ceil(level / 4) + 1."""
    return math.ceil(level / 4) + 1


def get_experience_for_level(level: int) -> int:
    """Experience threshold to reach a level, capped at the level-20 threshold."""
    if level < 1:
        return 0
    return EXPERIENCE_TABLE.get(level, EXPERIENCE_TABLE[MAX_LEVEL])


def get_experience_for_next_level(level: int) -> int:
    """Experience threshold of the level after ``level``."""
    return get_experience_for_level(level + 1)


def can_level_up(character: Character) -> bool:
    """True iff the character has enough experience and is below level 20."""
    if character.level >= MAX_LEVEL:
        return False
    return character.experience >= get_experience_for_next_level(character.level)


def get_new_abilities(char_class: CharacterClass, level: int) -> list[ClassAbility]:
    """Class features unlocked at exactly this level (may be empty)."""
    return [a for a in CLASS_ABILITIES.get(char_class, []) if a.level == level]


def level_up(character: Character) -> tuple[Character, LevelUpReward]:
    """
    Advance a character by one level.

    Max HP grows by 1d8 + CON modifier and skill points by 2 + INT
    modifier; both grants are floored (HP at 1, skill points at 0) so a
    low score never shrinks the character. The character is fully healed.

    Args:
        character: The character to advance

    Returns:
        (updated copy, reward). If the character cannot level up, the
        original character and an empty reward.
    """
    if not can_level_up(character):
        return character, LevelUpReward()

    new_level = character.level + 1
    hp_increase = max(1, roll_die(8) + character.stats.modifier(Ability.CON))
    skill_points = max(0, 2 + character.stats.modifier(Ability.INT))

    updated = character.model_copy(deep=True)
    updated.level = new_level
    updated.max_hp = character.max_hp + hp_increase
    updated.hp = updated.max_hp
    updated.skill_points = character.skill_points + skill_points
    updated.experience_to_next = get_experience_for_next_level(new_level)

    reward = LevelUpReward(
        hp_increase=hp_increase,
        skill_points=skill_points,
        new_abilities=get_new_abilities(character.char_class, new_level),
    )
    logger.info("%s reached level %d (+%d HP)", character.name, new_level, hp_increase)
    return updated, reward


def get_skill_modifier(character: Character, skill: Skill) -> int:
    """Governing ability modifier plus proficiency if the skill is trained."""
    ability_mod = character.stats.modifier(SKILL_ABILITIES[skill])
    rank = character.skills.get(skill)
    proficiency = get_proficiency_bonus(character.level) if rank > 0 else 0
    return ability_mod + proficiency


def roll_skill_check(
    character: Character,
    skill: Skill,
    difficulty: int = DEFAULT_SKILL_DC,
) -> SkillCheckResult:
    """
    Roll a d20 skill check against a difficulty class.

    Args:
        character: Character making the check
        skill: Skill being tested
        difficulty: DC to meet or beat

    Returns:
        SkillCheckResult with the natural roll, modifier and total
    """
    roll = roll_d20().total
    modifier = get_skill_modifier(character, skill)
    total = roll + modifier
    return SkillCheckResult(
        skill=skill,
        roll=roll,
        modifier=modifier,
        total=total,
        difficulty=difficulty,
        success=total >= difficulty,
    )


def spend_skill_point(character: Character, skill: Skill) -> Character:
    """
    Train a skill by one rank, spending one skill point.

    Raises:
        ValueError: If no skill points remain or the skill is at max rank
    """
    if character.skill_points <= 0:
        raise ValueError(f"{character.name} has no skill points to spend")
    rank = character.skills.get(skill)
    if rank >= MAX_SKILL_RANK:
        raise ValueError(f"{skill.value} is already at rank {MAX_SKILL_RANK}")

    updated = character.model_copy(deep=True)
    updated.skill_points -= 1
    updated.skills.set(skill, rank + 1)
    return updated
