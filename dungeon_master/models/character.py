"""
Character Models for the Dungeon Master.

Defines the player's avatar: class, ability scores, skill ranks,
and the progression counters (level, experience, hit points, gold).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

MAX_LEVEL = 20
MAX_SKILL_RANK = 5


class CharacterClass(str, Enum):
    """The eight playable classes."""

    FIGHTER = "Fighter"
    WIZARD = "Wizard"
    ROGUE = "Rogue"
    CLERIC = "Cleric"
    RANGER = "Ranger"
    BARBARIAN = "Barbarian"
    BARD = "Bard"
    PALADIN = "Paladin"


class Ability(str, Enum):
    """The six ability score abbreviations."""

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"


class Skill(str, Enum):
    """Trainable skills, each governed by one ability."""

    ATHLETICS = "athletics"
    STEALTH = "stealth"
    INVESTIGATION = "investigation"
    PERCEPTION = "perception"
    PERSUASION = "persuasion"
    INTIMIDATION = "intimidation"
    SURVIVAL = "survival"
    ARCANA = "arcana"


SKILL_ABILITIES: dict[Skill, Ability] = {
    Skill.ATHLETICS: Ability.STR,
    Skill.STEALTH: Ability.DEX,
    Skill.INVESTIGATION: Ability.INT,
    Skill.PERCEPTION: Ability.WIS,
    Skill.PERSUASION: Ability.CHA,
    Skill.INTIMIDATION: Ability.CHA,
    Skill.SURVIVAL: Ability.WIS,
    Skill.ARCANA: Ability.INT,
}


class AbilityScores(BaseModel):
    """The six ability scores, keyed by their upper-case abbreviations."""

    str_: int = Field(default=10, ge=1, le=30, alias="STR")
    dex: int = Field(default=10, ge=1, le=30, alias="DEX")
    con: int = Field(default=10, ge=1, le=30, alias="CON")
    int_: int = Field(default=10, ge=1, le=30, alias="INT")
    wis: int = Field(default=10, ge=1, le=30, alias="WIS")
    cha: int = Field(default=10, ge=1, le=30, alias="CHA")

    model_config = {"populate_by_name": True}

    def get(self, ability: Ability | str) -> int:
        """Get ability score by abbreviation."""
        key = ability.value if isinstance(ability, Ability) else ability.upper()
        mapping = {
            "STR": self.str_,
            "DEX": self.dex,
            "CON": self.con,
            "INT": self.int_,
            "WIS": self.wis,
            "CHA": self.cha,
        }
        if key not in mapping:
            raise ValueError(f"Unknown ability: {ability}")
        return mapping[key]

    def modifier(self, ability: Ability | str) -> int:
        """Get ability modifier by abbreviation."""
        return (self.get(ability) - 10) // 2

    def as_dict(self) -> dict[str, int]:
        """Scores keyed by abbreviation, in sheet order."""
        return self.model_dump(by_alias=True)


class SkillRanks(BaseModel):
    """Trained ranks for each skill (0 = untrained)."""

    athletics: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    stealth: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    investigation: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    perception: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    persuasion: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    intimidation: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    survival: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)
    arcana: int = Field(default=0, ge=0, le=MAX_SKILL_RANK)

    model_config = {"validate_assignment": True}

    def get(self, skill: Skill) -> int:
        return getattr(self, skill.value)

    def set(self, skill: Skill, rank: int) -> None:
        setattr(self, skill.value, rank)


class Character(BaseModel):
    """
    A player character.

    Hit points are kept within [0, max_hp]; use take_damage/heal rather
    than assigning hp directly when the amount comes from game rules.
    """

    name: str = Field(min_length=1, max_length=100)
    char_class: CharacterClass
    stats: AbilityScores = Field(default_factory=AbilityScores)
    level: int = Field(default=1, ge=1, le=MAX_LEVEL)
    experience: int = Field(default=0, ge=0)
    experience_to_next: int = Field(default=300, ge=0)
    hp: int = Field(ge=0)
    max_hp: int = Field(ge=1)
    gold: int = Field(default=0, ge=0)
    skill_points: int = Field(default=0, ge=0)
    skills: SkillRanks = Field(default_factory=SkillRanks)

    @model_validator(mode="after")
    def _check_hp(self) -> Character:
        if self.hp > self.max_hp:
            raise ValueError(f"hp ({self.hp}) cannot exceed max_hp ({self.max_hp})")
        return self

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamped at 0. Returns damage actually taken."""
        taken = min(self.hp, max(0, amount))
        self.hp -= taken
        return taken

    def heal(self, amount: int) -> int:
        """Restore hit points up to max_hp. Returns the amount healed."""
        healed = min(self.max_hp - self.hp, max(0, amount))
        self.hp += healed
        return healed
