"""Tests for character progression rules."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from dungeon_master.models import AbilityScores, Character, CharacterClass, Skill
from dungeon_master.skills.progression import (
    EXPERIENCE_TABLE,
    can_level_up,
    get_ability_modifier,
    get_experience_for_next_level,
    get_proficiency_bonus,
    get_skill_modifier,
    level_up,
    roll_skill_check,
    spend_skill_point,
)
from dungeon_master.skills.dice import DiceResult


def make_character(**overrides) -> Character:
    fields = {
        "name": "Bram",
        "char_class": CharacterClass.FIGHTER,
        "stats": AbilityScores(STR=15, DEX=12, CON=14, INT=8, WIS=10, CHA=9),
        "hp": 12,
        "max_hp": 12,
    }
    fields.update(overrides)
    return Character(**fields)


def d20(value: int) -> DiceResult:
    return DiceResult(notation="1d20", rolls=[value], total=value)


class TestRules:
    """Tests for the basic formulas."""

    @pytest.mark.parametrize(
        "score,expected", [(1, -5), (8, -1), (9, -1), (10, 0), (11, 0), (15, 2), (20, 5)]
    )
    def test_ability_modifier(self, score, expected):
        assert get_ability_modifier(score) == expected

    @pytest.mark.parametrize("level,expected", [(1, 2), (4, 2), (5, 3), (9, 4), (17, 6), (20, 6)])
    def test_proficiency_bonus(self, level, expected):
        assert get_proficiency_bonus(level) == expected

    def test_experience_table(self):
        assert EXPERIENCE_TABLE[2] == 300
        assert EXPERIENCE_TABLE[20] == 355000
        assert get_experience_for_next_level(1) == 300
        assert get_experience_for_next_level(4) == 6500

    def test_experience_past_max_level(self):
        assert get_experience_for_next_level(20) == 355000
        assert get_experience_for_next_level(25) == 355000


class TestLevelUp:
    """Tests for level-up eligibility and rewards."""

    def test_can_level_up_threshold(self):
        assert not can_level_up(make_character(experience=299))
        assert can_level_up(make_character(experience=300))

    def test_max_level_cannot_level_up(self):
        assert not can_level_up(make_character(level=20, experience=10_000_000))

    def test_level_up_rewards(self):
        character = make_character(experience=300, hp=4)
        with patch("dungeon_master.skills.progression.roll_die", return_value=5):
            updated, reward = level_up(character)

        assert updated.level == 2
        assert reward.hp_increase == 7  # 5 + CON 2
        assert updated.max_hp == 19
        assert updated.hp == 19  # fully healed
        assert reward.skill_points == 1  # 2 + INT -1
        assert updated.skill_points == 1
        assert updated.experience_to_next == 900
        assert [a.name for a in reward.new_abilities] == ["Action Surge"]

    def test_level_up_does_not_mutate_input(self):
        character = make_character(experience=300)
        level_up(character)
        assert character.level == 1
        assert character.max_hp == 12

    def test_ineligible_returns_empty_reward(self):
        character = make_character()
        updated, reward = level_up(character)
        assert updated.level == 1
        assert reward.is_empty

    def test_low_scores_never_shrink(self):
        weak = make_character(
            experience=300, stats=AbilityScores(STR=10, DEX=10, CON=1, INT=1, WIS=10, CHA=10)
        )
        with patch("dungeon_master.skills.progression.roll_die", return_value=1):
            updated, reward = level_up(weak)
        assert reward.hp_increase == 1
        assert reward.skill_points == 0
        assert updated.max_hp == 13

    def test_class_without_abilities(self):
        bard = make_character(char_class=CharacterClass.BARD, experience=300)
        _, reward = level_up(bard)
        assert reward.new_abilities == []

    def test_describe(self):
        character = make_character(experience=300)
        with patch("dungeon_master.skills.progression.roll_die", return_value=5):
            _, reward = level_up(character)
        assert reward.describe().startswith("Level Up! +7 HP, +1 skill points")
        assert "Action Surge" in reward.describe()


class TestSkills:
    """Tests for skill checks and training."""

    def test_untrained_skill_has_no_proficiency(self):
        character = make_character()
        assert get_skill_modifier(character, Skill.ATHLETICS) == 2

    def test_trained_skill_adds_proficiency(self):
        character = spend_skill_point(make_character(skill_points=1), Skill.ATHLETICS)
        assert get_skill_modifier(character, Skill.ATHLETICS) == 4

    def test_skill_check(self):
        character = make_character()
        with patch("dungeon_master.skills.progression.roll_d20", return_value=d20(13)):
            result = roll_skill_check(character, Skill.ATHLETICS)
        assert result.roll == 13
        assert result.total == 15
        assert result.difficulty == 15
        assert result.success

    def test_skill_check_failure(self):
        character = make_character()
        with patch("dungeon_master.skills.progression.roll_d20", return_value=d20(2)):
            result = roll_skill_check(character, Skill.ARCANA, difficulty=10)
        assert result.modifier == -1
        assert not result.success

    def test_spend_skill_point(self):
        character = make_character(skill_points=2)
        updated = spend_skill_point(character, Skill.STEALTH)
        assert updated.skills.stealth == 1
        assert updated.skill_points == 1
        assert character.skill_points == 2

    def test_spend_without_points(self):
        with pytest.raises(ValueError, match="no skill points"):
            spend_skill_point(make_character(skill_points=0), Skill.STEALTH)

    def test_spend_at_max_rank(self):
        character = make_character(skill_points=10)
        for _ in range(5):
            character = spend_skill_point(character, Skill.STEALTH)
        with pytest.raises(ValueError, match="rank 5"):
            spend_skill_point(character, Skill.STEALTH)
