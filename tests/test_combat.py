"""Tests for the combat resolution skill."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from dungeon_master.models import (
    NPC,
    AbilityScores,
    Character,
    CharacterClass,
    CombatEventType,
    CombatOutcome,
    NPCStats,
    Relationship,
)
from dungeon_master.skills.combat import (
    LOOT_TABLE,
    apply_combat_result,
    generate_loot,
    get_enemy_attack_bonus,
    get_player_ac,
    get_player_attack_bonus,
    resolve_combat,
    roll_attack,
)
from dungeon_master.skills.dice import DiceResult


def d20(value: int) -> DiceResult:
    return DiceResult(notation="1d20", rolls=[value], total=value)


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


def make_enemy(hp: int = 10, ac: int = 10, level: int = 1) -> NPC:
    return NPC(
        name="Goblin",
        race="Goblin",
        occupation="Enemy",
        relationship=Relationship.HOSTILE,
        stats=NPCStats(level=level, hp=hp, ac=ac),
    )


class TestAttackMath:
    """Tests for attack bonuses and rolls."""

    def test_player_attack_bonus(self):
        assert get_player_attack_bonus(make_character()) == 4  # STR 2 + proficiency 2

    def test_player_ac(self):
        assert get_player_ac(make_character()) == 11  # 10 + DEX 1

    @pytest.mark.parametrize("level,bonus", [(1, 2), (2, 3), (5, 4)])
    def test_enemy_attack_bonus(self, level, bonus):
        assert get_enemy_attack_bonus(make_enemy(level=level)) == bonus

    def test_enemy_without_stats(self):
        npc = NPC(name="Rat", race="Beast", occupation="Vermin")
        assert get_enemy_attack_bonus(npc) == 2

    def test_meeting_ac_hits(self):
        with patch("dungeon_master.skills.combat.roll_d20", return_value=d20(8)):
            assert roll_attack(2, 10).hit
            assert not roll_attack(1, 10).hit


class TestResolveCombat:
    """Tests for full encounters."""

    def test_quick_victory(self):
        character = make_character()
        enemy = make_enemy(hp=5)
        with (
            patch("dungeon_master.skills.combat.roll_d20", return_value=d20(20)),
            patch("dungeon_master.skills.combat.roll_damage", return_value=6),
        ):
            result = resolve_combat(character, enemy)

        assert result.outcome == CombatOutcome.PLAYER_VICTORY
        assert result.victory
        assert result.rounds == 1
        assert len(result.events) == 1
        assert result.events[0].type == CombatEventType.ATTACK
        assert result.events[0].damage == 6
        assert result.experience_gained == 50
        assert 5 <= result.gold_gained <= 24
        assert len(result.items_gained) <= 2
        assert result.damage_taken == 0
        assert result.enemy_hp_remaining == 0

    def test_enemy_hp_drops_by_fixed_damage_each_round(self):
        """Test a 20 HP enemy taking 3 per hit falls on the seventh round."""
        character = make_character(hp=1000, max_hp=1000)
        enemy = make_enemy(hp=20)
        with (
            patch("dungeon_master.skills.combat.roll_d20", return_value=d20(20)),
            patch("dungeon_master.skills.combat.roll_damage", return_value=3),
        ):
            result = resolve_combat(character, enemy)

        player_events = [e for e in result.events if e.attacker == "Bram"]
        enemy_events = [e for e in result.events if e.attacker == "Goblin"]
        assert result.outcome == CombatOutcome.PLAYER_VICTORY
        assert result.rounds == 7
        assert len(player_events) == 7
        assert all("hits Goblin for 3 damage" in e.result for e in player_events)
        assert sum(e.damage for e in player_events) == 21
        assert len(enemy_events) == 6
        assert result.damage_taken == 18
        assert result.enemy_hp_remaining == 0

        remaining = 20
        for event in player_events:
            remaining -= event.damage
        assert remaining == 20 - 7 * 3

    def test_enemy_victory(self):
        character = make_character(hp=3)
        enemy = make_enemy(hp=50, ac=30)
        with (
            patch("dungeon_master.skills.combat.roll_d20", return_value=d20(10)),
            patch("dungeon_master.skills.combat.roll_damage", return_value=5),
        ):
            result = resolve_combat(character, enemy)

        assert result.outcome == CombatOutcome.ENEMY_VICTORY
        assert not result.victory
        assert result.damage_taken == 3
        assert result.player_hp_remaining == 0
        assert result.experience_gained == 0
        assert result.gold_gained == 0
        assert result.items_gained == []

    def test_timeout_after_round_cap(self):
        character = make_character(hp=1000, max_hp=1000)
        enemy = make_enemy(hp=50, ac=99)
        result = resolve_combat(character, enemy)

        assert result.outcome == CombatOutcome.TIMEOUT
        assert result.is_timeout
        assert not result.victory
        assert result.rounds == 10
        assert len(result.events) == 20
        assert result.experience_gained == 0

    def test_custom_round_cap(self):
        character = make_character(hp=1000, max_hp=1000)
        result = resolve_combat(character, make_enemy(hp=50, ac=99), max_rounds=3)
        assert result.rounds == 3

    def test_inputs_not_mutated(self):
        character = make_character()
        enemy = make_enemy()
        resolve_combat(character, enemy)
        assert character.hp == 12
        assert enemy.stats.hp == 10

    def test_every_attack_logged(self):
        character = make_character()
        with (
            patch("dungeon_master.skills.combat.roll_d20", return_value=d20(1)),
            patch("dungeon_master.skills.combat.roll_damage", return_value=1),
        ):
            result = resolve_combat(character, make_enemy(ac=30), max_rounds=2)
        # 1 + 4 vs AC 30 and 1 + 2 vs AC 11 both miss
        assert len(result.events) == 4
        assert all("misses" in e.result for e in result.events)


class TestRewards:
    """Tests for loot and applying results."""

    def test_loot_from_table(self):
        names = {name for name, *_ in LOOT_TABLE}
        for _ in range(20):
            loot = generate_loot()
            assert len(loot) <= 2
            assert all(item.name in names for item in loot)

    def test_apply_combat_result(self):
        character = make_character()
        enemy = make_enemy(hp=5, level=2)
        with (
            patch("dungeon_master.skills.combat.roll_d20", return_value=d20(20)),
            patch("dungeon_master.skills.combat.roll_damage", return_value=6),
        ):
            result = resolve_combat(character, enemy)

        updated = apply_combat_result(character, result)
        assert updated.experience == 100
        assert updated.gold == result.gold_gained
        assert updated.hp == 12
        assert character.experience == 0
