"""Tests for core game models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dungeon_master.models import (
    NPC,
    AbilityScores,
    Character,
    CharacterClass,
    CombatOutcome,
    CombatResult,
    DialogueEntry,
    GameSession,
    HistoryEntryType,
    ItemType,
    Location,
    LocationType,
    QuestStatus,
    Relationship,
    create_item,
    create_quest,
)


def make_character(**overrides) -> Character:
    fields = {"name": "Bram", "char_class": CharacterClass.FIGHTER, "hp": 12, "max_hp": 12}
    fields.update(overrides)
    return Character(**fields)


def make_session(**overrides) -> GameSession:
    fields = {
        "id": "session-1",
        "character": make_character(),
        "current_location": "goldenheart-tavern",
        "visited_locations": ["goldenheart-tavern"],
    }
    fields.update(overrides)
    return GameSession(**fields)


# --- AbilityScores Tests ---


class TestAbilityScores:
    """Tests for AbilityScores model."""

    def test_default_values(self):
        abilities = AbilityScores()
        assert abilities.as_dict() == {
            "STR": 10,
            "DEX": 10,
            "CON": 10,
            "INT": 10,
            "WIS": 10,
            "CHA": 10,
        }

    def test_alias_works(self):
        abilities = AbilityScores(**{"STR": 18, "INT": 14})
        assert abilities.str_ == 18
        assert abilities.int_ == 14

    def test_modifier_calculation(self):
        abilities = AbilityScores(STR=16, DEX=8, CON=15, INT=1)
        assert abilities.modifier("STR") == 3
        assert abilities.modifier("dex") == -1
        assert abilities.modifier("CON") == 2
        assert abilities.modifier("INT") == -5

    def test_unknown_ability(self):
        with pytest.raises(ValueError, match="Unknown ability"):
            AbilityScores().get("LUCK")


# --- Character Tests ---


class TestCharacter:
    """Tests for Character model."""

    def test_hp_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            make_character(hp=20, max_hp=12)

    def test_take_damage_clamps_at_zero(self):
        character = make_character()
        assert character.take_damage(50) == 12
        assert character.hp == 0
        assert not character.is_alive

    def test_heal_clamps_at_max(self):
        character = make_character(hp=5)
        assert character.heal(100) == 7
        assert character.hp == 12

    def test_level_bounds(self):
        with pytest.raises(ValidationError):
            make_character(level=21)


# --- Quest Tests ---


class TestQuest:
    """Tests for Quest model."""

    def test_create_quest_factory(self):
        quest = create_quest(
            "Rats in the Cellar",
            "Clear out the cellar.",
            ["Find the cellar", "Kill the rats"],
            gold=10,
            experience=50,
            quest_id="quest-rats",
        )
        assert quest.id == "quest-rats"
        assert quest.status == QuestStatus.ACTIVE
        assert [o.description for o in quest.objectives] == ["Find the cellar", "Kill the rats"]
        assert quest.reward is not None
        assert quest.reward.gold == 10

    def test_progress(self):
        quest = create_quest("Q", "D", ["a", "b"])
        assert quest.progress_percent == 0.0
        assert quest.complete_objective(quest.objectives[0].id) is True
        assert quest.complete_objective(quest.objectives[0].id) is False
        assert quest.progress_percent == 0.5

    def test_terminal_status_cannot_change(self):
        quest = create_quest("Q", "D", ["a"])
        quest.complete()
        assert quest.completed_at is not None
        with pytest.raises(ValueError, match="already completed"):
            quest.fail()
        with pytest.raises(ValueError):
            quest.complete_objective(quest.objectives[0].id)

    def test_unknown_objective(self):
        quest = create_quest("Q", "D", ["a"])
        with pytest.raises(ValueError, match="no objective"):
            quest.complete_objective("obj-missing")


# --- NPC Tests ---


class TestNPC:
    """Tests for NPC model."""

    def test_dialogue_lookup(self):
        npc = NPC(
            name="Marta",
            race="Human",
            occupation="Innkeeper",
            dialogue=[DialogueEntry(trigger="greeting", response="Welcome, dear guest!")],
        )
        assert npc.get_dialogue("greeting") == "Welcome, dear guest!"
        assert npc.get_dialogue("trade") is None
        assert npc.id.startswith("npc-")

    def test_is_hostile(self):
        npc = NPC(name="Grik", race="Goblin", occupation="Enemy", relationship=Relationship.HOSTILE)
        assert npc.is_hostile


# --- Location Tests ---


class TestLocation:
    """Tests for Location accessibility."""

    def make_location(self) -> Location:
        return Location(
            id="woods",
            name="Woods",
            description="Trees.",
            type=LocationType.WILDERNESS,
            connections=["road"],
        )

    def test_visited_is_accessible(self):
        assert self.make_location().is_accessible_from(["woods"])

    def test_connected_to_visited(self):
        assert self.make_location().is_accessible_from(["road"])

    def test_connected_to_discovered(self):
        assert self.make_location().is_accessible_from(["tavern"], discovered=["road"])

    def test_not_accessible(self):
        assert not self.make_location().is_accessible_from(["tavern"])


# --- Combat Result Tests ---


class TestCombatResult:
    def test_outcome_flags(self):
        assert CombatResult(outcome=CombatOutcome.PLAYER_VICTORY, rounds=2).victory
        timeout = CombatResult(outcome=CombatOutcome.TIMEOUT, rounds=10)
        assert timeout.is_timeout
        assert not timeout.victory


# --- GameSession Tests ---


class TestGameSession:
    """Tests for the session aggregate."""

    def test_last_dm_line(self):
        session = make_session()
        assert session.last_dm_line() is None
        session.add_history(HistoryEntryType.DM, "First.")
        session.add_history(HistoryEntryType.PLAYER, "I look around")
        assert session.last_dm_line() == "First."

    def test_roll_entry_range(self):
        session = make_session()
        with pytest.raises(ValidationError):
            session.add_history(HistoryEntryType.ROLL, "d20 roll: 21", roll=21)

    def test_add_item_stacks_by_name(self):
        session = make_session()
        session.add_item(create_item("Torch", ItemType.TOOL, quantity=2))
        session.add_item(create_item("Torch", ItemType.TOOL, quantity=1))
        assert len(session.inventory) == 1
        assert session.inventory[0].quantity == 3

    def test_remove_item_drops_empty_stack(self):
        session = make_session()
        stored = session.add_item(create_item("Healing Potion", ItemType.CONSUMABLE, quantity=2))
        session.remove_item(stored.id)
        assert session.find_item(stored.id).quantity == 1
        session.remove_item(stored.id)
        assert session.find_item(stored.id) is None

    def test_remove_item_errors(self):
        session = make_session()
        stored = session.add_item(create_item("Rope", ItemType.TOOL))
        with pytest.raises(ValueError):
            session.remove_item(stored.id, quantity=2)
        with pytest.raises(ValueError):
            session.remove_item("item-missing")

    def test_visit(self):
        session = make_session()
        assert session.visit("millbrook-market") is True
        assert session.visit("goldenheart-tavern") is False
        assert session.current_location == "goldenheart-tavern"
        assert session.visited_locations == ["goldenheart-tavern", "millbrook-market"]

    def test_meet_npc_once(self):
        session = make_session()
        npc = NPC(name="Marta", race="Human", occupation="Innkeeper")
        session.meet_npc(npc)
        session.meet_npc(npc)
        assert len(session.encountered_npcs) == 1
        assert session.find_npc(npc.id) is not None
