"""Tests for NPC generation."""

from __future__ import annotations

from unittest.mock import patch

from dungeon_master.models import ItemType, Relationship, VoiceId
from dungeon_master.services.npc import (
    MONSTERS,
    NPC_OCCUPATIONS,
    NPCCategory,
    classify_npc_context,
    generate_combat_encounter,
    generate_contextual_npc,
    generate_merchant_inventory,
    generate_npc_dialogue,
    generate_random_npc,
)


class TestRandomNPC:
    """Tests for random townsfolk."""

    def test_fields_populated(self):
        for _ in range(30):
            npc = generate_random_npc("millbrook-market")
            assert npc.location == "millbrook-market"
            assert npc.occupation in NPC_OCCUPATIONS
            assert 2 <= len(npc.personality) <= 3
            assert len(set(npc.personality)) == len(npc.personality)
            assert npc.appearance.startswith(npc.race + ", ")
            assert 2 <= len(npc.appearance.split(", ")) - 1 <= 4
            assert npc.voice in set(VoiceId)
            assert " " in npc.name
            assert npc.stats is not None
            assert 1 <= npc.stats.level <= 5
            assert 5 * npc.stats.level <= npc.stats.hp <= 5 * npc.stats.level + 19
            assert 10 <= npc.stats.ac <= 14
            assert npc.get_dialogue("greeting") is not None

    def test_merchant_occupation_always_trades(self):
        with patch("dungeon_master.services.npc.random.choice", side_effect=lambda seq: seq[0]):
            npc = generate_random_npc("tavern")
        assert npc.occupation == "Merchant"
        assert npc.merchant
        assert npc.inventory is not None
        assert npc.get_dialogue("trade") is not None

    def test_non_merchants_have_no_stock(self):
        for _ in range(30):
            npc = generate_random_npc("tavern")
            assert (npc.inventory is not None) == npc.merchant


class TestDialogue:
    def test_greeting_by_personality(self):
        assert generate_npc_dialogue(["friendly"], "Baker")[0].response.startswith("Greetings")
        assert generate_npc_dialogue(["suspicious"], "Baker")[0].response.startswith("What")
        assert generate_npc_dialogue(["gloomy"], "Baker")[0].response == "Hello."

    def test_guard_line(self):
        dialogue = generate_npc_dialogue(["honest"], "Guard")
        assert [d.trigger for d in dialogue] == ["greeting", "law"]


class TestMerchantInventory:
    def test_stock_size_and_quantities(self):
        for _ in range(20):
            stock = generate_merchant_inventory()
            assert 3 <= len(stock) <= 10
            assert all(1 <= item.quantity <= 3 for item in stock)

    def test_weapon_has_damage(self):
        with patch("dungeon_master.services.npc.random.choice", side_effect=lambda seq: seq[0]):
            stock = generate_merchant_inventory()
        assert stock[0].type == ItemType.WEAPON
        assert stock[0].stats.damage == "1d8+1"


class TestContextualNPC:
    """Tests for NPCs shaped by a context hint."""

    def test_classify_context(self):
        assert classify_npc_context("a shifty merchant") == NPCCategory.MERCHANT
        assert classify_npc_context("the city guard") == NPCCategory.GUARD
        assert classify_npc_context("an old priest") == NPCCategory.PRIEST
        assert classify_npc_context("a wandering mage") == NPCCategory.SCHOLAR
        assert classify_npc_context("someone") == NPCCategory.COMMONER

    def test_merchant_profile(self):
        npc = generate_contextual_npc("a merchant", "millbrook-market")
        assert npc.occupation == "Merchant"
        assert npc.voice == VoiceId.MERCHANT
        assert npc.personality == ["greedy", "talkative"]
        assert npc.merchant
        assert npc.inventory

    def test_guard_profile(self):
        npc = generate_contextual_npc("guard", "millbrook-market")
        assert npc.voice == VoiceId.GUARD
        assert not npc.merchant
        assert npc.inventory is None

    def test_default_commoner(self):
        npc = generate_contextual_npc("a stranger", "king-road")
        assert npc.occupation == "Commoner"
        assert npc.voice == VoiceId.PEASANT
        assert npc.personality == ["friendly"]


class TestCombatEncounter:
    def test_hostile_monster(self):
        names = {m.name for m in MONSTERS}
        for _ in range(10):
            enemy = generate_combat_encounter("whispering-woods")
            assert enemy.name in names
            assert enemy.relationship == Relationship.HOSTILE
            assert enemy.voice == VoiceId.VILLAIN
            assert enemy.stats is not None
            assert enemy.get_dialogue("combat") == "Prepare to fight!"

    def test_preset_stats(self):
        with patch("dungeon_master.services.npc.random.choice", return_value=MONSTERS[1]):
            enemy = generate_combat_encounter("goblin-caves")
        assert enemy.name == "Orc Warrior"
        assert enemy.stats.level == 2
        assert enemy.stats.hp == 15
        assert enemy.stats.ac == 13
        assert enemy.stats.damage == "1d12+3"
