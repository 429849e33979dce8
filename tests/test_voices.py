"""Tests for voice archetypes and keyword classification."""

from __future__ import annotations

import pytest

from dungeon_master.content.fallback import (
    FALLBACK_POOLS,
    ActionCategory,
    classify_action,
    generate_fallback,
)
from dungeon_master.content.keywords import classify, classify_all, contains_keyword
from dungeon_master.content.voices import (
    VOICES,
    detect_voices,
    get_voice,
    select_voice_by_context,
)
from dungeon_master.models import VoiceId


class TestKeywords:
    """Tests for whole-word keyword matching."""

    def test_whole_word_only(self):
        assert contains_keyword("I attack the goblin", {"attack"})
        assert not contains_keyword("the counterattacker waits", {"attack"})

    def test_case_insensitive(self):
        assert contains_keyword("HALT right there", {"halt"})

    def test_multi_word_keyword(self):
        assert contains_keyword("In my years I saw much", {"in my years"})

    def test_classify_uses_table_order(self):
        table = [("first", frozenset({"gold"})), ("second", frozenset({"gold", "coin"}))]
        assert classify("gold and coin", table, default="none") == "first"
        assert classify("coin", table, default="none") == "second"
        assert classify("nothing", table, default="none") == "none"

    def test_classify_all(self):
        table = [("a", frozenset({"x"})), ("b", frozenset({"y"})), ("c", frozenset({"z"}))]
        assert classify_all("x z", table) == ["a", "c"]


class TestVoices:
    """Tests for the voice archetype catalog."""

    def test_twelve_archetypes(self):
        assert len(VOICES) == 12
        assert set(VOICES) == set(VoiceId)

    def test_get_voice(self):
        assert get_voice("merchant").name == "Merchant"
        with pytest.raises(ValueError):
            get_voice("pirate")

    def test_select_by_context(self):
        assert select_voice_by_context("a grumpy shopkeeper").id == VoiceId.MERCHANT
        assert select_voice_by_context("the temple priest").id == VoiceId.PRIEST

    def test_select_by_context_falls_back_to_random(self):
        assert select_voice_by_context("someone").id in VOICES

    def test_detect_multiple_voices(self):
        text = "Halt! Show me your papers. That's a fine deal, my friend, for just one coin."
        ids = [voice.id for voice in detect_voices(text)]
        assert ids == [VoiceId.MERCHANT, VoiceId.GUARD]

    def test_detect_no_voices(self):
        assert detect_voices("The wind blows across the empty plain.") == []


class TestFallback:
    """Tests for canned narration."""

    @pytest.mark.parametrize(
        "action,category",
        [
            ("I talk to the innkeeper", ActionCategory.DIALOGUE),
            ("I attack the goblin", ActionCategory.COMBAT),
            ("I search the room", ActionCategory.EXPLORATION),
            ("I sing a song", ActionCategory.GENERAL),
        ],
    )
    def test_classify_action(self, action, category):
        assert classify_action(action) == category

    def test_dialogue_checked_before_combat(self):
        assert classify_action("I ask him to fight") == ActionCategory.DIALOGUE

    def test_fallback_from_matching_pool(self):
        assert generate_fallback("I search the room") in FALLBACK_POOLS[ActionCategory.EXPLORATION]

    def test_every_line_ends_with_a_choice(self):
        for pool in FALLBACK_POOLS.values():
            for line in pool:
                assert line.endswith("?")
