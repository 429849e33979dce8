"""
Tests for the narrative adapter.
"""

from __future__ import annotations

import pytest

from dungeon_master.content.fallback import FALLBACK_POOLS, ActionCategory
from dungeon_master.models import AbilityScores, Character, CharacterClass
from dungeon_master.services.llm import GenerationError, GenerationResult, MockLLMProvider
from dungeon_master.services.narrative import (
    NarrativeAdapter,
    build_action_prompt,
    describe_roll,
    finalize_narrative,
)


def make_character() -> Character:
    return Character(
        name="Bram",
        char_class=CharacterClass.FIGHTER,
        stats=AbilityScores(STR=15, DEX=12, CON=14, INT=8, WIS=10, CHA=9),
        hp=12,
        max_hp=12,
    )


class RaisingProvider:
    """A provider that breaks its own contract."""

    model_name = "broken"
    is_available = True

    async def generate(self, prompt: str, max_tokens: int = 600, temperature: float = 0.8):
        raise RuntimeError("socket exploded")


class BlankProvider:
    model_name = "blank"
    is_available = True

    async def generate(self, prompt: str, max_tokens: int = 600, temperature: float = 0.8):
        # bypasses the ok check so cleanup has to catch it
        return GenerationResult(text=" \n\n ")


class NumericProvider:
    model_name = "numeric"
    is_available = True

    async def generate(self, prompt: str, max_tokens: int = 600, temperature: float = 0.8):
        return GenerationResult(text=12345)


class TestPrompt:
    """Tests for prompt construction."""

    @pytest.mark.parametrize(
        "roll,label",
        [(20, "excellent!"), (15, "excellent!"), (14, "good"), (10, "good"), (9, "average"),
         (6, "average"), (5, "failure"), (1, "failure")],
    )
    def test_describe_roll(self, roll: int, label: str) -> None:
        assert describe_roll(roll) == label

    def test_prompt_contents(self) -> None:
        prompt = build_action_prompt(make_character(), "A door creaks.", "I open it", 12)
        assert "Character: Bram (Fighter)" in prompt
        assert "STR 15, DEX 12, CON 14, INT 8, WIS 10, CHA 9" in prompt
        assert "Last event: A door creaks." in prompt
        assert 'PLAYER ACTION: "I open it"' in prompt
        assert "DICE RESULT: 12/20 (good)" in prompt
        assert prompt.endswith("in English.")

    def test_default_last_event(self) -> None:
        prompt = build_action_prompt(make_character(), None, "I wake up", 3)
        assert "Last event: The adventure begins" in prompt

    def test_truncation(self) -> None:
        """Test the prompt stays bounded however long the inputs are."""
        prompt = build_action_prompt(make_character(), "x" * 1000, "y" * 1000, 10)
        assert "x" * 150 in prompt
        assert "x" * 151 not in prompt
        assert "y" * 500 in prompt
        assert "y" * 501 not in prompt

    def test_custom_limits(self) -> None:
        prompt = build_action_prompt(
            make_character(), "abcdef", "ghijkl", 10, last_event_limit=3, action_limit=2
        )
        assert "Last event: abc\n" in prompt
        assert 'PLAYER ACTION: "gh"' in prompt


class TestFinalize:
    def test_adds_terminal_punctuation(self) -> None:
        assert finalize_narrative("  The door opens  ") == "The door opens."

    def test_keeps_existing_punctuation(self) -> None:
        assert finalize_narrative("What now?") == "What now?"
        assert finalize_narrative("Run!") == "Run!"

    def test_collapses_blank_lines(self) -> None:
        assert finalize_narrative("One.\n\n\n\nTwo.") == "One.\n\nTwo."

    def test_blank_is_none(self) -> None:
        assert finalize_narrative(None) is None
        assert finalize_narrative("   ") is None


class TestNarrativeAdapter:
    """Tests for narration with fallback."""

    @pytest.mark.asyncio
    async def test_uses_provider_text(self) -> None:
        provider = MockLLMProvider(default_response="The chest springs open")
        adapter = NarrativeAdapter(provider)
        text = await adapter.narrate(make_character(), None, "I open the chest", 17)
        assert text == "The chest springs open."
        assert "excellent!" in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_falls_back_on_failure(self) -> None:
        adapter = NarrativeAdapter(MockLLMProvider(fail_with=GenerationError.TRANSPORT))
        text = await adapter.narrate(make_character(), None, "I attack the goblin", 10)
        assert text in FALLBACK_POOLS[ActionCategory.COMBAT]

    @pytest.mark.asyncio
    async def test_falls_back_when_provider_raises(self) -> None:
        adapter = NarrativeAdapter(RaisingProvider())
        text = await adapter.narrate(make_character(), None, "I search the room", 10)
        assert text in FALLBACK_POOLS[ActionCategory.EXPLORATION]

    @pytest.mark.asyncio
    async def test_falls_back_on_blank_text(self) -> None:
        adapter = NarrativeAdapter(BlankProvider())
        text = await adapter.narrate(make_character(), None, "I talk to the barkeep", 10)
        assert text in FALLBACK_POOLS[ActionCategory.DIALOGUE]

    @pytest.mark.asyncio
    async def test_falls_back_on_non_text_reply(self) -> None:
        adapter = NarrativeAdapter(NumericProvider())
        text = await adapter.narrate(make_character(), None, "I attack the goblin", 10)
        assert text in FALLBACK_POOLS[ActionCategory.COMBAT]

    @pytest.mark.asyncio
    async def test_missing_action_still_narrates(self) -> None:
        """Test a missing action neither raises nor reaches the provider as None."""
        provider = MockLLMProvider(default_response="Nothing happens")
        adapter = NarrativeAdapter(provider)
        text = await adapter.narrate(make_character(), None, None, 10)
        assert text == "Nothing happens."
        assert 'PLAYER ACTION: ""' in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_missing_action_with_failing_provider(self) -> None:
        adapter = NarrativeAdapter(RaisingProvider())
        text = await adapter.narrate(make_character(), None, None, 10)
        assert isinstance(text, str)
        assert text

    @pytest.mark.asyncio
    async def test_limits_passed_through(self) -> None:
        provider = MockLLMProvider()
        adapter = NarrativeAdapter(provider, action_limit=4)
        await adapter.narrate(make_character(), None, "I dance wildly", 10)
        assert 'PLAYER ACTION: "I da"' in provider.prompts[0]
