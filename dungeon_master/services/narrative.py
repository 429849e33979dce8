"""
Narrative Adapter.

Turns a player action and its d20 roll into Dungeon Master narration.
The language model is tried first; whenever it fails or returns
something unusable, a canned line from the fallback pools is used
instead, so narrate() always produces text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from dungeon_master.content.fallback import generate_fallback
from dungeon_master.models.character import Character
from dungeon_master.services.llm import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_LAST_EVENT = "The adventure begins"
LAST_EVENT_LIMIT = 150
ACTION_LIMIT = 500

_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")
_EXCESS_BREAKS = re.compile(r"\n{3,}")


def describe_roll(roll: int) -> str:
    """Qualitative label for a d20 result."""
    if roll >= 15:
        return "excellent!"
    if roll >= 10:
        return "good"
    if roll >= 6:
        return "average"
    return "failure"


def build_action_prompt(
    character: Character,
    last_dm_line: str | None,
    action: str,
    roll: int,
    *,
    last_event_limit: int = LAST_EVENT_LIMIT,
    action_limit: int = ACTION_LIMIT,
) -> str:
    """
    Build the bounded user prompt for one player action.

    Only the latest DM line is included as context, truncated, so the
    prompt size does not grow with the session history.
    """
    stats = ", ".join(f"{name} {score}" for name, score in character.stats.as_dict().items())
    last_event = (last_dm_line or DEFAULT_LAST_EVENT)[:last_event_limit]
    return f"""GAME SITUATION:
Character: {character.name} ({character.char_class.value})
Stats: {stats}

Last event: {last_event}

PLAYER ACTION: "{action[:action_limit]}"
DICE RESULT: {roll}/20 ({describe_roll(roll)})

Describe the result briefly but vividly. If there are NPCs, give them unique voices. \
Offer a specific choice to the player. Maximum 4-6 sentences in English."""


def finalize_narrative(text: str | None) -> str | None:
    """
    Clean up generated narration.

    Trims whitespace, collapses runs of blank lines and makes sure the
    text ends with terminal punctuation. Returns None for blank input.
    """
    if text is None:
        return None
    cleaned = _EXCESS_BREAKS.sub("\n\n", text.strip())
    if not cleaned:
        return None
    if not _TERMINAL_PUNCTUATION.search(cleaned):
        cleaned += "."
    return cleaned


@dataclass
class NarrativeAdapter:
    """Produces narration for player actions, falling back on canned text."""

    provider: LLMProvider
    last_event_limit: int = LAST_EVENT_LIMIT
    action_limit: int = ACTION_LIMIT
    max_tokens: int = 600
    temperature: float = 0.8

    async def narrate(
        self,
        character: Character,
        last_dm_line: str | None,
        action: str,
        roll: int,
    ) -> str:
        """Narrate the outcome of an action. Never raises."""
        action = action if isinstance(action, str) else ""
        try:
            prompt = build_action_prompt(
                character,
                last_dm_line,
                action,
                roll,
                last_event_limit=self.last_event_limit,
                action_limit=self.action_limit,
            )
            logger.debug("Narration prompt is %d chars", len(prompt))
            result = await self.provider.generate(
                prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            if result.error is not None or not isinstance(result.text, str):
                logger.warning(
                    "Narration failed (%s), using fallback", result.error or "non-text reply"
                )
                return self.fallback(action)
            text = finalize_narrative(result.text)
        except Exception:
            logger.exception(
                "Narration with provider %s failed", getattr(self.provider, "model_name", "?")
            )
            return self.fallback(action)

        if text is None:
            logger.warning("Narration was blank after cleanup, using fallback")
            return self.fallback(action)
        return text

    def fallback(self, action: str) -> str:
        return finalize_narrative(generate_fallback(action)) or DEFAULT_LAST_EVENT + "."
