"""
Dice Rolling Skill.

Implements fair, cryptographically random dice rolling following SRD notation.
"""

from __future__ import annotations

import logging
import re
import secrets

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Pattern: NdX (optional: kh/klN) (optional: +/-M)
DICE_PATTERN = re.compile(r"^(\d+)d(\d+)(?:(kh|kl)(\d+))?([+-]\d+)?$")

# Looser pattern for damage strings such as "1d8+1" or "2d4 + 2"
DAMAGE_PATTERN = re.compile(r"(\d+)\s*d\s*(\d+)\s*(?:([+-])\s*(\d+))?", re.I)


class DiceResult(BaseModel):
    """Result of a dice roll."""

    notation: str = Field(description="Original dice notation")
    rolls: list[int] = Field(description="Individual die results")
    kept: list[int] | None = Field(default=None, description="Kept dice for kh/kl")
    modifier: int = Field(default=0, description="Any +/- modifier")
    total: int = Field(description="Final result")


def roll_die(sides: int) -> int:
    """Roll a single die with the given number of sides."""
    if sides < 1:
        raise ValueError("Die size must be positive")
    return secrets.randbelow(sides) + 1


def roll_dice(notation: str) -> DiceResult:
    """
    Roll dice using standard notation.

    Supports:
    - NdX: Roll N dice with X sides (e.g., "2d6", "1d20")
    - NdX+M: Add modifier (e.g., "1d20+5", "2d6-2")
    - NdXkhN: Keep highest N dice (e.g., "4d6kh3")
    - NdXklN: Keep lowest N dice (e.g., "2d20kl1")

    Args:
        notation: Dice notation string

    Returns:
        DiceResult with individual rolls and total

    Examples:
        >>> result = roll_dice("4d6kh3")
        >>> result.kept   # [6, 5, 4] (highest 3)
        >>> result.rolls  # [6, 5, 4, 1] (all 4 rolls)
    """
    notation = notation.lower().strip()

    match = DICE_PATTERN.match(notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    keep_type = match.group(3)  # "kh" or "kl" or None
    keep_count = int(match.group(4)) if match.group(4) else None
    modifier = int(match.group(5)) if match.group(5) else 0

    if num_dice < 1 or die_size < 1:
        raise ValueError("Number of dice and die size must be positive")

    if keep_count is not None and keep_count > num_dice:
        raise ValueError(f"Cannot keep {keep_count} dice when only rolling {num_dice}")

    rolls = [roll_die(die_size) for _ in range(num_dice)]

    kept: list[int] | None = None
    if keep_type == "kh" and keep_count:
        kept = sorted(rolls, reverse=True)[:keep_count]
        dice_sum = sum(kept)
    elif keep_type == "kl" and keep_count:
        kept = sorted(rolls)[:keep_count]
        dice_sum = sum(kept)
    else:
        dice_sum = sum(rolls)

    total = dice_sum + modifier
    logger.debug("Rolled %s: %s -> %d", notation, rolls, total)

    return DiceResult(
        notation=notation,
        rolls=rolls,
        kept=kept,
        modifier=modifier,
        total=total,
    )


def roll_d20(modifier: int = 0) -> DiceResult:
    """Convenience function for d20 rolls."""
    notation = f"1d20{'+' if modifier >= 0 else ''}{modifier}" if modifier else "1d20"
    return roll_dice(notation)


def roll_damage(notation: str, modifier: int = 0) -> int:
    """
    Roll damage dice, never returning less than 1.

    Any modifier embedded in the notation ("1d8+1") is added to the
    explicit ``modifier``. Notation that cannot be parsed counts as a
    flat 1 plus the modifier.

    Args:
        notation: Damage dice such as "1d8" or "2d6+2"
        modifier: Flat bonus (e.g. an ability modifier)

    Returns:
        Damage total, minimum 1
    """
    match = DAMAGE_PATTERN.search(notation or "")
    if not match:
        return max(1, 1 + modifier)

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    if num_dice < 1 or die_size < 1:
        return max(1, 1 + modifier)

    embedded = 0
    if match.group(4):
        embedded = int(match.group(4)) * (-1 if match.group(3) == "-" else 1)

    total = sum(roll_die(die_size) for _ in range(num_dice)) + embedded + modifier
    return max(1, total)
