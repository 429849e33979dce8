"""
Combat Resolution Skill.

Simulates a simplified turn-based fight between the player character
and a single hostile NPC:

- The player swings first each round (1d20 + STR + proficiency vs AC)
- The enemy answers if still standing (1d20 + level bonus vs 10 + DEX)
- The fight stops when either side drops to 0 HP or the round cap is hit
"""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, Field

from dungeon_master.models.character import Ability, Character
from dungeon_master.models.combat import (
    CombatEvent,
    CombatEventType,
    CombatOutcome,
    CombatResult,
)
from dungeon_master.models.item import InventoryItem, ItemType, create_item
from dungeon_master.models.npc import NPC
from dungeon_master.skills.dice import roll_d20, roll_damage
from dungeon_master.skills.progression import get_proficiency_bonus

logger = logging.getLogger(__name__)

MAX_COMBAT_ROUNDS = 10
BASE_PLAYER_AC = 10
DEFAULT_ENEMY_HP = 10
DEFAULT_ENEMY_AC = 10

PLAYER_DAMAGE_DIE = "1d8"
ENEMY_DAMAGE_DIE = "1d6"
ENEMY_DAMAGE_BONUS = 2

XP_PER_ENEMY_LEVEL = 50
GOLD_REWARD_RANGE = (5, 24)
MAX_LOOT_ITEMS = 2


# (name, type, description, value, weight, damage)
LOOT_TABLE: list[tuple[str, ItemType, str, int, float, str | None]] = [
    ("Copper Coins", ItemType.TREASURE, "A handful of copper coins", 5, 0.1, None),
    ("Healing Potion", ItemType.CONSUMABLE, "Restores health", 50, 0.5, None),
    ("Rusty Dagger", ItemType.WEAPON, "Old, but still sharp", 8, 1.0, "1d4"),
]


class AttackRoll(BaseModel):
    """Result of a single attack roll."""

    roll: int = Field(ge=1, le=20)
    bonus: int
    total: int
    target_ac: int
    hit: bool


def get_player_attack_bonus(character: Character) -> int:
    return character.stats.modifier(Ability.STR) + get_proficiency_bonus(character.level)


def get_player_ac(character: Character) -> int:
    """Simplified armor class: 10 + DEX modifier."""
    return BASE_PLAYER_AC + character.stats.modifier(Ability.DEX)


def get_enemy_attack_bonus(enemy: NPC) -> int:
    level = enemy.stats.level if enemy.stats else 1
    return level // 2 + 2


def roll_attack(bonus: int, target_ac: int) -> AttackRoll:
    """Roll 1d20 + bonus against a target AC; meeting the AC hits."""
    roll = roll_d20().total
    total = roll + bonus
    return AttackRoll(roll=roll, bonus=bonus, total=total, target_ac=target_ac, hit=total >= target_ac)


def generate_loot() -> list[InventoryItem]:
    """Draw 0-2 items, with replacement, from the loot table."""
    loot = []
    for _ in range(random.randint(0, MAX_LOOT_ITEMS)):
        name, item_type, description, value, weight, damage = random.choice(LOOT_TABLE)
        loot.append(
            create_item(
                name,
                item_type,
                description=description,
                value=value,
                weight=weight,
                damage=damage,
            )
        )
    return loot


def _attack_event(attacker: str, target: str, attack: AttackRoll, damage: int) -> CombatEvent:
    if attack.hit:
        result = f"{attacker} hits {target} for {damage} damage! ({attack.total} vs AC {attack.target_ac})"
    else:
        result = f"{attacker} misses {target}! ({attack.total} vs AC {attack.target_ac})"
    return CombatEvent(
        type=CombatEventType.ATTACK,
        attacker=attacker,
        target=target,
        damage=damage,
        result=result,
    )


def resolve_combat(
    character: Character,
    enemy: NPC,
    max_rounds: int = MAX_COMBAT_ROUNDS,
) -> CombatResult:
    """
    Fight an encounter to its conclusion.

    Neither the character nor the enemy is modified; use
    apply_combat_result to commit the outcome to the character.

    Args:
        character: The player character
        enemy: The hostile NPC (stats default to 10 HP / AC 10)
        max_rounds: Round cap after which the fight ends undecided

    Returns:
        CombatResult with the outcome, log and rewards
    """
    events: list[CombatEvent] = []
    player_hp = character.hp
    enemy_hp = enemy.stats.hp if enemy.stats else DEFAULT_ENEMY_HP
    enemy_ac = enemy.stats.ac if enemy.stats else DEFAULT_ENEMY_AC

    player_bonus = get_player_attack_bonus(character)
    player_damage_mod = character.stats.modifier(Ability.STR)
    player_ac = get_player_ac(character)
    enemy_bonus = get_enemy_attack_bonus(enemy)

    rounds = 0
    while player_hp > 0 and enemy_hp > 0 and rounds < max_rounds:
        rounds += 1

        attack = roll_attack(player_bonus, enemy_ac)
        damage = roll_damage(PLAYER_DAMAGE_DIE, player_damage_mod) if attack.hit else 0
        enemy_hp -= damage
        events.append(_attack_event(character.name, enemy.name, attack, damage))

        if enemy_hp <= 0:
            break

        attack = roll_attack(enemy_bonus, player_ac)
        damage = roll_damage(ENEMY_DAMAGE_DIE, ENEMY_DAMAGE_BONUS) if attack.hit else 0
        player_hp -= damage
        events.append(_attack_event(enemy.name, character.name, attack, damage))

    if enemy_hp <= 0:
        outcome = CombatOutcome.PLAYER_VICTORY
    elif player_hp <= 0:
        outcome = CombatOutcome.ENEMY_VICTORY
    else:
        outcome = CombatOutcome.TIMEOUT

    result = CombatResult(
        outcome=outcome,
        rounds=rounds,
        events=events,
        damage_taken=character.hp - max(0, player_hp),
        player_hp_remaining=max(0, player_hp),
        enemy_hp_remaining=max(0, enemy_hp),
    )

    if outcome == CombatOutcome.PLAYER_VICTORY:
        level = enemy.stats.level if enemy.stats else 1
        result.experience_gained = level * XP_PER_ENEMY_LEVEL
        result.gold_gained = random.randint(*GOLD_REWARD_RANGE)
        result.items_gained = generate_loot()

    logger.info(
        "Combat %s vs %s: %s after %d rounds",
        character.name,
        enemy.name,
        outcome.value,
        rounds,
    )
    return result


def apply_combat_result(character: Character, result: CombatResult) -> Character:
    """Return a copy of the character with damage, experience and gold applied."""
    updated = character.model_copy(deep=True)
    updated.take_damage(result.damage_taken)
    updated.experience += result.experience_gained
    updated.gold += result.gold_gained
    return updated
