"""
NPC Service for the Dungeon Master.

Generates the non-player characters the player meets: random townsfolk,
NPCs shaped by a context hint ("a nervous merchant"), and hostile
monsters for combat encounters.
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from dungeon_master.content.keywords import classify
from dungeon_master.models.item import InventoryItem, ItemType, create_item
from dungeon_master.models.npc import (
    NPC,
    DialogueEntry,
    NPCStats,
    Relationship,
    VoiceId,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

QUEST_GIVER_CHANCE = 0.3
CONTEXTUAL_QUEST_GIVER_CHANCE = 0.5
MERCHANT_CHANCE = 0.2

# Cumulative thresholds: 40% friendly, 40% neutral, 15% hostile, 5% romantic
RELATIONSHIP_WEIGHTS: list[tuple[Relationship, int]] = [
    (Relationship.FRIENDLY, 40),
    (Relationship.NEUTRAL, 40),
    (Relationship.HOSTILE, 15),
    (Relationship.ROMANTIC, 5),
]

MERCHANT_STOCK_RANGE = (3, 10)
MERCHANT_QUANTITY_RANGE = (1, 3)

NPC_RACES = [
    "Human",
    "Elf",
    "Dwarf",
    "Halfling",
    "Dragonborn",
    "Gnome",
    "Half-Elf",
    "Half-Orc",
    "Tiefling",
    "Aasimar",
]

NPC_OCCUPATIONS = [
    "Merchant",
    "Blacksmith",
    "Innkeeper",
    "Guard",
    "Farmer",
    "Priest",
    "Mage",
    "Bard",
    "Hunter",
    "Fisher",
    "Baker",
    "Tailor",
    "Alchemist",
    "Scribe",
    "Soldier",
    "Thief",
    "Mercenary",
]

PERSONALITY_TRAITS = [
    "friendly",
    "suspicious",
    "greedy",
    "generous",
    "curious",
    "secretive",
    "talkative",
    "quiet",
    "brave",
    "cowardly",
    "honest",
    "deceitful",
    "cheerful",
    "gloomy",
    "wise",
    "foolish",
    "patient",
    "hot-tempered",
    "kind",
    "cruel",
]

APPEARANCE_FEATURES = [
    "tall",
    "short",
    "thin",
    "stout",
    "muscular",
    "frail",
    "bearded",
    "bald",
    "long-haired",
    "short-haired",
    "scarred",
    "tattooed",
    "bespectacled",
    "walks with a cane",
    "elegant",
    "scruffy",
]

FIRST_NAMES = [
    "Aldric",
    "Bram",
    "Cedric",
    "Dorian",
    "Edmund",
    "Garrick",
    "Anna",
    "Elena",
    "Isolde",
    "Mira",
    "Nessa",
    "Rowena",
    "Eldar",
    "Thorin",
    "Borin",
    "Lirael",
    "Faelar",
    "Tamsin",
    "Wren",
    "Galen",
]

LAST_NAMES = [
    "Smith",
    "Fletcher",
    "Thatcher",
    "Cooper",
    "Ironbeard",
    "Goldwing",
    "Brightwater",
    "Darkmoor",
    "the Wise",
    "Swiftfoot",
    "Stronghand",
    "the Bold",
    "Quickfingers",
    "Goodheart",
]

# (name, type, description, value, weight, damage, armor)
MERCHANT_ITEMS: list[tuple[str, ItemType, str, int, float, str | None, int | None]] = [
    ("Iron Sword", ItemType.WEAPON, "A well-made iron sword", 25, 3.0, "1d8+1", None),
    ("Leather Armor", ItemType.ARMOR, "Sturdy leather armor", 20, 10.0, None, 2),
    ("Healing Potion", ItemType.CONSUMABLE, "Restores health", 50, 0.5, None, None),
    ("Rope", ItemType.TOOL, "Strong hemp rope", 2, 10.0, None, None),
    ("Torch", ItemType.TOOL, "Lights the darkness", 1, 1.0, None, None),
]


class Monster:
    """A hostile creature template for combat encounters."""

    def __init__(
        self,
        name: str,
        race: str,
        level: int,
        hp: int,
        ac: int,
        damage: str,
        experience: int,
    ) -> None:
        self.name = name
        self.race = race
        self.level = level
        self.hp = hp
        self.ac = ac
        self.damage = damage
        self.experience = experience


MONSTERS = [
    Monster("Goblin Raider", "Goblin", level=1, hp=7, ac=15, damage="1d6+2", experience=50),
    Monster("Orc Warrior", "Orc", level=2, hp=15, ac=13, damage="1d12+3", experience=100),
    Monster("Skeleton Guard", "Undead", level=1, hp=13, ac=13, damage="1d6+2", experience=50),
    Monster("Dire Wolf", "Beast", level=1, hp=11, ac=12, damage="2d4+2", experience=25),
    Monster("Bandit", "Human", level=1, hp=11, ac=12, damage="1d6+1", experience=25),
]


# =============================================================================
# Contextual Profiles
# =============================================================================


class NPCCategory(str, Enum):
    """Kinds of NPC a context hint can ask for."""

    MERCHANT = "merchant"
    GUARD = "guard"
    PRIEST = "priest"
    SCHOLAR = "scholar"
    COMMONER = "commoner"


# Checked in order; first match wins.
NPC_CONTEXT_TABLE = [
    (NPCCategory.MERCHANT, frozenset({"merchant", "trader", "shop", "shopkeeper", "vendor"})),
    (NPCCategory.GUARD, frozenset({"guard", "soldier", "watchman", "sentry", "patrol"})),
    (NPCCategory.PRIEST, frozenset({"priest", "cleric", "temple", "shrine", "monk"})),
    (NPCCategory.SCHOLAR, frozenset({"mage", "wizard", "sorcerer", "scholar", "sage"})),
]

# category -> (occupation, voice, personality)
NPC_PROFILES: dict[NPCCategory, tuple[str, VoiceId, list[str]]] = {
    NPCCategory.MERCHANT: ("Merchant", VoiceId.MERCHANT, ["greedy", "talkative"]),
    NPCCategory.GUARD: ("Guard", VoiceId.GUARD, ["strict", "honest"]),
    NPCCategory.PRIEST: ("Priest", VoiceId.PRIEST, ["wise", "kind"]),
    NPCCategory.SCHOLAR: ("Mage", VoiceId.SCHOLAR, ["curious", "wise"]),
    NPCCategory.COMMONER: ("Commoner", VoiceId.PEASANT, ["friendly"]),
}


# =============================================================================
# Generation Helpers
# =============================================================================


def generate_npc_name() -> str:
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def roll_relationship() -> Relationship:
    relationships, weights = zip(*RELATIONSHIP_WEIGHTS, strict=True)
    return random.choices(relationships, weights=weights)[0]


def generate_npc_dialogue(personality: list[str], occupation: str) -> list[DialogueEntry]:
    """A greeting shaped by personality plus, for some trades, a work line."""
    if "friendly" in personality:
        greeting = "Greetings, traveler! How fare you?"
    elif "suspicious" in personality:
        greeting = "What do you want, stranger?"
    else:
        greeting = "Hello."

    dialogue = [DialogueEntry(trigger="greeting", response=greeting)]
    if occupation == "Merchant":
        dialogue.append(
            DialogueEntry(trigger="trade", response="I have the finest wares! Care to take a look?")
        )
    elif occupation == "Guard":
        dialogue.append(
            DialogueEntry(trigger="law", response="Order must be kept. No trouble on my watch!")
        )
    return dialogue


def generate_merchant_inventory() -> list[InventoryItem]:
    """3-10 shop items drawn with replacement, each stacked 1-3 deep."""
    stock = []
    for _ in range(random.randint(*MERCHANT_STOCK_RANGE)):
        name, item_type, description, value, weight, damage, armor = random.choice(MERCHANT_ITEMS)
        stock.append(
            create_item(
                name,
                item_type,
                description=description,
                quantity=random.randint(*MERCHANT_QUANTITY_RANGE),
                value=value,
                weight=weight,
                damage=damage,
                armor=armor,
            )
        )
    return stock


# =============================================================================
# NPC Generation
# =============================================================================


def generate_random_npc(location: str) -> NPC:
    """
    Generate a random townsfolk NPC.

    Args:
        location: Location id the NPC is met at

    Returns:
        A fully populated NPC with combat stats in case things turn ugly
    """
    race = random.choice(NPC_RACES)
    occupation = random.choice(NPC_OCCUPATIONS)
    personality = random.sample(PERSONALITY_TRAITS, random.randint(2, 3))
    features = random.sample(APPEARANCE_FEATURES, random.randint(2, 4))

    merchant = occupation == "Merchant" or random.random() < MERCHANT_CHANCE
    level = random.randint(1, 5)

    npc = NPC(
        name=generate_npc_name(),
        race=race,
        occupation=occupation,
        personality=personality,
        appearance=f"{race}, {', '.join(features)}",
        voice=random.choice(list(VoiceId)),
        location=location,
        relationship=roll_relationship(),
        quest_giver=random.random() < QUEST_GIVER_CHANCE,
        merchant=merchant,
        stats=NPCStats(
            level=level,
            hp=random.randint(0, 19) + level * 5,
            ac=random.randint(10, 14),
        ),
        dialogue=generate_npc_dialogue(personality, occupation),
        inventory=generate_merchant_inventory() if merchant else None,
    )
    logger.debug("Generated NPC %s (%s) at %s", npc.name, npc.occupation, location)
    return npc


def classify_npc_context(context: str) -> NPCCategory:
    return classify(context, NPC_CONTEXT_TABLE, default=NPCCategory.COMMONER)


def generate_contextual_npc(context: str, location: str) -> NPC:
    """
    Generate an NPC matching a free-text hint such as "the temple priest".

    The hint picks the occupation, voice and personality; everything
    else is random. Unrecognized hints produce a friendly commoner.
    """
    occupation, voice, personality = NPC_PROFILES[classify_npc_context(context)]

    npc = generate_random_npc(location)
    npc.occupation = occupation
    npc.voice = voice
    npc.personality = list(personality)
    npc.merchant = occupation == "Merchant"
    npc.inventory = generate_merchant_inventory() if npc.merchant else None
    npc.quest_giver = random.random() < CONTEXTUAL_QUEST_GIVER_CHANCE
    npc.dialogue = generate_npc_dialogue(npc.personality, occupation)
    return npc


def generate_combat_encounter(location: str) -> NPC:
    """Draw a hostile monster for a fight."""
    monster = random.choice(MONSTERS)
    return NPC(
        name=monster.name,
        race=monster.race,
        occupation="Enemy",
        personality=["aggressive", "hostile"],
        appearance=f"{monster.race}, ready for battle",
        voice=VoiceId.VILLAIN,
        location=location,
        relationship=Relationship.HOSTILE,
        stats=NPCStats(
            level=monster.level,
            hp=monster.hp,
            ac=monster.ac,
            damage=monster.damage,
            experience=monster.experience,
        ),
        dialogue=[DialogueEntry(trigger="combat", response="Prepare to fight!")],
    )
