"""
Starter World for the Dungeon Master.

Static reference data every new game draws from: the world map,
starting equipment per class, the starter quests and the opening
scenarios.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from dungeon_master.models.character import CharacterClass
from dungeon_master.models.item import InventoryItem, ItemType, Rarity, create_item
from dungeon_master.models.location import Location, LocationType
from dungeon_master.models.quest import Quest, create_quest

STARTING_LOCATION_ID = "goldenheart-tavern"

# =============================================================================
# World Map
# =============================================================================

WORLD_LOCATIONS: list[Location] = [
    Location(
        id="goldenheart-tavern",
        name="The Goldenheart Tavern",
        description=(
            "A warm, crowded tavern at the heart of Millbrook. "
            "Adventurers trade rumors over mugs of ale by the hearth."
        ),
        type=LocationType.TOWN,
        connections=["millbrook-market", "king-road"],
        discovered=True,
        x=50,
        y=50,
    ),
    Location(
        id="millbrook-market",
        name="Millbrook Market Square",
        description="Stalls of cloth, spice and steel crowd the cobbled square.",
        type=LocationType.TOWN,
        connections=["goldenheart-tavern", "shadow-alley", "temple-of-dawn"],
        discovered=True,
        x=60,
        y=45,
    ),
    Location(
        id="shadow-alley",
        name="Shadow Alley",
        description="A narrow lane where the lamps never seem to stay lit.",
        type=LocationType.TOWN,
        connections=["millbrook-market", "old-crypt"],
        x=68,
        y=40,
    ),
    Location(
        id="temple-of-dawn",
        name="Temple of the Dawn",
        description="A white-stone temple whose bells ring at every sunrise.",
        type=LocationType.LANDMARK,
        connections=["millbrook-market"],
        x=62,
        y=32,
    ),
    Location(
        id="king-road",
        name="The King's Road",
        description="An old paved road leading out of town toward the wilds.",
        type=LocationType.WILDERNESS,
        connections=["goldenheart-tavern", "whispering-woods", "stone-bridge"],
        x=40,
        y=55,
    ),
    Location(
        id="whispering-woods",
        name="The Whispering Woods",
        description="Ancient trees murmur in a wind that never reaches the ground.",
        type=LocationType.WILDERNESS,
        connections=["king-road", "goblin-caves"],
        x=25,
        y=45,
    ),
    Location(
        id="goblin-caves",
        name="Goblin Caves",
        description="Damp tunnels reeking of smoke, bones and stolen goods.",
        type=LocationType.DUNGEON,
        connections=["whispering-woods"],
        x=15,
        y=35,
    ),
    Location(
        id="stone-bridge",
        name="The Old Stone Bridge",
        description="A mossy bridge over a roaring river, said to be older than the kingdom.",
        type=LocationType.LANDMARK,
        connections=["king-road", "ruined-tower"],
        x=35,
        y=70,
    ),
    Location(
        id="ruined-tower",
        name="The Ruined Tower",
        description="A shattered wizard's tower where strange lights flicker at night.",
        type=LocationType.DUNGEON,
        connections=["stone-bridge"],
        x=30,
        y=85,
    ),
    Location(
        id="old-crypt",
        name="The Old Crypt",
        description="Cracked tombs beneath the town, sealed for a century until recently.",
        type=LocationType.DUNGEON,
        connections=["shadow-alley"],
        x=75,
        y=30,
    ),
]

LOCATIONS_BY_ID: dict[str, Location] = {loc.id: loc for loc in WORLD_LOCATIONS}

DISCOVERED_LOCATION_IDS: frozenset[str] = frozenset(
    loc.id for loc in WORLD_LOCATIONS if loc.discovered
)


def get_location(location_id: str) -> Location | None:
    return LOCATIONS_BY_ID.get(location_id)


def is_location_accessible(location_id: str, visited: list[str]) -> bool:
    """Whether travel to a location is allowed given the visited set."""
    location = LOCATIONS_BY_ID.get(location_id)
    if location is None:
        return False
    return location.is_accessible_from(visited, DISCOVERED_LOCATION_IDS)


def get_accessible_locations(visited: list[str]) -> list[Location]:
    """Known but not yet visited locations the character may travel to."""
    return [
        loc
        for loc in WORLD_LOCATIONS
        if loc.id not in visited and loc.is_accessible_from(visited, DISCOVERED_LOCATION_IDS)
    ]


# =============================================================================
# Starting Equipment
# =============================================================================


def _healing_potion(quantity: int = 1) -> InventoryItem:
    return create_item(
        "Healing Potion",
        ItemType.CONSUMABLE,
        description="A small vial of red liquid that glows faintly. Restores 2d4+2 HP.",
        quantity=quantity,
        value=50,
        weight=0.5,
    )


_CLASS_ITEMS: dict[CharacterClass, list[tuple]] = {
    # (name, type, description, value, weight, damage, armor)
    CharacterClass.FIGHTER: [
        ("Longsword", ItemType.WEAPON, "A reliable steel longsword.", 15, 3.0, "1d8", None),
        ("Chain Mail", ItemType.ARMOR, "Interlocking metal rings.", 75, 55.0, None, 6),
    ],
    CharacterClass.WIZARD: [
        ("Quarterstaff", ItemType.WEAPON, "A sturdy oak staff.", 2, 4.0, "1d6", None),
        ("Spellbook", ItemType.TOOL, "Your precious collection of spells.", 50, 3.0, None, None),
    ],
    CharacterClass.ROGUE: [
        ("Shortsword", ItemType.WEAPON, "A light, quick blade.", 10, 2.0, "1d6", None),
        ("Thieves' Tools", ItemType.TOOL, "Picks and files for stubborn locks.", 25, 1.0, None, None),
    ],
    CharacterClass.CLERIC: [
        ("Mace", ItemType.WEAPON, "A flanged iron mace.", 5, 4.0, "1d6", None),
        ("Holy Symbol", ItemType.TOOL, "An amulet bearing your god's sign.", 5, 1.0, None, None),
    ],
    CharacterClass.RANGER: [
        ("Longbow", ItemType.WEAPON, "A tall yew bow.", 50, 2.0, "1d8", None),
        ("Leather Armor", ItemType.ARMOR, "Supple boiled leather.", 10, 10.0, None, 1),
    ],
    CharacterClass.BARBARIAN: [
        ("Greataxe", ItemType.WEAPON, "A heavy two-handed axe.", 30, 7.0, "1d12", None),
        ("Hide Armor", ItemType.ARMOR, "Thick furs and pelts.", 10, 12.0, None, 2),
    ],
    CharacterClass.BARD: [
        ("Rapier", ItemType.WEAPON, "A slender, elegant blade.", 25, 2.0, "1d8", None),
        ("Lute", ItemType.TOOL, "A well-loved lute.", 35, 2.0, None, None),
    ],
    CharacterClass.PALADIN: [
        ("Warhammer", ItemType.WEAPON, "A blessed steel warhammer.", 15, 2.0, "1d8", None),
        ("Shield", ItemType.ARMOR, "A sturdy shield with your order's crest.", 10, 6.0, None, 2),
    ],
}


def get_starting_items(char_class: CharacterClass) -> list[InventoryItem]:
    """Class-specific equipment (fresh instances)."""
    return [
        create_item(
            name,
            item_type,
            description=description,
            value=value,
            weight=weight,
            damage=damage,
            armor=armor,
        )
        for name, item_type, description, value, weight, damage, armor in _CLASS_ITEMS[char_class]
    ]


def get_common_starting_items() -> list[InventoryItem]:
    """Equipment every adventurer starts with (fresh instances)."""
    return [
        _healing_potion(quantity=2),
        create_item(
            "Rations",
            ItemType.CONSUMABLE,
            description="Dried meat, hard cheese and hardtack. Enough for one day.",
            quantity=3,
            value=1,
            weight=2.0,
        ),
        create_item(
            "Torch",
            ItemType.TOOL,
            description="Burns for about an hour.",
            quantity=2,
            value=1,
            weight=1.0,
        ),
        create_item(
            "Lucky Coin",
            ItemType.TREASURE,
            description="An old coin you have carried since childhood.",
            value=1,
            rarity=Rarity.UNCOMMON,
            weight=0.0,
        ),
    ]


COMMON_STARTING_ITEM_NAMES = ("Healing Potion", "Rations", "Torch", "Lucky Coin")


# =============================================================================
# Quests and Scenarios
# =============================================================================


def get_starter_quests() -> list[Quest]:
    """The quests every new game begins with (fresh instances)."""
    return [
        create_quest(
            "Welcome to Millbrook",
            "Get your bearings in town before setting out on the road.",
            ["Visit the Market Square", "Talk to a local merchant"],
            giver="Marta the Innkeeper",
            location=STARTING_LOCATION_ID,
            gold=25,
            experience=50,
            quest_id="quest-welcome",
        ),
        create_quest(
            "Trouble in the Woods",
            "Travelers on the King's Road report goblin raids near the Whispering Woods.",
            [
                "Travel to the Whispering Woods",
                "Find the goblin caves",
                "Defeat the goblin raiders",
            ],
            giver="Captain Holt",
            location=STARTING_LOCATION_ID,
            gold=100,
            experience=300,
            items=[_healing_potion()],
            quest_id="quest-goblins",
        ),
    ]


@dataclass(frozen=True)
class Scenario:
    """An opening situation for a new adventure."""

    name: str
    message: str


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        name="The Stranger's Map",
        message=(
            "Rain lashes the windows of the Goldenheart Tavern. A hooded stranger "
            "slides a torn map across your table and whispers: \"They said you could "
            "be trusted.\" Do you take the map, question the stranger, or call the innkeeper?"
        ),
    ),
    Scenario(
        name="Bells at Midnight",
        message=(
            "The temple bells ring at midnight, though no one is in the tower. "
            "Patrons of the Goldenheart fall silent and stare at you. "
            "Do you head for the temple, ask the locals, or finish your drink?"
        ),
    ),
    Scenario(
        name="The Missing Caravan",
        message=(
            "A merchant bursts into the tavern, pale and shaking. \"My caravan never "
            "reached the Old Stone Bridge!\" he cries. \"I'll pay in gold!\" "
            "Do you accept the job, haggle over the reward, or ignore him?"
        ),
    ),
    Scenario(
        name="A Brawl Brewing",
        message=(
            "A hulking mercenary knocks your mug off the table and grins. "
            "\"Strength decides everything here, stranger.\" The room goes quiet. "
            "Do you fight, talk him down, or leave?"
        ),
    ),
)


def get_random_scenario() -> Scenario:
    return random.choice(SCENARIOS)
