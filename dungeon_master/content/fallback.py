"""
Fallback narration.

Canned Dungeon Master replies used whenever the language model is
unavailable or returns something unusable. The player's action picks
the pool; a line is drawn at random from it. Every line carries one NPC
voice and ends with an explicit choice for the player.
"""

from __future__ import annotations

import random
from enum import Enum

from dungeon_master.content.keywords import classify


class ActionCategory(str, Enum):
    """Broad kinds of player action, used to pick a fallback pool."""

    DIALOGUE = "dialogue"
    COMBAT = "combat"
    EXPLORATION = "exploration"
    GENERAL = "general"


# Checked in order; first match wins.
ACTION_CATEGORY_TABLE = [
    (
        ActionCategory.DIALOGUE,
        frozenset({"talk", "speak", "ask", "say", "conversation", "chat", "greet"}),
    ),
    (
        ActionCategory.COMBAT,
        frozenset({"attack", "fight", "strike", "hit", "swing", "stab", "shoot"}),
    ),
    (
        ActionCategory.EXPLORATION,
        frozenset({"search", "examine", "look", "explore", "investigate", "inspect"}),
    ),
]

FALLBACK_POOLS: dict[ActionCategory, tuple[str, ...]] = {
    ActionCategory.DIALOGUE: (
        'The merchant behind the counter perks up at the sight of you. "Ah, gold loves '
        'to be counted, my friend! Shall we make a deal?" He produces a strange glowing '
        'amulet. "Only a hundred coins, a bargain!" Do you buy it, haggle, or walk away?',
        'A guard steps into your path. "Halt! Show me your papers! Order above all '
        'else." His eyes linger on your weapon. "Though perhaps we can come to an '
        'understanding..." Do you show your papers, offer a bribe, or prepare for trouble?',
        'An old priest looks up from his prayers. "May the gods bless you, my child. I '
        'see your road has been hard." He rises from his knees. "Repent and you shall '
        'find salvation. How may I help?" Do you ask for a blessing, confess, or ask '
        "about the town's troubles?",
    ),
    ActionCategory.COMBAT: (
        "Your blow lands! The barbarian in animal hides staggers back. \"Strength "
        'decides everything! The weak do not survive!" he roars, raising his axe. '
        "Do you keep attacking or take a defensive stance?",
        "An elegant duelist parries your thrust. \"My lord, you wish to cross blades? "
        'Pray tell, will you accept an honorable duel?" His rapier glints in the '
        "light. Do you accept the rules of the duel or attack without ceremony?",
        "A critical hit! Your foe collapses, dropping a glowing amulet. \"Fool... you "
        'have no idea... what you have done..." he rasps as the amulet pulses red. Do '
        "you pick it up, destroy it, or leave quickly?",
    ),
    ActionCategory.EXPLORATION: (
        "You find a hidden niche in the wall with an ancient scroll inside. \"A "
        'fascinating artifact," remarks a passing scholar. "It demands further '
        'study." Do you study the map, question the scholar, or keep searching?',
        "Beneath the dust you uncover an old lever, and a secret passage grinds open. "
        'A small voice calls from the dark: "Mister, it\'s scary in there, but it\'s so '
        'much fun!" Do you enter the passage, calm the child, or look for her parents?',
    ),
    ActionCategory.GENERAL: (
        'A hooded figure beckons you over. "There\'s a job going, but keep it quiet." '
        'He glances around. "Heard a tip about a fat score in the old castle. '
        'Interested?" Do you hear him out or refuse?',
        'A little girl runs up to you. "Mister, are you a real hero? I\'m scared!" She '
        'points down a dark alley. "Grandpa went in there and never came back..." Do '
        "you investigate, comfort her, or look for her family?",
        "The floor cracks beneath your feet, an ancient trap! You teeter on the edge "
        "of a chasm. An old chain hangs nearby and a narrow ledge waits on the far "
        "side. Do you leap for the chain, the ledge, or look for another way?",
        'The innkeeper waves you over. "Welcome, dear guest! The finest fare in '
        'town!" He leans closer. "Fresh news over a mug of ale? They say strange '
        'things are happening at the old castle." Do you order an ale, ask about the '
        "castle, or look for a room?",
        'An old man with a long beard studies you. "In my years I have seen a great '
        'deal, youngster. Wisdom comes with experience." He points to a fork in the '
        'road. "The left path leads to riches, the right to glory." Do you take the '
        "left path, the right, or ask for more?",
    ),
}


def classify_action(action: str) -> ActionCategory:
    return classify(action, ACTION_CATEGORY_TABLE, default=ActionCategory.GENERAL)


def generate_fallback(action: str) -> str:
    """Pick a canned narration suited to the player's action."""
    return random.choice(FALLBACK_POOLS[classify_action(action)])
