"""
NPC voice archetypes.

Twelve speech-style profiles used to flavor narration and to tag
Dungeon Master lines with the voices that appear in them.
"""

from __future__ import annotations

import random

from dungeon_master.content.keywords import classify, classify_all
from dungeon_master.models.npc import VoiceArchetype, VoiceId

VOICES: dict[VoiceId, VoiceArchetype] = {
    v.id: v
    for v in [
        VoiceArchetype(
            id=VoiceId.NOBLE,
            name="Noble",
            description="An aristocrat or person of rank",
            speech_pattern="Refined speech, elaborate turns of phrase, courtesy",
            vocabulary=["my lord", "my lady", "your grace", "noble", "pray tell"],
            examples=[
                "My lord, allow me to express my deepest respects.",
                "Pray tell, would you grace us with your humble proposal?",
                "I dare say this matter is most delicate.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.MERCHANT,
            name="Merchant",
            description="A trader or shopkeeper",
            speech_pattern="Businesslike, always mentions prices and profit",
            vocabulary=["gold", "deal", "trade", "bargain", "coin"],
            examples=[
                "Ah, gold loves to be counted, my friend!",
                "Shall we make a deal? Good for you, no loss for me.",
                "First-rate goods, you won't regret the bargain!",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.GUARD,
            name="Guard",
            description="A city watchman or soldier",
            speech_pattern="Clipped military speech, orders, discipline",
            vocabulary=["halt", "order", "law", "papers", "discipline"],
            examples=[
                "Halt! Show me your papers!",
                "Order above all else, remember that.",
                "Any breach of the law will be punished to the letter.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.PEASANT,
            name="Peasant",
            description="A commoner or farmhand",
            speech_pattern="Plain speech, dialect, complaints about hard times",
            vocabulary=["good sir", "humble", "please", "harvest", "hard times"],
            examples=[
                "Oh, good sir, life's been so hard on us!",
                "The harvest failed again, what can a body do...",
                "Forgive us, we're only humble folk.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.SCHOLAR,
            name="Scholar",
            description="A sage, mage or researcher",
            speech_pattern="Learned speech, technical terms, musings",
            vocabulary=["research", "study", "knowledge", "hypothesis", "artifact"],
            examples=[
                "A fascinating phenomenon, it demands further study.",
                "My hypothesis is confirmed by the ancient texts.",
                "This artifact possesses most unusual properties.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.ROGUE,
            name="Rogue",
            description="A thief, smuggler or swindler",
            speech_pattern="Sly speech, hints, thieves' cant",
            vocabulary=["shadows", "quiet", "secret", "job", "score"],
            examples=[
                "There's a job going, but keep it quiet...",
                "Heard a tip about a fat score in the shadows.",
                "The fence is a crook, but his goods are genuine.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.PRIEST,
            name="Priest",
            description="A cleric or temple servant",
            speech_pattern="Solemn speech, blessings, morality",
            vocabulary=["blessing", "bless", "divine", "prayer", "repent"],
            examples=[
                "May the gods bless you, my child.",
                "Repent your sins and you shall find salvation.",
                "The divine will is beyond the grasp of mortals.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.BARBARIAN,
            name="Barbarian",
            description="A tribal warrior",
            speech_pattern="Rough speech, short phrases, talk of strength",
            vocabulary=["strength", "battle", "warrior", "honor", "strong"],
            examples=[
                "Strength decides everything! The weak do not survive!",
                "The enemy is strong, but we are stronger!",
                "A warrior's honor is worth more than life!",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.CHILD,
            name="Child",
            description="Children and youngsters",
            speech_pattern="Childlike speech, curiosity, simplicity",
            vocabulary=["mister", "uncle", "scary", "fun"],
            examples=[
                "Mister, are you a real hero?",
                "It's scary, but it's so much fun!",
                "What's behind that door over there?",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.ELDER,
            name="Elder",
            description="Old and wise folk",
            speech_pattern="Slow speech, memories, wisdom",
            vocabulary=["in my years", "years", "wisdom", "experience", "i remember"],
            examples=[
                "In my years I have seen a great deal...",
                "I remember, it was long, long ago...",
                "Wisdom comes with experience, youngster.",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.INNKEEPER,
            name="Innkeeper",
            description="The keeper of a tavern or inn",
            speech_pattern="Hospitable speech, offers of service",
            vocabulary=["welcome", "drink", "room", "ale", "guest"],
            examples=[
                "Welcome, dear guest!",
                "The finest fare in town is served right here!",
                "Fresh news over a mug of ale?",
            ],
        ),
        VoiceArchetype(
            id=VoiceId.VILLAIN,
            name="Villain",
            description="Antagonists and enemies",
            speech_pattern="Threatening speech, arrogance, malice",
            vocabulary=["fool", "power", "revenge", "suffer", "suffering"],
            examples=[
                "Fool! You have no idea who you are dealing with!",
                "The power will be mine, and you will regret this!",
                "Your suffering has only just begun!",
            ],
        ),
    ]
}

# Scanned in order; used to tag narrator lines with voice badges.
VOICE_DETECTION_TABLE = [(voice.id, frozenset(voice.vocabulary)) for voice in VOICES.values()]

# Words describing who an NPC is, checked in priority order.
VOICE_CONTEXT_TABLE = [
    (VoiceId.MERCHANT, frozenset({"merchant", "trader", "shop", "shopkeeper", "vendor"})),
    (VoiceId.GUARD, frozenset({"guard", "guards", "soldier", "watchman", "sentry"})),
    (VoiceId.NOBLE, frozenset({"noble", "lord", "lady", "count", "duke"})),
    (VoiceId.PRIEST, frozenset({"priest", "cleric", "temple", "monk", "priestess"})),
    (VoiceId.SCHOLAR, frozenset({"sage", "mage", "scholar", "wizard", "librarian"})),
    (VoiceId.ROGUE, frozenset({"thief", "rogue", "smuggler", "pickpocket"})),
    (VoiceId.BARBARIAN, frozenset({"barbarian", "savage", "tribe", "tribesman"})),
    (VoiceId.CHILD, frozenset({"child", "children", "boy", "girl", "kid"})),
    (VoiceId.ELDER, frozenset({"elder", "old man", "old woman", "grandfather", "grandmother"})),
    (VoiceId.INNKEEPER, frozenset({"innkeeper", "tavern", "inn", "barkeep", "host"})),
    (VoiceId.VILLAIN, frozenset({"enemy", "villain", "antagonist", "cultist"})),
    (VoiceId.PEASANT, frozenset({"peasant", "commoner", "villager", "farmer"})),
]


def get_voice(voice_id: VoiceId | str) -> VoiceArchetype:
    """
    Look up a voice archetype.

    Raises:
        ValueError: If the id is not one of the twelve archetypes
    """
    return VOICES[VoiceId(voice_id)]


def random_voice() -> VoiceArchetype:
    return random.choice(list(VOICES.values()))


def select_voice_by_context(context: str) -> VoiceArchetype:
    """Pick the voice best matching a description, or a random one."""
    voice_id = classify(context, VOICE_CONTEXT_TABLE, default=None)
    if voice_id is None:
        return random_voice()
    return VOICES[voice_id]


def detect_voices(text: str) -> list[VoiceArchetype]:
    """
    Find the voices whose vocabulary appears in a piece of narration.

    Several voices can match one line; none match plain narration.
    """
    return [VOICES[voice_id] for voice_id in classify_all(text, VOICE_DETECTION_TABLE)]
