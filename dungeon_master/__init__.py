"""
AI Dungeon Master.

A text-adventure core: character creation and progression, combat,
NPCs with distinct voices, and narration from a language model with
canned fallbacks.
"""

__version__ = "0.1.0"
