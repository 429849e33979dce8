"""Command-line interface for the Dungeon Master."""
