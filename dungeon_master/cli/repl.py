"""
Interactive REPL for the Dungeon Master.

Provides a text-based interface for playing the game. Lines starting
with "/" are commands; anything else is sent to the Dungeon Master as
a free-text action.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dungeon_master.content import WORLD_LOCATIONS, get_location
from dungeon_master.db import InMemorySessionRepository
from dungeon_master.engine import (
    ActionValidationError,
    EngineConfig,
    GameEngine,
    SessionNotFoundError,
)
from dungeon_master.models import CharacterClass, HistoryEntryType, QuestStatus, Skill
from dungeon_master.services import NarrativeAdapter, create_llm_provider
from dungeon_master.skills import get_class_base_stats

logger = logging.getLogger(__name__)

HISTORY_PREFIXES = {
    HistoryEntryType.PLAYER: "> ",
    HistoryEntryType.DM: "DM: ",
    HistoryEntryType.ROLL: "[roll] ",
    HistoryEntryType.LEVELUP: "[level] ",
    HistoryEntryType.COMBAT: "[combat] ",
}


@dataclass
class GameState:
    """Current state of the REPL."""

    engine: GameEngine
    session_id: str
    running: bool = True


@dataclass
class Command:
    """A special REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[GameState, list[str]], Awaitable[str]]


class GameREPL:
    """
    Interactive REPL for playing the Dungeon Master.

    Handles user input, special commands, and game output.
    """

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.commands: dict[str, Command] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all special commands."""
        commands = [
            Command("help", ["?", "h"], "Show available commands", self._cmd_help),
            Command("quit", ["exit", "q"], "Exit the game", self._cmd_quit),
            Command("status", ["stats", "me"], "Show character status", self._cmd_status),
            Command("inventory", ["inv", "i"], "Show your inventory", self._cmd_inventory),
            Command("quests", ["journal", "j"], "Show your quests", self._cmd_quests),
            Command("map", ["m"], "Show known locations", self._cmd_map),
            Command("go", ["travel", "move"], "Travel to a location: /go <id>", self._cmd_go),
            Command("levelup", ["lvl"], "Level up if you have enough XP", self._cmd_levelup),
            Command("train", ["skill"], "Spend a skill point: /train <skill>", self._cmd_train),
            Command("use", ["drink"], "Use an item: /use <name or id>", self._cmd_use),
            Command("fight", ["attack"], "Fight a monster or met NPC: /fight [npc id]", self._cmd_fight),
            Command("meet", ["npc"], "Meet someone: /meet [who, e.g. merchant]", self._cmd_meet),
            Command("complete", ["done"], "Finish a quest: /complete <quest id> [objective id]", self._cmd_complete),
            Command("history", ["hist"], "Show recent events", self._cmd_history),
        ]

        for cmd in commands:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    # =========================================================================
    # Commands
    # =========================================================================

    async def _cmd_help(self, state: GameState, args: list[str]) -> str:
        lines = ["Available Commands:", "-" * 40]
        seen = set()
        for cmd in self.commands.values():
            if cmd.name in seen:
                continue
            seen.add(cmd.name)
            aliases = f" ({', '.join('/' + a for a in cmd.aliases)})" if cmd.aliases else ""
            lines.append(f"  /{cmd.name}{aliases} - {cmd.description}")
        lines.append("")
        lines.append("Anything else is your action, e.g. 'I search the room'.")
        return "\n".join(lines)

    async def _cmd_quit(self, state: GameState, args: list[str]) -> str:
        state.running = False
        return "Farewell, adventurer! Your story shall be remembered..."

    async def _cmd_status(self, state: GameState, args: list[str]) -> str:
        view = self.engine.get_session_view(state.session_id)
        c = view.session.character
        stats = "  ".join(f"{k} {v}" for k, v in c.stats.as_dict().items())
        trained = [f"{s.value} {c.skills.get(s)}" for s in Skill if c.skills.get(s) > 0]
        lines = [
            f"{c.name} - Level {c.level} {c.char_class.value}",
            f"HP: {c.hp}/{c.max_hp}   Gold: {c.gold}",
            f"XP: {c.experience}/{c.experience_to_next}"
            + ("  (ready to level up!)" if view.can_level_up else ""),
            f"Stats: {stats}",
            f"Skill points: {c.skill_points}",
        ]
        if trained:
            lines.append("Skills: " + ", ".join(trained))
        return "\n".join(lines)

    async def _cmd_inventory(self, state: GameState, args: list[str]) -> str:
        session = self.engine.get_session_view(state.session_id).session
        if not session.inventory:
            return "Your pack is empty."
        lines = ["Inventory:"]
        for item in session.inventory:
            qty = f" x{item.quantity}" if item.quantity > 1 else ""
            lines.append(f"  {item.name}{qty} [{item.type.value}] - {item.description}")
        return "\n".join(lines)

    async def _cmd_quests(self, state: GameState, args: list[str]) -> str:
        session = self.engine.get_session_view(state.session_id).session
        if not session.quests:
            return "Your journal is empty."
        lines = ["Quests:"]
        for quest in session.quests:
            lines.append(f"  {quest.title} ({quest.status.value}) [{quest.id}]")
            for obj in quest.objectives:
                mark = "x" if obj.completed else " "
                lines.append(f"    [{mark}] {obj.description} [{obj.id}]")
        return "\n".join(lines)

    async def _cmd_map(self, state: GameState, args: list[str]) -> str:
        view = self.engine.get_session_view(state.session_id)
        visited = view.session.visited_locations
        reachable = {loc.id for loc in view.accessible_locations}
        lines = ["Map:"]
        for loc in WORLD_LOCATIONS:
            if loc.id == view.session.current_location:
                marker = "*"
            elif loc.id in visited:
                marker = "+"
            elif loc.id in reachable:
                marker = "?"
            else:
                continue
            lines.append(f"  {marker} {loc.name} [{loc.id}]")
        lines.append("(* here, + visited, ? reachable)")
        return "\n".join(lines)

    async def _cmd_go(self, state: GameState, args: list[str]) -> str:
        if not args:
            return "Go where? Try /map to see location ids."
        result = await self.engine.travel(state.session_id, args[0])
        text = f"You arrive at {result.location.name}. {result.location.description}"
        if result.newly_discovered:
            text += "\n* New location discovered!"
        return text

    async def _cmd_levelup(self, state: GameState, args: list[str]) -> str:
        result = await self.engine.level_up(state.session_id)
        return f"You are now level {result.level}! {result.reward.describe()}"

    async def _cmd_train(self, state: GameState, args: list[str]) -> str:
        if not args:
            return "Train which skill? " + ", ".join(s.value for s in Skill)
        character = await self.engine.spend_skill_point(state.session_id, args[0].lower())
        skill = Skill(args[0].lower())
        return (
            f"{skill.value} is now rank {character.skills.get(skill)} "
            f"({character.skill_points} skill points left)"
        )

    async def _cmd_use(self, state: GameState, args: list[str]) -> str:
        if not args:
            return "Use what?"
        result = await self.engine.use_item(state.session_id, " ".join(args))
        return result.message

    async def _cmd_fight(self, state: GameState, args: list[str]) -> str:
        result = await self.engine.start_combat(state.session_id, args[0] if args else None)
        lines = [event.result for event in result.events]
        lines.append("")
        if result.victory:
            lines.append(
                f"Victory! +{result.experience_gained} XP, +{result.gold_gained} gold"
            )
            for item in result.items_gained:
                lines.append(f"* Loot: {item.name}")
        elif result.is_timeout:
            lines.append("The fight ends without a winner.")
        else:
            lines.append("You have been defeated...")
        lines.append(f"HP remaining: {result.player_hp_remaining}")
        return "\n".join(lines)

    async def _cmd_meet(self, state: GameState, args: list[str]) -> str:
        npc = await self.engine.encounter_npc(state.session_id, " ".join(args) or None)
        greeting = npc.get_dialogue("greeting") or "..."
        return (
            f"You meet {npc.name}, {npc.occupation.lower()} ({npc.appearance}) [{npc.id}]\n"
            f'"{greeting}"'
        )

    async def _cmd_complete(self, state: GameState, args: list[str]) -> str:
        if not args:
            return "Complete which quest? Try /quests to see ids."
        if len(args) > 1:
            result = await self.engine.update_quest(state.session_id, args[0], objective_id=args[1])
            return f"Objective done. {result.quest.title}: {result.quest.progress_percent:.0%}"
        result = await self.engine.update_quest(
            state.session_id, args[0], status=QuestStatus.COMPLETED
        )
        text = f"Quest completed: {result.quest.title}"
        if result.reward_granted:
            text += f" (+{result.reward_granted.gold} gold, +{result.reward_granted.experience} XP)"
        return text

    async def _cmd_history(self, state: GameState, args: list[str]) -> str:
        session = self.engine.get_session_view(state.session_id).session
        count = int(args[0]) if args and args[0].isdigit() else 10
        return "\n".join(
            HISTORY_PREFIXES[entry.type] + entry.content for entry in session.history[-count:]
        )

    # =========================================================================
    # Input handling
    # =========================================================================

    def _is_command(self, text: str) -> bool:
        return text.startswith("/")

    def _parse_command(self, text: str) -> tuple[str, list[str]]:
        """Parse a command into name and arguments."""
        parts = text[1:].split()
        if not parts:
            return "", []
        return parts[0].lower(), parts[1:]

    async def _process_input(self, text: str, state: GameState) -> str:
        """Process user input and return response."""
        text = text.strip()
        if not text:
            return ""

        try:
            if self._is_command(text):
                cmd_name, args = self._parse_command(text)
                if cmd_name not in self.commands:
                    return f"Unknown command: /{cmd_name}. Type /help for commands."
                return await self.commands[cmd_name].handler(state, args)

            result = await self.engine.submit_action(state.session_id, text)
        except ActionValidationError as e:
            return f"[{e}]"
        except SessionNotFoundError as e:
            state.running = False
            return f"[Error: {e}]"

        parts = [f"(d20: {result.dice_roll})", "", result.narrative]
        if result.voices:
            parts.append("")
            parts.append("Voices: " + ", ".join(v.value for v in result.voices))
        return "\n".join(parts)

    def _print_banner(self) -> None:
        """Print the game banner."""
        print("=" * 50)
        print("   AI DUNGEON MASTER")
        print("   A text adventure narrated on the fly")
        print("=" * 50)
        print("Type /help for commands, or just describe your action.\n")

    async def run(self, session_id: str) -> None:
        """Run the interactive REPL."""
        state = GameState(engine=self.engine, session_id=session_id)
        view = self.engine.get_session_view(session_id)

        self._print_banner()
        location = get_location(view.session.current_location)
        if location:
            print(f"[{location.name}]")
        print(view.session.last_dm_line() or "")
        print()

        while state.running:
            try:
                user_input = input("> ").strip()
                if not user_input:
                    continue

                response = await self._process_input(user_input, state)
                if response:
                    print()
                    print(response)
                    print()

            except KeyboardInterrupt:
                print("\n")
                state.running = False
            except EOFError:
                print("\n")
                state.running = False

        print("Thanks for playing!")


def create_engine(*, mock: bool = False, config: EngineConfig | None = None) -> GameEngine:
    """Build an engine with in-memory storage and the configured narrator."""
    provider = create_llm_provider("mock" if mock else "openrouter")
    if not provider.is_available:
        logger.warning("OPENROUTER_API_KEY not set, narration will use fallback text")
    config = config or EngineConfig()
    narrator = NarrativeAdapter(
        provider,
        last_event_limit=config.last_event_limit,
        action_limit=config.action_limit,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
    return GameEngine(repository=InMemorySessionRepository(), narrator=narrator, config=config)


async def _play(name: str, char_class: CharacterClass, mock: bool) -> None:
    engine = create_engine(mock=mock)
    session_id = await engine.start_session(
        name, char_class, get_class_base_stats(char_class).as_dict()
    )
    await GameREPL(engine).run(session_id)


def run_game(
    character_name: str = "Hero",
    char_class: CharacterClass = CharacterClass.FIGHTER,
    mock: bool = False,
) -> None:
    """
    Run the Dungeon Master game.

    Args:
        character_name: Name for the player character
        char_class: Class; ability scores use the class preset
        mock: Use the offline mock narrator instead of a real model
    """
    asyncio.run(_play(character_name, char_class, mock))


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="AI Dungeon Master text adventure")
    parser.add_argument("--name", default="Hero", help="Character name")
    parser.add_argument(
        "--class",
        dest="char_class",
        choices=[c.value for c in CharacterClass],
        default=CharacterClass.FIGHTER.value,
        help="Character class",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Play offline with the mock narrator",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("DM_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $DM_LOG_LEVEL or WARNING)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_game(
        character_name=args.name,
        char_class=CharacterClass(args.char_class),
        mock=args.mock,
    )


if __name__ == "__main__":
    main()
