"""
Game Engine for the Dungeon Master.

The orchestration layer behind every player request. Each operation
loads the session, applies the rules, and writes the session back
while holding that session's lock, so two requests for the same game
never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from pydantic import ValidationError

from dungeon_master.content import (
    detect_voices,
    get_accessible_locations,
    get_common_starting_items,
    get_location,
    get_random_scenario,
    get_starter_quests,
    get_starting_items,
    is_location_accessible,
)
from dungeon_master.db.interfaces import SessionRepository
from dungeon_master.db.memory import generate_session_id
from dungeon_master.engine.errors import ActionValidationError, SessionNotFoundError
from dungeon_master.engine.models import (
    ActionResult,
    EngineConfig,
    ItemUseResult,
    LevelUpResult,
    QuestUpdateResult,
    SessionView,
    TravelResult,
)
from dungeon_master.models import (
    NPC,
    Ability,
    AbilityScores,
    Character,
    CharacterClass,
    CombatOutcome,
    CombatResult,
    GameSession,
    HistoryEntryType,
    ItemType,
    QuestStatus,
    Skill,
)
from dungeon_master.services.narrative import NarrativeAdapter
from dungeon_master.services.npc import (
    generate_combat_encounter,
    generate_contextual_npc,
    generate_random_npc,
)
from dungeon_master.skills import (
    apply_combat_result,
    can_level_up,
    get_experience_for_next_level,
    level_up,
    resolve_combat,
    roll_d20,
    roll_dice,
    spend_skill_point,
)

logger = logging.getLogger(__name__)

HEALING_POTION_DICE = "2d4+2"


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ActionValidationError(f"Missing required field: {field_name}")


def _parse_ability_scores(ability_scores: AbilityScores | Mapping[str, int]) -> AbilityScores:
    if isinstance(ability_scores, AbilityScores):
        return ability_scores
    if not isinstance(ability_scores, Mapping):
        raise ActionValidationError("ability_scores must be a mapping of STR..CHA to scores")

    normalized = {str(key).upper(): score for key, score in ability_scores.items()}
    missing = [a.value for a in Ability if a.value not in normalized]
    if missing:
        raise ActionValidationError(f"Missing ability scores: {', '.join(missing)}")
    try:
        return AbilityScores.model_validate(normalized)
    except ValidationError as e:
        raise ActionValidationError(f"Invalid ability scores: {e}") from e


def _describe_combat(character: Character, enemy: NPC, result: CombatResult) -> str:
    if result.outcome == CombatOutcome.PLAYER_VICTORY:
        text = (
            f"Victory over {enemy.name} in {result.rounds} rounds! "
            f"+{result.experience_gained} XP, +{result.gold_gained} gold"
        )
        if result.items_gained:
            text += ", loot: " + ", ".join(item.name for item in result.items_gained)
        return text
    if result.outcome == CombatOutcome.ENEMY_VICTORY:
        return f"{character.name} falls to {enemy.name} after {result.rounds} rounds"
    return f"The fight with {enemy.name} ends undecided after {result.rounds} rounds"


@dataclass
class GameEngine:
    """
    Main game engine serving the session API.

    Coordinates:
    - Session storage (load, version-checked write-back)
    - Rules (character creation, progression, combat)
    - Narration (language model with canned fallback)
    """

    repository: SessionRepository
    narrator: NarrativeAdapter
    config: EngineConfig = field(default_factory=EngineConfig)

    _locks: defaultdict[str, asyncio.Lock] = field(
        init=False, default_factory=lambda: defaultdict(asyncio.Lock)
    )

    @asynccontextmanager
    async def _session(self, session_id: str) -> AsyncIterator[GameSession]:
        """
        Load a session for modification and write it back on success.

        If the block raises, nothing is written.
        """
        _require(session_id, "session_id")
        # unknown ids must not leave a lock behind
        if self.repository.get_session(session_id) is None:
            raise SessionNotFoundError(session_id)
        async with self._locks[session_id]:
            session = self.repository.get_session(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            yield session
            self.repository.update_session(session_id, session, expected_version=session.version)

    # =========================================================================
    # Session API
    # =========================================================================

    async def start_session(
        self,
        name: str,
        char_class: CharacterClass | str,
        ability_scores: AbilityScores | Mapping[str, int],
    ) -> str:
        """
        Create a character and a new game around it.

        Args:
            name: Character name
            char_class: One of the eight classes (enum or its name)
            ability_scores: The six scores keyed STR..CHA

        Returns:
            The new session id

        Raises:
            ActionValidationError: If a field is missing or invalid
        """
        _require(name, "name")
        _require(char_class, "char_class")
        _require(ability_scores, "ability_scores")
        if not isinstance(name, str):
            raise ActionValidationError("name must be text")

        try:
            char_class = CharacterClass(char_class)
        except ValueError as e:
            raise ActionValidationError(f"Unknown class: {char_class}") from e
        stats = _parse_ability_scores(ability_scores)

        base_hp = max(1, 10 + stats.modifier(Ability.CON))
        try:
            character = Character(
                name=name.strip(),
                char_class=char_class,
                stats=stats,
                experience_to_next=get_experience_for_next_level(1),
                hp=base_hp,
                max_hp=base_hp,
                gold=self.config.starting_gold,
                skill_points=self.config.starting_skill_points,
            )
        except ValidationError as e:
            raise ActionValidationError(f"Invalid character: {e}") from e

        scenario = get_random_scenario()
        session = GameSession(
            id=generate_session_id(),
            character=character,
            quests=get_starter_quests(),
            visited_locations=[self.config.starting_location],
            current_location=self.config.starting_location,
        )
        for item in get_starting_items(char_class) + get_common_starting_items():
            session.add_item(item)
        session.add_history(HistoryEntryType.DM, scenario.message)

        self.repository.create_session(session)
        logger.info(
            "Started session %s: %s the %s, adventure '%s'",
            session.id,
            character.name,
            char_class.value,
            scenario.name,
        )
        return session.id

    def get_session_view(self, session_id: str) -> SessionView:
        """
        Get a session with its derived map and level-up state.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        _require(session_id, "session_id")
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return SessionView(
            session=session,
            current_location=get_location(session.current_location),
            accessible_locations=get_accessible_locations(session.visited_locations),
            can_level_up=can_level_up(session.character),
        )

    async def submit_action(self, session_id: str, action_text: str) -> ActionResult:
        """
        Resolve a free-text action: roll a d20 and narrate the outcome.

        Appends the player's action, the roll and the narration to the
        session history.

        Raises:
            ActionValidationError: If the session id or action is missing
            SessionNotFoundError: If the session does not exist
        """
        _require(session_id, "session_id")
        _require(action_text, "action_text")

        async with self._session(session_id) as session:
            roll = roll_d20().total
            last_dm_line = session.last_dm_line()

            session.add_history(HistoryEntryType.PLAYER, action_text)
            session.add_history(HistoryEntryType.ROLL, f"d20 roll: {roll}", roll=roll)

            narrative = await self.narrator.narrate(
                session.character, last_dm_line, action_text, roll
            )
            session.add_history(HistoryEntryType.DM, narrative)

        logger.info("Session %s action resolved with roll %d", session_id, roll)
        return ActionResult(
            narrative=narrative,
            dice_roll=roll,
            voices=[voice.id for voice in detect_voices(narrative)],
        )

    # =========================================================================
    # Character progression
    # =========================================================================

    async def level_up(self, session_id: str) -> LevelUpResult:
        """
        Advance the session's character one level.

        Raises:
            ActionValidationError: If the character lacks the experience
        """
        async with self._session(session_id) as session:
            if not can_level_up(session.character):
                raise ActionValidationError(
                    f"{session.character.name} needs "
                    f"{session.character.experience_to_next} XP to level up"
                )
            session.character, reward = level_up(session.character)
            session.add_history(HistoryEntryType.LEVELUP, reward.describe())
            return LevelUpResult(level=session.character.level, reward=reward)

    async def spend_skill_point(self, session_id: str, skill: Skill | str) -> Character:
        """Train a skill by one rank. Returns the updated character."""
        try:
            skill = Skill(skill)
        except ValueError as e:
            raise ActionValidationError(f"Unknown skill: {skill}") from e

        async with self._session(session_id) as session:
            try:
                session.character = spend_skill_point(session.character, skill)
            except ValueError as e:
                raise ActionValidationError(str(e)) from e
            return session.character

    # =========================================================================
    # Inventory
    # =========================================================================

    async def use_item(self, session_id: str, item_ref: str) -> ItemUseResult:
        """
        Use one consumable from the inventory, by item id or name.

        Healing items restore 2d4+2 HP; other consumables are simply used up.

        Raises:
            ActionValidationError: If the item is missing or not consumable
        """
        _require(item_ref, "item")
        async with self._session(session_id) as session:
            item = session.find_item(item_ref) or session.find_item_by_name(item_ref)
            if item is None:
                raise ActionValidationError(f"No item '{item_ref}' in inventory")
            if item.type != ItemType.CONSUMABLE:
                raise ActionValidationError(f"{item.name} cannot be used")

            healed = 0
            if item.is_healing:
                healed = session.character.heal(roll_dice(HEALING_POTION_DICE).total)
                message = f"You drink the {item.name} and recover {healed} HP."
            else:
                message = f"You use the {item.name}."

            session.add_history(HistoryEntryType.DM, message)
            remaining = item.quantity - 1
            session.remove_item(item.id)
            logger.info("Session %s used %s (healed %d)", session_id, item.name, healed)
            return ItemUseResult(
                item_name=item.name,
                healed=healed,
                remaining=remaining,
                message=message,
            )

    # =========================================================================
    # World
    # =========================================================================

    async def travel(self, session_id: str, location_id: str) -> TravelResult:
        """
        Move to a location reachable from where the character has been.

        Raises:
            ActionValidationError: If the location is unknown or out of reach
        """
        _require(location_id, "location_id")
        location = get_location(location_id)
        if location is None:
            raise ActionValidationError(f"Unknown location: {location_id}")

        async with self._session(session_id) as session:
            if not is_location_accessible(location_id, session.visited_locations):
                raise ActionValidationError(f"{location.name} cannot be reached yet")
            newly_discovered = session.visit(location_id)
            session.add_history(
                HistoryEntryType.DM, f"You travel to {location.name}. {location.description}"
            )
            logger.info("Session %s traveled to %s", session_id, location_id)
            return TravelResult(location=location, newly_discovered=newly_discovered)

    async def encounter_npc(self, session_id: str, context: str | None = None) -> NPC:
        """Meet a new NPC at the current location, shaped by an optional hint."""
        async with self._session(session_id) as session:
            if context:
                npc = generate_contextual_npc(context, session.current_location)
            else:
                npc = generate_random_npc(session.current_location)
            session.meet_npc(npc)
            logger.info("Session %s met %s the %s", session_id, npc.name, npc.occupation)
            return npc

    async def start_combat(self, session_id: str, npc_id: str | None = None) -> CombatResult:
        """
        Fight a known NPC, or a freshly drawn monster when no id is given.

        Damage, experience, gold and loot are applied to the session.

        Raises:
            ActionValidationError: If the character cannot fight or the NPC is unknown
        """
        async with self._session(session_id) as session:
            character = session.character
            if not character.is_alive:
                raise ActionValidationError(f"{character.name} is too wounded to fight")

            if npc_id:
                enemy = session.find_npc(npc_id)
                if enemy is None:
                    raise ActionValidationError(f"Unknown NPC: {npc_id}")
            else:
                enemy = generate_combat_encounter(session.current_location)
                session.meet_npc(enemy)

            result = resolve_combat(character, enemy, max_rounds=self.config.max_combat_rounds)
            session.character = apply_combat_result(character, result)
            session.log_combat(result.events)
            for item in result.items_gained:
                session.add_item(item)
            session.add_history(HistoryEntryType.COMBAT, _describe_combat(character, enemy, result))
            return result

    async def update_quest(
        self,
        session_id: str,
        quest_id: str,
        objective_id: str | None = None,
        status: QuestStatus | str | None = None,
    ) -> QuestUpdateResult:
        """
        Tick off an objective and/or close a quest.

        Completing a quest grants its reward. Closed quests cannot change.

        Raises:
            ActionValidationError: If the quest, objective or status is invalid
        """
        _require(quest_id, "quest_id")
        if status is not None:
            try:
                status = QuestStatus(status)
            except ValueError as e:
                raise ActionValidationError(f"Unknown quest status: {status}") from e
            if status == QuestStatus.ACTIVE:
                raise ActionValidationError("A quest cannot be reopened")

        async with self._session(session_id) as session:
            quest = session.find_quest(quest_id)
            if quest is None:
                raise ActionValidationError(f"Unknown quest: {quest_id}")

            reward = None
            try:
                if objective_id:
                    quest.complete_objective(objective_id)
                if status == QuestStatus.COMPLETED:
                    quest.complete()
                    reward = quest.reward
                elif status == QuestStatus.FAILED:
                    quest.fail()
            except ValueError as e:
                raise ActionValidationError(str(e)) from e

            if reward is not None:
                session.character.gold += reward.gold
                session.character.experience += reward.experience
                for item in reward.items:
                    session.add_item(item)
                logger.info("Session %s completed quest %s", session_id, quest.title)

            return QuestUpdateResult(quest=quest, reward_granted=reward)
