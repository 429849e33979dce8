"""
Quest models for the Dungeon Master.

Defines the player's tracked objectives, their rewards,
and the one-way status transitions of a quest.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from dungeon_master.models.item import InventoryItem


class QuestStatus(str, Enum):
    """Status of a quest in the player's journal."""

    ACTIVE = "active"  # Player is working on it
    COMPLETED = "completed"  # Successfully finished (terminal)
    FAILED = "failed"  # Cannot be completed any more (terminal)


TERMINAL_STATUSES = frozenset({QuestStatus.COMPLETED, QuestStatus.FAILED})


class QuestObjective(BaseModel):
    """A single step of a quest."""

    id: str = Field(default_factory=lambda: f"obj-{uuid4().hex[:8]}")
    description: str
    completed: bool = False


class QuestReward(BaseModel):
    """Rewards granted upon quest completion."""

    gold: int = Field(default=0, ge=0)
    experience: int = Field(default=0, ge=0)
    items: list[InventoryItem] = Field(default_factory=list)


class Quest(BaseModel):
    """
    A tracked objective in the quest journal.

    Status only ever moves from ACTIVE to COMPLETED or FAILED.
    """

    id: str = Field(default_factory=lambda: f"quest-{uuid4().hex[:8]}")
    title: str
    description: str
    status: QuestStatus = QuestStatus.ACTIVE
    objectives: list[QuestObjective] = Field(default_factory=list)
    reward: QuestReward | None = None

    giver: str | None = None
    """Display name of the quest giver."""

    location: str | None = None
    """Location id where the quest was given."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def progress_percent(self) -> float:
        """Fraction of objectives completed (0.0 to 1.0)."""
        if not self.objectives:
            return 1.0 if self.status == QuestStatus.COMPLETED else 0.0
        done = sum(1 for o in self.objectives if o.completed)
        return done / len(self.objectives)

    def get_objective(self, objective_id: str) -> QuestObjective | None:
        return next((o for o in self.objectives if o.id == objective_id), None)

    def complete_objective(self, objective_id: str) -> bool:
        """
        Mark an objective as done.

        Returns True if the objective was just completed.

        Raises:
            ValueError: If the quest is already completed or failed,
                or the objective does not belong to this quest.
        """
        self._require_active("update objectives of")
        objective = self.get_objective(objective_id)
        if objective is None:
            raise ValueError(f"Quest {self.id} has no objective {objective_id}")
        if objective.completed:
            return False
        objective.completed = True
        return True

    def add_objective(self, description: str) -> QuestObjective:
        self._require_active("add objectives to")
        objective = QuestObjective(description=description)
        self.objectives.append(objective)
        return objective

    def complete(self) -> None:
        """Mark quest as completed."""
        self._require_active("complete")
        self.status = QuestStatus.COMPLETED
        self.completed_at = datetime.now(UTC)

    def fail(self) -> None:
        """Mark quest as failed."""
        self._require_active("fail")
        self.status = QuestStatus.FAILED
        self.completed_at = datetime.now(UTC)

    def _require_active(self, verb: str) -> None:
        if self.is_terminal:
            raise ValueError(f"Cannot {verb} quest '{self.title}': already {self.status.value}")


def create_quest(
    title: str,
    description: str,
    objectives: list[str],
    *,
    giver: str | None = None,
    location: str | None = None,
    gold: int = 0,
    experience: int = 0,
    items: list[InventoryItem] | None = None,
    quest_id: str | None = None,
) -> Quest:
    """
    Factory function to create an active quest.

    Args:
        title: Display name for the quest
        description: Full quest description
        objectives: Objective descriptions, in order
        giver: Display name of the quest giver
        location: Location id where the quest was given
        gold: Gold reward
        experience: Experience reward
        items: Item rewards
        quest_id: Fixed id (random if omitted)

    Returns:
        A new Quest instance
    """
    reward = None
    if gold or experience or items:
        reward = QuestReward(gold=gold, experience=experience, items=items or [])

    extra = {"id": quest_id} if quest_id is not None else {}
    return Quest(
        title=title,
        description=description,
        objectives=[QuestObjective(description=d) for d in objectives],
        reward=reward,
        giver=giver,
        location=location,
        **extra,
    )
