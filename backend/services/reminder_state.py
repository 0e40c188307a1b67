"""
Reminder list state with optimistic completion toggling.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from loguru import logger

from core.errors import NotFoundError, ValidationError
from models.schemas import ReminderRead
from services.optimistic import optimistic_apply
from services.persistence import PersistenceOrchestrator


class ReminderStateManager:
    """
    Holds a local copy of the user's reminders.

    `toggle_completion` updates the local copy before the store and puts the
    previous value back if the write fails. `update_text` writes first and
    then reloads from the store.
    """

    def __init__(self, store: PersistenceOrchestrator, reminders: Iterable[ReminderRead] = ()) -> None:
        self._store = store
        self._reminders: Dict[int, ReminderRead] = {r.id: r for r in reminders}

    @classmethod
    async def load(cls, store: PersistenceOrchestrator) -> "ReminderStateManager":
        manager = cls(store)
        await manager.refresh()
        return manager

    @property
    def reminders(self) -> List[ReminderRead]:
        return list(self._reminders.values())

    def get(self, reminder_id: int) -> ReminderRead:
        try:
            return self._reminders[reminder_id]
        except KeyError:
            raise NotFoundError(f"Reminder {reminder_id} not found") from None

    async def refresh(self) -> None:
        rows = await self._store.list_reminders()
        self._reminders = {row.id: ReminderRead.model_validate(row) for row in rows}

    def _set_completed(self, reminder_id: int, completed: bool) -> None:
        self._reminders[reminder_id] = self.get(reminder_id).model_copy(update={"completed": completed})

    async def toggle_completion(self, reminder_id: int) -> ReminderRead:
        previous = self.get(reminder_id).completed
        new_status = not previous

        async def persist() -> None:
            await self._store.set_reminder_completed(reminder_id, new_status)

        def revert() -> None:
            logger.warning("Reverting reminder={} to completed={}", reminder_id, previous)
            self._set_completed(reminder_id, previous)

        await optimistic_apply(
            apply=lambda: self._set_completed(reminder_id, new_status),
            persist=persist,
            revert=revert,
        )
        return self.get(reminder_id)

    async def update_text(self, reminder_id: int, new_text: str) -> ReminderRead:
        if not new_text or not new_text.strip():
            raise ValidationError("Cannot save empty reminder.")
        self.get(reminder_id)
        await self._store.update_reminder_text(reminder_id, new_text.strip())
        await self.refresh()
        return self.get(reminder_id)
