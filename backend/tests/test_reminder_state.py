from datetime import datetime, timezone

import pytest

from core.errors import PersistenceError, ValidationError
from services.persistence import PersistenceOrchestrator
from services.reminder_state import ReminderStateManager


async def _manager_with_reminder(session, user, completed=False):
    store = PersistenceOrchestrator(session, user.id)
    reminder = await store.create_reminder("Send minutes", datetime(2025, 2, 1, tzinfo=timezone.utc))
    if completed:
        await store.set_reminder_completed(reminder.id, True)
    return store, await ReminderStateManager.load(store), reminder.id


def test_toggle_flips_local_and_stored_state(run_db):
    async def scenario(session, user):
        store, manager, reminder_id = await _manager_with_reminder(session, user)

        toggled = await manager.toggle_completion(reminder_id)
        assert toggled.completed is True
        assert (await store.get_reminder(reminder_id)).completed is True

        toggled = await manager.toggle_completion(reminder_id)
        assert toggled.completed is False

    run_db(scenario)


@pytest.mark.parametrize("initial", [False, True])
def test_failed_toggle_restores_previous_value(run_db, initial):
    async def scenario(session, user):
        store, manager, reminder_id = await _manager_with_reminder(session, user, completed=initial)
        seen = []

        async def failing_write(rid, completed):
            seen.append(manager.get(rid).completed)
            raise PersistenceError("Could not update reminder status. Please try again.")

        store.set_reminder_completed = failing_write
        with pytest.raises(PersistenceError):
            await manager.toggle_completion(reminder_id)

        assert seen == [not initial]
        assert manager.get(reminder_id).completed is initial

    run_db(scenario)


def test_update_text_persists_then_refreshes(run_db):
    async def scenario(session, user):
        store, manager, reminder_id = await _manager_with_reminder(session, user)

        updated = await manager.update_text(reminder_id, "  Send minutes to all  ")
        assert updated.text == "Send minutes to all"
        assert (await store.get_reminder(reminder_id)).text == "Send minutes to all"

    run_db(scenario)


def test_update_text_rejects_blank_without_writing(run_db):
    async def scenario(session, user):
        store, manager, reminder_id = await _manager_with_reminder(session, user)
        writes = []

        async def recording_write(rid, text):
            writes.append(text)

        store.update_reminder_text = recording_write
        with pytest.raises(ValidationError):
            await manager.update_text(reminder_id, "   ")
        assert writes == []
        assert manager.get(reminder_id).text == "Send minutes"

    run_db(scenario)
