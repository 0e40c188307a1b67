from datetime import datetime, timedelta, timezone

from services.reminder_deriver import derive_reminders, parse_due_date


def test_due_clause_becomes_midnight_of_that_day():
    [draft] = derive_reminders(["Ship release (due: January 5, 2025)"])
    assert draft.text == "Ship release (due: January 5, 2025)"
    assert draft.remind_at == datetime(2025, 1, 5, tzinfo=timezone.utc)


def test_item_without_due_clause_is_due_now():
    before = datetime.now(timezone.utc)
    [draft] = derive_reminders(["Ship release"])
    after = datetime.now(timezone.utc)
    assert before - timedelta(seconds=1) <= draft.remind_at <= after + timedelta(seconds=1)


def test_unparseable_date_falls_back_to_now():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    drafts = derive_reminders(["Ping legal (due: next Friday)", "Refresh deck (Due: 2025-02-01)"], now=now)
    assert [d.remind_at for d in drafts] == [now, now]


def test_due_match_is_case_insensitive_and_accepts_end_of_text():
    assert parse_due_date("Assignee: Bo, DUE: March 12, 2026") == datetime(2026, 3, 12, tzinfo=timezone.utc)
    assert parse_due_date("Fix bug (Assignee: Alice, Due: January 5, 2025)") == datetime(
        2025, 1, 5, tzinfo=timezone.utc
    )


def test_empty_input_yields_no_drafts():
    assert derive_reminders([]) == []
