"""
Turn parsed action items into reminder drafts.

An item like "Ship release (due: January 5, 2025)" is due at midnight on that
date; anything without a recognisable due date is due "now".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from loguru import logger

DUE_RE = re.compile(r"due:\s*(.*?)(?:\)|$)", re.IGNORECASE)
DUE_DATE_FORMAT = "%B %d, %Y"  # "January 5, 2025"


@dataclass
class ReminderDraft:
    text: str
    remind_at: datetime


def parse_due_date(item: str) -> Optional[datetime]:
    match = DUE_RE.search(item)
    if not match or not match.group(1).strip():
        return None
    fragment = match.group(1).strip()
    try:
        parsed = datetime.strptime(fragment, DUE_DATE_FORMAT)
    except ValueError:
        logger.debug("Could not parse due date {!r} in action item", fragment)
        return None
    return parsed.replace(tzinfo=timezone.utc)


def derive_reminders(action_items: Iterable[str], now: Optional[datetime] = None) -> List[ReminderDraft]:
    now = now or datetime.now(timezone.utc)
    return [ReminderDraft(text=item, remind_at=parse_due_date(item) or now) for item in action_items]
