"""
Deletion notifications – one JSON POST per summary after it was deleted.

Delivery failures are logged and returned to the caller; they never stop
the deletion itself.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import httpx
from loguru import logger

from models.summary import Summary
from models.user import User


async def notify_summary_deletion(
    client: httpx.AsyncClient,
    url: Optional[str],
    summaries: Iterable[Summary],
    user: User,
    timeout: float = 10.0,
) -> List[int]:
    """Return the ids of summaries whose notification could not be delivered."""
    if not url:
        return []

    failed: List[int] = []
    for summary in summaries:
        payload = {
            "summary": summary.summary,
            "userName": user.full_name or user.email,
            "userEmail": user.email,
        }
        try:
            response = await client.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Deletion webhook failed for summary={}: {}", summary.id, exc)
            failed.append(summary.id)
    return failed
