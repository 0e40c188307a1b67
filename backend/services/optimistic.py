"""
Optimistic local mutation with rollback.

    apply()        – mutate local state right away
    await persist() – write to the store
    revert()       – undo the local mutation if the write failed
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


async def optimistic_apply(
    apply: Callable[[], None],
    persist: Callable[[], Awaitable[T]],
    revert: Callable[[], None],
) -> T:
    apply()
    try:
        return await persist()
    except Exception:
        revert()
        raise
