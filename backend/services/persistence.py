"""
Multi-table persistence for summaries, notes and reminders.

The orchestrator is bound to one request's `AsyncSession` and one user id;
every query it issues is filtered by that user. Writes that span tables are
separate commits, not one transaction: `save_summary` reports a failure
after the summary was stored as `PartialSaveError` with the committed ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Type

from loguru import logger
from sqlalchemy import delete, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, col, select

from core.errors import NotFoundError, PartialSaveError, PersistenceError, ValidationError
from models.note import Note
from models.reminder import Reminder
from models.summary import Summary
from services.reminder_deriver import derive_reminders
from services.summary_parser import parse_summary_text


@dataclass
class SaveResult:
    summary: Summary
    note: Note
    reminders: List[Reminder] = field(default_factory=list)


@dataclass
class DeleteResult:
    deleted: int
    # rows that pointed at the deleted summaries: removed on cascade, kept otherwise
    linked_notes: int = 0
    linked_reminders: int = 0


def clean_lines(lines: Iterable[str]) -> List[str]:
    stripped = (line.strip() for line in lines)
    return [line for line in stripped if line]


def _unique_ids(ids: Sequence[int], empty_message: str) -> List[int]:
    unique = list(dict.fromkeys(ids))
    if not unique:
        raise ValidationError(empty_message)
    return unique


class PersistenceOrchestrator:
    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id

    # ------------------------------------------------------------------ save

    async def save_summary(self, transcript: str, summary_text: str) -> SaveResult:
        """
        Store the summary, then the note parsed from it, then one reminder per
        action item. A failed summary insert writes nothing; a failure after
        that leaves the earlier rows in place.
        """
        if not summary_text or not summary_text.strip():
            raise ValidationError("No summary to save.")

        try:
            summary = await self._insert_summary(transcript, summary_text)
        except SQLAlchemyError as exc:
            logger.exception("Saving summary failed for user={}", self.user_id)
            raise PersistenceError("Failed to save summary.") from exc

        parsed = parse_summary_text(summary_text)

        try:
            note = await self._insert_note(summary.id, parsed.title, parsed.key_points, parsed.decisions)
        except SQLAlchemyError as exc:
            logger.exception("Note insert failed after summary={} was saved", summary.id)
            raise PartialSaveError(
                f"Summary {summary.id} was saved but its note could not be created.",
                summary_id=summary.id,
            ) from exc

        try:
            reminders = await self._insert_reminders(summary.id, parsed.action_items)
        except SQLAlchemyError as exc:
            logger.exception("Reminder insert failed after summary={} note={} were saved", summary.id, note.id)
            raise PartialSaveError(
                f"Summary {summary.id} and note {note.id} were saved but reminders could not be created.",
                summary_id=summary.id,
                note_id=note.id,
            ) from exc

        logger.info(
            "Saved summary={} note={} reminders={} for user={}",
            summary.id, note.id, len(reminders), self.user_id,
        )
        return SaveResult(summary=summary, note=note, reminders=reminders)

    async def _insert_summary(self, transcript: str, summary_text: str) -> Summary:
        summary = Summary(user_id=self.user_id, transcript=transcript, summary=summary_text)
        self.session.add(summary)
        await self._commit()
        await self.session.refresh(summary)
        return summary

    async def _insert_note(
        self,
        summary_id: Optional[int],
        title: str,
        key_discussions: List[str],
        decisions_made: List[str],
    ) -> Note:
        note = Note(
            user_id=self.user_id,
            summary_id=summary_id,
            title=title,
            key_discussions=clean_lines(key_discussions),
            decisions_made=clean_lines(decisions_made),
        )
        self.session.add(note)
        await self._commit()
        await self.session.refresh(note)
        return note

    async def _insert_reminders(self, summary_id: int, action_items: List[str]) -> List[Reminder]:
        reminders = [
            Reminder(
                user_id=self.user_id,
                summary_id=summary_id,
                text=draft.text,
                remind_at=draft.remind_at,
                completed=False,
            )
            for draft in derive_reminders(action_items)
        ]
        if not reminders:
            return []
        self.session.add_all(reminders)
        await self._commit()
        for reminder in reminders:
            await self.session.refresh(reminder)
        return reminders

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    # ---------------------------------------------------------- manual rows

    async def create_note(self, title: str, key_discussions: Iterable[str], decisions_made: Iterable[str]) -> Note:
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty.")
        try:
            return await self._insert_note(None, title.strip(), list(key_discussions), list(decisions_made))
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to save note.") from exc

    async def create_reminder(self, text: str, remind_at: datetime) -> Reminder:
        if not text or not text.strip():
            raise ValidationError("Reminder text cannot be empty.")
        reminder = Reminder(user_id=self.user_id, text=text.strip(), remind_at=remind_at, completed=False)
        self.session.add(reminder)
        try:
            await self._commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to save reminder.") from exc
        await self.session.refresh(reminder)
        return reminder

    # ---------------------------------------------------------------- reads

    async def _fetch(self, stmt):
        # bulk updates/deletes bypass the identity map, so reload loaded rows
        return await self.session.execute(stmt.execution_options(populate_existing=True))

    async def list_summaries(self) -> List[Summary]:
        stmt = (
            select(Summary)
            .where(Summary.user_id == self.user_id)
            .order_by(col(Summary.created_at).desc(), col(Summary.id).desc())
        )
        return list((await self._fetch(stmt)).scalars().all())

    async def list_notes(self) -> List[Note]:
        stmt = (
            select(Note)
            .where(Note.user_id == self.user_id)
            .order_by(col(Note.created_at).desc(), col(Note.id).desc())
        )
        return list((await self._fetch(stmt)).scalars().all())

    async def list_reminders(self, summary_id: Optional[int] = None) -> List[Reminder]:
        stmt = select(Reminder).where(Reminder.user_id == self.user_id)
        if summary_id is not None:
            stmt = stmt.where(Reminder.summary_id == summary_id)
        stmt = stmt.order_by(col(Reminder.remind_at).asc(), col(Reminder.id).asc())
        return list((await self._fetch(stmt)).scalars().all())

    async def get_summary(self, summary_id: int) -> Summary:
        return await self._get_owned(Summary, summary_id)

    async def get_note_for_summary(self, summary_id: int) -> Optional[Note]:
        stmt = select(Note).where(Note.user_id == self.user_id, Note.summary_id == summary_id)
        return (await self._fetch(stmt)).scalars().first()

    async def get_reminder(self, reminder_id: int) -> Reminder:
        return await self._get_owned(Reminder, reminder_id)

    async def _get_owned(self, model: Type[SQLModel], row_id: int):
        stmt = select(model).where(model.id == row_id, model.user_id == self.user_id)
        row = (await self._fetch(stmt)).scalar_one_or_none()
        if row is None:
            raise NotFoundError(f"{model.__name__} {row_id} not found")
        return row

    # -------------------------------------------------------------- updates

    async def set_reminder_completed(self, reminder_id: int, completed: bool) -> Reminder:
        reminder = await self.get_reminder(reminder_id)
        reminder.completed = completed
        try:
            await self._commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not update reminder status. Please try again.") from exc
        await self.session.refresh(reminder)
        return reminder

    async def update_reminder_text(self, reminder_id: int, text: str) -> Reminder:
        reminder = await self.get_reminder(reminder_id)
        reminder.text = text
        try:
            await self._commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not update reminder.") from exc
        await self.session.refresh(reminder)
        return reminder

    # -------------------------------------------------------------- deletes

    async def delete_summaries(self, ids: Sequence[int], cascade: bool) -> DeleteResult:
        """
        cascade=True  – delete the summaries; the store's FK cascade removes
                        their notes and reminders.
        cascade=False – null the summary reference on notes and reminders,
                        then delete the summaries in the same transaction.
        """
        summary_ids = _unique_ids(ids, "No summaries selected")
        await self._ensure_owned(Summary, summary_ids)

        linked_notes = await self._count_linked(Note, summary_ids)
        linked_reminders = await self._count_linked(Reminder, summary_ids)

        if not cascade:
            try:
                for model in (Note, Reminder):
                    await self.session.execute(
                        update(model)
                        .where(col(model.summary_id).in_(summary_ids), model.user_id == self.user_id)
                        .values(summary_id=None)
                        .execution_options(synchronize_session=False)
                    )
            except SQLAlchemyError as exc:
                await self.session.rollback()
                raise PersistenceError("Failed to unlink notes and reminders.") from exc
            logger.info(
                "Unlinking notes={} reminders={} from summaries={}", linked_notes, linked_reminders, summary_ids
            )

        # unlink and delete share one transaction: both commit or neither does
        deleted = await self._delete_batch(Summary, summary_ids)
        logger.info("Deleted summaries={} cascade={} for user={}", summary_ids, cascade, self.user_id)
        return DeleteResult(deleted=deleted, linked_notes=linked_notes, linked_reminders=linked_reminders)

    async def delete_notes(self, ids: Sequence[int]) -> int:
        note_ids = _unique_ids(ids, "No notes selected")
        await self._ensure_owned(Note, note_ids)
        return await self._delete_batch(Note, note_ids)

    async def delete_reminders(self, ids: Sequence[int]) -> int:
        reminder_ids = _unique_ids(ids, "No reminders selected")
        await self._ensure_owned(Reminder, reminder_ids)
        return await self._delete_batch(Reminder, reminder_ids)

    async def _ensure_owned(self, model: Type[SQLModel], ids: List[int]) -> None:
        stmt = select(model.id).where(col(model.id).in_(ids), model.user_id == self.user_id)
        found = set((await self.session.execute(stmt)).scalars().all())
        missing = [row_id for row_id in ids if row_id not in found]
        if missing:
            raise NotFoundError(f"{model.__name__} not found: {', '.join(map(str, missing))}")

    async def _count_linked(self, model: Type[SQLModel], summary_ids: List[int]) -> int:
        stmt = select(func.count()).select_from(model).where(
            col(model.summary_id).in_(summary_ids), model.user_id == self.user_id
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def _delete_batch(self, model: Type[SQLModel], ids: List[int]) -> int:
        """One `DELETE ... WHERE id IN (...)`; anything short of all ids is rolled back."""
        name = model.__name__.lower()
        try:
            result = await self.session.execute(
                delete(model)
                .where(col(model.id).in_(ids), model.user_id == self.user_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != len(ids):
                await self.session.rollback()
                raise PersistenceError(
                    f"Deleted {result.rowcount} of {len(ids)} {name} rows; nothing was removed."
                )
            await self._commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError(f"Failed to delete {name} rows.") from exc
        return len(ids)
