"""Atomic moves between the active notes and the trash.

``trash`` and ``restore`` each run as a single transaction: the row is read
under a lock, its counterpart is inserted, then the original is deleted.
Either all three steps commit or the session is rolled back and nothing
changed. The delete must remove exactly one row; if a concurrent request
already moved the note, the transaction is rolled back instead of leaving
the note in both tables.
"""
import logging
import uuid
from contextlib import contextmanager

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notebin.notes.models import Note
from notebin.trash.models import TrashedNote
from notebin.common.errors import NotFoundOrNotOwned, TransactionFailure
from notebin.common.utils import utcnow

log = logging.getLogger(__name__)


class LifecycleCoordinator:
    def __init__(self, session: Session, clock=utcnow):
        self.session = session
        self.clock = clock

    @contextmanager
    def _atomic(self, action: str, **ids):
        try:
            yield
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log.exception(f"{action}_rolled_back", extra={k: str(v) for k, v in ids.items()})
            raise TransactionFailure() from exc
        except TransactionFailure:
            self.session.rollback()
            log.exception(f"{action}_rolled_back", extra={k: str(v) for k, v in ids.items()})
            raise
        except BaseException:
            self.session.rollback()
            raise

    # --- trash ---

    def trash(self, owner_id: uuid.UUID, note_id: uuid.UUID) -> TrashedNote:
        with self._atomic("trash", note_id=note_id, owner_id=owner_id):
            note = self._lock_note(owner_id, note_id)
            trashed = self._insert_trashed(note)
            self._remove_note(note)
            # stays loaded after commit: a concurrent erase must not fail a committed move
            self.session.expunge(trashed)
        log.info("note_trashed", extra={
            "note_id": str(note_id), "trashed_id": str(trashed.id), "owner_id": str(owner_id),
        })
        return trashed

    def _lock_note(self, owner_id, note_id) -> Note:
        stmt = (
            select(Note)
            .where(Note.id == note_id, Note.owner_id == owner_id)
            .with_for_update()
        )
        note = self.session.scalars(stmt).first()
        if note is None:
            raise NotFoundOrNotOwned("Note not found.", details={"note_id": str(note_id)})
        return note

    def _insert_trashed(self, note: Note) -> TrashedNote:
        trashed = TrashedNote(
            id=uuid.uuid4(),
            original_note_id=note.id,
            owner_id=note.owner_id,
            title=note.title,
            content=note.content,
            original_updated_at=note.updated_at,
            trashed_at=max(self.clock(), note.updated_at),
        )
        self.session.add(trashed)
        self.session.flush()
        return trashed

    def _remove_note(self, note: Note) -> None:
        result = self.session.execute(
            delete(Note).where(Note.id == note.id, Note.owner_id == note.owner_id)
        )
        if result.rowcount != 1:
            raise TransactionFailure(details={"note_id": str(note.id)})

    # --- restore ---

    def restore(self, owner_id: uuid.UUID, trashed_id: uuid.UUID) -> Note:
        with self._atomic("restore", trashed_id=trashed_id, owner_id=owner_id):
            trashed = self._lock_trashed(owner_id, trashed_id)
            note = self._insert_note(trashed)
            self._remove_trashed(trashed)
            self.session.expunge(note)
        log.info("note_restored", extra={
            "trashed_id": str(trashed_id), "note_id": str(note.id), "owner_id": str(owner_id),
        })
        return note

    def _lock_trashed(self, owner_id, trashed_id) -> TrashedNote:
        stmt = (
            select(TrashedNote)
            .where(TrashedNote.id == trashed_id, TrashedNote.owner_id == owner_id)
            .with_for_update()
        )
        trashed = self.session.scalars(stmt).first()
        if trashed is None:
            raise NotFoundOrNotOwned("Trashed note not found.", details={"trashed_id": str(trashed_id)})
        return trashed

    def _insert_note(self, trashed: TrashedNote) -> Note:
        now = self.clock()
        # a fresh id: restoring creates a new active record, it does not revive the old one
        note = Note(
            id=uuid.uuid4(),
            owner_id=trashed.owner_id,
            title=trashed.title,
            content=trashed.content,
            created_at=now,
            updated_at=trashed.original_updated_at or now,
        )
        self.session.add(note)
        self.session.flush()
        return note

    def _remove_trashed(self, trashed: TrashedNote) -> None:
        result = self.session.execute(
            delete(TrashedNote).where(
                TrashedNote.id == trashed.id, TrashedNote.owner_id == trashed.owner_id
            )
        )
        if result.rowcount != 1:
            raise TransactionFailure(details={"trashed_id": str(trashed.id)})
