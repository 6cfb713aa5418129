import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from notebin.notes.models import Note
from notebin.common.errors import ValidationError, NotFoundOrNotOwned
from notebin.common.utils import utcnow, clean_text

log = logging.getLogger(__name__)


def validate_note_text(title, content) -> tuple[str, str]:
    title_c, content_c = clean_text(title), clean_text(content)
    missing = {}
    if not title_c:
        missing["title"] = ["Must not be empty."]
    if not content_c:
        missing["content"] = ["Must not be empty."]
    if missing:
        raise ValidationError("Title and content are required.", details=missing)
    return title_c, content_c


class NoteStore:
    """Active notes of a user. Every call is scoped to ``owner_id``."""

    def __init__(self, session: Session, clock=utcnow):
        self.session = session
        self.clock = clock

    def create(self, owner_id: uuid.UUID, title: str, content: str) -> Note:
        title, content = validate_note_text(title, content)
        now = self.clock()
        note = Note(
            id=uuid.uuid4(), owner_id=owner_id, title=title, content=content,
            created_at=now, updated_at=now,
        )
        self.session.add(note)
        self.session.commit()
        log.info("note_created", extra={"note_id": str(note.id), "owner_id": str(owner_id)})
        return note

    def list_active(self, owner_id: uuid.UUID) -> list[Note]:
        stmt = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.updated_at.desc())
        )
        return list(self.session.scalars(stmt))

    def get(self, owner_id: uuid.UUID, note_id: uuid.UUID) -> Note:
        stmt = select(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        note = self.session.scalars(stmt).first()
        if note is None:
            raise NotFoundOrNotOwned("Note not found.", details={"note_id": str(note_id)})
        return note

    def update(self, owner_id: uuid.UUID, note_id: uuid.UUID, title: str, content: str) -> Note:
        title, content = validate_note_text(title, content)
        note = self.get(owner_id, note_id)
        note.title = title
        note.content = content
        # updated_at never moves backward, even if the clock does
        note.updated_at = max(self.clock(), note.updated_at)
        self.session.flush()
        # stays loaded after commit: a concurrent trash must not fail a committed edit
        self.session.expunge(note)
        self.session.commit()
        log.info("note_updated", extra={"note_id": str(note.id), "owner_id": str(owner_id)})
        return note
