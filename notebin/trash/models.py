import uuid
from sqlalchemy import ForeignKey, Uuid
from notebin.extensions import db
from notebin.common.utils import utcnow

class TrashedNote(db.Model):
    """Soft-deleted note, kept until restored or erased forever."""
    __tablename__ = "trashed_notes"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    # informational only: the active row is gone once a note is trashed
    original_note_id = db.Column(Uuid, nullable=True)
    owner_id = db.Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = db.Column(db.Text, nullable=False, default="")
    content = db.Column(db.Text, nullable=False, default="")

    trashed_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    # the note's updated_at when it was trashed; restore puts it back
    original_updated_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f"<TrashedNote {self.id} owner={self.owner_id}>"
