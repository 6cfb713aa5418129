import uuid
from sqlalchemy import ForeignKey, Uuid
from notebin.extensions import db
from notebin.common.utils import utcnow

class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = db.Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = db.Column(db.Text, nullable=False, default="")
    content = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    # set explicitly by NoteStore / LifecycleCoordinator, never by an onupdate hook
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Note {self.id} owner={self.owner_id}>"
