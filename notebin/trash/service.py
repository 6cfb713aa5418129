import logging
import uuid

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from notebin.trash.models import TrashedNote
from notebin.common.errors import NotFoundOrNotOwned

log = logging.getLogger(__name__)


class TrashLedger:
    def __init__(self, session: Session):
        self.session = session

    def list_trashed(self, owner_id: uuid.UUID) -> list[TrashedNote]:
        stmt = (
            select(TrashedNote)
            .where(TrashedNote.owner_id == owner_id)
            .order_by(TrashedNote.trashed_at.desc())
        )
        return list(self.session.scalars(stmt))

    def erase_forever(self, owner_id: uuid.UUID, trashed_id: uuid.UUID) -> None:
        """Delete a trashed note for good. There is no way back."""
        result = self.session.execute(
            delete(TrashedNote).where(
                TrashedNote.id == trashed_id, TrashedNote.owner_id == owner_id
            )
        )
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundOrNotOwned("Trashed note not found.", details={"trashed_id": str(trashed_id)})
        self.session.commit()
        log.info("trashed_note_erased", extra={"trashed_id": str(trashed_id), "owner_id": str(owner_id)})
