from flask import Blueprint, jsonify
from notebin.extensions import db
from notebin.notes.schemas import NoteOut
from notebin.trash.schemas import TrashedNoteOut
from notebin.trash.service import TrashLedger
from notebin.trash.lifecycle import LifecycleCoordinator
from notebin.common.authz import auth_required, current_user_id

bp = Blueprint("trash", __name__)

note_out = NoteOut()
trashed_out_many = TrashedNoteOut(many=True)

@bp.get("/")
@auth_required
def list_trashed_notes():
    trashed = TrashLedger(db.session).list_trashed(current_user_id())
    return jsonify(trashed_out_many.dump(trashed)), 200

@bp.post("/<uuid:trashed_id>/restore")
@auth_required
def restore_note(trashed_id):
    note = LifecycleCoordinator(db.session).restore(current_user_id(), trashed_id)
    return jsonify(note_out.dump(note)), 200

@bp.delete("/<uuid:trashed_id>")
@auth_required
def erase_note(trashed_id):
    TrashLedger(db.session).erase_forever(current_user_id(), trashed_id)
    return ("", 204)
