from flask import Blueprint, request, jsonify
from notebin.extensions import db
from notebin.notes.schemas import NoteIn, NoteOut
from notebin.notes.service import NoteStore
from notebin.trash.lifecycle import LifecycleCoordinator
from notebin.common.authz import auth_required, current_user_id

bp = Blueprint("notes", __name__)

note_in = NoteIn()
note_out = NoteOut()
note_out_many = NoteOut(many=True)

def _store() -> NoteStore:
    return NoteStore(db.session)

@bp.post("/")
@auth_required
def create_note():
    payload = request.get_json(silent=True) or {}
    data = note_in.load(payload)
    note = _store().create(current_user_id(), data["title"], data["content"])
    return jsonify(note_out.dump(note)), 201

@bp.get("/")
@auth_required
def list_notes():
    notes = _store().list_active(current_user_id())
    return jsonify(note_out_many.dump(notes)), 200

@bp.get("/<uuid:note_id>")
@auth_required
def get_note(note_id):
    note = _store().get(current_user_id(), note_id)
    return jsonify(note_out.dump(note)), 200

@bp.put("/<uuid:note_id>")
@auth_required
def update_note(note_id):
    payload = request.get_json(silent=True) or {}
    data = note_in.load(payload)
    note = _store().update(current_user_id(), note_id, data["title"], data["content"])
    return jsonify(note_out.dump(note)), 200

@bp.delete("/<uuid:note_id>")
@auth_required
def trash_note(note_id):
    # moves the note to the trash, see trashed-notes routes to undo
    LifecycleCoordinator(db.session).trash(current_user_id(), note_id)
    return ("", 204)
