from marshmallow import Schema, fields

class TrashedNoteOut(Schema):
    id = fields.UUID(required=True)
    original_note_id = fields.UUID(allow_none=True)
    owner_id = fields.UUID(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    trashed_at = fields.DateTime(required=True)
    original_updated_at = fields.DateTime(allow_none=True)
