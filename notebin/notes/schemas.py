from marshmallow import Schema, fields

class NoteIn(Schema):
    # blank values are rejected by NoteStore after trimming
    title = fields.String(required=True)
    content = fields.String(required=True)

class NoteOut(Schema):
    id = fields.UUID(required=True)
    owner_id = fields.UUID(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
