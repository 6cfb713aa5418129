from marshmallow import Schema, fields, validate, pre_load

class RegisterSchema(Schema):
    username = fields.String(required=True, validate=validate.Length(min=3, max=64))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6, max=128))

    @pre_load
    def strip_username(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("username"), str):
            data = {**data, "username": data["username"].strip()}
        return data

class LoginSchema(Schema):
    username = fields.String(required=True)
    password = fields.String(required=True, load_only=True)

class TokenOut(Schema):
    access_token = fields.String(required=True)

class MeOut(Schema):
    id = fields.UUID(required=True)
    username = fields.String(required=True)
    created_at = fields.DateTime(required=True)
