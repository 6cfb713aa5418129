# notebin/docs/spec.py
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from marshmallow import Schema, fields

from notebin.auth.schemas import RegisterSchema, LoginSchema, TokenOut, MeOut
from notebin.notes.schemas import NoteIn, NoteOut
from notebin.trash.schemas import TrashedNoteOut


class ErrorBody(Schema):
    code = fields.String()
    message = fields.String()
    details = fields.Dict()

class ErrorSchema(Schema):
    error = fields.Nested(ErrorBody)


def _ref(name: str):
    return {"$ref": f"#/components/schemas/{name}"}

def _json(name: str, many: bool = False):
    schema = {"type": "array", "items": _ref(name)} if many else _ref(name)
    return {"content": {"application/json": {"schema": schema}}}

def _error(description: str):
    return {"description": description, **_json("Error")}

_SECURED = [{"bearerAuth": []}]
_UNAUTHORIZED = _error("No token provided / Invalid token")
_NOT_FOUND = _error("Not found or not owned by caller")

def _id_param(name: str):
    return {"in": "path", "name": name, "required": True, "schema": {"type": "string", "format": "uuid"}}


def build_spec():
    spec = APISpec(
        title="Notebin API",
        version="1.0.0",
        openapi_version="3.0.3",
        info={"description": "Notes with a recoverable trash"},
        plugins=[MarshmallowPlugin()],
    )

    spec.components.security_scheme(
        "bearerAuth",
        {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
    )

    spec.components.schema("Register", schema=RegisterSchema)
    spec.components.schema("Login", schema=LoginSchema)
    spec.components.schema("Token", schema=TokenOut)
    spec.components.schema("Me", schema=MeOut)
    spec.components.schema("NoteIn", schema=NoteIn)
    spec.components.schema("NoteOut", schema=NoteOut)
    spec.components.schema("TrashedNoteOut", schema=TrashedNoteOut)
    spec.components.schema("Error", schema=ErrorSchema)

    # ---- AUTH ----
    spec.path(
        path="/api/v1/auth/register",
        operations={
            "post": {
                "summary": "Register",
                "requestBody": {"required": True, **_json("Register")},
                "responses": {
                    "201": {"description": "Created", **_json("Token")},
                    "400": _error("Invalid body"),
                    "409": _error("Username already exists"),
                },
            }
        },
    )

    spec.path(
        path="/api/v1/auth/login",
        operations={
            "post": {
                "summary": "Login",
                "requestBody": {"required": True, **_json("Login")},
                "responses": {
                    "200": {"description": "OK", **_json("Token")},
                    "401": _error("Invalid username or password"),
                },
            }
        },
    )

    spec.path(
        path="/api/v1/auth/me",
        operations={
            "get": {
                "summary": "Current user",
                "security": _SECURED,
                "responses": {"200": {"description": "OK", **_json("Me")}, "401": _UNAUTHORIZED},
            }
        },
    )

    # ---- NOTES ----
    spec.path(
        path="/api/v1/notes/",
        operations={
            "post": {
                "summary": "Create note",
                "security": _SECURED,
                "requestBody": {"required": True, **_json("NoteIn")},
                "responses": {
                    "201": {"description": "Created", **_json("NoteOut")},
                    "400": _error("Empty title or content"),
                    "401": _UNAUTHORIZED,
                },
            },
            "get": {
                "summary": "List my active notes (most recently edited first)",
                "security": _SECURED,
                "responses": {"200": {"description": "OK", **_json("NoteOut", many=True)}, "401": _UNAUTHORIZED},
            },
        },
    )

    spec.path(
        path="/api/v1/notes/{id}",
        operations={
            "get": {
                "summary": "Get note",
                "security": _SECURED,
                "parameters": [_id_param("id")],
                "responses": {"200": {"description": "OK", **_json("NoteOut")}, "404": _NOT_FOUND},
            },
            "put": {
                "summary": "Update note",
                "security": _SECURED,
                "parameters": [_id_param("id")],
                "requestBody": {"required": True, **_json("NoteIn")},
                "responses": {
                    "200": {"description": "OK", **_json("NoteOut")},
                    "400": _error("Empty title or content"),
                    "404": _NOT_FOUND,
                },
            },
            "delete": {
                "summary": "Move note to trash",
                "security": _SECURED,
                "parameters": [_id_param("id")],
                "responses": {"204": {"description": "Trashed"}, "404": _NOT_FOUND},
            },
        },
    )

    # ---- TRASH ----
    spec.path(
        path="/api/v1/trashed-notes/",
        operations={
            "get": {
                "summary": "List my trashed notes (most recently trashed first)",
                "security": _SECURED,
                "responses": {"200": {"description": "OK", **_json("TrashedNoteOut", many=True)}, "401": _UNAUTHORIZED},
            }
        },
    )

    spec.path(
        path="/api/v1/trashed-notes/{id}/restore",
        operations={
            "post": {
                "summary": "Restore a trashed note",
                "security": _SECURED,
                "parameters": [_id_param("id")],
                "responses": {"200": {"description": "Restored", **_json("NoteOut")}, "404": _NOT_FOUND},
            }
        },
    )

    spec.path(
        path="/api/v1/trashed-notes/{id}",
        operations={
            "delete": {
                "summary": "Erase a trashed note forever",
                "security": _SECURED,
                "parameters": [_id_param("id")],
                "responses": {"204": {"description": "Erased"}, "404": _NOT_FOUND},
            }
        },
    )

    return spec.to_dict()
