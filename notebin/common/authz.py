import uuid
from functools import wraps

from flask import current_app, g, request

from notebin.auth.gate import credential_from_header


def auth_required(fn):
    """
    Ex: @auth_required
        def handler(): ... g.user_id is the verified caller

    Raises Unauthenticated / InvalidCredential through the app's AuthGate.
    """
    @wraps(fn)
    def inner(*args, **kwargs):
        credential = credential_from_header(request.headers.get("Authorization"))
        g.user_id = current_app.extensions["auth_gate"].verify(credential)
        return fn(*args, **kwargs)
    return inner


def current_user_id() -> uuid.UUID:
    return g.user_id
