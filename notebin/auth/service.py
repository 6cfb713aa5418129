import logging
import uuid

from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from notebin.extensions import db
from notebin.users.models import User
from notebin.common.errors import ApiError, Conflict, NotFoundOrNotOwned

log = logging.getLogger(__name__)

def normalize_username(username: str) -> str:
    return (username or "").strip()

def create_user(username: str, password: str) -> User:
    username_n = normalize_username(username)
    if not username_n or not password:
        raise ApiError("Username & password required.", 400, "validation_error")

    user = User(username=username_n)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already exists.", details={"username": username_n})
    log.info("user_registered", extra={"user_id": str(user.id)})
    return user

def authenticate_user(username: str, password: str) -> User:
    username_n = normalize_username(username)
    user: User | None = User.query.filter_by(username=username_n).first()
    if not user or not user.check_password(password):
        raise ApiError("Invalid username or password.", 401, "invalid_credentials")
    return user

def get_user(user_id: uuid.UUID) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundOrNotOwned("User not found.")
    return user

def issue_token(user: User) -> dict:
    """The user id is the only identity the notes API ever needs."""
    return {"access_token": create_access_token(identity=str(user.id))}
