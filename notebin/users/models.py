import uuid
from sqlalchemy import Uuid
from passlib.hash import bcrypt
from notebin.extensions import db
from notebin.common.utils import utcnow

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # password helpers
    def set_password(self, raw_password: str) -> None:
        self.password_hash = bcrypt.hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return bcrypt.verify(raw_password, self.password_hash)
