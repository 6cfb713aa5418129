import uuid
from abc import ABC, abstractmethod

from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from notebin.common.errors import Unauthenticated, InvalidCredential


def credential_from_header(header: str | None) -> str:
    """Extract the token from an Authorization header.

    Accepts ``Bearer <token>`` and, for older clients, the bare token.
    """
    value = (header or "").strip()
    if not value:
        raise Unauthenticated()
    parts = value.split(None, 1)
    if len(parts) == 1:
        return parts[0]
    scheme, token = parts
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidCredential()
    return token.strip()


class AuthGate(ABC):
    """Turns a bearer credential into a verified user id."""

    @abstractmethod
    def verify(self, credential: str | None) -> uuid.UUID:
        """Return the caller's id or raise Unauthenticated / InvalidCredential."""


class JwtAuthGate(AuthGate):
    def verify(self, credential: str | None) -> uuid.UUID:
        if not credential:
            raise Unauthenticated()
        try:
            claims = decode_token(credential)
        except (PyJWTError, JWTExtendedException):
            raise InvalidCredential()
        if claims.get("type") != "access":
            raise InvalidCredential()
        try:
            return uuid.UUID(str(claims.get("sub")))
        except ValueError:
            raise InvalidCredential()
