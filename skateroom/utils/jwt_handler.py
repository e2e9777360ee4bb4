# jwt_handler.py
from dataclasses import dataclass
from datetime import datetime

from jose import JWTError, jwt
from skateroom.config import settings


class InvalidTokenError(ValueError):
    pass


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    session_id: str


def encode_session_token(user_id: str, session_id: str, expires_at: datetime) -> str:
    # The token expires together with its AuthSession row.
    claims = {"sub": user_id, "sid": session_id, "exp": expires_at}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionClaims:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    user_id, session_id = claims.get("sub"), claims.get("sid")
    if not user_id or not session_id:
        raise InvalidTokenError("token does not name a session")
    return SessionClaims(user_id=str(user_id), session_id=str(session_id))
