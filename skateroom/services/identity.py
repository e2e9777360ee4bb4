"""Email/password identity provider and the per-request auth context.

Access tokens are JWTs that name a row in `auth_sessions`; signing out deletes
the row, which invalidates the token even before it expires.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from skateroom.config import settings
from skateroom.models.auth_session import AuthSession
from skateroom.models.profile import Profile
from skateroom.models.user import User
from skateroom.schemas.auth import AuthResponse, AuthUser
from skateroom.utils.jwt_handler import InvalidTokenError, decode_session_token, encode_session_token
from skateroom.utils.password_hash import hash_password, verify_password


logger = logging.getLogger(__name__)

# Called with (auth session id, user); user is None when that session ends.
SessionListener = Callable[[str, Optional[AuthUser]], None]

AUTH_TIMEOUT_MESSAGE = "Connection timeout. Please try again."


class IdentityError(RuntimeError):
    """Provider-side failure with a message fit for the login form."""


class AuthTimeoutError(RuntimeError):
    pass


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class IdentityProvider:
    def __init__(self, session_factory: sessionmaker, *, token_ttl: timedelta | None = None) -> None:
        self._session_factory = session_factory
        self._token_ttl = token_ttl or timedelta(minutes=settings.access_token_expire_minutes)
        self._listeners: list[SessionListener] = []

    def on_session_change(self, callback: SessionListener) -> Callable[[], None]:
        """Register `callback`; it fires with the user on sign-in and None on sign-out."""

        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, session_id: str, user: AuthUser | None) -> None:
        for callback in list(self._listeners):
            try:
                callback(session_id, user)
            except Exception:  # noqa: BLE001 - one bad listener must not break sign-in/out
                logger.exception("identity.listener_failed")

    @staticmethod
    def session_id_of(access_token: str | None) -> str | None:
        if not access_token:
            return None
        try:
            return decode_session_token(access_token).session_id
        except InvalidTokenError:
            return None

    def _issue_token(self, db: Session, user: User) -> tuple[str, AuthResponse]:
        expires_at = datetime.now(timezone.utc) + self._token_ttl
        auth_session = AuthSession(user_id=user.id, expires_at=expires_at)
        db.add(auth_session)
        db.commit()
        db.refresh(auth_session)
        token = encode_session_token(user.id, auth_session.id, expires_at)
        return auth_session.id, AuthResponse(access_token=token, user=AuthUser(id=user.id, email=user.email))

    def sign_up(self, email: str, password: str) -> AuthResponse:
        """Create the account and its profile, then sign in."""

        with self._session_factory() as db:
            if db.query(User).filter(User.email == email).first() is not None:
                raise IdentityError("User already registered")
            user = User(email=email, password=hash_password(password))
            db.add(user)
            try:
                db.flush()
                db.add(Profile(id=user.id))
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise IdentityError("User already registered") from exc
            db.refresh(user)
            session_id, response = self._issue_token(db, user)
        logger.info("identity.sign_up user_id=%s", response.user.id)
        self._notify(session_id, response.user)
        return response

    def sign_in(self, email: str, password: str) -> AuthResponse:
        with self._session_factory() as db:
            user = db.query(User).filter(User.email == email).first()
            if user is None or not verify_password(password, user.password):
                logger.info("identity.sign_in_rejected email=%s", email)
                raise IdentityError("Invalid login credentials")
            session_id, response = self._issue_token(db, user)
        logger.info("identity.sign_in user_id=%s", response.user.id)
        self._notify(session_id, response.user)
        return response

    def sign_out(self, access_token: str) -> None:
        try:
            claims = decode_session_token(access_token)
        except InvalidTokenError as exc:
            raise IdentityError("Invalid session") from exc
        session_id = claims.session_id
        with self._session_factory() as db:
            db.query(AuthSession).filter(AuthSession.id == session_id).delete()
            db.commit()
        logger.info("identity.sign_out user_id=%s", claims.user_id)
        self._notify(session_id, None)

    def get_session(self, access_token: str | None) -> AuthUser | None:
        """Resolve a token to its user; None for missing, invalid, expired or revoked tokens."""

        if not access_token:
            return None
        try:
            claims = decode_session_token(access_token)
        except InvalidTokenError:
            return None
        session_id, user_id = claims.session_id, claims.user_id
        with self._session_factory() as db:
            auth_session = db.query(AuthSession).filter(AuthSession.id == session_id).first()
            if auth_session is None or auth_session.user_id != user_id:
                return None
            if _as_utc(auth_session.expires_at) <= datetime.now(timezone.utc):
                return None
            user = db.query(User).filter(User.id == user_id).first()
            if user is None:
                return None
            return AuthUser(id=user.id, email=user.email)


class AuthContext:
    """Auth state for one caller, passed explicitly instead of living in a global.

    Lifecycle: `initialize()` resolves the session, `sign_out()` tears it down,
    `close()` detaches it from the provider.
    """

    def __init__(self, identity: IdentityProvider, access_token: str | None, *, timeout: float) -> None:
        self.identity = identity
        self.access_token = access_token
        self.timeout = timeout
        self.user: AuthUser | None = None
        self.session_id = IdentityProvider.session_id_of(access_token)
        self._unsubscribe: Callable[[], None] | None = None

    async def initialize(self) -> AuthUser | None:
        try:
            self.user = await asyncio.wait_for(
                asyncio.to_thread(self.identity.get_session, self.access_token),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.warning("identity.session_timeout timeout=%s", self.timeout)
            raise AuthTimeoutError(AUTH_TIMEOUT_MESSAGE) from exc
        self._unsubscribe = self.identity.on_session_change(self._on_session_change)
        return self.user

    def _on_session_change(self, session_id: str, user: AuthUser | None) -> None:
        if user is None and session_id == self.session_id:
            self.user = None

    def sign_out(self) -> None:
        if self.access_token:
            self.identity.sign_out(self.access_token)
        self.user = None
        self.access_token = None
        self.close()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
