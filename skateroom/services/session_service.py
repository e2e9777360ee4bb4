import logging
from typing import Iterable

from skateroom.db.store import TableStore
from skateroom.schemas.skate_session import SkateSessionCreate, SkateSessionRead, SkateSessionUpdate


logger = logging.getLogger(__name__)

SKATE_SESSIONS = "skate_sessions"


class SessionNotFoundError(LookupError):
    pass


def fetch_sessions(store: TableStore, user_id: str) -> list[SkateSessionRead]:
    rows = store.select(SKATE_SESSIONS, {"user_id": user_id}, order_by="session_date", descending=True)
    return [SkateSessionRead.model_validate(row) for row in rows]


def filter_sessions(sessions: Iterable[SkateSessionRead], query: str | None) -> list[SkateSessionRead]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(sessions)
    return [
        session
        for session in sessions
        if any(needle in (text or "").lower() for text in (session.place_name, session.address, session.review))
    ]


def _ensure_owned(store: TableStore, user_id: str, session_id: str) -> None:
    if store.maybe_single(SKATE_SESSIONS, {"id": session_id, "user_id": user_id}) is None:
        raise SessionNotFoundError(session_id)


def create_session(store: TableStore, user_id: str, payload: SkateSessionCreate) -> list[SkateSessionRead]:
    row = payload.model_dump()
    row["user_id"] = user_id
    inserted = store.insert(SKATE_SESSIONS, [row])
    logger.info("sessions.created user_id=%s session_id=%s", user_id, inserted[0].get("id"))
    return fetch_sessions(store, user_id)


def update_session(
    store: TableStore, user_id: str, session_id: str, payload: SkateSessionUpdate
) -> list[SkateSessionRead]:
    _ensure_owned(store, user_id, session_id)
    patch = payload.model_dump(exclude_unset=True)
    if patch:
        store.update(SKATE_SESSIONS, patch, {"id": session_id, "user_id": user_id})
        logger.info("sessions.updated session_id=%s fields=%s", session_id, sorted(patch))
    return fetch_sessions(store, user_id)


def delete_session(store: TableStore, user_id: str, session_id: str) -> list[SkateSessionRead]:
    _ensure_owned(store, user_id, session_id)
    store.delete(SKATE_SESSIONS, {"id": session_id, "user_id": user_id})
    logger.info("sessions.deleted session_id=%s", session_id)
    return fetch_sessions(store, user_id)
