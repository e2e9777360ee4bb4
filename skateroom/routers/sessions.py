from fastapi import APIRouter, Depends, HTTPException, Query, status
from skateroom.db.store import TableStore
from skateroom.routers.dependencies import get_current_user, get_store
from skateroom.schemas.auth import AuthUser
from skateroom.schemas.skate_session import SkateSessionCreate, SkateSessionRead, SkateSessionUpdate
from skateroom.services.session_service import (
    SessionNotFoundError,
    create_session,
    delete_session,
    fetch_sessions,
    filter_sessions,
    update_session,
)


router = APIRouter()


@router.get("", response_model=list[SkateSessionRead])
def list_sessions(
    q: str | None = Query(default=None, description="Case-insensitive search over place, address and review"),
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> list[SkateSessionRead]:
    return filter_sessions(fetch_sessions(store, current_user.id), q)


@router.post("", response_model=list[SkateSessionRead], status_code=status.HTTP_201_CREATED)
def add_session(
    payload: SkateSessionCreate,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> list[SkateSessionRead]:
    return create_session(store, current_user.id, payload)


@router.put("/{session_id}", response_model=list[SkateSessionRead])
def edit_session(
    session_id: str,
    payload: SkateSessionUpdate,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> list[SkateSessionRead]:
    try:
        return update_session(store, current_user.id, session_id, payload)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found") from exc


@router.delete("/{session_id}", response_model=list[SkateSessionRead])
def remove_session(
    session_id: str,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> list[SkateSessionRead]:
    try:
        return delete_session(store, current_user.id, session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found") from exc
