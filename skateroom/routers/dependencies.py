from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from skateroom.config import settings
from skateroom.database import get_db
from skateroom.db.blobs import BlobStorage
from skateroom.db.store import SqlTableStore, TableStore
from skateroom.schemas.auth import AuthUser
from skateroom.services.identity import AuthContext, AuthTimeoutError, IdentityProvider


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in", auto_error=False)


def get_identity(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_avatar_storage(request: Request) -> BlobStorage:
    return request.app.state.avatar_storage


def get_store(db: Session = Depends(get_db)) -> TableStore:
    return SqlTableStore(db)


async def get_auth_context(
    identity: IdentityProvider = Depends(get_identity),
    token: str | None = Depends(oauth2_scheme),
) -> AsyncGenerator[AuthContext, None]:
    context = AuthContext(identity, token, timeout=settings.auth_timeout_seconds)
    try:
        await context.initialize()
    except AuthTimeoutError as exc:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc)) from exc
    try:
        yield context
    finally:
        context.close()


def get_current_user(context: AuthContext = Depends(get_auth_context)) -> AuthUser:
    if context.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return context.user
