from fastapi import APIRouter, Depends, HTTPException, Response, status
from skateroom.routers.dependencies import get_auth_context, get_identity
from skateroom.schemas.auth import AuthResponse, SessionResponse, SignInRequest, SignUpRequest
from skateroom.services.identity import AuthContext, IdentityError, IdentityProvider


router = APIRouter()


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, identity: IdentityProvider = Depends(get_identity)) -> AuthResponse:
    try:
        return identity.sign_up(payload.email, payload.password)
    except IdentityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(payload: SignInRequest, identity: IdentityProvider = Depends(get_identity)) -> AuthResponse:
    try:
        return identity.sign_in(payload.email, payload.password)
    except IdentityError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(context: AuthContext = Depends(get_auth_context)) -> Response:
    if context.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        context.sign_out()
    except IdentityError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=SessionResponse)
def read_session(context: AuthContext = Depends(get_auth_context)) -> SessionResponse:
    return SessionResponse(user=context.user)
