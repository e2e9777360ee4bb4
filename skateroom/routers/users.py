from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from skateroom.db.blobs import BlobStorage
from skateroom.db.store import TableStore
from skateroom.routers.dependencies import get_avatar_storage, get_current_user, get_store
from skateroom.schemas.auth import AuthUser
from skateroom.schemas.profile import ProfileResponse, ProfileUpdate
from skateroom.services.profile_service import (
    ProfileNotFoundError,
    build_profile_response,
    fetch_profile,
    update_profile,
    upload_avatar,
)


router = APIRouter()

MAX_AVATAR_BYTES = 5 * 1024 * 1024


@router.get("/me/profile", response_model=ProfileResponse)
def read_my_profile(
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> ProfileResponse:
    try:
        profile = fetch_profile(store, current_user.id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found") from exc
    return build_profile_response(profile)


@router.put("/me/profile", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdate,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> ProfileResponse:
    try:
        profile = update_profile(store, current_user.id, payload)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found") from exc
    return build_profile_response(profile)


@router.post("/me/avatar", response_model=ProfileResponse)
def upload_my_avatar(
    file: UploadFile = File(...),
    store: TableStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_avatar_storage),
    current_user: AuthUser = Depends(get_current_user),
) -> ProfileResponse:
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Avatar must be an image")
    data = file.file.read(MAX_AVATAR_BYTES + 1)
    if len(data) > MAX_AVATAR_BYTES:
        raise HTTPException(status_code=413, detail="Avatar too large")
    try:
        profile = upload_avatar(store, blobs, current_user.id, file.filename or "", data)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found") from exc
    return build_profile_response(profile)
