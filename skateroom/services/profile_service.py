import logging
from datetime import date
from pathlib import PurePosixPath

from skateroom.db.blobs import BlobStorage
from skateroom.db.store import TableStore
from skateroom.schemas.profile import ProfileRead, ProfileResponse, ProfileStats, ProfileUpdate
from skateroom.services.profile_stats import calculate_age, calculate_skating_duration


logger = logging.getLogger(__name__)

PROFILES = "profiles"


class ProfileNotFoundError(LookupError):
    pass


def fetch_profile(store: TableStore, user_id: str) -> ProfileRead:
    row = store.maybe_single(PROFILES, {"id": user_id})
    if row is None:
        raise ProfileNotFoundError(user_id)
    return ProfileRead.model_validate(row)


def update_profile(store: TableStore, user_id: str, update: ProfileUpdate) -> ProfileRead:
    patch = update.model_dump(exclude_unset=True, mode="python")
    if "stance" in patch and patch["stance"] is not None:
        patch["stance"] = patch["stance"].value
    if patch:
        rows = store.update(PROFILES, patch, {"id": user_id})
        if not rows:
            raise ProfileNotFoundError(user_id)
        logger.info("profile.updated user_id=%s fields=%s", user_id, sorted(patch))
    return fetch_profile(store, user_id)


def avatar_path(user_id: str, filename: str) -> str:
    ext = PurePosixPath(filename or "").suffix.lstrip(".").lower() or "png"
    return f"{user_id}/avatar.{ext}"


def upload_avatar(store: TableStore, blobs: BlobStorage, user_id: str, filename: str, data: bytes) -> ProfileRead:
    """Store the image, then point the profile at its public URL."""

    path = avatar_path(user_id, filename)
    blobs.upload(path, data, overwrite=True)
    public_url = blobs.get_public_url(path)
    rows = store.update(PROFILES, {"avatar_url": public_url}, {"id": user_id})
    if not rows:
        raise ProfileNotFoundError(user_id)
    logger.info("profile.avatar_uploaded user_id=%s path=%s", user_id, path)
    return ProfileRead.model_validate(rows[0])


def build_profile_stats(profile: ProfileRead, today: date | None = None) -> ProfileStats:
    return ProfileStats(
        age=calculate_age(profile.date_of_birth, today),
        skating_duration=calculate_skating_duration(profile.skating_since, today),
    )


def build_profile_response(profile: ProfileRead, today: date | None = None) -> ProfileResponse:
    return ProfileResponse(profile=profile, stats=build_profile_stats(profile, today))
