from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

from skateroom.config import Settings


class BlobStorageError(RuntimeError):
    pass


class BlobStorage(Protocol):
    def upload(self, path: str, data: bytes, *, overwrite: bool = False) -> None: ...

    def get_public_url(self, path: str) -> str: ...


def _clean_path(path: str) -> PurePosixPath:
    # Reject absolute paths and parent traversal; blobs stay inside their bucket.
    candidate = PurePosixPath(path)
    if not path or candidate.is_absolute() or ".." in candidate.parts:
        raise BlobStorageError(f"Invalid blob path: {path!r}")
    return candidate


@dataclass(frozen=True)
class LocalBlobStorage:
    """One bucket of files under `root`, served back from `base_url`."""

    root: Path
    bucket: str
    base_url: str

    def upload(self, path: str, data: bytes, *, overwrite: bool = False) -> None:
        target = self.root / self.bucket / _clean_path(path)
        if target.exists() and not overwrite:
            raise BlobStorageError(f"Blob already exists: {self.bucket}/{path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise BlobStorageError(f"Failed to write blob {self.bucket}/{path}: {exc}") from exc

    def get_public_url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{self.bucket}/{_clean_path(path).as_posix()}"


def build_avatar_storage(settings: Settings) -> LocalBlobStorage:
    base_url = settings.public_base_url.rstrip("/") + "/" + settings.storage_url_path.strip("/")
    return LocalBlobStorage(root=Path(settings.storage_dir), bucket=settings.avatar_bucket, base_url=base_url)
