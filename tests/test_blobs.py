import pytest

from skateroom.db.blobs import BlobStorageError, LocalBlobStorage


def test_upload_and_public_url(tmp_path) -> None:
    blobs = LocalBlobStorage(root=tmp_path, bucket="avatars", base_url="http://cdn.test/storage/")

    blobs.upload("u1/avatar.png", b"one")

    assert (tmp_path / "avatars" / "u1" / "avatar.png").read_bytes() == b"one"
    assert blobs.get_public_url("u1/avatar.png") == "http://cdn.test/storage/avatars/u1/avatar.png"


def test_upload_without_overwrite_keeps_existing_blob(tmp_path) -> None:
    blobs = LocalBlobStorage(root=tmp_path, bucket="avatars", base_url="http://cdn.test")
    blobs.upload("u1/avatar.png", b"one")

    with pytest.raises(BlobStorageError):
        blobs.upload("u1/avatar.png", b"two")

    blobs.upload("u1/avatar.png", b"two", overwrite=True)
    assert (tmp_path / "avatars" / "u1" / "avatar.png").read_bytes() == b"two"


@pytest.mark.parametrize("path", ["", "/etc/passwd", "../escape.png", "u1/../../x"])
def test_paths_cannot_leave_the_bucket(tmp_path, path) -> None:
    blobs = LocalBlobStorage(root=tmp_path, bucket="avatars", base_url="http://cdn.test")
    with pytest.raises(BlobStorageError):
        blobs.upload(path, b"x")
