"""Tests for plain file uploads."""

import re
from pathlib import Path

import pytest

from image_renditions import ErrorKind, FileUploader, FileUploadError, UploadedImage
from image_renditions.common.file_storage_impl import LocalFileStorage


@pytest.fixture
def uploader(tmp_path: Path) -> FileUploader:
    return FileUploader(tmp_path / "files")


def test_upload_moves_file_under_slugged_unique_name(uploader: FileUploader, make_jpeg):
    path = make_jpeg(50, 50, name="php4Fa21")
    upload = UploadedImage(path=path, mime_type="image/jpeg", client_name="Écharpe rouge (1).JPG")

    saved = uploader.upload(upload)

    assert re.match(r"^Echarpe-rouge-1-[0-9a-f]{32}\.jpeg$", saved.name)
    assert not path.exists()
    assert (uploader.storage.root / saved.name).stat().st_size == saved.size


def test_upload_falls_back_to_client_extension(uploader: FileUploader, source_dir: Path):
    path = source_dir / "tmp123"
    _ = path.write_bytes(b"%PDF-1.4")
    upload = UploadedImage(path=path, mime_type="application/pdf", client_name="Manual.pdf")

    saved = uploader.upload(upload)

    assert saved.name.startswith("Manual-")
    assert saved.name.endswith(".pdf")


def test_upload_failure_raises_save_failed(
    uploader: FileUploader, make_jpeg, monkeypatch: pytest.MonkeyPatch
):
    def _fail(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(LocalFileStorage, "move", _fail)
    upload = UploadedImage(path=make_jpeg(10, 10), mime_type="image/jpeg", client_name="a.jpg")

    with pytest.raises(FileUploadError) as exc_info:
        _ = uploader.upload(upload)

    assert exc_info.value.kind is ErrorKind.SAVE_FAILED
    assert str(exc_info.value) == "SAVE_FAILED: Saving the file failed."


def test_delete_is_idempotent(uploader: FileUploader, make_jpeg):
    saved = uploader.upload(UploadedImage(path=make_jpeg(10, 10), mime_type="image/jpeg"))

    uploader.delete(saved.name)
    uploader.delete(saved.name)

    assert not (uploader.storage.root / saved.name).exists()
