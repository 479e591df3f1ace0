from pathlib import Path

import pytest

from docextract.exceptions import ObjectNotFoundError, StorageError
from docextract.storage.local_adapter import LocalObjectStorage


class TestLocalObjectStorage:
    def test_fetch_reads_file(self, tmp_path: Path) -> None:
        (tmp_path / "images" / "u").mkdir(parents=True)
        (tmp_path / "images" / "u" / "photo.png").write_bytes(b"png-bytes")

        stored = LocalObjectStorage(tmp_path).fetch("images/u/photo.png")

        assert stored.body == b"png-bytes"
        assert stored.content_type == "image/png"

    def test_fetch_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ObjectNotFoundError, match="File not found"):
            LocalObjectStorage(tmp_path).fetch("images/u/missing.pdf")

    def test_exists(self, tmp_path: Path) -> None:
        (tmp_path / "a.pdf").write_bytes(b"%PDF")
        storage = LocalObjectStorage(tmp_path)
        assert storage.exists("a.pdf") is True
        assert storage.exists("b.pdf") is False

    def test_rejects_key_outside_root(self, tmp_path: Path) -> None:
        with pytest.raises(StorageError, match="escapes files root"):
            LocalObjectStorage(tmp_path / "root").fetch("../secret.txt")

    def test_location_is_absolute_path(self, tmp_path: Path) -> None:
        location = LocalObjectStorage(tmp_path).location("images/u/a.pdf")
        assert location == {"Path": str((tmp_path / "images/u/a.pdf").resolve())}
