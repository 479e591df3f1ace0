import mimetypes
from pathlib import Path

from docextract.exceptions import ObjectNotFoundError, StorageError
from docextract.storage.base import BaseObjectStorage, StoredObject


class LocalObjectStorage(BaseObjectStorage):
    """Reads objects from a directory tree: {files_root}/{key}."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    def fetch(self, key: str) -> StoredObject:
        path = self._resolve_path(key)
        if not path.is_file():
            raise ObjectNotFoundError(f"File not found: {path}")
        try:
            body = path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc
        content_type, _ = mimetypes.guess_type(path.name)
        return StoredObject(body=body, content_type=content_type)

    def exists(self, key: str) -> bool:
        return self._resolve_path(key).is_file()

    def location(self, key: str) -> dict[str, str]:
        return {"Path": str(self._resolve_path(key))}

    def _resolve_path(self, key: str) -> Path:
        path = (self._files_root / key).resolve()
        if not path.is_relative_to(self._files_root.resolve()):
            raise StorageError(f"Storage key escapes files root: {key}")
        return path
