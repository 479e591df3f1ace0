from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    """Raw object bytes plus the content type recorded by the store."""

    body: bytes
    content_type: str | None = None


class BaseObjectStorage(ABC):
    """Contract for all object storage adapters."""

    @abstractmethod
    def fetch(self, key: str) -> StoredObject:
        """Read an object by storage key.

        Raises:
            ObjectNotFoundError: if no object exists under the key.
            StorageError: if the store cannot be reached.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if an object exists under the key."""

    @abstractmethod
    def location(self, key: str) -> dict[str, str]:
        """Describe where the object lives, in the shape the OCR service reports back."""
