from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docextract.exceptions import ObjectNotFoundError, StorageError
from docextract.logging.logger import Log
from docextract.storage.base import BaseObjectStorage, StoredObject

_MISSING_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3ObjectStorage(BaseObjectStorage):
    """Reads uploaded objects from a single S3 bucket."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def fetch(self, key: str) -> StoredObject:
        Log.info(f"Downloading s3://{self._bucket}/{key}")
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            body = response["Body"].read()
        except ClientError as exc:
            if self._is_missing(exc):
                raise ObjectNotFoundError(
                    f"Object not found: s3://{self._bucket}/{key}"
                ) from exc
            raise StorageError(f"S3 get_object failed for {key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 get_object failed for {key}: {exc}") from exc

        content_type = response.get("ContentType")
        Log.info(f"Downloaded {len(body)} bytes for {key} ({content_type})")
        return StoredObject(body=body, content_type=content_type)

    def exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if self._is_missing(exc):
                return False
            raise StorageError(f"S3 head_object failed for {key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 head_object failed for {key}: {exc}") from exc
        return True

    def location(self, key: str) -> dict[str, str]:
        return {"S3Bucket": self._bucket, "S3ObjectName": key}

    @staticmethod
    def _is_missing(exc: ClientError) -> bool:
        return exc.response.get("Error", {}).get("Code", "") in _MISSING_CODES
