from pathlib import Path

import boto3

from docextract.config.settings import Settings
from docextract.storage.base import BaseObjectStorage
from docextract.storage.local_adapter import LocalObjectStorage
from docextract.storage.s3_adapter import S3ObjectStorage


class StorageFactory:
    """Creates the configured object storage adapter."""

    BACKENDS = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStorage:
        backend = settings.storage_backend.lower()
        if backend == "s3":
            if not settings.s3_bucket:
                raise ValueError("s3_bucket is required for storage_backend=s3")
            client = boto3.client("s3", region_name=settings.aws_region)
            return S3ObjectStorage(client=client, bucket=settings.s3_bucket)
        if backend == "local":
            return LocalObjectStorage(files_root=Path(settings.files_root))
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
