import boto3

from docextract.config.settings import Settings
from docextract.ocr.base import BaseOcrJobClient
from docextract.ocr.local_adapter import CompletionPublisher, LocalOcrJobClient
from docextract.ocr.models import NotificationChannel
from docextract.ocr.textract_adapter import TextractJobClient
from docextract.storage.base import BaseObjectStorage


class OcrJobClientFactory:
    """Creates the configured OCR job client."""

    ENGINES = ("textract", "local")

    @classmethod
    def create(
        cls,
        settings: Settings,
        storage: BaseObjectStorage,
        publisher: CompletionPublisher,
    ) -> BaseOcrJobClient:
        engine = settings.ocr_engine.lower()
        if engine == "textract":
            if not settings.s3_bucket:
                raise ValueError("s3_bucket is required for ocr_engine=textract")
            client = boto3.client("textract", region_name=settings.aws_region)
            return TextractJobClient(client=client, bucket=settings.s3_bucket)
        if engine == "local":
            return LocalOcrJobClient(
                storage=storage,
                publisher=publisher,
                page_size=settings.local_ocr_page_size,
            )
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}")

    @staticmethod
    def notification_channel(settings: Settings) -> NotificationChannel:
        return NotificationChannel(
            topic_arn=settings.textract_sns_topic_arn,
            role_arn=settings.textract_role_arn,
        )
