from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docextract.exceptions import OcrServiceError
from docextract.logging.logger import Log
from docextract.ocr.base import BaseOcrJobClient
from docextract.ocr.models import NotificationChannel, OcrBlock, OcrPage


class TextractJobClient(BaseOcrJobClient):
    """Asynchronous text detection with AWS Textract, completion published to SNS."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def submit(self, storage_key: str, channel: NotificationChannel) -> str:
        Log.info(
            f"Starting Textract job for s3://{self._bucket}/{storage_key} "
            f"(topic {channel.topic_arn})"
        )
        try:
            response = self._client.start_document_text_detection(
                DocumentLocation={
                    "S3Object": {"Bucket": self._bucket, "Name": storage_key},
                },
                NotificationChannel={
                    "SNSTopicArn": channel.topic_arn,
                    "RoleArn": channel.role_arn,
                },
            )
        except (ClientError, BotoCoreError) as exc:
            raise OcrServiceError(f"Textract job submission failed: {exc}") from exc

        job_id = response.get("JobId")
        if not job_id:
            raise OcrServiceError("Textract returned no JobId")
        return str(job_id)

    def fetch_page(self, job_id: str, next_token: str | None = None) -> OcrPage:
        kwargs: dict[str, Any] = {"JobId": job_id}
        if next_token:
            kwargs["NextToken"] = next_token
        try:
            response = self._client.get_document_text_detection(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise OcrServiceError(f"Textract results for job {job_id} failed: {exc}") from exc

        blocks = [
            OcrBlock(
                block_type=block.get("BlockType", ""),
                text=block.get("Text", ""),
                page=block.get("Page", 1),
            )
            for block in response.get("Blocks", [])
        ]
        return OcrPage(blocks=blocks, next_token=response.get("NextToken"))
