from docextract.logging.logger import Log
from docextract.ocr.base import BaseOcrJobClient
from docextract.ocr.models import LINE_BLOCK, OcrBlock


def read_line_text(client: BaseOcrJobClient, job_id: str) -> str:
    """Collect every result page of a job and join its LINE blocks with newlines.

    Pages are fetched one after another until the service stops returning a
    next token. WORD and other block types repeat line content and are dropped.
    """
    blocks: list[OcrBlock] = []
    next_token: str | None = None
    while True:
        page = client.fetch_page(job_id, next_token)
        blocks.extend(page.blocks)
        next_token = page.next_token
        if not next_token:
            break

    lines = [block.text for block in blocks if block.block_type == LINE_BLOCK]
    text = "\n".join(lines)
    Log.info(
        f"OCR results for job {job_id}: {len(blocks)} blocks, "
        f"{len(lines)} lines, {len(text)} chars"
    )
    return text
