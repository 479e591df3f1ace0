from docextract.database.repositories.documents_repository import DocumentsRepository
from docextract.exceptions import DocumentNotFoundError
from docextract.pipeline.models import Document


class CorrelationResolver:
    """Maps an OCR job id back to the document that started the job.

    Job ids are assumed unique per submission; if several records share one,
    whichever the index returns first wins.
    """

    def __init__(self, documents: DocumentsRepository) -> None:
        self._documents = documents

    def find_by_job_id(self, job_id: str) -> Document | None:
        return self._documents.find_by_job_id(job_id)

    def resolve(self, job_id: str) -> Document:
        """Return the document for `job_id`.

        Raises:
            DocumentNotFoundError: if no document references the job.
        """
        document = self.find_by_job_id(job_id)
        if document is None:
            raise DocumentNotFoundError(f"Document not found for job: {job_id}")
        return document
