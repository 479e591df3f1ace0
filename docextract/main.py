from docextract.config.settings import Settings
from docextract.database.connection import close_pool, init_pool
from docextract.database.repositories.event_queue_repository import EventQueueRepository
from docextract.logging.logger import Log
from docextract.pipeline.dispatcher import build_dispatcher
from docextract.worker.batch_runner import BatchRunner
from docextract.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        event_repo = EventQueueRepository(settings.max_event_attempts)
        dispatcher = build_dispatcher(settings, publisher=event_repo.enqueue_completion)
        batch_runner = BatchRunner(dispatcher, event_repo, settings)
        worker = Worker(event_repo, batch_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
