"""
ARQ worker: background task definitions.
Run with: python -m app.worker
"""
import logging
import sys

from arq.connections import RedisSettings

from app.core.config import settings
from app.tasks.generate_tasks import generate_tasks_for_user_plant
from app.tasks.seed_climate import seed_climate

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)


# ── Worker settings ───────────────────────────────────────────────────────────


class WorkerSettings:
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)
    functions = [generate_tasks_for_user_plant, seed_climate]
    on_startup = None
    on_shutdown = None


if __name__ == "__main__":
    from arq import run_worker

    run_worker(WorkerSettings)
