from celery import Celery

from campus_events.core.config import CELERY_TASK_ALWAYS_EAGER
from campus_events.core.logging import configure_logging
from campus_events.core.redis_config import get_redis_url


def make_celery(app_name: str = "campus_events") -> Celery:
    redis_url = get_redis_url()
    celery = Celery(app_name, broker=redis_url, backend=redis_url, include=["campus_events.tasks"])
    celery.conf.task_serializer = "json"
    celery.conf.result_serializer = "json"
    celery.conf.accept_content = ["json"]
    celery.conf.result_persistent = False
    celery.conf.task_track_started = True
    celery.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
    # Workers log through structlog like the API does
    celery.conf.worker_hijack_root_logger = False
    celery.conf.beat_schedule = {
        "purge-expired-otps": {
            "task": "campus_events.tasks.purge_expired_otps_task",
            "schedule": 15 * 60.0,
        },
    }
    return celery


configure_logging()
celery_app = make_celery()
