from celery import Celery
from orquestra.core.settings import get_settings

settings = get_settings()

celery_app = Celery(
    "orquestra",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["orquestra.tasks.notification_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    task_always_eager=settings.celery_task_always_eager,
    worker_prefetch_multiplier=1,
    result_expires=3600,
)
