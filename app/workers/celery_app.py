"""
@file: celery_app.py
@description:
This module initializes and configures the Celery application that triggers
the periodic result sync. It sets up the Celery instance with the appropriate
broker, backend, task routes, and beat schedule.

@dependencies:
- celery: For asynchronous task processing and the beat scheduler
- app.core.config: For application configuration settings

@notes:
- The sync runs every SYNC_INTERVAL_MINUTES via crontab
- The sync is idempotent, so a late or duplicated beat tick is harmless
- Redis is used as both the broker and result backend
"""

import os

from celery import Celery
from celery.schedules import crontab

from app.core.config import settings

SYNC_TASK_NAME = "app.workers.tasks.sync_pick_results"

# Initialize Celery app
celery_app = Celery(
    "pickresults",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["app.workers.tasks"]
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_track_started=True,
)

celery_app.conf.task_routes = {
    SYNC_TASK_NAME: {"queue": "results"},
}

celery_app.conf.beat_schedule = {
    "sync-pick-results": {
        "task": SYNC_TASK_NAME,
        "schedule": crontab(minute=f"*/{settings.SYNC_INTERVAL_MINUTES}"),
        "args": (),
    },
}

# This allows the Celery app to work with Pytest
# Ref: https://docs.celeryproject.org/en/stable/userguide/testing.html
if os.environ.get("TESTING"):
    celery_app.conf.update(task_always_eager=True)
