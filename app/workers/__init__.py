"""
Workers Package for PickResults Backend.

This package runs the periodic result sync with Celery.

Key components:
- celery_app: Initializes and configures the Celery application and beat schedule
- tasks: Defines the sync_pick_results task
"""

from app.workers.celery_app import celery_app
from app.workers.tasks import sync_pick_results

__all__ = [
    'celery_app',
    'sync_pick_results'
]
