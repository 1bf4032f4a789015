"""
@file: tasks.py
@description:
Celery tasks for the PickResults backend.

Key features:
- sync_pick_results: runs one result-sync batch on the configured database
  and game feed, the same batch POST /api/v1/sync-results runs

@dependencies:
- asyncio: The batch is async; the task drives it on its own event loop
- app.workers.celery_app: For task registration
- app.services.sync_orchestrator: For the batch itself
- app.core.logger: For task logging

@notes:
- Per-pick failures are part of a normal result; only a failure to list
  candidate picks makes the summary report an error.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict

from app.core.logger import get_task_logger
from app.services.pick_store import PickStoreError
from app.services.sync_orchestrator import build_orchestrator
from app.workers.celery_app import SYNC_TASK_NAME, celery_app

# Initialize logger
logger = get_task_logger("sync_pick_results")


@celery_app.task(name=SYNC_TASK_NAME)
def sync_pick_results() -> Dict[str, Any]:
    """
    Sync game state onto active picks and grade those whose game is final.

    Returns:
        Dict[str, Any]: Summary with status, counts and timestamp.
    """
    logger.info("Starting scheduled pick result sync")
    orchestrator = build_orchestrator()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        report = loop.run_until_complete(orchestrator.sync_batch())
    except PickStoreError as e:
        logger.error(f"Error syncing pick results: {str(e)}")
        return {
            "status": "error",
            "message": str(e),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    finally:
        loop.close()

    return {
        "status": "success",
        "processed": report.processed,
        "succeeded": report.succeeded,
        "failed": report.failed,
        "timestamp": report.timestamp
    }
