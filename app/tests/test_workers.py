"""
@file: test_workers.py
@description:
Test suite for the Celery worker setup in the PickResults API, focusing on:
- The beat schedule for the periodic sync
- The sync_pick_results task summary on success and on store failure

@dependencies:
- pytest: For test framework
- unittest.mock: For replacing the orchestrator
- app.workers: Worker modules being tested

@notes:
- Tasks are called directly; no broker is needed
"""

from unittest import mock

from celery.schedules import crontab

from app.core.config import settings
from app.schemas.picks import SyncItemResult, SyncReport
from app.services.pick_store import PickStoreError
from app.workers.celery_app import SYNC_TASK_NAME, celery_app
from app.workers.tasks import sync_pick_results


class AsyncMock(mock.MagicMock):
    """Helper class for mocking async functions"""
    async def __call__(self, *args, **kwargs):
        return super(AsyncMock, self).__call__(*args, **kwargs)


def test_beat_schedule_runs_sync():
    entry = celery_app.conf.beat_schedule["sync-pick-results"]

    assert entry["task"] == SYNC_TASK_NAME
    assert entry["schedule"] == crontab(minute=f"*/{settings.SYNC_INTERVAL_MINUTES}")
    assert celery_app.conf.task_routes[SYNC_TASK_NAME] == {"queue": "results"}


def test_sync_task_is_registered():
    assert SYNC_TASK_NAME in celery_app.tasks


def test_sync_pick_results_task_success():
    report = SyncReport(
        processed=2,
        succeeded=1,
        failed=1,
        updates=[
            SyncItemResult(pick_id="a", success=True),
            SyncItemResult(pick_id="b", success=False, error="Game not found"),
        ],
    )
    orchestrator = mock.MagicMock()
    orchestrator.sync_batch = AsyncMock(return_value=report)

    with mock.patch("app.workers.tasks.build_orchestrator", return_value=orchestrator):
        result = sync_pick_results()

    assert result["status"] == "success"
    assert (result["processed"], result["succeeded"], result["failed"]) == (2, 1, 1)
    assert result["timestamp"].endswith("+00:00")
    orchestrator.sync_batch.assert_called_once()


def test_sync_pick_results_task_store_failure():
    orchestrator = mock.MagicMock()
    orchestrator.sync_batch = AsyncMock(side_effect=PickStoreError("database unavailable"))

    with mock.patch("app.workers.tasks.build_orchestrator", return_value=orchestrator):
        result = sync_pick_results()

    assert result["status"] == "error"
    assert result["message"] == "database unavailable"
    assert result["timestamp"].endswith("+00:00")
