"""
@file: sync.py
@description:
Scheduler-facing endpoint that runs one result-sync batch.

Routes:
- POST /api/v1/sync-results : sync game state and grade picks for finished games
- GET /api/v1/sync-results : describe the endpoint

@dependencies:
- FastAPI APIRouter for route definitions.
- app.services.sync_orchestrator for the batch itself.
- app.core.auth.verify_cron_secret for the shared-secret check.

@notes:
- Per-pick failures never fail the request; they are reported in `updates`.
- Only a failure to list candidate picks returns 500.
- Safe to call repeatedly: resolved picks are never re-graded.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_sync_orchestrator
from app.core.auth import verify_cron_secret
from app.core.logger import setup_logger
from app.schemas.picks import SyncResultsResponse
from app.services.pick_store import PickStoreError
from app.services.sync_orchestrator import PickSyncOrchestrator

# Create a component-specific logger
logger = setup_logger("app.api.sync")

router = APIRouter()


@router.post(
    "/sync-results",
    response_model=SyncResultsResponse,
    dependencies=[Depends(verify_cron_secret)],
    tags=["Sync"],
)
async def sync_results(
    orchestrator: PickSyncOrchestrator = Depends(get_sync_orchestrator)
):
    """
    POST /api/v1/sync-results

    Runs one sync batch: refreshes score and status on every active pick and
    grades picks whose game has finished.

    Requires `Authorization: Bearer <CRON_SECRET>` when CRON_SECRET is set.

    Example Response:
    {
      "success": true,
      "message": "Game results synced successfully",
      "stats": {"total": 3, "success": 2, "failed": 1},
      "updates": [
        {"pick_id": "...", "success": true, "result": {"status": "WON", ...}},
        {"pick_id": "...", "success": false, "error": "Game not found"}
      ]
    }
    """
    logger.info("Starting game results sync")
    try:
        report = await orchestrator.sync_batch()
    except PickStoreError as e:
        logger.error(f"Error syncing game results: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Failed to sync game results",
                "message": str(e),
            },
        )

    return SyncResultsResponse.from_report(report)


@router.get("/sync-results", tags=["Sync"])
async def describe_sync_results():
    """
    GET /api/v1/sync-results

    Describes the sync endpoint for anyone wiring up a scheduler.
    """
    return {
        "endpoint": "/api/v1/sync-results",
        "method": "POST",
        "description": "Syncs live game scores and determines pick results",
        "authentication": "Bearer token (CRON_SECRET)",
        "usage": "Call this endpoint periodically (e.g., every 5-15 minutes) during game days",
    }
