"""
@file: picks.py
@description:
Provides API endpoints to read a pick's synced state and to verify its result by hand.

Routes:
- GET /api/v1/picks/{pick_id} : mirrored game fields and graded outcome of one pick
- PATCH /api/v1/picks/{pick_id}/result : admin override of the graded result

@dependencies:
- FastAPI APIRouter for route definitions.
- app.services.pick_store for reads and writes.
- app.core.auth for JWT authentication and the admin scope.

@notes:
- Manual verification may overwrite an automatic grade; the sync never
  re-grades a pick afterwards because result_determined is set.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_pick_store
from app.core.auth import User, get_current_active_user, require_admin
from app.core.logger import setup_logger
from app.schemas.picks import PickOut, VerifyResultRequest
from app.services.pick_store import PickNotFoundError, PickStore, PickStoreError

# Create a component-specific logger
logger = setup_logger("app.api.picks")

router = APIRouter()


@router.get("/picks/{pick_id}", response_model=PickOut, tags=["Picks"])
def get_pick(
    pick_id: str,
    store: PickStore = Depends(get_pick_store),
    current_user: User = Depends(get_current_active_user),
) -> PickOut:
    """
    GET /api/v1/picks/{pick_id}

    Requires authentication.

    Raises:
        HTTPException(404): If the pick does not exist.
        HTTPException(500): If there's an error querying the database.
    """
    try:
        pick = store.get_pick(pick_id)
    except PickNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pick not found")
    except PickStoreError as e:
        logger.error(f"Database error retrieving pick {pick_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return PickOut.model_validate(pick)


@router.patch("/picks/{pick_id}/result", response_model=PickOut, tags=["Picks"])
def verify_pick_result(
    pick_id: str,
    body: VerifyResultRequest,
    store: PickStore = Depends(get_pick_store),
    current_user: User = Depends(require_admin),
) -> PickOut:
    """
    PATCH /api/v1/picks/{pick_id}/result

    Sets a pick's result to WON, LOST or PUSH and marks it determined.

    Requires the admin scope.

    Example Request Body:
    {
      "status": "WON",
      "notes": "Stat correction confirmed by league office"
    }
    """
    logger.info(f"Admin {current_user.id} verifying pick {pick_id} as {body.status.value}")
    try:
        pick = store.verify_result(pick_id, body.status, body.notes)
    except PickNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pick not found")
    except PickStoreError as e:
        logger.error(f"Database error verifying pick {pick_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return PickOut.model_validate(pick)
