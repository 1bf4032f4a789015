"""
@file: deps.py
@description:
Shared FastAPI dependencies for the API routers: the pick store and the sync
orchestrator, both wired to the configured database and game state client.

@notes:
- Tests swap these out with app.dependency_overrides.
"""

from fastapi import Depends

from app.db.session import SessionLocal
from app.services.pick_store import PickStore
from app.services.sportradar_api import BaseGameStateClient, get_game_state_client
from app.services.sync_orchestrator import PickSyncOrchestrator


def get_pick_store() -> PickStore:
    return PickStore(SessionLocal)


def get_sync_orchestrator(
    store: PickStore = Depends(get_pick_store),
    client: BaseGameStateClient = Depends(get_game_state_client),
) -> PickSyncOrchestrator:
    return PickSyncOrchestrator(store=store, client=client)
