"""
@file: sync_orchestrator.py
@description:
Orchestrates one result-sync batch: pulls every pick that may need a sync,
fetches the current state of each referenced game, grades picks whose game
is final, and writes the results back.

Key features:
- Batch isolation: a failed fetch or write only fails that pick
- One fetch per distinct (league, game id), shared by all picks on that game
- Bounded parallelism across games and picks (asyncio semaphore)
- Idempotent: resolved picks are never re-graded, so the batch can run on
  any schedule and even overlap with itself

@dependencies:
- asyncio: For concurrent fetches and executor offloading of store calls
- app.services.pick_store: Candidate selection and per-pick writes
- app.services.sportradar_api: Game state client interface
- app.services.pick_result: Outcome resolver
- app.core.logger: For logging

@notes:
- Only a failure to list candidates aborts the batch; it propagates as PickStoreError.
- Provider "not found" and transient errors are reported the same way; the next
  scheduled batch is the retry.
"""

import asyncio
from typing import Dict, List, Optional, Tuple, Union

from app.core.config import settings
from app.core.logger import setup_logger
from app.schemas.games import GameResult
from app.schemas.picks import PickResultData, SyncItemResult, SyncReport
from app.services.pick_result import is_game_complete, resolve
from app.services.pick_store import PickRecord, PickStore
from app.services.sportradar_api import BaseGameStateClient, GameStateError

# Initialize logger
logger = setup_logger("app.services.sync_orchestrator")

GameKey = Tuple[str, str]
FetchOutcome = Union[GameResult, Exception]


def _game_key(pick: PickRecord) -> GameKey:
    return ((pick.sport or "").upper(), pick.external_game_id)


class PickSyncOrchestrator:
    """
    Runs result-sync batches over the pick store.

    Args:
        store: Pick store to read candidates from and write results to.
        client: Game state client used to fetch current game state.
        max_concurrency: Upper bound on in-flight fetches and writes.
    """

    def __init__(
        self,
        store: PickStore,
        client: BaseGameStateClient,
        max_concurrency: Optional[int] = None,
    ):
        self.store = store
        self.client = client
        self.max_concurrency = max_concurrency or settings.SYNC_MAX_CONCURRENCY

    async def sync_batch(self) -> SyncReport:
        """
        Run one sync batch.

        Returns:
            SyncReport: Counts of processed, succeeded and failed picks plus a
            per-pick entry in candidate order.

        Raises:
            PickStoreError: If the candidate picks cannot be listed.
        """
        loop = asyncio.get_running_loop()
        candidates = await loop.run_in_executor(None, self.store.list_sync_candidates)
        logger.info(f"Found {len(candidates)} active picks to sync")

        semaphore = asyncio.Semaphore(self.max_concurrency)
        games = await self._fetch_games(candidates, semaphore)

        updates: List[SyncItemResult] = list(
            await asyncio.gather(
                *(self._sync_pick(pick, games[_game_key(pick)], semaphore) for pick in candidates)
            )
        )

        succeeded = sum(1 for update in updates if update.success)
        report = SyncReport(
            processed=len(candidates),
            succeeded=succeeded,
            failed=len(updates) - succeeded,
            updates=updates,
        )
        logger.info(
            f"Sync batch finished: {report.processed} processed, "
            f"{report.succeeded} succeeded, {report.failed} failed"
        )
        return report

    async def _fetch_games(
        self,
        candidates: List[PickRecord],
        semaphore: asyncio.Semaphore,
    ) -> Dict[GameKey, FetchOutcome]:
        keys = list(dict.fromkeys(_game_key(pick) for pick in candidates))
        if len(keys) < len(candidates):
            logger.debug(f"{len(candidates)} picks reference {len(keys)} distinct games")

        results = await asyncio.gather(*(self._fetch_game(key, semaphore) for key in keys))
        return dict(zip(keys, results))

    async def _fetch_game(self, key: GameKey, semaphore: asyncio.Semaphore) -> FetchOutcome:
        sport, game_id = key
        async with semaphore:
            try:
                return await self.client.fetch_game(sport, game_id)
            except GameStateError as e:
                logger.warning(f"Could not fetch {sport} game {game_id}: {str(e)}")
                return e
            except Exception as e:
                logger.error(f"Unexpected error fetching {sport} game {game_id}: {str(e)}")
                return e

    async def _sync_pick(
        self,
        pick: PickRecord,
        fetched: FetchOutcome,
        semaphore: asyncio.Semaphore,
    ) -> SyncItemResult:
        if isinstance(fetched, Exception):
            return SyncItemResult(pick_id=pick.id, success=False, error=str(fetched) or type(fetched).__name__)

        game = fetched
        outcome = None
        if is_game_complete(game.status) and not pick.result_determined:
            outcome = resolve(pick.prediction, game)
            if not outcome.resolved:
                logger.debug(f"Pick {pick.id} not gradable yet: {outcome.explanation}")

        loop = asyncio.get_running_loop()
        async with semaphore:
            try:
                graded = await loop.run_in_executor(
                    None, self.store.apply_sync_update, pick.id, game, outcome
                )
            except Exception as e:
                logger.warning(f"Error syncing pick {pick.id}: {str(e)}")
                return SyncItemResult(pick_id=pick.id, success=False, error=str(e) or type(e).__name__)

        if graded:
            logger.info(f"Pick {pick.id} result: {outcome.status.value} - {outcome.explanation}")
        logger.debug(
            f"Updated pick {pick.id}: {game.status} - {game.home_team} {game.home_score} "
            f"vs {game.away_team} {game.away_score}"
        )
        return SyncItemResult(
            pick_id=pick.id,
            success=True,
            result=PickResultData.from_outcome(outcome) if outcome is not None else None,
        )


def build_orchestrator() -> PickSyncOrchestrator:
    """Build an orchestrator wired to the configured database and game feed."""
    from app.db.session import SessionLocal
    from app.services.sportradar_api import GameStateClientFactory

    return PickSyncOrchestrator(
        store=PickStore(SessionLocal),
        client=GameStateClientFactory.get_client(),
    )
