"""
@file: pick_store.py
@description:
Persistence layer for picks as seen by the result sync: reading the picks
that may need a sync and writing back mirrored game fields and graded results.

Key features:
- Candidate selection: picks with an external game id that are not final or not graded
- Atomic per-pick writes: mirrored game fields and the graded result land together
- Monotonic grading: a resolved pick is never re-graded by the sync
- Manual verification: admins can set a result directly

@dependencies:
- sqlalchemy: For queries and transactions
- app.db.models: The Pick ORM model
- app.schemas: Prediction parsing, game state and graded outcome schemas
- app.core.logger: For logging

@notes:
- Methods are synchronous; async callers run them in an executor.
- Each call opens and closes its own session so calls are safe across threads.
- PickRecord snapshots are returned instead of ORM objects.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logger import setup_logger
from app.db.models import Pick
from app.schemas.games import GameResult
from app.schemas.picks import GradedOutcome, PickStatus
from app.schemas.predictions import Prediction, parse_prediction

# Initialize logger
logger = setup_logger("app.services.pick_store")

# Provider statuses that still need polling
ACTIVE_GAME_STATUSES = ("scheduled", "inprogress", "created")


class PickStoreError(Exception):
    """Raised when the pick store cannot be read or written."""
    pass


class PickNotFoundError(PickStoreError):
    """Raised when a pick id does not exist."""
    pass


@dataclass(frozen=True)
class PickRecord:
    """Snapshot of the pick columns the result sync works with."""
    id: str
    sport: str
    external_game_id: str
    prediction: Prediction
    result_determined: bool

    @classmethod
    def from_model(cls, pick: Pick) -> "PickRecord":
        return cls(
            id=pick.id,
            sport=pick.sport,
            external_game_id=pick.external_game_id,
            prediction=parse_prediction(
                pick.prediction_type,
                predicted_winner=pick.predicted_winner,
                spread_team=pick.spread_team,
                spread_value=pick.spread_value,
                total_value=pick.total_value,
                total_prediction=pick.total_prediction,
            ),
            result_determined=bool(pick.result_determined),
        )


class PickStore:
    """
    SQLAlchemy-backed store for pick sync state.

    Args:
        session_factory: Callable returning a new Session, e.g. app.db.session.SessionLocal.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_sync_candidates(self) -> List[PickRecord]:
        """
        List picks that may need a sync this cycle.

        A candidate has an external game id and either an active game status,
        no game status yet, or no graded result yet.

        Returns:
            List[PickRecord]: Candidate picks, oldest first.

        Raises:
            PickStoreError: If the store cannot be queried.
        """
        query = (
            select(Pick)
            .where(Pick.external_game_id.is_not(None))
            .where(
                or_(
                    Pick.game_status.in_(ACTIVE_GAME_STATUSES),
                    Pick.game_status.is_(None),
                    Pick.result_determined.is_(False),
                )
            )
            .order_by(Pick.created_at, Pick.id)
        )
        try:
            with self.session_factory() as session:
                picks = session.scalars(query).all()
                records = [PickRecord.from_model(pick) for pick in picks]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list sync candidates: {str(e)}")
            raise PickStoreError(f"Failed to list sync candidates: {str(e)}")

        logger.debug(f"Found {len(records)} sync candidates")
        return records

    def apply_sync_update(
        self,
        pick_id: str,
        game: GameResult,
        outcome: Optional[GradedOutcome] = None,
    ) -> bool:
        """
        Mirror the latest game state onto a pick and record a new grade.

        Both changes are committed in one transaction with the row locked, so
        a pick never shows fresh scores with a stale grade or the reverse. The
        outcome is written only if it is resolved and the pick is not.

        Args:
            pick_id: Pick to update.
            game: Latest game state to mirror.
            outcome: Grade produced for this cycle, if any.

        Returns:
            bool: True if a new grade was written.

        Raises:
            PickNotFoundError: If the pick no longer exists.
            PickStoreError: If the write fails.
        """
        try:
            with self.session_factory() as session, session.begin():
                pick = session.scalars(
                    select(Pick).where(Pick.id == pick_id).with_for_update()
                ).one_or_none()
                if pick is None:
                    raise PickNotFoundError(f"Pick {pick_id} not found")

                pick.home_team = game.home_team
                pick.away_team = game.away_team
                pick.game_status = game.status
                pick.home_score = game.home_score
                pick.away_score = game.away_score

                graded = outcome is not None and outcome.resolved and not pick.result_determined
                if graded:
                    pick.status = outcome.status.value
                    pick.result_notes = outcome.explanation
                    pick.result_determined = True
        except SQLAlchemyError as e:
            logger.error(f"Failed to update pick {pick_id}: {str(e)}")
            raise PickStoreError(f"Failed to update pick {pick_id}: {str(e)}")

        return graded

    def get_pick(self, pick_id: str) -> Pick:
        """
        Load a pick by id.

        Raises:
            PickNotFoundError: If the pick does not exist.
            PickStoreError: If the store cannot be queried.
        """
        try:
            with self.session_factory() as session:
                pick = session.get(Pick, pick_id)
        except SQLAlchemyError as e:
            raise PickStoreError(f"Failed to load pick {pick_id}: {str(e)}")
        if pick is None:
            raise PickNotFoundError(f"Pick {pick_id} not found")
        return pick

    def verify_result(self, pick_id: str, status: PickStatus, notes: Optional[str] = None) -> Pick:
        """
        Set a pick's result by hand, overriding any automatic grade.

        Args:
            pick_id: Pick to verify.
            status: WON, LOST or PUSH.
            notes: Optional explanation; defaults to a note naming the verified status.

        Returns:
            Pick: The updated pick.

        Raises:
            ValueError: If status is PENDING.
            PickNotFoundError: If the pick does not exist.
            PickStoreError: If the write fails.
        """
        if status is PickStatus.PENDING:
            raise ValueError("A verified result must be WON, LOST or PUSH")

        try:
            with self.session_factory() as session:
                with session.begin():
                    pick = session.scalars(
                        select(Pick).where(Pick.id == pick_id).with_for_update()
                    ).one_or_none()
                    if pick is None:
                        raise PickNotFoundError(f"Pick {pick_id} not found")

                    pick.status = status.value
                    pick.result_notes = notes or f"Result verified by admin: {status.value}"
                    pick.result_determined = True
                # Reload server-side timestamps before the session closes
                session.refresh(pick)
        except SQLAlchemyError as e:
            logger.error(f"Failed to verify pick {pick_id}: {str(e)}")
            raise PickStoreError(f"Failed to verify pick {pick_id}: {str(e)}")

        logger.info(f"Pick {pick_id} result verified as {status.value}")
        return pick
