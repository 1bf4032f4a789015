"""
@file: picks.py
@description:
Pydantic schemas for graded pick outcomes, pick read/verify endpoints and
the report returned by a result-sync batch.

Schemas:
- PickStatus / GradedOutcome: result of grading one prediction against a game
- PickOut: a pick's mirrored game fields and graded outcome
- VerifyResultRequest: body for an admin's manual result verification
- SyncItemResult / SyncReport: per-pick outcome and aggregate of one sync batch
- SyncResultsResponse: HTTP payload of the sync trigger endpoint

@notes:
- `resolved` is derived from the status so the two can never disagree.
- The sync report is meant for operational logging, not as a stable contract.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class PickStatus(str, Enum):
    """Grading status of a pick. PENDING means not gradable yet."""
    WON = "WON"
    LOST = "LOST"
    PUSH = "PUSH"
    PENDING = "PENDING"


RESOLVED_STATUSES = frozenset({PickStatus.WON, PickStatus.LOST, PickStatus.PUSH})


class GradedOutcome(BaseModel):
    """
    Output of the outcome resolver.

    Attributes:
        status: WON, LOST, PUSH or PENDING.
        explanation: Human-readable note with the deciding arithmetic.
        resolved: True only for WON, LOST and PUSH.
    """
    model_config = ConfigDict(frozen=True)

    status: PickStatus
    explanation: str

    @computed_field
    @property
    def resolved(self) -> bool:
        return self.status in RESOLVED_STATUSES


class PickResultData(BaseModel):
    """Graded fields written onto a pick, as reported by a sync batch."""
    status: PickStatus
    result_determined: bool
    result_notes: str

    @classmethod
    def from_outcome(cls, outcome: GradedOutcome) -> "PickResultData":
        return cls(
            status=outcome.status,
            result_determined=outcome.resolved,
            result_notes=outcome.explanation,
        )


class PickOut(BaseModel):
    """Fields returned by the API for a single pick."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    sport: Optional[str] = None
    matchup: Optional[str] = None
    external_game_id: Optional[str] = None
    prediction_type: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    game_status: Optional[str] = None
    status: PickStatus
    result_notes: Optional[str] = None
    result_determined: bool
    updated_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    def coerce_stored_status(cls, v):
        # Rows may carry statuses written by other writers, e.g. "won" or "ACTIVE"
        if isinstance(v, PickStatus):
            return v
        try:
            return PickStatus(str(v).upper())
        except ValueError:
            return PickStatus.PENDING


class VerifyResultRequest(BaseModel):
    """Body of an admin's manual result verification."""
    status: PickStatus = Field(..., description="WON, LOST or PUSH.")
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("status")
    def status_must_be_resolved(cls, v: PickStatus) -> PickStatus:
        if v not in RESOLVED_STATUSES:
            raise ValueError("A verified result must be WON, LOST or PUSH")
        return v


class SyncItemResult(BaseModel):
    """Outcome of syncing one pick."""
    pick_id: str
    success: bool
    error: Optional[str] = None
    result: Optional[PickResultData] = None


class SyncReport(BaseModel):
    """Aggregate of one sync batch."""
    processed: int
    succeeded: int
    failed: int
    updates: List[SyncItemResult] = Field(default_factory=list)
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class SyncStats(BaseModel):
    total: int
    success: int
    failed: int


class SyncResultsResponse(BaseModel):
    """Response of POST /api/v1/sync-results."""
    success: bool = True
    message: str
    stats: SyncStats
    updates: List[SyncItemResult]

    @classmethod
    def from_report(cls, report: SyncReport) -> "SyncResultsResponse":
        return cls(
            message="Game results synced successfully",
            stats=SyncStats(total=report.processed, success=report.succeeded, failed=report.failed),
            updates=report.updates,
        )
