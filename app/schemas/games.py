"""
@file: games.py
@description:
Pydantic schema for the state of an external game as reported by the game-data feed.

A GameResult is a snapshot: it is re-fetched every sync cycle and the latest
fetch always wins. Scores are None until the game has started.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameResult(BaseModel):
    """Latest known status and score of one external game."""
    model_config = ConfigDict(frozen=True)

    game_id: str = Field(..., description="Provider-assigned game identifier.")
    league: str = Field(..., description="League code the game belongs to, e.g. 'NBA'.")
    home_team: str
    away_team: str
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: str = Field(..., description="Provider status string, e.g. 'scheduled', 'inprogress', 'closed'.")
    scheduled: Optional[str] = Field(default=None, description="Scheduled start time (ISO format).")
    period: Optional[int] = None
    clock: Optional[str] = None

    @property
    def has_scores(self) -> bool:
        """True once both scores are reported."""
        return self.home_score is not None and self.away_score is not None
