"""
@file: models.py
@description:
This file defines SQLAlchemy ORM models for the PickResults Backend API.
It includes the Pick model/table, which stores a user's prediction about an
external game, the game fields mirrored from the last sync, and the graded result.

@notes:
- Primary keys are UUID4 strings so the table works on both PostgreSQL and SQLite.
- Prediction columns are loose and nullable; app.schemas.predictions.parse_prediction
  turns them into a typed prediction at grading time.
- `status` moves PENDING -> WON/LOST/PUSH once; `result_determined` marks that
  terminal state and keeps resolved picks out of later sync runs.

@dependencies:
- SQLAlchemy: for defining ORM models.
- app.db.base: provides the Base class (declarative_base).
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text, func, Index
from app.db.base import Base


class Pick(Base):
    """
    @class Pick
    @description
    SQLAlchemy model representing a user-submitted pick on an external game.

    @attributes:
        id (String): Primary key (uuid4 string).
        user_id (String): Author of the pick.
        sport (String): League code used to query the game feed (e.g. "NBA").
        matchup (String): Free-text matchup as entered by the user.
        external_game_id (String): Provider game id; picks without one are never synced.
        prediction_type (String): WINNER, SPREAD or TOTAL.
        predicted_winner, spread_team, spread_value, total_value, total_prediction:
            Prediction fields, only those relevant to prediction_type are set.
        home_team, away_team, home_score, away_score, game_status:
            Game fields mirrored from the latest sync, for display.
        status (String): PENDING, WON, LOST or PUSH.
        result_notes (Text): Explanation of the graded result.
        result_determined (Boolean): True once status is terminal.
        created_at / updated_at (DateTime): Row timestamps.
    """
    __tablename__ = "picks"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Primary key using UUID4."
    )
    user_id = Column(String(64), nullable=True, index=True, doc="Author of the pick.")
    sport = Column(String(16), nullable=False, doc="League code, e.g. 'NBA'.")
    matchup = Column(String, nullable=True, doc="Matchup as entered by the user.")
    external_game_id = Column(
        String,
        nullable=True,
        index=True,
        doc="Game identifier assigned by the game-data provider."
    )

    prediction_type = Column(String(16), nullable=True, doc="WINNER, SPREAD or TOTAL.")
    predicted_winner = Column(String, nullable=True)
    spread_team = Column(String, nullable=True)
    spread_value = Column(Float, nullable=True)
    total_value = Column(Float, nullable=True)
    total_prediction = Column(String(8), nullable=True, doc="OVER or UNDER.")

    home_team = Column(String, nullable=True)
    away_team = Column(String, nullable=True)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    game_status = Column(String(32), nullable=True, doc="Provider status from the last sync.")

    status = Column(
        String(16),
        nullable=False,
        default="PENDING",
        doc="Graded status: PENDING, WON, LOST or PUSH."
    )
    result_notes = Column(Text, nullable=True, doc="Explanation of the graded result.")
    result_determined = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="True once the pick reached a terminal graded status."
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp of when the record was created."
    )
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now(),
        doc="Timestamp of the last update to this record."
    )

    __table_args__ = (
        Index("ix_picks_sync_candidates", "external_game_id", "result_determined"),
    )
