"""
@file: predictions.py
@description:
Pydantic schemas describing what a pick predicts about a game.

A prediction is a tagged union keyed by its kind:
- WinnerPrediction: moneyline, the named team wins outright
- SpreadPrediction: the named team covers a signed point spread
- TotalPrediction: the combined score lands over/under a line

Stored pick rows keep these fields as loose nullable columns, so two extra
variants describe rows that cannot be graded yet:
- IncompletePrediction: the kind is known but required fields are missing or invalid
- UnknownPrediction: the kind itself is missing or unrecognised

@notes:
- Complete variants enforce their required fields at construction time.
- parse_prediction() never raises; bad data becomes a non-gradable variant.
"""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class PredictionKind(str, Enum):
    """Closed set of prediction types a pick can carry."""
    WINNER = "WINNER"
    SPREAD = "SPREAD"
    TOTAL = "TOTAL"


class TotalSide(str, Enum):
    """Side of a total (over/under) prediction."""
    OVER = "OVER"
    UNDER = "UNDER"


class _PredictionBase(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class WinnerPrediction(_PredictionBase):
    """Moneyline prediction: the named team wins the game."""
    kind: Literal[PredictionKind.WINNER] = PredictionKind.WINNER
    predicted_winner: str = Field(..., min_length=1, description="Team predicted to win, full or partial name.")


class SpreadPrediction(_PredictionBase):
    """
    Point spread prediction.

    Uses sportsbook notation: a negative spread_value means the team must win by
    more than its absolute value, a positive one means it may lose by less.
    """
    kind: Literal[PredictionKind.SPREAD] = PredictionKind.SPREAD
    spread_team: str = Field(..., min_length=1, description="Team the spread applies to.")
    spread_value: float = Field(..., allow_inf_nan=False, description="Signed spread, e.g. -5.5 or +3.")


class TotalPrediction(_PredictionBase):
    """Over/under prediction on the combined final score."""
    kind: Literal[PredictionKind.TOTAL] = PredictionKind.TOTAL
    total_line: float = Field(..., gt=0, allow_inf_nan=False, description="Combined score threshold.")
    total_side: TotalSide


class IncompletePrediction(_PredictionBase):
    """A prediction whose kind is known but which cannot be graded yet."""
    kind: PredictionKind
    missing_fields: List[str] = Field(default_factory=list)


class UnknownPrediction(_PredictionBase):
    """A prediction whose kind is missing or not one of PredictionKind."""
    raw_kind: Optional[str] = None


Prediction = Union[
    WinnerPrediction,
    SpreadPrediction,
    TotalPrediction,
    IncompletePrediction,
    UnknownPrediction,
]


def _invalid_fields(exc: ValidationError) -> List[str]:
    fields = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "unknown"
        if name not in fields:
            fields.append(name)
    return fields


def parse_prediction(
    prediction_type: Optional[str],
    predicted_winner: Optional[str] = None,
    spread_team: Optional[str] = None,
    spread_value: Optional[float] = None,
    total_value: Optional[float] = None,
    total_prediction: Optional[str] = None,
) -> Prediction:
    """
    Build a prediction variant from the loose columns stored on a pick.

    Args:
        prediction_type: Stored kind, e.g. "SPREAD" (case-insensitive).
        predicted_winner: Team name for WINNER picks.
        spread_team: Team name for SPREAD picks.
        spread_value: Signed spread for SPREAD picks.
        total_value: Line for TOTAL picks.
        total_prediction: "OVER" or "UNDER" for TOTAL picks (case-insensitive).

    Returns:
        Prediction: A complete variant, or IncompletePrediction / UnknownPrediction
        when the stored data cannot be graded.
    """
    try:
        kind = PredictionKind(prediction_type.strip().upper())
    except (AttributeError, ValueError):
        return UnknownPrediction(raw_kind=prediction_type)

    try:
        if kind is PredictionKind.WINNER:
            return WinnerPrediction(predicted_winner=predicted_winner)
        if kind is PredictionKind.SPREAD:
            return SpreadPrediction(spread_team=spread_team, spread_value=spread_value)
        side = total_prediction.strip().upper() if isinstance(total_prediction, str) else total_prediction
        return TotalPrediction(total_line=total_value, total_side=side)
    except ValidationError as exc:
        return IncompletePrediction(kind=kind, missing_fields=_invalid_fields(exc))
