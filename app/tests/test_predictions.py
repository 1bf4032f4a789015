"""
@file: test_predictions.py
@description:
Test suite for prediction schemas, focusing on:
- Building typed predictions from stored pick columns
- Incomplete and unknown predictions instead of validation errors
- Variant field constraints

@dependencies:
- pytest: For test framework
- pydantic: For validation errors
- app.schemas.predictions: Module being tested
"""

import pytest
from pydantic import ValidationError

from app.schemas.predictions import (
    IncompletePrediction,
    PredictionKind,
    SpreadPrediction,
    TotalPrediction,
    TotalSide,
    UnknownPrediction,
    WinnerPrediction,
    parse_prediction,
)


def test_parse_winner():
    prediction = parse_prediction("WINNER", predicted_winner=" Lakers ")

    assert prediction == WinnerPrediction(predicted_winner="Lakers")
    assert prediction.kind is PredictionKind.WINNER


def test_parse_spread_is_case_insensitive():
    prediction = parse_prediction("spread", spread_team="Celtics", spread_value=3.5)

    assert isinstance(prediction, SpreadPrediction)
    assert prediction.spread_value == 3.5


def test_parse_total_normalises_side():
    prediction = parse_prediction("TOTAL", total_value=214.5, total_prediction="under")

    assert prediction == TotalPrediction(total_line=214.5, total_side=TotalSide.UNDER)


@pytest.mark.parametrize(
    "kwargs, kind, missing",
    [
        ({"prediction_type": "WINNER"}, PredictionKind.WINNER, ["predicted_winner"]),
        ({"prediction_type": "WINNER", "predicted_winner": "   "}, PredictionKind.WINNER, ["predicted_winner"]),
        ({"prediction_type": "SPREAD", "spread_team": "Lakers"}, PredictionKind.SPREAD, ["spread_value"]),
        ({"prediction_type": "SPREAD"}, PredictionKind.SPREAD, ["spread_team", "spread_value"]),
        ({"prediction_type": "TOTAL", "total_prediction": "OVER"}, PredictionKind.TOTAL, ["total_line"]),
        ({"prediction_type": "TOTAL", "total_value": 210.5}, PredictionKind.TOTAL, ["total_side"]),
        (
            {"prediction_type": "TOTAL", "total_value": 210.5, "total_prediction": "SIDEWAYS"},
            PredictionKind.TOTAL,
            ["total_side"],
        ),
    ],
)
def test_parse_incomplete(kwargs, kind, missing):
    prediction = parse_prediction(**kwargs)

    assert isinstance(prediction, IncompletePrediction)
    assert prediction.kind is kind
    assert prediction.missing_fields == missing


@pytest.mark.parametrize("raw_kind", [None, "", "PARLAY"])
def test_parse_unknown_kind(raw_kind):
    prediction = parse_prediction(raw_kind, predicted_winner="Lakers")

    assert prediction == UnknownPrediction(raw_kind=raw_kind)


def test_total_line_must_be_positive():
    with pytest.raises(ValidationError):
        TotalPrediction(total_line=0, total_side=TotalSide.OVER)


def test_predictions_are_immutable():
    prediction = WinnerPrediction(predicted_winner="Lakers")

    with pytest.raises(ValidationError):
        prediction.predicted_winner = "Celtics"
