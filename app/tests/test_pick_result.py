"""
@file: test_pick_result.py
@description:
Test suite for the outcome resolver, focusing on:
- Moneyline, spread and total grading, including pushes
- Non-gradable input (missing scores, incomplete or unknown predictions)
- Team name matching
- Game completion checks and display formatting

@dependencies:
- pytest: For test framework
- app.services.pick_result: Module being tested
"""

import pytest

from app.schemas.picks import GradedOutcome, PickStatus
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
from app.services.pick_result import format_outcome, is_game_complete, resolve, team_matches


def test_winner_correct_pick_wins(make_game):
    """Partial team name matches the winning home team."""
    game = make_game(home_score=110, away_score=105)

    outcome = resolve(WinnerPrediction(predicted_winner="Lakers"), game)

    assert outcome.status is PickStatus.WON
    assert outcome.resolved is True
    assert "Correctly predicted Los Angeles Lakers to win" in outcome.explanation
    assert "Los Angeles Lakers 110 - Boston Celtics 105" in outcome.explanation


def test_winner_wrong_pick_loses(make_game):
    game = make_game(home_score=99, away_score=105)

    outcome = resolve(WinnerPrediction(predicted_winner="lakers"), game)

    assert outcome.status is PickStatus.LOST
    assert "but Boston Celtics won" in outcome.explanation


def test_winner_unmatched_team_loses(make_game):
    outcome = resolve(WinnerPrediction(predicted_winner="Knicks"), make_game())

    assert outcome.status is PickStatus.LOST


@pytest.mark.parametrize("predicted", ["Lakers", "Celtics", "Knicks"])
def test_winner_tie_is_push_for_any_team(make_game, predicted):
    game = make_game(home_score=21, away_score=21)

    outcome = resolve(WinnerPrediction(predicted_winner=predicted), game)

    assert outcome.status is PickStatus.PUSH
    assert outcome.explanation.startswith("Game ended in a tie")


@pytest.mark.parametrize(
    "spread_value, expected",
    [
        (-5.5, PickStatus.LOST),  # 100 - 5.5 = 94.5 < 95
        (-4, PickStatus.WON),     # 100 - 4 = 96 > 95
        (-5, PickStatus.PUSH),    # 100 - 5 = 95
    ],
)
def test_spread_favorite(make_game, spread_value, expected):
    game = make_game(home_team="Lakers", away_team="Celtics", home_score=100, away_score=95)

    outcome = resolve(SpreadPrediction(spread_team="Lakers", spread_value=spread_value), game)

    assert outcome.status is expected


def test_spread_underdog_covers_on_away_side(make_game):
    """Away team losing by 3 covers +3.5."""
    game = make_game(home_score=100, away_score=97)

    outcome = resolve(SpreadPrediction(spread_team="Celtics", spread_value=3.5), game)

    assert outcome.status is PickStatus.WON
    assert "Celtics covered the spread +3.5" in outcome.explanation


def test_spread_explanation_on_loss(make_game):
    game = make_game(home_team="Lakers", away_team="Celtics", home_score=100, away_score=95)

    outcome = resolve(SpreadPrediction(spread_team="Lakers", spread_value=-5.5), game)

    assert outcome.explanation == "Lakers did not cover the spread -5.5. Final: Lakers 100 - Celtics 95"


def test_spread_ambiguous_team_stays_pending(make_game):
    """A name contained in both team names cannot pick a side."""
    game = make_game(home_team="Los Angeles Lakers", away_team="Los Angeles Clippers")

    outcome = resolve(SpreadPrediction(spread_team="Los Angeles", spread_value=-2), game)

    assert outcome.status is PickStatus.PENDING
    assert outcome.resolved is False


def test_spread_exact_match_beats_substring(make_game):
    game = make_game(home_team="New York Jets", away_team="Jets", home_score=10, away_score=20)

    outcome = resolve(SpreadPrediction(spread_team="Jets", spread_value=-3), game)

    # Resolved to the away team by exact match: 20 - 3 = 17 > 10
    assert outcome.status is PickStatus.WON


def test_spread_unmatched_team_stays_pending(make_game):
    outcome = resolve(SpreadPrediction(spread_team="Knicks", spread_value=-2), make_game())

    assert outcome.status is PickStatus.PENDING


def test_total_push(make_game):
    game = make_game(home_score=110, away_score=105)

    outcome = resolve(TotalPrediction(total_line=215, total_side=TotalSide.OVER), game)

    assert outcome.status is PickStatus.PUSH
    assert outcome.explanation.startswith("Push on total 215.")


@pytest.mark.parametrize(
    "side, expected",
    [(TotalSide.OVER, PickStatus.WON), (TotalSide.UNDER, PickStatus.LOST)],
)
def test_total_over_under(make_game, side, expected):
    game = make_game(home_score=110, away_score=105)

    outcome = resolve(TotalPrediction(total_line=214.5, total_side=side), game)

    assert outcome.status is expected
    assert "Actual total: 215" in outcome.explanation


def test_total_under_hits(make_game):
    game = make_game(home_score=100, away_score=100)

    outcome = resolve(TotalPrediction(total_line=210.5, total_side=TotalSide.UNDER), game)

    assert outcome.status is PickStatus.WON
    assert outcome.explanation.startswith("UNDER 210.5 hit.")


def test_missing_scores_stay_pending(make_game):
    game = make_game(home_score=None, away_score=None, status="inprogress")

    outcome = resolve(WinnerPrediction(predicted_winner="Lakers"), game)

    assert outcome == GradedOutcome(status=PickStatus.PENDING, explanation="Game scores not available yet")


def test_zero_scores_are_gradable(make_game):
    game = make_game(home_score=0, away_score=1)

    outcome = resolve(WinnerPrediction(predicted_winner="Celtics"), game)

    assert outcome.status is PickStatus.WON


def test_spread_missing_value_is_pending_not_error(make_game):
    prediction = parse_prediction("SPREAD", spread_team="Lakers", spread_value=None)

    outcome = resolve(prediction, make_game())

    assert isinstance(prediction, IncompletePrediction)
    assert outcome.status is PickStatus.PENDING
    assert outcome.resolved is False
    assert outcome.explanation == "Spread information not specified (missing: spread_value)"


def test_incomplete_winner_and_total_are_pending(make_game):
    winner = resolve(IncompletePrediction(kind=PredictionKind.WINNER), make_game())
    total = resolve(
        IncompletePrediction(kind=PredictionKind.TOTAL, missing_fields=["total_side"]),
        make_game(),
    )

    assert winner.explanation == "No predicted winner specified"
    assert total.explanation == "Total information not specified (missing: total_side)"


def test_unknown_prediction_is_pending(make_game):
    outcome = resolve(UnknownPrediction(raw_kind="PARLAY"), make_game())

    assert outcome.status is PickStatus.PENDING
    assert outcome.explanation == "Unknown prediction type"


def test_resolve_is_deterministic(make_game):
    game = make_game(home_team="Lakers", away_team="Celtics", home_score=100, away_score=95)
    prediction = SpreadPrediction(spread_team="Lakers", spread_value=-4)

    outcomes = {resolve(prediction, game) for _ in range(5)}

    assert len(outcomes) == 1


@pytest.mark.parametrize(
    "name, team, expected",
    [
        ("Lakers", "Los Angeles Lakers", True),
        ("LOS ANGELES LAKERS", "Los Angeles Lakers", True),
        ("  lakers ", "Los Angeles Lakers", True),
        ("Celtics", "Los Angeles Lakers", False),
        ("", "Los Angeles Lakers", False),
    ],
)
def test_team_matches(name, team, expected):
    assert team_matches(name, team) is expected


@pytest.mark.parametrize(
    "status, expected",
    [
        ("closed", True),
        ("complete", True),
        ("FINAL", True),
        ("inprogress", False),
        ("scheduled", False),
        (None, False),
        ("", False),
    ],
)
def test_is_game_complete(status, expected):
    assert is_game_complete(status) is expected


def test_format_outcome():
    outcome = GradedOutcome(status=PickStatus.LOST, explanation="UNDER 210.5 missed.")

    assert format_outcome(outcome) == "❌ LOST: UNDER 210.5 missed."
