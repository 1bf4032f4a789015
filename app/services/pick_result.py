"""
@file: pick_result.py
@description:
Outcome resolver: decides whether a pick WON, LOST or PUSHed given the final
score of its game.

Key features:
- Moneyline (WINNER), point spread (SPREAD) and over/under (TOTAL) grading
- Case-insensitive team matching that tolerates partial names ("Lakers"
  matches "Los Angeles Lakers")
- Explanations carry the deciding arithmetic and the final score for audit

@notes:
- resolve() is pure and deterministic: no I/O, no clock, never raises for
  well-typed input. The sync orchestrator relies on this to re-run safely.
- Anything that cannot be graded (no scores, incomplete prediction, unknown
  kind, unmatched team) comes back as PENDING rather than an error.
- Callers decide *when* to grade with is_game_complete(); resolve() itself
  grades whatever scores it is given.
"""

from typing import Optional

from app.schemas.games import GameResult
from app.schemas.picks import GradedOutcome, PickStatus
from app.schemas.predictions import (
    IncompletePrediction,
    Prediction,
    PredictionKind,
    SpreadPrediction,
    TotalPrediction,
    TotalSide,
    WinnerPrediction,
)

# Differences smaller than this count as landing exactly on the line
PUSH_EPSILON = 0.01

COMPLETE_STATUSES = frozenset({"complete", "closed", "final"})

_INCOMPLETE_NOTES = {
    PredictionKind.WINNER: "No predicted winner specified",
    PredictionKind.SPREAD: "Spread information not specified",
    PredictionKind.TOTAL: "Total information not specified",
}

_STATUS_ICONS = {
    PickStatus.WON: "✅",
    PickStatus.LOST: "❌",
    PickStatus.PUSH: "🔄",
    PickStatus.PENDING: "⏳",
}


def _pending(explanation: str) -> GradedOutcome:
    return GradedOutcome(status=PickStatus.PENDING, explanation=explanation)


def _final_line(game: GameResult) -> str:
    return f"{game.home_team} {game.home_score} - {game.away_team} {game.away_score}"


def _format_line(value: float) -> str:
    return f"{value:g}"


def _format_spread(value: float) -> str:
    return f"{value:+g}"


def team_matches(name: str, team: str) -> bool:
    """
    Case-insensitive team match: exact name, or `name` contained in `team`.

    Args:
        name: Name as entered on the pick, possibly partial ("Lakers").
        team: Full team name from the game feed ("Los Angeles Lakers").
    """
    needle = name.strip().lower()
    haystack = team.strip().lower()
    if not needle:
        return False
    return needle == haystack or needle in haystack


def _resolve_side(name: str, game: GameResult) -> Optional[bool]:
    """
    Return True if `name` is the home team, False if away, None if unresolvable.

    An exact match wins over substring containment; a substring that matches
    both teams is ambiguous.
    """
    needle = name.strip().lower()
    if needle == game.home_team.strip().lower():
        return True
    if needle == game.away_team.strip().lower():
        return False
    is_home = team_matches(name, game.home_team)
    is_away = team_matches(name, game.away_team)
    if is_home == is_away:
        return None
    return is_home


def _resolve_winner(prediction: WinnerPrediction, game: GameResult) -> GradedOutcome:
    if game.home_score == game.away_score:
        return GradedOutcome(
            status=PickStatus.PUSH,
            explanation=f"Game ended in a tie: {_final_line(game)}",
        )

    actual_winner = game.home_team if game.home_score > game.away_score else game.away_team

    if team_matches(prediction.predicted_winner, actual_winner):
        return GradedOutcome(
            status=PickStatus.WON,
            explanation=f"Correctly predicted {actual_winner} to win. Final: {_final_line(game)}",
        )
    return GradedOutcome(
        status=PickStatus.LOST,
        explanation=(
            f"Predicted {prediction.predicted_winner} to win, but {actual_winner} won. "
            f"Final: {_final_line(game)}"
        ),
    )


def _resolve_spread(prediction: SpreadPrediction, game: GameResult) -> GradedOutcome:
    is_home = _resolve_side(prediction.spread_team, game)
    if is_home is None:
        return _pending(
            f"Spread team {prediction.spread_team} does not match exactly one of "
            f"{game.home_team} or {game.away_team}"
        )

    if is_home:
        team_score, opponent_score = game.home_score, game.away_score
    else:
        team_score, opponent_score = game.away_score, game.home_score

    # A negative spread subtracts from the team's score
    adjusted_score = team_score + prediction.spread_value
    spread = _format_spread(prediction.spread_value)
    final = f"Final: {_final_line(game)}"

    if abs(adjusted_score - opponent_score) < PUSH_EPSILON:
        return GradedOutcome(
            status=PickStatus.PUSH,
            explanation=f"Push on {prediction.spread_team} {spread}. {final}",
        )
    if adjusted_score > opponent_score:
        return GradedOutcome(
            status=PickStatus.WON,
            explanation=f"{prediction.spread_team} covered the spread {spread}. {final}",
        )
    return GradedOutcome(
        status=PickStatus.LOST,
        explanation=f"{prediction.spread_team} did not cover the spread {spread}. {final}",
    )


def _resolve_total(prediction: TotalPrediction, game: GameResult) -> GradedOutcome:
    actual_total = game.home_score + game.away_score
    line = _format_line(prediction.total_line)
    detail = f"Actual total: {actual_total} ({_final_line(game)})"

    if abs(actual_total - prediction.total_line) < PUSH_EPSILON:
        return GradedOutcome(status=PickStatus.PUSH, explanation=f"Push on total {line}. {detail}")

    over_hit = actual_total > prediction.total_line
    under_hit = actual_total < prediction.total_line
    side = prediction.total_side.value

    if (prediction.total_side is TotalSide.OVER and over_hit) or (
        prediction.total_side is TotalSide.UNDER and under_hit
    ):
        return GradedOutcome(status=PickStatus.WON, explanation=f"{side} {line} hit. {detail}")
    return GradedOutcome(status=PickStatus.LOST, explanation=f"{side} {line} missed. {detail}")


def resolve(prediction: Prediction, game: GameResult) -> GradedOutcome:
    """
    Grade a prediction against a game's score.

    Args:
        prediction: Any Prediction variant, including non-gradable ones.
        game: Latest game state; scores may still be missing.

    Returns:
        GradedOutcome: WON/LOST/PUSH when gradable, otherwise PENDING with the reason.
    """
    if not game.has_scores:
        return _pending("Game scores not available yet")

    if isinstance(prediction, WinnerPrediction):
        return _resolve_winner(prediction, game)
    if isinstance(prediction, SpreadPrediction):
        return _resolve_spread(prediction, game)
    if isinstance(prediction, TotalPrediction):
        return _resolve_total(prediction, game)
    if isinstance(prediction, IncompletePrediction):
        note = _INCOMPLETE_NOTES[prediction.kind]
        if prediction.missing_fields:
            note = f"{note} (missing: {', '.join(prediction.missing_fields)})"
        return _pending(note)
    return _pending("Unknown prediction type")


def is_game_complete(game_status: Optional[str]) -> bool:
    """
    Check whether a provider status string means the game is final and safe to grade.
    """
    if not game_status:
        return False
    return game_status.strip().lower() in COMPLETE_STATUSES


def format_outcome(outcome: GradedOutcome) -> str:
    """
    Format an outcome for display, e.g. "✅ WON: Correctly predicted ...".
    """
    return f"{_STATUS_ICONS[outcome.status]} {outcome.status.value}: {outcome.explanation}"
