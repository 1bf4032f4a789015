"""
@file: games.py
@description:
Live game details, read through the game state client.

Routes:
- GET /api/v1/games/{game_id}?league=NBA : current status and score of one game

@dependencies:
- FastAPI APIRouter for route definitions.
- app.services.sportradar_api for the game state client.

@notes:
- Responses go through the client's TTL cache, so repeated calls during a
  game do not each hit the provider.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.logger import setup_logger
from app.schemas.games import GameResult
from app.services.sportradar_api import (
    SUPPORTED_LEAGUES,
    BaseGameStateClient,
    GameNotFoundError,
    GameStateError,
    get_game_state_client,
)

# Create a component-specific logger
logger = setup_logger("app.api.games")

router = APIRouter()


@router.get("/games/{game_id}", response_model=GameResult, tags=["Games"])
async def get_game(
    game_id: str,
    league: str = Query("NBA", description="League code, e.g. NBA, NFL, MLB"),
    client: BaseGameStateClient = Depends(get_game_state_client),
) -> GameResult:
    """
    GET /api/v1/games/{game_id}

    Returns the current state of one external game.

    Raises:
        HTTPException(400): If the league is not supported.
        HTTPException(404): If the provider does not know the game.
        HTTPException(502): If the provider request fails.
    """
    league = league.upper()
    if league not in SUPPORTED_LEAGUES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid league. Supported: {', '.join(SUPPORTED_LEAGUES)}",
        )

    try:
        return await client.fetch_game(league, game_id)
    except GameNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    except GameStateError as e:
        logger.error(f"Error fetching {league} game {game_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
