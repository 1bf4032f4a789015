"""
@file: sportradar_api.py
@description:
Game state client for the Sportradar game-data feed. Fetches the current
status and score of one external game by (league, provider game id) and
normalises it into a GameResult.

API Documentation: https://developer.sportradar.com/

Key features:
- League coverage: NBA, MLB, NHL, NFL, NCAAFB, NCAAMB game summaries
- Async HTTP via httpx, with bounded retries of transport errors (tenacity)
- Error taxonomy: GameNotFoundError for unknown games, GameStateError for
  everything else the provider or network can throw at us
- CachedGameStateClient: explicit, injected TTL cache in front of any client

@dependencies:
- httpx: Async HTTP client
- tenacity: Retry of transient transport failures
- app.core.config: API key, access level, timeout and retry settings
- app.core.logger: For component-specific logging

@notes:
- Callers must treat GameNotFoundError and GameStateError the same way;
  the former only exists so the game-details endpoint can answer 404.
- Only successful lookups are cached.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.core.config import settings
from app.core.logger import setup_logger
from app.schemas.games import GameResult

# Initialize logger
logger = setup_logger("app.services.sportradar_api")

SPORTRADAR_BASE_URL = "https://api.sportradar.com"

# League code -> URL path template; {level} is the account access level (trial/production)
LEAGUE_PATHS: Dict[str, str] = {
    "NBA": "nba/{level}/v8/en",
    "MLB": "mlb/{level}/v8/en",
    "NHL": "nhl/{level}/v7/en",
    "NFL": "nfl/official/{level}/v7/en",
    "NCAAFB": "ncaafb/{level}/v7/en",
    "NCAAMB": "ncaamb/{level}/v8/en",
}

SUPPORTED_LEAGUES = tuple(LEAGUE_PATHS)

# Where each league reports its current period in a game summary
_PERIOD_KEYS = ("quarter", "period", "inning", "half")
_CLOCK_KEYS = ("clock", "inning_half")


class GameStateError(Exception):
    """Raised when the current state of a game cannot be fetched."""
    pass


class GameNotFoundError(GameStateError):
    """Raised when the provider does not know the requested game."""
    pass


class BaseGameStateClient(ABC):
    """
    Interface for anything that can report the current state of an external game.

    Implementations raise GameStateError (or its subclass GameNotFoundError)
    instead of returning partial data.
    """

    @abstractmethod
    async def fetch_game(self, sport: str, external_game_id: str) -> GameResult:
        """
        Fetch the latest state of one game.

        Args:
            sport: League code, e.g. "NBA".
            external_game_id: Provider-assigned game identifier.

        Returns:
            GameResult: Team names, status and (possibly missing) scores.

        Raises:
            GameNotFoundError: If the provider has no such game.
            GameStateError: For any other provider or network failure.
        """
        raise NotImplementedError


def format_team_name(team: Dict[str, Any]) -> str:
    """Format a team as "<market> <name>" when the feed supplies a market."""
    name = team.get("name") or ""
    market = team.get("market")
    if market:
        return f"{market} {name}".strip()
    return name


def _score(team: Dict[str, Any], key: str) -> Optional[int]:
    value = team.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return None
    return int(value)


def _first(game: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if game.get(key) is not None:
            return game[key]
    return None


def parse_game_summary(league: str, payload: Dict[str, Any]) -> GameResult:
    """
    Normalise a Sportradar game summary into a GameResult.

    Args:
        league: League code the summary was requested for.
        payload: Decoded JSON body. MLB wraps the game in a top-level "game" key.

    Returns:
        GameResult: The normalised game state.

    Raises:
        GameStateError: If the summary lacks the teams, status or id.
    """
    game = payload.get("game") if isinstance(payload.get("game"), dict) else payload
    home = game.get("home")
    away = game.get("away")
    if not isinstance(home, dict) or not isinstance(away, dict) or not game.get("status") or not game.get("id"):
        raise GameStateError(f"Malformed {league} game summary: missing id, status or teams")

    score_key = "runs" if league == "MLB" else "points"
    period = _first(game, _PERIOD_KEYS)
    clock = _first(game, _CLOCK_KEYS)

    return GameResult(
        game_id=str(game["id"]),
        league=league,
        home_team=format_team_name(home),
        away_team=format_team_name(away),
        home_score=_score(home, score_key),
        away_score=_score(away, score_key),
        status=str(game["status"]),
        scheduled=game.get("scheduled"),
        period=period if isinstance(period, int) and not isinstance(period, bool) else None,
        clock=str(clock) if clock is not None else None,
    )


class SportradarClient(BaseGameStateClient):
    """
    Sportradar implementation of the game state client.

    Args:
        api_key: Sportradar API key. Defaults to settings.SPORTRADAR_API_KEY.
        access_level: "trial" or "production". Defaults to settings.
        timeout: Request timeout in seconds.
        retry_attempts: Total attempts for transport errors (1 disables retries).
        http_client: Optional shared httpx.AsyncClient; one is created per request otherwise.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        access_level: Optional[str] = None,
        timeout: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.SPORTRADAR_API_KEY
        self.access_level = access_level or settings.SPORTRADAR_ACCESS_LEVEL
        self.timeout = timeout or settings.SPORTRADAR_TIMEOUT_SECONDS
        self.retry_attempts = retry_attempts or settings.SPORTRADAR_RETRY_ATTEMPTS
        self._http_client = http_client

    def base_url(self, league: str) -> str:
        """Return the API base URL for a league."""
        try:
            path = LEAGUE_PATHS[league]
        except KeyError:
            raise GameStateError(f"Unsupported league: {league}")
        return f"{SPORTRADAR_BASE_URL}/{path.format(level=self.access_level)}"

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await client.get(
                    url,
                    params={"api_key": self.api_key},
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )

    async def _request(self, league: str, endpoint: str) -> Dict[str, Any]:
        if not self.api_key:
            raise GameStateError("SPORTRADAR_API_KEY is not configured")

        url = f"{self.base_url(league)}{endpoint}"
        try:
            if self._http_client is not None:
                response = await self._get(self._http_client, url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._get(client, url)
        except httpx.TransportError as e:
            logger.warning(f"Request error for {league} {endpoint}: {str(e)}")
            raise GameStateError(f"Failed to fetch from Sportradar: {str(e)}")

        if response.status_code == 404:
            raise GameNotFoundError(f"{league} resource not found: {endpoint}")
        if response.is_error:
            logger.warning(f"Sportradar HTTP {response.status_code} for {league} {endpoint}")
            raise GameStateError(
                f"Sportradar API error: {response.status_code} {response.reason_phrase}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GameStateError(f"Invalid JSON from Sportradar: {str(e)}")
        if not isinstance(payload, dict):
            raise GameStateError("Unexpected Sportradar response shape")
        return payload

    async def fetch_game(self, sport: str, external_game_id: str) -> GameResult:
        league = (sport or "").upper()
        logger.debug(f"Fetching {league} game {external_game_id}")
        payload = await self._request(league, f"/games/{external_game_id}/summary.json")
        return parse_game_summary(league, payload)


class CachedGameStateClient(BaseGameStateClient):
    """
    Time-bounded cache in front of another game state client.

    Entries expire ttl_seconds after they were fetched; invalidate() and
    clear() drop entries early. Failures are never cached.

    Args:
        inner: The client that actually fetches games.
        ttl_seconds: Lifetime of a cached result; 0 disables caching.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        inner: BaseGameStateClient,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.inner = inner
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Tuple[str, str], Tuple[float, GameResult]] = {}

    @staticmethod
    def _key(sport: str, external_game_id: str) -> Tuple[str, str]:
        return ((sport or "").upper(), str(external_game_id))

    async def fetch_game(self, sport: str, external_game_id: str) -> GameResult:
        key = self._key(sport, external_game_id)
        now = self._clock()

        cached = self._entries.get(key)
        if cached is not None:
            expires_at, game = cached
            if now < expires_at:
                logger.debug(f"Using cached state for {key[0]} game {key[1]}")
                return game
            del self._entries[key]

        game = await self.inner.fetch_game(sport, external_game_id)
        if self.ttl_seconds > 0:
            self._sweep(now)
            self._entries[key] = (now + self.ttl_seconds, game)
        return game

    def _sweep(self, now: float) -> None:
        """Drop every expired entry so games that are never read again do not pile up."""
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    def invalidate(self, sport: str, external_game_id: str) -> None:
        """Drop the cached state of one game."""
        self._entries.pop(self._key(sport, external_game_id), None)

    def clear(self) -> None:
        """Drop all cached game states."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class GameStateClientFactory:
    """Factory for creating and managing the process-wide game state client."""
    _instance: Optional[CachedGameStateClient] = None

    @classmethod
    def get_client(cls) -> CachedGameStateClient:
        """
        Retrieve or create the configured game state client.

        Returns:
            CachedGameStateClient: A Sportradar client behind the configured TTL cache.
        """
        if cls._instance is None:
            cls._instance = CachedGameStateClient(
                SportradarClient(),
                ttl_seconds=settings.GAME_CACHE_TTL_SECONDS,
            )
            logger.debug("Initialized Sportradar game state client")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def get_game_state_client() -> BaseGameStateClient:
    """FastAPI dependency returning the shared game state client."""
    return GameStateClientFactory.get_client()
