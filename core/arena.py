# =============================================================================
# core/arena.py  -  ClawdsBet Endpoint Functions
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One function per upstream endpoint.  Each maps its arguments onto a path,
#   query parameters or a JSON body, calls api_call(), and returns the parsed
#   JSON exactly as the API sent it.
#
#   ENDPOINTS:
#     get_leaderboard      GET  /leaderboard
#     get_markets          GET  /markets
#     get_categories       GET  /markets/categories
#     get_bot_stats        GET  /bots/{bot_id}
#     get_market_details   GET  /markets/{market_id}
#     place_bet            POST /bets            (requires the API key)
#     get_recent_activity  GET  /bets
#     get_sync_status      GET  /monitoring/health/sync
#                          GET  /monitoring/sync-cursor   (fetched concurrently)
#
# Nothing in this module knows about MCP.  It can be used from a REPL with
# just a Settings object.
# =============================================================================

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Any

from core.client import ConfigurationError, api_call, path_segment
from core.config import Settings
from core.models import ActivityQuery, BetRequest, MarketQuery, SyncStatus

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = (
    "API key required for placing bets. Set CLAWDSBET_API_KEY environment variable."
)

SYNC_HEALTH_ENDPOINT = "/monitoring/health/sync"
SYNC_CURSOR_ENDPOINT = "/monitoring/sync-cursor"


def get_leaderboard(settings: Settings, limit: int = 10) -> Any:
    return api_call(settings, "/leaderboard", params={"limit": limit})


def get_markets(settings: Settings, query: MarketQuery | None = None) -> Any:
    """List markets.  Only the filters set on the query are sent."""
    query = query or MarketQuery()
    return api_call(settings, "/markets", params=query.to_params())


def get_categories(settings: Settings) -> Any:
    return api_call(settings, "/markets/categories")


def get_bot_stats(settings: Settings, bot_id: str) -> Any:
    return api_call(settings, f"/bots/{path_segment(bot_id)}")


def get_market_details(settings: Settings, market_id: str) -> Any:
    return api_call(settings, f"/markets/{path_segment(market_id)}")


def place_bet(settings: Settings, bet: BetRequest) -> Any:
    """Place a bet with virtual funds.

    The key check happens before any request is built, so a missing key
    never costs a round-trip.

    Raises:
        ConfigurationError: if no API key is configured.
    """
    if not settings.has_api_key:
        raise ConfigurationError(MISSING_API_KEY_MESSAGE)
    return api_call(settings, "/bets", method="POST", body=bet.to_body())


def get_recent_activity(settings: Settings, query: ActivityQuery | None = None) -> Any:
    query = query or ActivityQuery()
    return api_call(settings, "/bets", params=query.to_params())


def get_sync_status(settings: Settings) -> SyncStatus:
    """Fetch sync health and cursor position concurrently.

    The two legs are independent and unordered.  If either one raises, the
    exception propagates and no partial result is returned.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="sync-status") as pool:
        health = pool.submit(api_call, settings, SYNC_HEALTH_ENDPOINT)
        cursor = pool.submit(api_call, settings, SYNC_CURSOR_ENDPOINT)
        status = SyncStatus(health=health.result(), cursor=cursor.result())
    logger.debug("Fetched sync health and cursor")
    return status
