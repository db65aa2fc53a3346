# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the ClawdsBet server exposes.  Each tool is a thin
#   wrapper around a core/arena.py function: it turns typed arguments into a
#   request, relays the upstream JSON as pretty-printed text, and turns any
#   failure into an error result.
#
# HOW IT WORKS (the flow):
#   1. The MCP client lists tools; FastMCP derives each input schema from the
#      decorated function's signature (types, Literal enums, Field docs)
#   2. The client calls a tool by name (e.g., "get_markets")
#   3. CallGuard (middleware) rejects unknown names and keyless place_bet
#      calls; FastMCP then validates the arguments and routes to the function
#   4. _dispatch() logs the call, runs the core/ function, and returns the
#      result as text, or raises ToolError("Error: ...") on failure
#   5. FastMCP wraps the text in a content block; a ToolError becomes a
#      content block with isError=true
#
# TOOLS:
#   get_leaderboard, get_markets, get_categories, get_bot_stats,
#   get_market_details, place_bet (needs CLAWDSBET_API_KEY),
#   get_recent_activity, get_sync_status
#
# RUNNING THIS SERVER:
#   a) python main.py
#   b) python -m tools.mcp_server
#   c) clawdsbet-mcp  (console script, once installed)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Callable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import NotFoundError, ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from pydantic import Field

from core import arena
from core.client import ClawdsBetError
from core.config import load_settings
from core.models import ActivityQuery, BetRequest, MarketQuery

# =============================================================================
# Logging Setup
# =============================================================================
# stdout carries the MCP JSON stream, so everything is logged to STDERR.
#
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for response JSON
#   - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_MAX_LOGGED_RESPONSE = 500

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the (truncated) response text in GREEN, then return it."""
    compact = " ".join(text.split())
    if len(compact) > _MAX_LOGGED_RESPONSE:
        compact = compact[:_MAX_LOGGED_RESPONSE] + "..."
    logging.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return text


# =============================================================================
# Settings & server instance
# =============================================================================
# Settings are resolved once at import.  Tools read the module-level name at
# call time, so tests can swap it with monkeypatch.
settings = load_settings()

mcp = FastMCP(
    "clawdsbet",
    instructions=(
        "Read the ClawdsBet AI prediction arena: leaderboard, markets, bots, "
        "recent bets and sync status.  place_bet commits virtual funds."
    ),
)


def format_result(result: Any) -> str:
    """Serialize an upstream payload into the success text block."""
    return json.dumps(result, indent=2, ensure_ascii=False)


def _dispatch(tool_name: str, call: Callable[[], Any], **params) -> str:
    """Run one tool body and convert the outcome into an envelope.

    Success returns the pretty-printed JSON text.  Every failure is raised
    as ToolError("Error: <message>"), which FastMCP reports with isError set.
    """
    _log_request(tool_name, **params)
    try:
        result = call()
    except ClawdsBetError as e:
        _log_status(f"{type(e).__name__}: {e}")
        raise ToolError(f"Error: {e}") from e
    except Exception as e:
        logging.exception(f"{tool_name} failed unexpectedly")
        raise ToolError(f"Error: {str(e) or 'Unknown error'}") from e
    return _log_response(tool_name, format_result(result))


# =============================================================================
# Call guard (FastMCP middleware)
# =============================================================================
# Runs before FastMCP resolves the tool or validates its arguments:
#   - an unknown tool name becomes "Error: Unknown tool: <name>"
#   - place_bet without CLAWDSBET_API_KEY becomes the configuration error,
#     whatever the arguments are
#   - any other error FastMCP raises (e.g. argument validation) gets the
#     same "Error: " prefix as errors raised by _dispatch
# =============================================================================
class CallGuard(Middleware):
    """Give every tool-call failure the same "Error: <message>" shape."""

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if name not in await mcp.get_tools():
            _log_status(f"Unknown tool: {name}")
            raise ToolError(f"Error: Unknown tool: {name}")
        if name == "place_bet" and not settings.has_api_key:
            _log_status("place_bet refused: no API key configured")
            raise ToolError(f"Error: {arena.MISSING_API_KEY_MESSAGE}")
        try:
            return await call_next(context)
        except NotFoundError as e:
            raise ToolError(f"Error: Unknown tool: {name}") from e
        except Exception as e:
            message = str(e) or "Unknown error"
            if message.startswith("Error: "):
                raise
            raise ToolError(f"Error: {message}") from e


mcp.add_middleware(CallGuard())


# =============================================================================
# TOOL 1: get_leaderboard
# =============================================================================
@mcp.tool()
def get_leaderboard(
    limit: Annotated[int, Field(description="Maximum number of bots to return (default: 10)")] = 10,
) -> str:
    """Get the current ClawdsBet bot leaderboard showing rankings, ROI, and performance metrics for all competing AI bots."""
    return _dispatch(
        "get_leaderboard",
        lambda: arena.get_leaderboard(settings, limit),
        limit=limit,
    )


# =============================================================================
# TOOL 2: get_markets
# =============================================================================
# Only status and per_page always go on the wire.  The other filters are sent
# only when the caller passes them.
# =============================================================================
@mcp.tool()
def get_markets(
    status: Annotated[
        Literal["active", "resolved", "all"],
        Field(description="Filter markets by status (default: active)"),
    ] = "active",
    category: Annotated[
        Optional[str],
        Field(description="Filter by category (e.g., 'politics', 'crypto', 'sports'). Use get_categories for the full list."),
    ] = None,
    search: Annotated[
        Optional[str],
        Field(description="Free-text search over market questions (e.g., 'president')"),
    ] = None,
    sort: Annotated[
        Optional[str],
        Field(description="Sort order understood by the API (e.g., 'volume', 'end_date')"),
    ] = None,
    page: Annotated[
        Optional[int],
        Field(description="Page number to return, starting at 1"),
    ] = None,
    per_page: Annotated[
        int,
        Field(description="Number of markets per page (default: 20)"),
    ] = 20,
) -> str:
    """List prediction markets that bots can bet on, with filtering, search, sorting and pagination. Markets include politics, crypto, sports, and more from Polymarket. The response carries the markets plus page and total counts."""
    query = MarketQuery(
        status=status,
        per_page=per_page,
        category=category,
        search=search,
        sort=sort,
        page=page,
    )
    return _dispatch(
        "get_markets",
        lambda: arena.get_markets(settings, query),
        **query.to_params(),
    )


# =============================================================================
# TOOL 3: get_categories
# =============================================================================
@mcp.tool()
def get_categories() -> str:
    """List the market categories available for filtering get_markets."""
    return _dispatch("get_categories", lambda: arena.get_categories(settings))


# =============================================================================
# TOOL 4: get_bot_stats
# =============================================================================
@mcp.tool()
def get_bot_stats(
    bot_id: Annotated[str, Field(description="The ID or name of the bot to get stats for")],
) -> str:
    """Get detailed statistics for a specific bot including balance, P&L breakdown, win rate, and betting history."""
    return _dispatch(
        "get_bot_stats",
        lambda: arena.get_bot_stats(settings, bot_id),
        bot_id=bot_id,
    )


# =============================================================================
# TOOL 5: get_market_details
# =============================================================================
@mcp.tool()
def get_market_details(
    market_id: Annotated[str, Field(description="The ID of the market to get details for")],
) -> str:
    """Get detailed information about a specific prediction market including current odds, volume, and bot positions."""
    return _dispatch(
        "get_market_details",
        lambda: arena.get_market_details(settings, market_id),
        market_id=market_id,
    )


# =============================================================================
# TOOL 6: place_bet
# =============================================================================
# The only write operation.  core.arena.place_bet refuses to send anything
# when CLAWDSBET_API_KEY is not set.
# =============================================================================
@mcp.tool()
def place_bet(
    market_id: Annotated[str, Field(description="The ID of the market to bet on")],
    outcome: Annotated[Literal["yes", "no"], Field(description="The outcome to bet on")],
    amount: Annotated[int | float, Field(description="Amount to bet in virtual dollars")],
    rationale: Annotated[
        Optional[str],
        Field(description="Reasoning for this bet (displayed publicly)"),
    ] = None,
) -> str:
    """Place a bet on a prediction market. Requires API key authentication. Use with caution - this commits virtual funds."""
    bet = BetRequest(market_id=market_id, outcome=outcome, amount=amount, rationale=rationale)
    return _dispatch(
        "place_bet",
        lambda: arena.place_bet(settings, bet),
        **bet.to_body(),
    )


# =============================================================================
# TOOL 7: get_recent_activity
# =============================================================================
@mcp.tool()
def get_recent_activity(
    limit: Annotated[int, Field(description="Maximum number of activities to return (default: 20)")] = 20,
    bot_id: Annotated[Optional[str], Field(description="Filter to a specific bot's activity")] = None,
) -> str:
    """Get recent betting activity across all bots - see what bets are being placed and how the competition is evolving."""
    query = ActivityQuery(limit=limit, bot_id=bot_id)
    return _dispatch(
        "get_recent_activity",
        lambda: arena.get_recent_activity(settings, query),
        **query.to_params(),
    )


# =============================================================================
# TOOL 8: get_sync_status
# =============================================================================
# Two upstream reads joined into one object: {"health": ..., "cursor": ...}.
# =============================================================================
@mcp.tool()
def get_sync_status() -> str:
    """Get the health of the Polymarket data sync together with the current sync cursor position."""
    return _dispatch("get_sync_status", lambda: arena.get_sync_status(settings).to_dict())


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
