# =============================================================================
# core/models.py  -  Request & Result Shapes
# =============================================================================
#
# These dataclasses describe what each tool sends upstream.  A field left at
# None means "the caller did not provide it" and is dropped before the
# request is built, so absent optional arguments never reach the wire as
# empty or default-valued parameters.
#
# Fields are declared in the order they appear in the query string.
# =============================================================================

from dataclasses import dataclass, fields
from typing import Any, Optional


def _present(obj) -> dict[str, Any]:
    """Return the dataclass fields of obj whose value is not None."""
    return {
        f.name: getattr(obj, f.name)
        for f in fields(obj)
        if getattr(obj, f.name) is not None
    }


# -----------------------------------------------------------------------------
# MarketQuery  -  GET /markets
# -----------------------------------------------------------------------------
@dataclass
class MarketQuery:
    """Filter, search, sort and pagination for the market listing."""

    status: str = "active"             # "active", "resolved" or "all"
    per_page: int = 20
    category: Optional[str] = None     # e.g. "politics", "crypto", "sports"
    search: Optional[str] = None       # free-text match on the market question
    sort: Optional[str] = None
    page: Optional[int] = None         # 1-based

    def to_params(self) -> dict[str, Any]:
        params = _present(self)
        # An empty string filter is treated as "not provided".
        for key in ("category", "search", "sort"):
            if params.get(key) == "":
                del params[key]
        return params


# -----------------------------------------------------------------------------
# ActivityQuery  -  GET /bets
# -----------------------------------------------------------------------------
@dataclass
class ActivityQuery:
    """Recent betting activity, optionally narrowed to one bot."""

    limit: int = 20
    bot_id: Optional[str] = None

    def to_params(self) -> dict[str, Any]:
        params = _present(self)
        if params.get("bot_id") == "":
            del params["bot_id"]
        return params


# -----------------------------------------------------------------------------
# BetRequest  -  POST /bets
# -----------------------------------------------------------------------------
@dataclass
class BetRequest:
    """A bet on one outcome of one market, paid in virtual dollars."""

    market_id: str
    outcome: str                       # "yes" or "no"
    amount: int | float
    rationale: Optional[str] = None    # shown publicly next to the bet

    def to_body(self) -> dict[str, Any]:
        return _present(self)


# -----------------------------------------------------------------------------
# SyncStatus  -  composite of the two monitoring endpoints
# -----------------------------------------------------------------------------
@dataclass
class SyncStatus:
    """Market-sync health and cursor position, fetched together."""

    health: Any                        # payload of /monitoring/health/sync
    cursor: Any                        # payload of /monitoring/sync-cursor

    def to_dict(self) -> dict[str, Any]:
        return {"health": self.health, "cursor": self.cursor}
