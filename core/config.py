# =============================================================================
# core/config.py  -  Runtime Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Resolves the upstream base URL, the optional API key and the request
#   timeout from the environment, once, into a frozen Settings object.
#
# ENVIRONMENT VARIABLES:
#   CLAWDSBET_API_URL  - API base URL (default: https://clawdsbet.com/api)
#   CLAWDSBET_API_KEY  - API key for authenticated operations (default: "")
#   CLAWDSBET_TIMEOUT  - Per-request timeout in seconds (default: 30)
#
#   A .env file in the working directory is loaded first.  Variables that
#   are already set in the real environment are not overridden.
# =============================================================================

from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://clawdsbet.com/api"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Read-only configuration shared by every tool call."""

    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid CLAWDSBET_TIMEOUT={raw!r}")
        return DEFAULT_TIMEOUT_SECONDS
    if value <= 0:
        logger.warning(f"Ignoring non-positive CLAWDSBET_TIMEOUT={raw!r}")
        return DEFAULT_TIMEOUT_SECONDS
    return value


def load_settings(env: dict[str, str] | None = None) -> Settings:
    """Build Settings from the process environment (or an explicit mapping).

    Args:
        env: Mapping to read instead of os.environ.  When omitted, a .env
             file is loaded into the process environment first.

    Returns:
        A frozen Settings instance.
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    api_url = (env.get("CLAWDSBET_API_URL") or DEFAULT_API_URL).rstrip("/")
    return Settings(
        api_url=api_url,
        api_key=env.get("CLAWDSBET_API_KEY", "").strip(),
        timeout=_parse_timeout(env.get("CLAWDSBET_TIMEOUT")),
    )
