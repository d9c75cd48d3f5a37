import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_GAME_TTL_SECONDS = 3600.0


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _parse_ttl(env_var: str, default: float = DEFAULT_GAME_TTL_SECONDS) -> float:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default

    try:
        return float(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid number of seconds (got %r); defaulting to %.0f",
            env_var,
            raw_value,
            default,
        )
        return default


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Idle games are dropped after this many seconds; 0 or less keeps them forever.
GAME_TTL_SECONDS = _parse_ttl("GAME_TTL_SECONDS")
