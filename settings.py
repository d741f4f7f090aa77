# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-10-03
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


SERVICE_NAME = "tabflow-api"
SERVICE_VERSION = "0.2.0"


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
EMBEDDING_DIMENSIONS = _env_int("TABFLOW_EMBEDDING_DIMENSIONS", 768)

# Ask the endpoint for EMBEDDING_DIMENSIONS-length output (Matryoshka models)
EMBEDDING_SEND_DIMENSIONS = _env_bool("TABFLOW_EMBEDDING_SEND_DIMENSIONS", True)

EMBEDDING_TIMEOUT_SECONDS = _env_float("TABFLOW_EMBEDDING_TIMEOUT_SECONDS", 30.0)

# 0 disables the in-process embedding cache
EMBEDDING_CACHE_SIZE = _env_int("TABFLOW_EMBEDDING_CACHE_SIZE", 0)


# -----------------------------------------------------------------------------
# Input limits
# -----------------------------------------------------------------------------
MAX_URL_CHARS = _env_int("TABFLOW_MAX_URL_CHARS", 2048)
MAX_TITLE_CHARS = 512
MAX_SUMMARY_CHARS = 5000
MAX_QUERY_CHARS = _env_int("TABFLOW_MAX_QUERY_CHARS", 500)


# -----------------------------------------------------------------------------
# Result size ceilings (k is clamped, never rejected, above these)
# -----------------------------------------------------------------------------
DEFAULT_K = _env_int("TABFLOW_DEFAULT_K", 10)
SEARCH_MAX_K = _env_int("TABFLOW_SEARCH_MAX_K", 50)
HISTORY_MAX_K = _env_int("TABFLOW_HISTORY_MAX_K", 30)
LISTING_MAX_K = _env_int("TABFLOW_LISTING_MAX_K", 100)


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------
DB_POOL_SIZE = _env_int("TABFLOW_DB_POOL_SIZE", 10)
DB_MAX_OVERFLOW = _env_int("TABFLOW_DB_MAX_OVERFLOW", 0)
DB_CREATE_SCHEMA = _env_bool("TABFLOW_DB_CREATE_SCHEMA", False)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBEDDING_DIMENSIONS <= 0:
    raise RuntimeError("EMBEDDING_DIMENSIONS must be positive")

for _name, _ceiling in (
    ("SEARCH_MAX_K", SEARCH_MAX_K),
    ("HISTORY_MAX_K", HISTORY_MAX_K),
    ("LISTING_MAX_K", LISTING_MAX_K),
):
    if _ceiling < 1:
        raise RuntimeError(f"{_name} must be at least 1, got {_ceiling}")

if DEFAULT_K < 1:
    raise RuntimeError(f"DEFAULT_K must be at least 1, got {DEFAULT_K}")
