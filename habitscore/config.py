"""Configuration — loads environment variables with sensible defaults.

All tunables live here. Override via .env file or environment variables.
Window sizes and thresholds are read from here, never hardcoded elsewhere.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

def _env(key: str, default: str = "") -> str:
    return os.getenv(key, default)

def _env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))

def _env_bool(key: str, default: bool = False) -> bool:
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes")


# ═══════════════════════════════════════════════════════════════════════════
# Owner
# ═══════════════════════════════════════════════════════════════════════════
# There is no login here: the CLI acts on behalf of a single user id.

OWNER_USER_ID = _env_int("OWNER_USER_ID", 1)

# ═══════════════════════════════════════════════════════════════════════════
# Scoring
# ═══════════════════════════════════════════════════════════════════════════

# Used when a user has no settings row yet. Always within [0, 100].
DEFAULT_PASS_PERCENTAGE = min(max(_env_int("DEFAULT_PASS_PERCENTAGE", 80), 0), 100)

HABIT_NAME_MAX_LENGTH = _env_int("HABIT_NAME_MAX_LENGTH", 80)

# ═══════════════════════════════════════════════════════════════════════════
# Charts
# ═══════════════════════════════════════════════════════════════════════════
# LOOKBACK_DAYS bounds how far back completions are loaded for the charts.
# It must cover SERIES_BUCKET_LIMIT weeks (12 * 7 = 84 days) to fill the
# weekly chart; the month chart is limited by it instead.

LOOKBACK_DAYS = _env_int("LOOKBACK_DAYS", 120)
DAY_SERIES_DAYS = _env_int("DAY_SERIES_DAYS", 30)
SERIES_BUCKET_LIMIT = _env_int("SERIES_BUCKET_LIMIT", 12)

# ═══════════════════════════════════════════════════════════════════════════
# Database
# ═══════════════════════════════════════════════════════════════════════════

DB_PATH = Path(_env("HABITSCORE_DB_PATH") or _PROJECT_ROOT / "data" / "habitscore.db")

# ═══════════════════════════════════════════════════════════════════════════
# Logging
# ═══════════════════════════════════════════════════════════════════════════

# CLI output goes to stdout; logs go to stderr, quiet unless raised here.
LOG_LEVEL = _env("LOG_LEVEL", "WARNING").upper()
LOG_SQL = _env_bool("LOG_SQL", False)

# ═══════════════════════════════════════════════════════════════════════════
# Timezone (default UTC, override for your locale in .env)
# ═══════════════════════════════════════════════════════════════════════════
# Only used to decide what "today" is when the caller doesn't say.

TIMEZONE_OFFSET_HOURS = _env_int("TIMEZONE_OFFSET_HOURS", 0)
