"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "3000"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./charger_status.db",
    )

# Charger status cache (read path).
STATUS_CACHE_TTL_MS = int(os.environ.get("STATUS_CACHE_TTL_MS", "5000"))
STATUS_CACHE_MAX_SIZE = int(os.environ.get("STATUS_CACHE_MAX_SIZE", "1000"))

# API key -> partner cache (authentication).
PARTNER_CACHE_TTL_MS = int(os.environ.get("PARTNER_CACHE_TTL_MS", str(5 * 60 * 1000)))
PARTNER_CACHE_MAX_SIZE = int(os.environ.get("PARTNER_CACHE_MAX_SIZE", "10000"))
PARTNER_CACHE_SWEEP_INTERVAL_S = float(os.environ.get("PARTNER_CACHE_SWEEP_INTERVAL_S", "60"))

# Backing-store deadlines. Reads stay shorter than writes.
OWNERSHIP_CHECK_TIMEOUT_MS = int(os.environ.get("OWNERSHIP_CHECK_TIMEOUT_MS", "3000"))
STATUS_UPDATE_TIMEOUT_MS = int(os.environ.get("STATUS_UPDATE_TIMEOUT_MS", "5000"))
STATUS_READ_TIMEOUT_MS = int(os.environ.get("STATUS_READ_TIMEOUT_MS", "2000"))
AUTH_LOOKUP_TIMEOUT_MS = int(os.environ.get("AUTH_LOOKUP_TIMEOUT_MS", "3000"))

# X-Load-Test: true skips the ownership check on status updates. Load-test escape hatch only.
LOAD_TEST_BYPASS_ENABLED = os.environ.get("LOAD_TEST_BYPASS_ENABLED", "false").lower() == "true"

PARTNER_PAGE_MAX_LIMIT = int(os.environ.get("PARTNER_PAGE_MAX_LIMIT", "100"))
