import os

# --- Storage ---

DB_PATH = os.getenv("SIPCALC_DB_PATH", "sipcalc.db")

# Saved calculations beyond this count are discarded oldest-first.
HISTORY_LIMIT = int(os.getenv("SIPCALC_HISTORY_LIMIT", "50"))

# Drafts older than this are dropped the next time they are read.
DRAFT_TTL_HOURS = float(os.getenv("SIPCALC_DRAFT_TTL_HOURS", "24"))

# --- HTTP ---

LOG_LEVEL = os.getenv("SIPCALC_LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "SIPCALC_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
    if origin.strip()
]
