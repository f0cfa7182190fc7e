import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

APP_NAME = "SecuraScan Security API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

HIBP_RANGE_URL = os.getenv("HIBP_RANGE_URL", "https://api.pwnedpasswords.com/range").rstrip("/")
HIBP_TIMEOUT_SECONDS = float(os.getenv("HIBP_TIMEOUT_SECONDS", "10"))
HIBP_USER_AGENT = os.getenv("HIBP_USER_AGENT", "securascan-Security-App")

EMAIL_RULES_PATH = Path(
    os.getenv("EMAIL_RULES_PATH", str(BASE_DIR / "data" / "email_rules.json"))
)


def get_cors_origins() -> list[str]:
    configured_origins = os.getenv("CORS_ORIGINS", "").strip()
    if configured_origins:
        return [origin.strip() for origin in configured_origins.split(",") if origin.strip()]
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
