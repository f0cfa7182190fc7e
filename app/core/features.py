from __future__ import annotations

from enum import Enum


class Feature(str, Enum):
    PASSWORD_BREACH_CHECK = "Real HIBP Password Checking"
    EMAIL_BREACH_CHECK = "Reliable Email Breach Checking"
    DOMAIN_SCAN = "Domain Security Scanning"
    IP_GEOLOCATION = "IP Geolocation"
    SECURITY_NEWS = "Security News"


class Limit(str, Enum):
    PASSWORD_DANGER_LENGTH = "PASSWORD_DANGER_LENGTH"
    PASSWORD_MIN_LENGTH = "PASSWORD_MIN_LENGTH"
    PASSWORD_GOOD_LENGTH = "PASSWORD_GOOD_LENGTH"
    PASSWORD_LONG_LENGTH = "PASSWORD_LONG_LENGTH"
    PASSWORD_MAX_SCORE = "PASSWORD_MAX_SCORE"
    PASSWORD_MAX_SUGGESTIONS = "PASSWORD_MAX_SUGGESTIONS"
    PASSWORD_FALLBACK_SCORE = "PASSWORD_FALLBACK_SCORE"
    PASSWORD_FALLBACK_BREACH_COUNT = "PASSWORD_FALLBACK_BREACH_COUNT"


ENABLED_FEATURES: list[Feature] = [
    Feature.PASSWORD_BREACH_CHECK,
    Feature.EMAIL_BREACH_CHECK,
    Feature.DOMAIN_SCAN,
    Feature.IP_GEOLOCATION,
    Feature.SECURITY_NEWS,
]


GLOBAL_LIMITS: dict[Limit, int] = {
    Limit.PASSWORD_DANGER_LENGTH: 4,
    Limit.PASSWORD_MIN_LENGTH: 8,
    Limit.PASSWORD_GOOD_LENGTH: 12,
    Limit.PASSWORD_LONG_LENGTH: 16,
    Limit.PASSWORD_MAX_SCORE: 8,
    Limit.PASSWORD_MAX_SUGGESTIONS: 4,
    Limit.PASSWORD_FALLBACK_SCORE: 2,
    Limit.PASSWORD_FALLBACK_BREACH_COUNT: 1_000_000,
}


def get_global_limit(limit: Limit | str) -> int:
    resolved = Limit(limit) if isinstance(limit, str) else limit
    return GLOBAL_LIMITS[resolved]


def feature_names() -> list[str]:
    return [feature.value for feature in ENABLED_FEATURES]
