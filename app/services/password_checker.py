import hashlib
import logging
import re
from dataclasses import dataclass, field

from app.core.errors import CollaboratorUnavailable, ValidationError
from app.core.features import Limit, get_global_limit
from app.core.text import replace_lone_surrogates
from app.services.breach.base import BreachProvider

logger = logging.getLogger(__name__)

# =========================================================
# STATIC DATA
# =========================================================

HIBP_SOURCE = "Have I Been Pwned API"
FALLBACK_SOURCE = "Fallback Check"

COMMON_PASSWORDS = {
    "password",
    "123456",
    "password123",
    "admin",
    "12345678",
}

UPPERCASE_RE = re.compile(r"[A-Z]")
LOWERCASE_RE = re.compile(r"[a-z]")
DIGIT_RE = re.compile(r"[0-9]")
SPECIAL_RE = re.compile(r"[^A-Za-z0-9]")

SUGGEST_TOO_SHORT = "Too short - Use at least 8 characters"
SUGGEST_UPPERCASE = "Add uppercase letters"
SUGGEST_LOWERCASE = "Add lowercase letters"
SUGGEST_NUMBERS = "Add numbers"
SUGGEST_SPECIAL = "Add special characters (!@#$%)"
SUGGEST_DANGEROUSLY_SHORT = "Password is dangerously short"


@dataclass
class StrengthReport:
    score: int
    label: str
    suggestions: list[str]
    has_uppercase: bool
    has_lowercase: bool
    has_numbers: bool
    has_special: bool


@dataclass
class PasswordAssessment:
    pwned: bool
    breach_count: int
    strength: str
    score: int
    length: int
    source: str
    note: str
    degraded: bool = False
    strength_report: StrengthReport | None = None
    suggestions: list[str] = field(default_factory=list)


# =========================================================
# FINGERPRINT
# =========================================================

def fingerprint(password: str) -> str:
    return hashlib.sha1(replace_lone_surrogates(password).encode("utf-8")).hexdigest().upper()


def split_fingerprint(digest: str) -> tuple[str, str]:
    return digest[:5], digest[5:]


# =========================================================
# STRENGTH
# =========================================================

def strength_label(score: int) -> str:
    if score >= 6:
        return "Very Strong"
    if score >= 4:
        return "Strong"
    if score >= 2:
        return "Moderate"
    if score >= 0:
        return "Weak"
    return "Very Weak"


def score_strength(password: str) -> StrengthReport:
    score = 0
    suggestions = []
    length = len(password)

    if length >= get_global_limit(Limit.PASSWORD_LONG_LENGTH):
        score += 3
    elif length >= get_global_limit(Limit.PASSWORD_GOOD_LENGTH):
        score += 2
    elif length >= get_global_limit(Limit.PASSWORD_MIN_LENGTH):
        score += 1
    else:
        suggestions.append(SUGGEST_TOO_SHORT)

    has_uppercase = bool(UPPERCASE_RE.search(password))
    has_lowercase = bool(LOWERCASE_RE.search(password))
    has_numbers = bool(DIGIT_RE.search(password))
    has_special = bool(SPECIAL_RE.search(password))

    if has_uppercase:
        score += 1
    else:
        suggestions.append(SUGGEST_UPPERCASE)

    if has_lowercase:
        score += 1
    else:
        suggestions.append(SUGGEST_LOWERCASE)

    if has_numbers:
        score += 1
    else:
        suggestions.append(SUGGEST_NUMBERS)

    # special characters weigh double
    if has_special:
        score += 2
    else:
        suggestions.append(SUGGEST_SPECIAL)

    label = strength_label(score)

    if length < get_global_limit(Limit.PASSWORD_DANGER_LENGTH):
        label = "Very Weak"
        suggestions.insert(0, SUGGEST_DANGEROUSLY_SHORT)

    return StrengthReport(
        score=score,
        label=label,
        suggestions=suggestions[: get_global_limit(Limit.PASSWORD_MAX_SUGGESTIONS)],
        has_uppercase=has_uppercase,
        has_lowercase=has_lowercase,
        has_numbers=has_numbers,
        has_special=has_special,
    )


# =========================================================
# FALLBACK
# =========================================================

def fallback_assessment(password: str) -> PasswordAssessment:
    pwned = password.lower() in COMMON_PASSWORDS
    length = len(password)

    if length >= get_global_limit(Limit.PASSWORD_GOOD_LENGTH):
        strength = "Strong"
    elif length >= get_global_limit(Limit.PASSWORD_MIN_LENGTH):
        strength = "Moderate"
    else:
        strength = "Weak"

    return PasswordAssessment(
        pwned=pwned,
        breach_count=get_global_limit(Limit.PASSWORD_FALLBACK_BREACH_COUNT) if pwned else 0,
        strength=strength,
        score=get_global_limit(Limit.PASSWORD_FALLBACK_SCORE),
        length=length,
        source=FALLBACK_SOURCE,
        note="Breach lookup unavailable - using fallback check",
        degraded=True,
    )


# =========================================================
# MAIN ENTRY
# =========================================================

def validate_password(password) -> str:
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")
    return password


def check_password(password, provider: BreachProvider) -> PasswordAssessment:
    password = validate_password(password)
    prefix, suffix = split_fingerprint(fingerprint(password))

    try:
        counts = provider.range_counts(prefix)
    except CollaboratorUnavailable:
        logger.warning("Breach lookup unavailable, using fallback password check")
        return fallback_assessment(password)

    breach_count = counts.get(suffix, 0)
    pwned = suffix in counts

    report = score_strength(password)

    if pwned:
        note = f"This password was found {breach_count:,} times in data breaches"
    else:
        note = "Good! This password is not in known breach databases"

    logger.info("Password check completed pwned=%s strength=%s", pwned, report.label)

    return PasswordAssessment(
        pwned=pwned,
        breach_count=breach_count,
        strength=report.label,
        score=report.score,
        length=len(password),
        source=HIBP_SOURCE,
        note=note,
        strength_report=report,
        suggestions=report.suggestions,
    )
