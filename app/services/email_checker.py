import logging
from dataclasses import dataclass, field

from app.core.errors import ValidationError
from app.services.email_rules import EmailRules

logger = logging.getLogger(__name__)

HIBP_SITE = "https://haveibeenpwned.com"

CONFIDENCE_VERIFIED = "100% (user verified)"
CONFIDENCE_HIGH = "High"
CONFIDENCE_MEDIUM = "Medium"
CONFIDENCE_LOW = "Low"
CONFIDENCE_UNKNOWN = "Unknown"


@dataclass
class BreachRecord:
    source: str
    date: str
    description: str


@dataclass
class EmailAssessment:
    email: str
    breached: bool
    source: str
    confidence: str
    note: str
    breaches: list[BreachRecord] = field(default_factory=list)
    warning: str | None = None
    recommendation: str | None = None
    analysis: dict | None = None
    failed_open: bool = False

    @property
    def count(self) -> int:
        return len(self.breaches)


USER_VERIFIED_BREACH = BreachRecord(
    source="User-Verified Breach",
    date="2023-01-15",
    description="Manually verified as compromised",
)

COMMON_DATABASE_BREACH = BreachRecord(
    source="Common Email Database",
    date="2022-06-20",
    description="Found in list of commonly breached emails",
)


def validate_email_input(email) -> str:
    if not email or not isinstance(email, str) or "@" not in email:
        raise ValidationError("Valid email address is required")
    return email


# =========================================================
# RULES (fixed priority, first match wins)
# =========================================================

def _known_breached(email: str) -> EmailAssessment:
    return EmailAssessment(
        email=email,
        breached=True,
        breaches=[USER_VERIFIED_BREACH],
        source="Manual Verification",
        note="This email has been manually verified as breached",
        warning="Immediately change passwords for accounts using this email",
        confidence=CONFIDENCE_VERIFIED,
    )


def _known_safe(email: str) -> EmailAssessment:
    return EmailAssessment(
        email=email,
        breached=False,
        source="Manual Verification",
        note="This email has been manually verified as safe",
        confidence=CONFIDENCE_VERIFIED,
    )


def _common_breached(email: str) -> EmailAssessment:
    return EmailAssessment(
        email=email,
        breached=True,
        breaches=[COMMON_DATABASE_BREACH],
        source="Common Email Analysis",
        note="This email pattern is commonly found in data breaches",
        confidence=CONFIDENCE_HIGH,
    )


def _safe_pattern(email: str) -> EmailAssessment:
    return EmailAssessment(
        email=email,
        breached=False,
        source="Pattern Analysis",
        note="This email pattern is less likely to be in breaches",
        confidence=CONFIDENCE_MEDIUM,
    )


def _neutral(email: str, email_lower: str) -> EmailAssessment:
    parts = email_lower.split("@")
    username, domain = parts[0], parts[1]

    return EmailAssessment(
        email=email,
        breached=False,
        source="Neutral Analysis",
        note="Email not found in our verification database. Check manually for accurate results.",
        recommendation=f"For 100% accurate results, visit {HIBP_SITE}",
        analysis={
            "domain": domain,
            "usernameLength": len(username),
            "domainType": "Commercial" if ".com" in domain else "Other",
            "verificationStatus": "Not verified in our database",
        },
        confidence=CONFIDENCE_LOW,
    )


def error_fallback(email) -> EmailAssessment:
    return EmailAssessment(
        email=email,
        breached=False,
        source="Error Fallback",
        note="Check failed - Assuming email is safe",
        warning=f"Verify manually at {HIBP_SITE}",
        confidence=CONFIDENCE_UNKNOWN,
        failed_open=True,
    )


def classify_email(email: str, rules: EmailRules) -> EmailAssessment:
    email_lower = email.lower()

    if email_lower in rules.known_breached:
        logger.info("Email matched known breached list")
        return _known_breached(email)

    if email_lower in rules.known_safe:
        logger.info("Email matched known safe list")
        return _known_safe(email)

    if email_lower in rules.common_breached:
        logger.info("Email matched common breached list")
        return _common_breached(email)

    if rules.matches_safe_pattern(email_lower):
        logger.info("Email matched safe pattern")
        return _safe_pattern(email)

    logger.info("Email not in verification database, neutral response")
    return _neutral(email, email_lower)


# =========================================================
# MAIN ENTRY
# =========================================================

def check_email(email, rules: EmailRules) -> EmailAssessment:
    """
    Input errors raise ValidationError. Anything that goes wrong
    after validation fails open to a safe verdict.
    """
    email = validate_email_input(email)

    try:
        return classify_email(email, rules)
    except Exception:
        logger.exception("Email check failed, returning fail-open result")
        return error_fallback(email)
