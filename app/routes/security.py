from dataclasses import asdict

from fastapi import APIRouter, Depends

from app.core.features import Limit, get_global_limit
from app.core.timestamps import utc_timestamp
from app.dependencies.providers import breach_provider, email_rules
from app.models.checks import (
    EmailCheckRequest,
    EmailCheckResponse,
    PasswordCheckRequest,
    PasswordCheckResponse,
)
from app.services.breach.base import BreachProvider
from app.services.email_checker import check_email
from app.services.email_rules import EmailRules
from app.services.password_checker import check_password

router = APIRouter(prefix="/api/security", tags=["Security Checks"])


# =========================================================
# PASSWORD CHECK
# =========================================================

@router.post(
    "/check-password",
    response_model=PasswordCheckResponse,
    response_model_exclude_none=True,
)
def password_check(
    payload: PasswordCheckRequest | None = None,
    provider: BreachProvider = Depends(breach_provider),
):
    # an empty body is treated like {}
    payload = payload or PasswordCheckRequest()
    result = check_password(payload.password, provider)

    response = PasswordCheckResponse(
        pwned=result.pwned,
        breachCount=result.breach_count,
        strength=result.strength,
        score=result.score,
        source=result.source,
        timestamp=utc_timestamp(),
        note=result.note,
    )

    report = result.strength_report
    if not result.degraded:
        response.maxScore = get_global_limit(Limit.PASSWORD_MAX_SCORE)
        response.length = result.length
        response.hasUppercase = report.has_uppercase
        response.hasLowercase = report.has_lowercase
        response.hasNumbers = report.has_numbers
        response.hasSpecial = report.has_special
        response.suggestions = result.suggestions

    return response


# =========================================================
# EMAIL CHECK
# =========================================================

@router.post(
    "/check-email",
    response_model=EmailCheckResponse,
    response_model_exclude_none=True,
)
def email_check(
    payload: EmailCheckRequest | None = None,
    rules: EmailRules = Depends(email_rules),
):
    payload = payload or EmailCheckRequest()
    result = check_email(payload.email, rules)

    return EmailCheckResponse(
        email=result.email,
        breached=result.breached,
        breaches=[asdict(record) for record in result.breaches],
        count=result.count,
        source=result.source,
        timestamp=utc_timestamp(),
        note=result.note,
        confidence=result.confidence,
        warning=result.warning,
        recommendation=result.recommendation,
        analysis=result.analysis,
    )
