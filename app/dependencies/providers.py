from __future__ import annotations

from app.services.breach.base import BreachProvider
from app.services.breach.manager import get_breach_provider
from app.services.email_rules import EmailRules, get_email_rules


def breach_provider() -> BreachProvider:
    return get_breach_provider()


def email_rules() -> EmailRules:
    return get_email_rules()
