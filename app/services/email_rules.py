from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, PrivateAttr, field_validator

from app.core import config

logger = logging.getLogger(__name__)

_rules: EmailRules | None = None


class EmailRules(BaseModel):
    """
    Hand-maintained email lookup lists.

    Evaluated in field order: known_breached, known_safe,
    common_breached, then safe_patterns. First match wins.
    """

    known_breached: list[str] = []
    known_safe: list[str] = []
    common_breached: list[str] = []
    safe_patterns: list[str] = []

    _compiled: list[re.Pattern] = PrivateAttr(default_factory=list)

    @field_validator("known_breached", "known_safe", "common_breached")
    @classmethod
    def lowercase_entries(cls, value: list[str]) -> list[str]:
        return [entry.strip().lower() for entry in value if entry and entry.strip()]

    @field_validator("safe_patterns")
    @classmethod
    def check_patterns(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid safe pattern {pattern!r}: {exc}") from exc
        return value

    def model_post_init(self, context) -> None:
        self._compiled = [re.compile(pattern) for pattern in self.safe_patterns]

    def matches_safe_pattern(self, email_lower: str) -> bool:
        return any(pattern.search(email_lower) for pattern in self._compiled)


def load_email_rules(path: Path | str = config.EMAIL_RULES_PATH) -> EmailRules:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    rules = EmailRules(**data)

    logger.info(
        "Email rules loaded from %s (breached=%d safe=%d common=%d patterns=%d)",
        p,
        len(rules.known_breached),
        len(rules.known_safe),
        len(rules.common_breached),
        len(rules.safe_patterns),
    )
    return rules


def get_email_rules() -> EmailRules:
    global _rules
    if _rules is None:
        _rules = load_email_rules()
    return _rules
