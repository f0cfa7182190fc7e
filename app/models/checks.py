from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from app.core.text import replace_lone_surrogates


# Request fields are typed loosely so that missing or non-string
# values reach the services and come back as a 400 with our error shape.

class CheckRequest(BaseModel):

    @field_validator("*")
    @classmethod
    def scrub_surrogates(cls, value: Any) -> Any:
        # echoed inputs must survive UTF-8 serialization
        if isinstance(value, str):
            return replace_lone_surrogates(value)
        return value


class PasswordCheckRequest(CheckRequest):
    password: Any = None


class EmailCheckRequest(CheckRequest):
    email: Any = None


class DomainScanRequest(CheckRequest):
    domain: Any = None


class PasswordCheckResponse(BaseModel):
    success: bool = True
    pwned: bool
    breachCount: int
    strength: str
    score: int

    # Omitted on the fallback path
    maxScore: Optional[int] = None
    length: Optional[int] = None
    hasUppercase: Optional[bool] = None
    hasLowercase: Optional[bool] = None
    hasNumbers: Optional[bool] = None
    hasSpecial: Optional[bool] = None
    suggestions: Optional[List[str]] = None

    source: str
    timestamp: str
    note: str


class BreachRecordOut(BaseModel):
    source: str
    date: str
    description: str


class EmailCheckResponse(BaseModel):
    success: bool = True
    email: Any
    breached: bool
    breaches: List[BreachRecordOut]
    count: int
    source: str
    timestamp: str
    note: str
    confidence: str

    warning: Optional[str] = None
    recommendation: Optional[str] = None
    analysis: Optional[Dict[str, Any]] = None
