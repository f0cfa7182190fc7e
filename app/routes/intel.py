import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.errors import ValidationError
from app.core.timestamps import utc_timestamp
from app.models.checks import DomainScanRequest

router = APIRouter(prefix="/api/security", tags=["Threat Intel"])
logger = logging.getLogger(__name__)

# Placeholder data until real reputation / geo providers are wired in.
MOCK_IP = "8.8.8.8"
MOCK_COUNTRY = "United States"


def domain_reputation(domain: str) -> dict:
    return {
        "success": True,
        "domain": domain,
        "reputation": "Clean",
        "malicious": 0,
        "harmless": 65,
        "timestamp": utc_timestamp(),
        "note": "Add VirusTotal API key for real scanning",
    }


@router.post("/scan-domain")
def scan_domain(payload: DomainScanRequest | None = None):
    payload = payload or DomainScanRequest()
    if not payload.domain:
        raise ValidationError("Domain is required")

    try:
        logger.info("Scanning domain: %s", payload.domain)
        return domain_reputation(payload.domain)
    except Exception:
        logger.exception("Domain scan failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Domain scan failed"},
        )


@router.get("/my-ip")
def my_ip():
    return {
        "success": True,
        "ip": MOCK_IP,
        "country": MOCK_COUNTRY,
        "timestamp": utc_timestamp(),
    }


@router.get("/security-news")
def security_news():
    return {
        "success": True,
        "stories": [],
        "timestamp": utc_timestamp(),
    }


@router.get("/api-usage")
def api_usage():
    return {
        "success": True,
        "usage": {},
        "timestamp": utc_timestamp(),
    }
