import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s"
)

logger = logging.getLogger(__name__)

from app.core import config
from app.core.errors import ValidationError
from app.core.features import feature_names
from app.core.timestamps import utc_timestamp

app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
)

from app.middleware.security import SecurityHeadersMiddleware, SecurityLoggingMiddleware
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(SecurityLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Rejected request path=%s reason=%s", request.url.path, exc.message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed body path=%s", request.url.path)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request body"},
    )


@app.on_event("startup")
def startup():
    logger.info("%s starting up", config.APP_NAME)

    from app.services.email_rules import get_email_rules
    get_email_rules()

    logger.info("Startup completed")


from app.routes.security import router as security_router
from app.routes.intel import router as intel_router

app.include_router(security_router)
app.include_router(intel_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "OK",
        "message": config.APP_NAME,
        "version": config.APP_VERSION,
        "timestamp": utc_timestamp(),
        "features": feature_names(),
    }


@app.get("/")
def root():
    return {
        "name": config.APP_NAME,
        "description": "Reliable cybersecurity monitoring",
        "version": config.APP_VERSION,
        "timestamp": utc_timestamp(),
        "endpoints": {
            "password": "POST /api/security/check-password",
            "email": "POST /api/security/check-email",
            "domain": "POST /api/security/scan-domain",
            "ip": "GET /api/security/my-ip",
            "news": "GET /api/security/security-news",
            "usage": "GET /api/security/api-usage",
            "health": "GET /api/health",
        },
        "note": "Password checking uses real HIBP API. Email checking uses reliable pattern matching.",
    }


def run():
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
