# parish/main.py
import logging
import os
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

# Ensure all SQLAlchemy models are imported so relationships resolve
import parish.models  # noqa: F401

from parish.api import (
    donations,
    events,
    faithful,
    hello,
    intentions,
    masses,
    priests,
    sacrament_info,
    statistics,
)
from parish.api.system import router as system_router
from parish.exceptions import NotFoundError, ValidationFailedError
from parish.schemas.common import TIMESTAMP_FORMAT

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,http://127.0.0.1:3000,"
    "http://localhost:5173,http://127.0.0.1:5173"
)
UNEXPECTED_PREFIX = "Ikosa ritunguranye: "

app = FastAPI(title="Parish Registry")

# --- CORS for local frontend dev ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─────────────────────────────────────────────────────────────────────────────
# Error mapping
# ─────────────────────────────────────────────────────────────────────────────

def _error_body(status: int, error: str, message: str, request: Request) -> dict:
    return {
        "status": status,
        "error": error,
        "message": message,
        "path": request.url.path,
        "timestamp": datetime.now().strftime(TIMESTAMP_FORMAT),
    }


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_body(404, "Not Found", exc.message, request))


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    body = _error_body(400, "Validation Failed", exc.message, request)
    if exc.field_errors:
        body["errors"] = {to_camel(k): v for k, v in exc.field_errors.items()}
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Flatten pydantic errors to {field: message}, field names as sent on the wire."""
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "request"
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        errors.setdefault(field, msg)
    return JSONResponse(status_code=400, content=errors)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": f"{UNEXPECTED_PREFIX}{exc}"})


# Routers
app.include_router(system_router)  # /health, /version
app.include_router(hello.router)  # /hello
app.include_router(hello.api_router)  # /api/hello

# sacrament-info first: /api/faithful/search must not be read as an id
app.include_router(sacrament_info.router)
app.include_router(faithful.router)  # /api/faithful
app.include_router(donations.router)  # /api/donations
app.include_router(priests.router)  # /api/priests
app.include_router(masses.router)  # /api/masses
app.include_router(events.router)  # /api/events
app.include_router(intentions.router)  # /api/intentions
app.include_router(statistics.router)  # /api/statistics
