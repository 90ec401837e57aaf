import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.dependencies import get_stores
from app.exceptions import AppError
from app.logging_config import configure_logging
from app.schemas.responses import CompanyInfo, ErrorResponse

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    stores = get_stores()
    logger.info("Starting %s (record store: %s)", settings.app_name, stores.transactions.backend_name)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Contact/quote intake, simulated multi-method payments and admin dashboard",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump(exclude_none=True))


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "environment": get_settings().environment,
        "version": VERSION,
    }


@app.get("/api/company-info", response_model=CompanyInfo)
def company_info():
    s = get_settings()
    return CompanyInfo(name=s.company_name, email=s.company_email, phone=s.company_phone, address=s.company_address)


from app.routers import admin, client, payments, tickets  # noqa: E402
app.include_router(payments.router, prefix="/api", tags=["payments"])
app.include_router(tickets.router, prefix="/api", tags=["tickets"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(client.router, prefix="/api/client", tags=["client"])
