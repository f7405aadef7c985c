import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from krishi_sakhi.advisor.service import get_advisor
from krishi_sakhi.api.v1.router import api_v1_router
from krishi_sakhi.core.config import settings, validate_settings_for_production
from krishi_sakhi.core.logging import setup_logging
from krishi_sakhi.core.metrics import PrometheusMiddleware, metrics_response
from krishi_sakhi.core.sentry import init_sentry

# Configure logging before anything else
setup_logging()
init_sentry()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    validate_settings_for_production()
    advisor = get_advisor()
    if advisor.is_configured():
        logger.info(
            "Starting Krishi Sakhi advisor (models=%s, min_interval=%dms)",
            ", ".join(advisor.model_candidates),
            advisor.throttle.min_interval_ms,
        )
    else:
        logger.warning("GEMINI_API_KEY is not set; advice requests will be refused")

    yield

    logger.info("Krishi Sakhi advisor shut down")


app = FastAPI(
    title="Krishi Sakhi",
    description="Multilingual farming advisor for Kerala smallholders",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.app_debug else None,
    redoc_url="/api/redoc" if settings.app_debug else None,
)


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled %s on %s %s:\n%s", type(exc).__name__, request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.add_middleware(PrometheusMiddleware)

# CORS: parse allowed_origins from settings (comma-separated)
_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(api_v1_router)


@app.get("/api/v1/health")
async def health():
    return {
        "status": "ok",
        "configured": get_advisor().is_configured(),
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_response()
