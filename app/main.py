"""
KMWF Beneficiary Assessment Engine: FastAPI Application Entry Point

POST /v1/assessment/calculate  → synchronous scoring
POST /v1/assessment/survey     → aggregate + score a field survey
POST /v1/beneficiary/card      → derive a beneficiary card on approval
GET  /v1/assessment/health     → health check
GET  /docs                     → OpenAPI / Swagger UI
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.api.admin_endpoint import router as admin_router
from app.api.assessment_endpoint import router as assessment_router
from app.api.beneficiary_endpoint import router as beneficiary_router
from app.core.config import get_settings

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if get_settings().app_env == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(get_settings().log_level),
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("assessment_engine_starting", model_version=get_settings().scoring_model_version)
    yield
    logger.info("assessment_engine_shutting_down")


app = FastAPI(
    title="KMWF Beneficiary Assessment Engine",
    description="Survey-based eligibility scoring for sponsorship applicants",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (sponsorship web app) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

# ── Prometheus metrics ──
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ──
app.include_router(assessment_router)
app.include_router(beneficiary_router)
app.include_router(admin_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": get_settings().app_name,
        "version": "1.0.0",
        "docs": "/docs",
        "calculate": "POST /v1/assessment/calculate",
    }
