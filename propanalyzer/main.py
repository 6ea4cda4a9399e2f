import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propanalyzer.api.calculate import router as calculate_router
from propanalyzer.api.health import router as health_router
from propanalyzer.core.config import settings
from propanalyzer.telemetry import setup_otel_if_configured

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

app = FastAPI(title="Property Analyzer API", version="0.1.0")
setup_otel_if_configured(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="")
app.include_router(calculate_router, prefix="")
