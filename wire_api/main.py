"""W.I.R.E. API — FastAPI application entry point."""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wire_api.routes import ac, metrics

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(
    title="W.I.R.E. API",
    description="Electrical quantity resolution for the circuit-building workspace",
    version="0.1.0",
)

# CORS — allow frontend origins
_frontend_url = os.getenv("FRONTEND_URL")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_frontend_url] if _frontend_url else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route modules
app.include_router(metrics.router, prefix="/api", tags=["DC Metrics"])
app.include_router(ac.router, prefix="/api", tags=["AC Analysis"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "wire-api"}
