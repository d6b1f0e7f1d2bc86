"""FastAPI application exposing subscription checks."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plangate.app.feature_gates import FeatureGateError
from plangate.app.routes.entitlements import router as entitlements_router

load_dotenv()

logger = logging.getLogger("plangate")

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

app = FastAPI(title="Plangate API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(entitlements_router)


@app.exception_handler(FeatureGateError)
async def handle_feature_gate_error(request: Request, exc: FeatureGateError) -> JSONResponse:
    logger.info(
        "Feature gate denied request",
        extra={"path": request.url.path, "error_code": exc.code},
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": dict(exc.payload)})


@app.get("/api/health")
def health() -> dict:
    return {"status": "ok"}
