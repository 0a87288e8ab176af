# app/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.routers.workouts import router as workouts_router
from app.routers.exercises import router as exercises_router
from app.routers.stats import router as stats_router
from app.routers.webhook import router as webhook_router
from app.db import SessionLocal, init_db  # SessionLocal for healthz DB check
from app.settings import get_settings

log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(_app: FastAPI):
    if get_settings().DB_AUTO_CREATE:
        init_db()
        log.info("database tables ensured")
    yield

app = FastAPI(
    title="LiftLog API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "workouts", "description": "Logged workouts with their exercises"},
        {"name": "exercises", "description": "Per-exercise progress and catalogue"},
        {"name": "stats", "description": "Aggregate training stats"},
        {"name": "webhook", "description": "SMS workout submissions"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(workouts_router)
app.include_router(exercises_router)
app.include_router(stats_router)
app.include_router(webhook_router)
