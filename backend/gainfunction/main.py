# gainfunction/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from gainfunction.db import SessionLocal, engine, init_database  # SessionLocal for healthz DB check
from gainfunction.routers.exercises import router as exercises_router
from gainfunction.routers.templates import router as templates_router
from gainfunction.routers.workouts import router as workouts_router
from gainfunction.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()
logging.getLogger("gainfunction").setLevel(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    created = init_database(
        engine, SessionLocal, schema_version=settings.SCHEMA_VERSION, seed=settings.SEED_EXERCISES
    )
    log.info("store ready (created=%s)", created)
    yield


app = FastAPI(
    title="GainFunction API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "exercises", "description": "Exercise catalog"},
        {"name": "templates", "description": "Workout templates and their exercises"},
        {"name": "workouts", "description": "Logged workouts, exercises and sets"},
    ],
)


# CORS (relax for local dev; tighten origins via ALLOW_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
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
    return {"ok": True, "name": "GainFunction API"}

@app.get("/ping")
def ping():
    return {"pong": True}

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
app.include_router(exercises_router)
app.include_router(templates_router)
app.include_router(workouts_router)
