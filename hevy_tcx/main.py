import logging
import sys
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hevy_tcx.api.v1 import capture, export, workouts

# Ensure package loggers (capture, relay, export) print to stdout
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)
logging.getLogger("hevy_tcx").setLevel(logging.DEBUG)
from hevy_tcx.config import settings
from hevy_tcx.services.http_client import close_http_client, init_http_client
from hevy_tcx.services.runtime import build_runtime

scheduler = AsyncIOScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    runtime = build_runtime()
    app.state.runtime = runtime
    init_http_client(timeout=settings.http_timeout_seconds, capture_hook=runtime.hook)

    # Export control follows page navigation (polled about once per second)
    runtime.watcher.schedule(scheduler, settings.visibility_poll_seconds)
    scheduler.start()
    yield
    scheduler.shutdown()
    runtime.stop()
    await close_http_client()


app = FastAPI(
    title="Hevy TCX Export API",
    description="Capture Hevy workouts from API traffic and export them as TCX",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(capture.router, prefix="/api/v1")
app.include_router(workouts.router, prefix="/api/v1")
app.include_router(export.router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok"}
