"""
Main entry point for the FastAPI server.

This module defines the FastAPI application, its routers and lifecycle
management. It relies on environment variables for configuration
(e.g., HOST, FAST_API_PORT, DATA_DIR) and runs the archival sweep on startup.
"""

import asyncio
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.Core.Exceptions.handlers import register_exception_handlers
from app.dependencies import get_appointment_repository, get_clock, server_config
from app.Domains.Appointment.Services.archival_sweep import ArchivalSweep
from app.Http.Routes.appointments import router as appointments_router
from app.Http.Routes.schedule import router as schedule_router
from app.Http.Routes.views import router as views_router

# Configure loguru
logger.remove()
logger.add(
    sys.stderr,
    level=server_config.log_level,
    format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    enqueue=True,
    backtrace=True,
    diagnose=True,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan manager that handles startup and shutdown tasks.
    Archives past-due confirmations once, then keeps sweeping in the background.
    """
    sweep = ArchivalSweep(
        app.dependency_overrides.get(get_appointment_repository, get_appointment_repository)(),
        clock=app.dependency_overrides.get(get_clock, get_clock)(),
    )
    sweep.run()

    sweep_task = None
    if server_config.sweep_interval_seconds > 0:
        sweep_task = asyncio.create_task(sweep.run_forever(server_config.sweep_interval_seconds))
    try:
        yield
    finally:
        if sweep_task:
            sweep_task.cancel()
            try:
                await sweep_task
            except asyncio.CancelledError:
                pass


# Create the FastAPI app with the lifespan context
app: FastAPI = FastAPI(
    lifespan=lifespan,
    title="GACI Scheduling API",
    description="Waiting list, slot booking and archival of identity-document appointments.",
    version="1.0.0",
)

# Register custom exception handlers for standardized error responses
register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(appointments_router)
app.include_router(views_router)
app.include_router(schedule_router)


def parse_server_args():
    """Parse server-specific arguments into the server config"""
    import argparse

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--host", help="Server host")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    server_args, _ = parser.parse_known_args()

    if server_args.host:
        server_config.host = server_args.host
    if server_args.port:
        server_config.port = server_args.port
    if server_args.reload:
        server_config.reload = server_args.reload


if __name__ == "__main__":
    import uvicorn

    parse_server_args()
    logger.info("Starting FastAPI server")
    uvicorn.run(
        "main:app",
        host=server_config.host,
        port=server_config.port,
        reload=server_config.reload,
    )
