"""
Backend entry point for the mass-action service.

Serves the section select API used when bulk-moving or duplicating course
modules. FastAPI's lifespan handles startup checks and closes the database
engine on shutdown.

Run with: python main.py [--port PORT]
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Set up import paths before any local imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from massaction.config import (
    check_required_env_vars,
    get_allowed_origins,
    get_api_port,
    get_sentry_dsn,
)
from massaction.database import close_engine, is_configured

# Import routes using full paths
from web_api.routes.section_select import router as section_select_router

if get_sentry_dsn():
    sentry_sdk.init(dsn=get_sentry_dsn())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Reports missing configuration on startup and closes database
    connections on shutdown.
    """
    ok, warnings = check_required_env_vars()
    for warning in warnings:
        print(warning)
    if not ok:
        raise RuntimeError("Missing required environment variables")

    yield  # FastAPI runs here

    print("Shutting down...")
    await close_engine()  # Close database connections


# Create FastAPI app with lifespan
app = FastAPI(
    title="Mass Action API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(section_select_router)


@app.get("/")
async def root():
    """API status."""
    return {"status": "ok"}


@app.get("/health")
async def health():
    """Health check endpoint with detailed status."""
    return {
        "status": "healthy",
        "database_configured": is_configured(),
    }


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Mass Action API Server")
    parser.add_argument(
        "--port",
        type=int,
        default=get_api_port(),
        help="Port to run the server on (default: API_PORT or 8000)",
    )
    args = parser.parse_args()

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
