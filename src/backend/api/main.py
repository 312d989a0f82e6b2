"""
FastAPI server for the meet query network.

This module handles application setup, lifespan management, and middleware configuration.
Route handlers are organized in the routers/ package.

The network is built once at startup from ``Settings`` and shared by all
requests; each request runs with its own run state.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from api.routers import runs_router, threads_router
from config.settings import get_settings
from dotenv import load_dotenv
from entities.network import create_network_clients
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

# Configure logging - use force=True to prevent duplicate handlers
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, force=True)

# Reduce noise from Azure SDK and other libraries
logging.getLogger("azure").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
# Reduce agent_framework verbosity (it logs all message content at INFO level)
logging.getLogger("agent_framework").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Builds the network on startup unless one was injected into app state.
    """
    logger.info("Meet Query Network API starting")

    settings = get_settings()
    application.state.settings = settings
    if getattr(application.state, "network", None) is None:
        clients = create_network_clients(settings)
        application.state.network = clients.build_network()
        application.state.history = clients.history
        logger.info(
            "Network ready (table=%s, max_turns=%d, strict_columns=%s)",
            clients.table,
            clients.max_turns,
            clients.strict_columns,
        )

    yield

    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(title="Meet Query Network", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(runs_router)
app.include_router(threads_router)


@app.get("/health")
async def health_check() -> dict[str, object]:
    """Health check endpoint."""
    network_ready = getattr(app.state, "network", None) is not None
    return {"status": "healthy", "network_ready": network_ready}


if __name__ == "__main__":
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)  # noqa: S104
