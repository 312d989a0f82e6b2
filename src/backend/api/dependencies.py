"""
FastAPI dependencies for shared resources.
"""

import logging

from config.settings import Settings, get_settings
from entities.network import MeetQueryNetwork
from entities.shared.protocols import HistoryStore
from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Get settings from app state, falling back to the process-wide instance."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_network(request: Request) -> MeetQueryNetwork:
    """
    Get the meet query network from app state.

    Raises HTTPException 503 if not initialized.
    """
    network = getattr(request.app.state, "network", None)
    if network is None:
        raise HTTPException(status_code=503, detail="Network not initialized")
    return network


def get_history(request: Request) -> HistoryStore:
    """
    Get the history store from app state.

    Raises HTTPException 503 if not initialized.
    """
    history = getattr(request.app.state, "history", None)
    if history is None:
        raise HTTPException(status_code=503, detail="History store not initialized")
    return history
