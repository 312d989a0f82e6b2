"""
Thread history API routes.
"""

import logging

from api.dependencies import get_history
from api.models import ThreadHistoryResponse
from entities.shared.protocols import HistoryStore
from fastapi import APIRouter, Depends, HTTPException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/threads", tags=["threads"])


@router.get("/{thread_id}", response_model=ThreadHistoryResponse, response_model_by_alias=True)
async def get_thread(
    thread_id: str,
    history: HistoryStore = Depends(get_history),
) -> ThreadHistoryResponse:
    """
    Get the stored user messages and agent turns of a thread.
    Returns entries in chronological order (oldest first).
    """
    entries = await history.get(thread_id)
    if not entries:
        raise HTTPException(status_code=404, detail="Thread not found")
    return ThreadHistoryResponse(thread_id=thread_id, entries=entries)
