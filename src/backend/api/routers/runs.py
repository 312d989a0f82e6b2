"""
Network run API routes.

``POST /api/runs`` triggers one run of the meet query network and waits
for the final answer.
"""

import asyncio
import logging
import uuid

from api.dependencies import get_app_settings, get_network
from api.models import RunResponse
from config.settings import Settings
from entities.network import MeetQueryNetwork
from entities.shared.errors import NetworkError
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from models import AgentRunRequest, RunStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/runs", tags=["runs"])


def _sanitized_error_response(error: Exception, status_code: int, message: str) -> JSONResponse:
    """Build a sanitized error response with a correlation ID.

    Logs the full exception server-side and returns a generic message
    to the client so internal details are never leaked.
    """
    correlation_id = uuid.uuid4().hex[:12]
    logger.error("Run error [%s]: %s", correlation_id, error, exc_info=error)
    return JSONResponse(
        status_code=status_code,
        content={
            "status": RunStatus.FAILED.value,
            "error": message,
            "correlation_id": correlation_id,
        },
    )


@router.post("", response_model=RunResponse, response_model_by_alias=True)
async def create_run(
    body: AgentRunRequest,
    network: MeetQueryNetwork = Depends(get_network),
    settings: Settings = Depends(get_app_settings),
) -> RunResponse | JSONResponse:
    """
    Run the network for one user question.

    Returns the final answer, the turn transcript, and the number of
    result rows the analyst retrieved.
    """
    logger.info("Run requested for thread %s", body.thread_id)
    try:
        result = await asyncio.wait_for(network.run(body), timeout=settings.run_timeout_seconds)
    except TimeoutError as e:
        return _sanitized_error_response(
            e,
            status.HTTP_504_GATEWAY_TIMEOUT,
            "The request took too long. Please try again.",
        )
    except NetworkError as e:
        return _sanitized_error_response(
            e,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred. Please try again.",
        )
    except Exception as e:
        logger.warning("Unexpected run failure for thread %s", body.thread_id)
        return _sanitized_error_response(
            e,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred. Please try again.",
        )

    return RunResponse.from_result(result)
