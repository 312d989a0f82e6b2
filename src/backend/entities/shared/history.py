"""
In-memory conversation history keyed by thread ID.

Note: This is an in-memory store. For deployments with multiple
instances, back ``HistoryStore`` with a database instead.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from collections.abc import Sequence
from threading import Lock
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from entities.shared.run_state import RunStateSnapshot
    from models import TurnRecord

logger = logging.getLogger(__name__)


class InMemoryHistoryStore:
    """``HistoryStore`` kept in process memory with LRU eviction.

    Args:
        max_threads: Upper bound on stored threads.
    """

    def __init__(self, max_threads: int = 1000) -> None:
        self._threads: OrderedDict[str, list[dict[str, Any]]] = OrderedDict()
        self._lock = Lock()
        self._max_threads = max_threads

    async def create_thread(self, state: RunStateSnapshot) -> str:
        """Create the thread for a run, reusing the caller's thread ID when given.

        Args:
            state: Initial snapshot of the run.

        Returns:
            The thread ID.
        """
        thread_id = state.thread_id or uuid.uuid4().hex
        with self._lock:
            if thread_id not in self._threads:
                self._threads[thread_id] = []
                logger.info("Created thread %s (store size: %d)", thread_id, len(self._threads))
            self._threads.move_to_end(thread_id)
            self._evict_unlocked()
        return thread_id

    async def get(self, thread_id: str) -> list[dict[str, Any]]:
        """Return a copy of a thread's entries, oldest first.

        Args:
            thread_id: Conversation thread ID.

        Returns:
            Stored entries, or an empty list for unknown threads.
        """
        with self._lock:
            entries = self._threads.get(thread_id)
            return list(entries) if entries is not None else []

    async def append_results(
        self,
        thread_id: str,
        new_results: Sequence[TurnRecord],
        user_message: str | None = None,
    ) -> None:
        """Append a user message and turn results to a thread.

        Args:
            thread_id: Conversation thread ID.
            new_results: Turns to append, in turn order.
            user_message: The user's message, recorded before the turns.
        """
        now = time.time()
        entries: list[dict[str, Any]] = []
        if user_message is not None:
            entries.append({"role": "user", "content": user_message, "timestamp": now})
        entries.extend(
            {"role": "agent", "timestamp": now, **turn.to_dict()} for turn in new_results
        )

        with self._lock:
            self._threads.setdefault(thread_id, []).extend(entries)
            self._threads.move_to_end(thread_id)
            self._evict_unlocked()

    def _evict_unlocked(self) -> None:
        """Drop least recently used threads over the limit. Must hold _lock."""
        while len(self._threads) > self._max_threads:
            evicted, _ = self._threads.popitem(last=False)
            logger.info("Evicted LRU thread: %s", evicted)
