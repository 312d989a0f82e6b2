"""Meet query network: the run loop that coordinates the participants.

One ``MeetQueryNetwork.run`` call is one run: it creates the run state,
alternates router decisions and agent turns until the router reports
completion, and returns the final answer. Turns are strictly
sequential; independent runs share nothing but the (stateless)
participants and collaborators.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from entities.meet_query import TOOL_NAME as MEET_QUERY_TOOL
from entities.meet_query import run_analyst_turn
from entities.router import Router
from entities.shared.errors import TurnBudgetExceeded
from entities.shared.protocols import NoOpReporter
from entities.shared.run_state import RunState, RunStateHandle, ToolContext
from entities.summary import run_summary_turn
from entities.supervisor import ROUTE_TOOL_NAME, run_supervisor_turn
from models import AgentName, AgentRunRequest, NetworkResult, TurnRecord

if TYPE_CHECKING:
    from entities.shared.protocols import HistoryStore, ProgressReporter, ResultStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 12

TurnRunner = Callable[[Any, ToolContext, Sequence[TurnRecord], int], Awaitable[TurnRecord]]


@dataclass(frozen=True)
class Participant:
    """An agent bound to its turn logic and declared tools.

    Attributes:
        name: Routing address of the participant.
        agent: The ChatAgent invoked on each turn.
        run_turn: Coroutine function executing one turn.
        tools: Tool names the agent may call.
    """

    name: AgentName
    agent: Any
    run_turn: TurnRunner
    tools: tuple[str, ...] = ()


def build_participants(
    supervisor_agent: Any,  # noqa: ANN401
    analyst_agent: Any,  # noqa: ANN401
    summary_agent: Any,  # noqa: ANN401
) -> dict[AgentName, Participant]:
    """Bind the three agents to their turn logic.

    Args:
        supervisor_agent: ChatAgent for routing decisions.
        analyst_agent: ChatAgent for meet queries.
        summary_agent: ChatAgent for the final answer.

    Returns:
        Participant lookup table keyed by ``AgentName``.
    """
    return {
        AgentName.SUPERVISOR: Participant(
            AgentName.SUPERVISOR, supervisor_agent, run_supervisor_turn, (ROUTE_TOOL_NAME,)
        ),
        AgentName.MEET_ANALYST: Participant(
            AgentName.MEET_ANALYST, analyst_agent, run_analyst_turn, (MEET_QUERY_TOOL,)
        ),
        AgentName.MEET_SUMMARY: Participant(AgentName.MEET_SUMMARY, summary_agent, run_summary_turn),
    }


class _HistoryWriter:
    """Appends turns to history in order without blocking the run loop.

    A single worker drains a queue, so appends land in submission order.
    Failures are logged and never reach the run.
    """

    def __init__(self, history: HistoryStore, thread_id: str, run_id: str) -> None:
        self._history = history
        self._thread_id = thread_id
        self._run_id = run_id
        self._queue: asyncio.Queue[tuple[list[TurnRecord], str | None] | None] = asyncio.Queue()
        self._worker = asyncio.create_task(self._drain())

    def submit(self, turns: list[TurnRecord], user_message: str | None = None) -> None:
        self._queue.put_nowait((turns, user_message))

    async def _drain(self) -> None:
        while (item := await self._queue.get()) is not None:
            turns, user_message = item
            try:
                await self._history.append_results(self._thread_id, turns, user_message)
            except Exception:
                logger.exception("[%s] Failed to append history for thread %s", self._run_id, self._thread_id)

    async def close(self) -> None:
        """Wait until every submitted append has been attempted."""
        self._queue.put_nowait(None)
        await self._worker

    def cancel(self) -> None:
        self._worker.cancel()


class MeetQueryNetwork:
    """Runs the supervisor / analyst / summary network, one run per ``run`` call.

    Args:
        participants: Lookup table with one participant per ``AgentName``.
        store: Store collaborator used by the meet query tool.
        history: Optional history collaborator.
        router: Routing policy. Defaults to ``Router()``.
        reporter: Progress reporter for turn-level steps.
        max_turns: Turn ceiling per run.
        table: Table the meet query tool reads from.
        strict_columns: Fail compilation on unknown filter columns.
    """

    def __init__(
        self,
        participants: Mapping[AgentName, Participant],
        store: ResultStore,
        history: HistoryStore | None = None,
        router: Router | None = None,
        reporter: ProgressReporter | None = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        table: str = "powerlifting-records",
        strict_columns: bool = True,
    ) -> None:
        missing = [name.value for name in AgentName if name not in participants]
        if missing:
            raise ValueError(f"Missing participants: {', '.join(missing)}")
        for name, participant in participants.items():
            if participant.name is not name:
                raise ValueError(f"Participant {participant.name.value!r} registered as {name.value!r}")
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")

        self._participants = dict(participants)
        self._store = store
        self._history = history
        self._router = router or Router()
        self._reporter = reporter or NoOpReporter()
        self._max_turns = max_turns
        self._table = table
        self._strict_columns = strict_columns

    async def run(self, request: AgentRunRequest) -> NetworkResult:
        """Run the network until the router reports completion.

        Args:
            request: Trigger payload for this run.

        Returns:
            The final answer together with the turns and results.

        Raises:
            RoutingContractViolation: If a supervisor turn selects no valid agent.
            TurnBudgetExceeded: If the run does not finish within ``max_turns``.
        """
        run_id = uuid.uuid4().hex[:6]
        state = RunState(
            original_input=request.input,
            user_id=request.user_id,
            thread_id=request.thread_id,
            message_id=request.message_id,
        )
        handle = RunStateHandle(state)
        context = ToolContext(
            state=handle,
            store=self._store,
            table=self._table,
            strict_columns=self._strict_columns,
        )
        logger.info("[%s] Starting run for thread %s", run_id, request.thread_id)

        writer: _HistoryWriter | None = None
        if self._history is not None:
            try:
                thread_id = await self._history.create_thread(handle.snapshot())
            except Exception:
                logger.exception("[%s] Could not create history thread", run_id)
            else:
                writer = _HistoryWriter(self._history, thread_id, run_id)
                writer.submit([], user_message=request.input)

        try:
            turns = await self._loop(handle, context, writer, run_id)
        except asyncio.CancelledError:
            logger.warning("[%s] Run cancelled", run_id)
            if writer is not None:
                writer.cancel()
            raise
        except Exception:
            logger.exception("[%s] Run failed", run_id)
            if writer is not None:
                await writer.close()
            raise

        if writer is not None:
            await writer.close()

        snapshot = handle.snapshot()
        answer = next(
            (turn.text for turn in reversed(turns) if turn.agent is AgentName.MEET_SUMMARY),
            "",
        )
        logger.info("[%s] Run completed in %d turns", run_id, len(turns))
        return NetworkResult(
            answer=answer,
            turns=tuple(turns),
            meet_results=tuple(snapshot.results_as_list()),
            is_in_domain=snapshot.is_in_domain,
            thread_id=snapshot.thread_id,
        )

    async def _loop(
        self,
        handle: RunStateHandle,
        context: ToolContext,
        writer: _HistoryWriter | None,
        run_id: str,
    ) -> list[TurnRecord]:
        turns: list[TurnRecord] = []
        pending: AgentName | None = None

        while True:
            target = pending if pending is not None else self._router.next(handle.snapshot())
            pending = None
            if target is None:
                return turns

            if len(turns) >= self._max_turns:
                raise TurnBudgetExceeded(self._max_turns)

            index = len(turns)
            participant = self._participants[target]
            logger.info("[%s] Turn %d: %s", run_id, index, target.value)

            step_name = target.value
            self._reporter.step_start(step_name, run_id)
            try:
                turn = await participant.run_turn(participant.agent, context, tuple(turns), index)
            finally:
                self._reporter.step_end(step_name, run_id)

            turns.append(turn)
            if writer is not None:
                writer.submit([turn])

            if target is AgentName.SUPERVISOR:
                pending = self._router.on_route(turn)
