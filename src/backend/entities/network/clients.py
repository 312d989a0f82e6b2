"""Network client container and Protocol adapters for dependency injection.

``NetworkClients`` bundles every I/O dependency the meet query network
needs. Production code constructs it via ``create_network_clients()``
from real Azure and ClickHouse clients; tests construct it from
in-memory fakes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from entities.shared.history import InMemoryHistoryStore
from entities.shared.protocols import LoggingReporter, NoOpReporter
from entities.shared.store_client import ClickHouseClient

from .network import MeetQueryNetwork, build_participants

if TYPE_CHECKING:
    from agent_framework import ChatAgent
    from config.settings import Settings
    from entities.shared.protocols import HistoryStore, ProgressReporter, ResultStore

logger = logging.getLogger(__name__)


class ClickHouseResultStore:
    """``ResultStore`` backed by ``ClickHouseClient``.

    Each ``query()`` call opens and closes a fresh connection.

    Args:
        host: ClickHouse server hostname.
        port: HTTP(S) port.
        username: ClickHouse user.
        password: ClickHouse password.
        database: Database holding the meet results table.
        secure: Use HTTPS.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        database: str,
        secure: bool = False,
    ) -> None:
        self._connection = {
            "host": host,
            "port": port,
            "username": username,
            "password": password,
            "database": database,
            "secure": secure,
        }

    async def query(self, query_text: str, parameters: dict[str, Any]) -> list[dict[str, Any]]:
        """Execute a compiled query.

        Args:
            query_text: Query text with typed named placeholders.
            parameters: Values for each placeholder.

        Returns:
            Result rows keyed by column name.

        Raises:
            StoreExecutionError: If the store is unreachable or rejects the query.
        """
        async with ClickHouseClient(**self._connection) as client:
            return await client.query(query_text, parameters)


@dataclass(frozen=True)
class NetworkClients:
    """Immutable bundle of all dependencies for the meet query network.

    Args:
        supervisor_agent: ChatAgent making routing decisions.
        analyst_agent: ChatAgent constructing meet queries.
        summary_agent: ChatAgent writing the final answer.
        store: Store the meet query tool reads from.
        history: Conversation history collaborator.
        reporter: Progress reporter for turn-level steps.
        table: Meet results table name.
        strict_columns: Fail compilation on unknown filter columns.
        max_turns: Turn ceiling per run.
    """

    supervisor_agent: ChatAgent
    analyst_agent: ChatAgent
    summary_agent: ChatAgent
    store: ResultStore
    history: HistoryStore | None = None
    reporter: ProgressReporter | None = None
    table: str = "powerlifting-records"
    strict_columns: bool = True
    max_turns: int = 12

    def build_network(self) -> MeetQueryNetwork:
        """Assemble a ``MeetQueryNetwork`` from this bundle."""
        return MeetQueryNetwork(
            participants=build_participants(
                self.supervisor_agent,
                self.analyst_agent,
                self.summary_agent,
            ),
            store=self.store,
            history=self.history,
            reporter=self.reporter or NoOpReporter(),
            max_turns=self.max_turns,
            table=self.table,
            strict_columns=self.strict_columns,
        )


def create_network_clients(
    settings: Settings,
    reporter: ProgressReporter | None = None,
    history: HistoryStore | None = None,
) -> NetworkClients:
    """Build a ``NetworkClients`` from application ``Settings``.

    Loads prompts from disk, creates ``ChatAgent`` instances via the
    agent factories, and wraps ClickHouse in a ``ResultStore`` adapter.
    Each call produces a fresh, self-contained bundle.

    Args:
        settings: Centralised application configuration.
        reporter: Optional progress reporter. Defaults to ``LoggingReporter``.
        history: Optional history store. Defaults to ``InMemoryHistoryStore``.

    Returns:
        Fully-initialised ``NetworkClients`` ready for ``build_network()``.
    """
    from agent_framework_azure_ai import AzureAIClient  # noqa: PLC0415
    from azure.identity.aio import DefaultAzureCredential  # noqa: PLC0415
    from entities.meet_query.agent import create_meet_analyst_agent  # noqa: PLC0415
    from entities.meet_query.agent import load_prompt as load_analyst_prompt  # noqa: PLC0415
    from entities.summary.agent import create_summary_agent  # noqa: PLC0415
    from entities.summary.agent import load_prompt as load_summary_prompt  # noqa: PLC0415
    from entities.supervisor.agent import create_supervisor_agent  # noqa: PLC0415
    from entities.supervisor.agent import load_prompt as load_supervisor_prompt  # noqa: PLC0415

    # -- Credential --------------------------------------------------------
    credential = (
        DefaultAzureCredential(managed_identity_client_id=settings.azure_client_id)
        if settings.azure_client_id
        else DefaultAzureCredential()
    )

    # -- LLM clients -------------------------------------------------------
    def llm(model: str | None) -> AzureAIClient:
        return AzureAIClient(
            project_endpoint=settings.azure_ai_project_endpoint,
            credential=credential,
            model_deployment_name=model or settings.azure_ai_model_deployment_name,
            use_latest_version=True,
        )

    # -- Agents ------------------------------------------------------------
    supervisor_agent = create_supervisor_agent(
        llm(settings.azure_ai_supervisor_model), load_supervisor_prompt()
    )
    analyst_agent = create_meet_analyst_agent(
        llm(settings.azure_ai_meet_analyst_model), load_analyst_prompt()
    )
    summary_agent = create_summary_agent(llm(settings.azure_ai_summary_model), load_summary_prompt())

    # -- Store -------------------------------------------------------------
    store = ClickHouseResultStore(
        host=settings.clickhouse_host,
        port=settings.clickhouse_port,
        username=settings.clickhouse_username,
        password=settings.clickhouse_password,
        database=settings.clickhouse_database,
        secure=settings.clickhouse_secure,
    )

    logger.info(
        "Created network clients (table=%s, max_turns=%d)",
        settings.meet_results_table,
        settings.max_turns,
    )

    return NetworkClients(
        supervisor_agent=supervisor_agent,
        analyst_agent=analyst_agent,
        summary_agent=summary_agent,
        store=store,
        history=history or InMemoryHistoryStore(max_threads=settings.max_history_threads),
        reporter=reporter or LoggingReporter(),
        table=settings.meet_results_table,
        strict_columns=settings.strict_unknown_columns,
        max_turns=settings.max_turns,
    )
