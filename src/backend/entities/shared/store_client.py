"""
Shared ClickHouse client for executing compiled meet queries.

This module provides a reusable async client for executing parameterized
queries against ClickHouse using server-side ``{name:Type}`` binding.
"""

import inspect
import logging
from typing import Any

import clickhouse_connect
from clickhouse_connect.driver.exceptions import ClickHouseError

from entities.shared.errors import StoreExecutionError

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:  # noqa: ANN401
    """Convert non-JSON-serializable values (dates, decimals) to strings."""
    if value is None or isinstance(value, (int, float, str, bool)):
        return value
    return str(value)


class ClickHouseClient:
    """
    Async context manager for ClickHouse read queries.

    Usage:
        async with ClickHouseClient(host="localhost") as client:
            rows = await client.query(compiled.query_text, compiled.parameters)
    """

    def __init__(
        self,
        host: str,
        port: int = 8123,
        username: str = "default",
        password: str = "",
        database: str = "default",
        secure: bool = False,
    ):
        """
        Initialize the ClickHouse client.

        Args:
            host: ClickHouse server hostname.
            port: HTTP(S) port.
            username: ClickHouse user.
            password: ClickHouse password.
            database: Default database for unqualified table names.
            secure: Use HTTPS.
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.database = database
        self.secure = secure
        self._client: Any = None

    async def __aenter__(self):
        """Open the connection."""
        if not self.host:
            raise ValueError("CLICKHOUSE_HOST environment variable is required")

        try:
            self._client = await clickhouse_connect.get_async_client(
                host=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                database=self.database,
                secure=self.secure,
            )
        except (ClickHouseError, OSError) as exc:
            raise StoreExecutionError(f"Could not connect to ClickHouse: {exc}") from exc
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the connection."""
        if self._client is not None:
            closed = self._client.close()
            if inspect.isawaitable(closed):
                await closed
            self._client = None

    async def query(self, query_text: str, parameters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Execute a parameterized query and return rows.

        Args:
            query_text: Query with ``{name:Type}`` placeholders.
            parameters: Placeholder name → bound value.

        Returns:
            List of row dicts with JSON-safe values.

        Raises:
            StoreExecutionError: If the connection is not open or the query fails.
        """
        if self._client is None:
            raise StoreExecutionError(
                "ClickHouse connection not established. Use 'async with' context manager."
            )

        logger.info("Executing meet query with %d bound parameters", len(parameters))

        try:
            result = await self._client.query(query_text, parameters=parameters)
        except (ClickHouseError, OSError) as exc:
            logger.error("ClickHouse execution error: %s", exc)
            raise StoreExecutionError(str(exc)) from exc

        rows = [
            {column: _json_safe(value) for column, value in row.items()}
            for row in result.named_results()
        ]
        logger.info("Query executed successfully. Returned %d rows.", len(rows))
        return rows
