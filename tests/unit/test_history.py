"""Tests for the in-memory history store."""

from entities.shared.history import InMemoryHistoryStore
from entities.shared.protocols import HistoryStore
from entities.shared.run_state import RunState, RunStateHandle
from models import AgentName, TurnRecord


def _snapshot(thread_id: str | None = "thread-1"):
    return RunStateHandle(RunState(original_input="q", thread_id=thread_id)).snapshot()


class TestInMemoryHistoryStore:
    """Thread creation, ordered appends, and eviction."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryHistoryStore(), HistoryStore)

    async def test_create_thread_reuses_caller_id(self) -> None:
        store = InMemoryHistoryStore()

        assert await store.create_thread(_snapshot("abc")) == "abc"
        assert await store.get("abc") == []

    async def test_create_thread_generates_id(self) -> None:
        thread_id = await InMemoryHistoryStore().create_thread(_snapshot(None))
        assert thread_id

    async def test_appends_in_order(self) -> None:
        store = InMemoryHistoryStore()
        thread_id = await store.create_thread(_snapshot())
        first = TurnRecord(index=0, agent=AgentName.SUPERVISOR, text="route")
        second = TurnRecord(index=1, agent=AgentName.MEET_SUMMARY, text="answer")

        await store.append_results(thread_id, [], user_message="question")
        await store.append_results(thread_id, [first])
        await store.append_results(thread_id, [second])

        entries = await store.get(thread_id)
        assert [e["role"] for e in entries] == ["user", "agent", "agent"]
        assert entries[0]["content"] == "question"
        assert [e.get("index") for e in entries[1:]] == [0, 1]
        assert entries[2]["agent"] == "Meet Summary Agent"

    async def test_get_returns_copy(self) -> None:
        store = InMemoryHistoryStore()
        await store.append_results("t", [], user_message="q")

        (await store.get("t")).clear()

        assert len(await store.get("t")) == 1

    async def test_unknown_thread_is_empty(self) -> None:
        assert await InMemoryHistoryStore().get("missing") == []

    async def test_evicts_least_recently_used(self) -> None:
        store = InMemoryHistoryStore(max_threads=2)
        await store.create_thread(_snapshot("a"))
        await store.create_thread(_snapshot("b"))
        await store.append_results("a", [], user_message="touch a")
        await store.create_thread(_snapshot("c"))

        assert await store.get("b") == []
        assert len(await store.get("a")) == 1
