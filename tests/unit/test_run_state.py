"""Tests for run state snapshots and updates."""

import pytest
from entities.shared.run_state import RunState, RunStateHandle, StateUpdate


def _handle(**kwargs) -> RunStateHandle:
    return RunStateHandle(RunState(original_input="question", **kwargs))


class TestStateUpdate:
    """Explicit field updates."""

    def test_unset_fields_are_not_changes(self) -> None:
        assert StateUpdate().changes() == {}
        assert StateUpdate(completed=True).changes() == {"completed": True}

    def test_none_is_an_explicit_change(self) -> None:
        assert StateUpdate(is_in_domain=None).changes() == {"is_in_domain": None}

    def test_apply_counts_one_mutation_per_update(self) -> None:
        handle = _handle()

        handle.apply(StateUpdate(routing_reasoning="r", completed=True, is_in_domain=True))
        handle.apply(StateUpdate())

        assert handle.mutation_count == 1
        snapshot = handle.snapshot()
        assert snapshot.completed is True
        assert snapshot.is_in_domain is True
        assert snapshot.routing_reasoning == "r"

    def test_results_replaced_wholesale(self) -> None:
        handle = _handle()
        handle.apply(StateUpdate(meet_results=[{"Name": "A"}, {"Name": "B"}]))
        handle.apply(StateUpdate(meet_results=[{"Name": "C"}]))

        assert handle.snapshot().results_as_list() == [{"Name": "C"}]


class TestSnapshot:
    """Snapshots are read-only copies."""

    def test_snapshot_is_frozen(self) -> None:
        snapshot = _handle().snapshot()
        with pytest.raises(AttributeError):
            snapshot.completed = True  # type: ignore[misc]

    def test_result_rows_are_read_only(self) -> None:
        handle = _handle()
        handle.apply(StateUpdate(meet_results=[{"Name": "A"}]))

        row = handle.snapshot().meet_results[0]
        with pytest.raises(TypeError):
            row["Name"] = "B"  # type: ignore[index]

    def test_snapshot_detached_from_later_updates(self) -> None:
        handle = _handle()
        handle.apply(StateUpdate(meet_results=[{"Name": "A"}]))
        before = handle.snapshot()

        handle.apply(StateUpdate(meet_results=[], completed=True))

        assert before.results_as_list() == [{"Name": "A"}]
        assert before.completed is False

    def test_applied_rows_are_copied(self) -> None:
        rows = [{"Name": "A"}]
        handle = _handle()
        handle.apply(StateUpdate(meet_results=rows))

        rows[0]["Name"] = "mutated"

        assert handle.snapshot().results_as_list() == [{"Name": "A"}]

    def test_carries_request_fields(self) -> None:
        snapshot = _handle(user_id="u1", thread_id="t1", message_id="m1").snapshot()

        assert snapshot.original_input == "question"
        assert (snapshot.user_id, snapshot.thread_id, snapshot.message_id) == ("u1", "t1", "m1")
        assert snapshot.is_in_domain is None
        assert snapshot.completed is False
