"""Tests for the summary turn."""

from __future__ import annotations

from entities.shared.run_state import StateUpdate
from entities.summary import FALLBACK_ANSWER, build_summary_prompt, run_summary_turn
from models import AgentName, TurnRecord
from tests.conftest import JAKOB_ROWS, make_context, scripted_agent


class TestSummaryPrompt:
    """Prompt sections for in-domain and out-of-domain runs."""

    def test_in_domain_prompt_carries_results(self) -> None:
        context = make_context()
        context.state.apply(
            StateUpdate(meet_results=JAKOB_ROWS, is_in_domain=True, routing_reasoning="lifter lookup")
        )

        prompt = build_summary_prompt(context.state.snapshot())

        assert "How did Jakob Heller do?" in prompt
        assert "Query type: Powerlifting-related" in prompt
        assert "Routing reasoning: lifter lookup" in prompt
        assert "Spring Open" in prompt
        assert "## Meet Results" in prompt

    def test_out_of_domain_prompt_has_no_data_section(self) -> None:
        context = make_context(original_input="What's the capital of France?")
        context.state.apply(StateUpdate(is_in_domain=False, completed=True))

        prompt = build_summary_prompt(context.state.snapshot())

        assert "Query type: Non-powerlifting" in prompt
        assert "## Meet Results" not in prompt
        assert "specialize in powerlifting" in prompt

    def test_prompt_mentions_query_errors(self) -> None:
        context = make_context()
        context.state.apply(StateUpdate(is_in_domain=True))
        transcript = [
            TurnRecord(
                index=1,
                agent=AgentName.MEET_ANALYST,
                tool_name="get_meet_results",
                tool_output={"error": "Query failed: Connection refused"},
            )
        ]

        prompt = build_summary_prompt(context.state.snapshot(), transcript)

        assert "## Query Errors" in prompt
        assert "Connection refused" in prompt


class TestSummaryTurn:
    """The final answer turn."""

    async def test_answer_is_agent_text(self) -> None:
        context = make_context()
        agent = scripted_agent("  Jakob totalled 720 kg at the Spring Open.  ")

        turn = await run_summary_turn(agent, context, (), 4)

        assert turn.agent is AgentName.MEET_SUMMARY
        assert turn.index == 4
        assert turn.text == "Jakob totalled 720 kg at the Spring Open."
        assert turn.tool_name is None

    async def test_empty_answer_uses_fallback(self) -> None:
        turn = await run_summary_turn(scripted_agent(""), make_context(), (), 2)

        assert turn.text == FALLBACK_ANSWER

    async def test_summary_does_not_mutate_state(self) -> None:
        context = make_context()

        await run_summary_turn(scripted_agent("done"), context, (), 2)

        assert context.state.mutation_count == 0
