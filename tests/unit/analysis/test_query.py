"""Unit tests for question answering over patterns."""

from unittest.mock import MagicMock

import pytest
from debris.analysis.advisor import AdvisorError, Available, Unavailable
from debris.analysis.models import Pattern, SafetyTier
from debris.analysis.query import (
    EMPTY_QUERY_ANSWER,
    HELP_ANSWER,
    NO_PATTERNS_ANSWER,
    QueryResponder,
    answer_with_rules,
)
from debris.core.events import EventCategory, EventLog


def _pattern(name: str, tier: SafetyTier, size: int) -> Pattern:
    return Pattern(
        id=name,
        name=name,
        member_paths=(f"/p/{name}",),
        safety_tier=tier,
        rationale="r",
        total_size_bytes=size,
    )


@pytest.fixture
def patterns() -> list[Pattern]:
    return [
        _pattern("node_modules", SafetyTier.HIGH, 4096),
        _pattern("*.log files", SafetyTier.MEDIUM, 2048),
        _pattern("build", SafetyTier.HIGH, 1024),
        _pattern("Other temporary files", SafetyTier.LOW, 8192),
    ]


class TestAnswerWithRules:
    """Tests for answer_with_rules function."""

    def test_safe_lists_high_patterns(self, patterns: list[Pattern]) -> None:
        answer = answer_with_rules("What's safe to delete?", patterns)
        assert answer == "These patterns are safe to delete:\n- node_modules\n- build"

    def test_no_safe_patterns(self) -> None:
        answer = answer_with_rules("safe?", [_pattern("x", SafetyTier.LOW, 1)])
        assert answer == "No patterns were identified as highly safe to delete."

    def test_largest_lists_top_three(self, patterns: list[Pattern]) -> None:
        answer = answer_with_rules("Show me the LARGEST files", patterns)
        assert answer.splitlines() == [
            "Largest patterns:",
            "- Other temporary files: 8.0 KB",
            "- node_modules: 4.0 KB",
            "- *.log files: 2.0 KB",
        ]

    def test_unrecognized_gets_help(self, patterns: list[Pattern]) -> None:
        assert answer_with_rules("hello there", patterns) == HELP_ANSWER


class TestQueryResponder:
    """Tests for QueryResponder.answer."""

    def test_empty_query(self, events: EventLog, patterns: list[Pattern]) -> None:
        responder = QueryResponder(Unavailable("off"), events)
        assert responder.answer("   ", patterns) == EMPTY_QUERY_ANSWER

    def test_no_patterns(self, events: EventLog) -> None:
        responder = QueryResponder(Unavailable("off"), events)
        assert responder.answer("safe?", []) == NO_PATTERNS_ANSWER

    def test_agent_answer_preferred(self, events: EventLog, patterns: list[Pattern]) -> None:
        agent = MagicMock()
        agent.respond.return_value = "Delete node_modules first."

        answer = QueryResponder(Available(agent), events).answer("safe?", patterns)

        assert answer == "Delete node_modules first."
        prompt = agent.respond.call_args.args[0]
        assert "node_modules: 1 items" in prompt
        assert "User question: safe?" in prompt

    def test_agent_failure_falls_back(self, events: EventLog, patterns: list[Pattern]) -> None:
        agent = MagicMock()
        agent.respond.side_effect = AdvisorError("timeout")

        answer = QueryResponder(Available(agent), events).answer("what is safe", patterns)

        assert answer.startswith("These patterns are safe to delete:")

    def test_unavailable_agent_uses_rules(self, events: EventLog, patterns: list[Pattern]) -> None:
        answer = QueryResponder(Unavailable("off"), events).answer("largest?", patterns)

        assert answer.startswith("Largest patterns:")
        assert not events.filter(category=EventCategory.AI)

    def test_unknown_capability_rejected(self, events: EventLog, patterns: list[Pattern]) -> None:
        with pytest.raises(TypeError, match="Unknown capability"):
            QueryResponder(object(), events).answer("safe?", patterns)  # type: ignore[arg-type]
