"""Answers to simple questions about the current patterns.

Rules cover the common questions ("what is safe to delete?", "what takes
the most space?"). When the external agent is available it answers first,
and any failure falls back to the rules.
"""

from collections.abc import Sequence

from debris.analysis.advisor import (
    QUERY_TEMPLATE,
    SYSTEM_INSTRUCTIONS,
    AdvisorError,
    AgentCapability,
    Available,
    Unavailable,
    build_patterns_context,
)
from debris.analysis.models import Pattern, SafetyTier
from debris.core.events import EventCategory, EventLog
from debris.utils.formatting import format_size

_CAT = EventCategory.AI

EMPTY_QUERY_ANSWER = "Please ask a question about the files."
NO_PATTERNS_ANSWER = "No file patterns have been detected yet. Please scan for files first."
HELP_ANSWER = (
    "I can help you understand which files are safe to delete and what's taking up space. "
    "Try asking 'What's safe to delete?' or 'Show me the largest files'."
)

_SAFETY_WORDS = ("safe", "delete")
_SIZE_WORDS = ("largest", "space", "big")


def answer_with_rules(query: str, patterns: Sequence[Pattern]) -> str:
    """Answer a query from keyword rules alone."""
    lowered = query.lower()

    if any(word in lowered for word in _SAFETY_WORDS):
        safe = [p for p in patterns if p.safety_tier == SafetyTier.HIGH]
        if not safe:
            return "No patterns were identified as highly safe to delete."
        names = "\n".join(f"- {p.name}" for p in safe[:3])
        return f"These patterns are safe to delete:\n{names}"

    if any(word in lowered for word in _SIZE_WORDS):
        largest = sorted(patterns, key=lambda p: p.total_size_bytes, reverse=True)[:3]
        info = "\n".join(f"- {p.name}: {format_size(p.total_size_bytes)}" for p in largest)
        return f"Largest patterns:\n{info}"

    return HELP_ANSWER


class QueryResponder:
    """Answers questions about patterns, preferring the external agent.

    Args:
        capability: Resolved external agent capability.
        events: Event sink.
    """

    def __init__(self, capability: AgentCapability, events: EventLog) -> None:
        self._capability = capability
        self._events = events

    def answer(self, query: str, patterns: Sequence[Pattern]) -> str:
        """Answer a natural-language question about the given patterns."""
        if not query.strip():
            return EMPTY_QUERY_ANSWER
        if not patterns:
            return NO_PATTERNS_ANSWER

        match self._capability:
            case Unavailable():
                return answer_with_rules(query, patterns)
            case Available(agent=agent):
                prompt = QUERY_TEMPLATE.format(
                    instructions=SYSTEM_INSTRUCTIONS,
                    context=build_patterns_context(patterns),
                    query=query.strip(),
                )
                try:
                    answer = agent.respond(prompt)
                except AdvisorError as e:
                    self._events.error(f"Agent query failed: {e}", _CAT)
                    self._events.warning("Using rule-based response", _CAT)
                    return answer_with_rules(query, patterns)

                self._events.success("Agent response generated successfully", _CAT)
                return answer
            case _:
                msg = f"Unknown capability: {self._capability!r}"
                raise TypeError(msg)
