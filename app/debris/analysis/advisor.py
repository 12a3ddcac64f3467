"""Optional external classification agent.

An AI CLI (Claude Code or Gemini CLI) can propose pattern groupings and
answer questions about the current patterns. Whether it can be used is
decided once at startup and represented as a capability value:
``Unavailable(reason)`` or ``Available(agent)``. Every call site branches
on that value; any agent failure degrades to the rule-based behavior.
"""

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from debris.analysis.classifier import PatternClassifier
from debris.analysis.exchange import (
    CandidatePattern,
    ResponseParseError,
    parse_classification,
    unwrap_agent_output,
)
from debris.analysis.models import Pattern
from debris.core.config import AdvisorConfig
from debris.core.events import EventCategory, EventLog
from debris.filesystem.models import DiscoveredEntry
from debris.utils.formatting import format_size
from debris.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

_CAT = EventCategory.AI

SYSTEM_INSTRUCTIONS = """\
You are an assistant specialized in analyzing temporary files and build artifacts.
Identify file patterns (node_modules, build directories, caches, logs), assess
deletion safety (High/Medium/Low) and explain briefly. Be direct and factual."""

CLASSIFY_TEMPLATE = """\
{instructions}

Analyze these files and group them into patterns. For each pattern give:
1. A descriptive pattern name
2. A safety score (High/Medium/Low) for deletion
3. A clear reason why it is safe or unsafe to delete
4. The exact paths that match this pattern (each path in at most one pattern)

Files to analyze:
{summary}

Respond with ONLY valid JSON in this exact format (no markdown, no explanation):
{{"patterns": [{{"patternName": "string", "safetyScore": "High|Medium|Low",
"reason": "string", "matchingFiles": ["string"]}}]}}
"""

QUERY_TEMPLATE = """\
{instructions}
Keep answers under three sentences.

Current file patterns detected:
{context}

User question: {query}
"""


class AdvisorError(Exception):
    """Raised when the external agent fails or returns unusable output."""


@dataclass
class AgentClassifier:
    """Runs the configured AI CLI in non-interactive mode.

    Attributes:
        config: Provider, model and timeout settings.
    """

    config: AdvisorConfig

    def classify(self, entries: Sequence[DiscoveredEntry]) -> list[CandidatePattern]:
        """Ask the agent to group entries into patterns.

        Args:
            entries: Entries to classify; only the first ``max_entries``
                are summarized in the prompt.

        Returns:
            Candidate patterns, not yet validated against the entries.

        Raises:
            AdvisorError: If the agent fails, times out, or answers with
                something that does not match the response schema.
        """
        summary = build_file_summary(entries, self.config.max_entries)
        if not summary:
            raise AdvisorError("Nothing to classify")

        prompt = CLASSIFY_TEMPLATE.format(instructions=SYSTEM_INSTRUCTIONS, summary=summary)
        output = self._run(prompt)
        try:
            return list(parse_classification(output).patterns)
        except ResponseParseError as e:
            raise AdvisorError(str(e)) from e

    def respond(self, prompt: str) -> str:
        """Send a free-form prompt and return the answer text.

        Raises:
            AdvisorError: If the agent fails or answers with nothing.
        """
        answer = unwrap_agent_output(self._run(prompt))
        if not answer.strip():
            raise AdvisorError("Agent returned an empty answer")
        return answer

    def _run(self, prompt: str) -> str:
        """Execute the agent CLI with a bounded timeout.

        Raises:
            AdvisorError: On timeout, missing executable, or non-zero exit.
        """
        command = self._build_command(prompt)
        try:
            result = run_command(command, timeout=float(self.config.timeout_seconds))
        except subprocess.TimeoutExpired as e:
            msg = f"Agent timed out after {self.config.timeout_seconds} seconds"
            raise AdvisorError(msg) from e
        except FileNotFoundError as e:
            raise AdvisorError(f"Agent command not found: {e}") from e
        except OSError as e:
            raise AdvisorError(f"Failed to execute agent: {e}") from e

        logger.debug("Agent %s finished in %.1fs", command[0], result.duration)
        if not result.success:
            raise AdvisorError(f"Agent failed: {result.error_summary}")
        return result.stdout

    def _build_command(self, prompt: str) -> list[str]:
        """Build the non-interactive command line for the provider."""
        model = self.config.effective_model
        if self.config.provider == "claude":
            return ["claude", "-p", prompt, "--output-format", "json", "--model", model]
        return ["gemini", "--prompt", prompt, "--model", model]


@dataclass(frozen=True, slots=True)
class Unavailable:
    """The external agent cannot be used.

    Attributes:
        reason: Why the agent is unavailable.
    """

    reason: str


@dataclass(frozen=True, slots=True)
class Available:
    """The external agent is installed and enabled.

    Attributes:
        agent: Agent handle used for all calls.
    """

    agent: AgentClassifier


AgentCapability = Unavailable | Available


def resolve_capability(config: AdvisorConfig, events: EventLog) -> AgentCapability:
    """Decide once whether the external agent can be used.

    Args:
        config: Advisor settings.
        events: Event sink.

    Returns:
        Available with an agent handle, or Unavailable with a reason.
    """
    if not config.enabled:
        events.info("Using rule-based file analysis", _CAT)
        return Unavailable("External agent disabled in configuration")

    if not command_exists(config.provider):
        events.info("Using rule-based file analysis", _CAT)
        events.warning(f"Agent CLI '{config.provider}' not found on PATH", _CAT)
        return Unavailable(f"'{config.provider}' is not installed")

    events.success(
        f"Agent-assisted analysis enabled ({config.provider}, {config.effective_model})", _CAT
    )
    return Available(AgentClassifier(config=config))


def classify_with_fallback(
    entries: Sequence[DiscoveredEntry],
    classifier: PatternClassifier,
    capability: AgentCapability,
    events: EventLog,
) -> list[Pattern]:
    """Classify entries with the agent, falling back to the rule tables.

    The agent's proposal is used only if it passes validation as a whole;
    any failure, timeout or rejection yields the deterministic patterns.
    """
    match capability:
        case Unavailable():
            return classifier.classify(entries)
        case Available(agent=agent):
            if len(entries) > agent.config.max_entries:
                events.info(
                    f"{len(entries)} files exceed the agent limit of "
                    f"{agent.config.max_entries}; using rule-based analysis",
                    _CAT,
                )
                return classifier.classify(entries)

            events.info(f"Sending {len(entries)} files to agent for analysis", _CAT)
            try:
                candidates = agent.classify(entries)
            except AdvisorError as e:
                events.error(f"Agent analysis failed: {e}", _CAT)
                events.warning("Falling back to rule-based analysis", _CAT)
                return classifier.classify(entries)

            accepted = classifier.accept_external(candidates, entries)
            if accepted is None:
                events.warning("Agent result rejected, using rule-based fallback", _CAT)
                return classifier.classify(entries)

            events.success(f"Agent analysis complete: {len(accepted)} patterns identified", _CAT)
            return accepted
        case _:
            msg = f"Unknown capability: {capability!r}"
            raise TypeError(msg)


def build_file_summary(entries: Sequence[DiscoveredEntry], limit: int) -> str:
    """Summarize entries for a prompt, one line per entry."""
    lines = []
    for entry in list(entries)[:limit]:
        kind = "DIR" if entry.is_directory else "FILE"
        lines.append(f"[{kind}] {entry.path} ({format_size(entry.size_bytes)})")
    return "\n".join(lines)


def build_patterns_context(patterns: Sequence[Pattern]) -> str:
    """Summarize patterns for a prompt, one line per pattern."""
    return "\n".join(
        f"- {p.name}: {p.item_count} items, {format_size(p.total_size_bytes)}, "
        f"Safety: {p.safety_tier.value}"
        for p in patterns
    )
