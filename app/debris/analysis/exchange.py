"""Response schema for the external classification agent.

The agent is asked to answer with a JSON document of the form::

    {"patterns": [{"patternName": str, "safetyScore": "High"|"Medium"|"Low",
                   "reason": str, "matchingFiles": [str, ...]}, ...]}

This module parses that answer into validated models. Anything that does
not fit the schema raises, and the caller falls back to the rule-based
classifier.
"""

from __future__ import annotations

import json
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class CandidatePattern(BaseModel):
    """One pattern proposed by the external agent.

    Attributes:
        pattern_name: Descriptive group name.
        safety_score: Proposed safety tier.
        reason: Explanation for the tier.
        matching_files: Paths the agent assigned to this pattern.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern_name: str = Field(alias="patternName")
    safety_score: Literal["High", "Medium", "Low"] = Field(alias="safetyScore")
    reason: str = ""
    matching_files: list[str] = Field(alias="matchingFiles", default_factory=lambda: [])

    @field_validator("pattern_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Normalize surrounding whitespace in the pattern name."""
        return v.strip()


class ClassificationResponse(BaseModel):
    """Complete answer of the external agent."""

    model_config = ConfigDict(frozen=True)

    patterns: list[CandidatePattern] = Field(default_factory=lambda: [])


class ResponseParseError(ValueError):
    """Raised when the agent answer cannot be parsed or validated."""


def _strip_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


def unwrap_agent_output(raw: str) -> str:
    """Extract the model's answer text from CLI output.

    ``claude -p --output-format json`` wraps the answer in an envelope with
    a ``result`` field; plain output is returned unchanged.
    """
    text = raw.strip()
    try:
        envelope = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(envelope, dict) and isinstance(envelope.get("result"), str):
        return envelope["result"].strip()
    return text


def parse_classification(raw: str) -> ClassificationResponse:
    """Parse and validate an agent classification answer.

    Args:
        raw: Raw stdout of the agent CLI.

    Returns:
        Validated ClassificationResponse.

    Raises:
        ResponseParseError: If the answer is not valid JSON or does not
            match the schema.
    """
    text = _strip_fences(unwrap_agent_output(raw))
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Agent answer is not valid JSON: {e}"
        raise ResponseParseError(msg) from e

    try:
        return ClassificationResponse.model_validate(data)
    except ValidationError as e:
        msg = f"Agent answer does not match schema: {e}"
        raise ResponseParseError(msg) from e
