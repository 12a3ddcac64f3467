"""Shared types and utilities for CLI commands.

This module holds the output format enum and the lazily built
application context (event log, configuration, store, classifier and
agent capability) shared by every command of one invocation.
"""

from dataclasses import dataclass
from enum import Enum

import typer

from debris.analysis.advisor import AgentCapability, resolve_capability
from debris.analysis.classifier import PatternClassifier
from debris.analysis.query import QueryResponder
from debris.core.config import ConfigError, DebrisConfig, load_config_or_default
from debris.core.events import EventLog
from debris.core.pipeline import ScanPipeline
from debris.core.store import ScanStore
from debris.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@dataclass
class AppContext:
    """Collaborators constructed once per CLI invocation."""

    events: EventLog
    config: DebrisConfig
    store: ScanStore
    classifier: PatternClassifier
    capability: AgentCapability

    def pipeline(self, config: DebrisConfig | None = None) -> ScanPipeline:
        """Build a scan pipeline, optionally with an overridden config."""
        return ScanPipeline(
            config or self.config,
            self.events,
            self.store,
            self.classifier,
            self.capability,
        )

    def responder(self) -> QueryResponder:
        return QueryResponder(self.capability, self.events)


def get_events(ctx: typer.Context) -> EventLog:
    """Return the invocation's event log, creating it if needed."""
    obj = ctx.ensure_object(dict)
    if "events" not in obj:
        obj["events"] = EventLog()
    return obj["events"]


def get_app_context(ctx: typer.Context) -> AppContext:
    """Return the invocation's application context.

    The context is built on first use so that commands which do not need
    a valid configuration (e.g. ``config init``) still run.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    obj = ctx.ensure_object(dict)
    if "app" in obj:
        return obj["app"]

    events = get_events(ctx)
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    classifier = PatternClassifier(
        events,
        temp_patterns=config.name_patterns,
        extensions=config.extensions,
    )
    app_ctx = AppContext(
        events=events,
        config=config,
        store=ScanStore(events),
        classifier=classifier,
        capability=resolve_capability(config.advisor, events),
    )
    obj["app"] = app_ctx
    return app_ctx
