"""Configuration model and TOML I/O for debris.

Configuration is stored in ~/.config/debris/config.toml. A missing file
means "use the defaults"; an invalid file is an error the CLI reports.

Example::

    roots = ["~/Projects", "~/Downloads"]
    name_patterns = ["node_modules", "build", "__pycache__"]
    extensions = [".log", ".tmp"]
    max_workers = 4
    progressive_interval = 0.3

    [advisor]
    enabled = true
    provider = "claude"
    timeout_seconds = 60
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from debris.analysis import rules
from debris.core.paths import get_config_path

logger = logging.getLogger(__name__)

AdvisorProvider = Literal["claude", "gemini"]

DEFAULT_MODELS: dict[AdvisorProvider, str] = {
    "claude": "sonnet",
    "gemini": "gemini-2.5-flash",
}


class AdvisorConfig(BaseModel):
    """Settings for the optional external classification agent.

    Attributes:
        enabled: Whether to try the external agent at all.
        provider: AI CLI to run ("claude" or "gemini").
        model: Model name. If None, uses the default per provider.
        timeout_seconds: Upper bound for one agent call.
        max_entries: Maximum number of entries summarized in a prompt.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: Annotated[
        bool,
        Field(description="Use the external agent when it is installed"),
    ] = False
    provider: Annotated[
        AdvisorProvider,
        Field(description="AI provider to use"),
    ] = "claude"
    model: Annotated[
        str | None,
        Field(description="Model name (None = use default per provider)"),
    ] = None
    timeout_seconds: Annotated[
        int,
        Field(ge=5, le=600, description="Timeout in seconds (5-600)"),
    ] = 60
    max_entries: Annotated[
        int,
        Field(ge=1, le=1000, description="Entries summarized per prompt"),
    ] = 100

    @property
    def effective_model(self) -> str:
        """Get the configured model, or the provider default."""
        if self.model:
            return self.model
        return DEFAULT_MODELS[self.provider]


class DebrisConfig(BaseModel):
    """Top-level debris configuration.

    Attributes:
        roots: Directories to scan (``~`` allowed).
        name_patterns: Artifact name literals, in priority order.
        extensions: Disposable file extensions, in priority order.
        max_workers: Concurrent walkers per root.
        progressive_interval: Seconds between interim classifications.
        advisor: External agent settings.
    """

    model_config = ConfigDict(extra="forbid")

    roots: list[str] = Field(default_factory=lambda: list(rules.DEFAULT_ROOTS))
    name_patterns: list[str] = Field(default_factory=lambda: list(rules.COMMON_TEMP_PATTERNS))
    extensions: list[str] = Field(default_factory=lambda: list(rules.FILE_EXTENSIONS))
    max_workers: Annotated[int, Field(ge=1, le=32)] = 4
    progressive_interval: Annotated[float, Field(ge=0.05, le=10.0)] = 0.3
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)

    @field_validator("name_patterns", "extensions")
    @classmethod
    def reject_blank(cls, v: list[str]) -> list[str]:
        """Reject blank literals, which would match every entry."""
        for item in v:
            if not item.strip().strip("."):
                msg = f"Blank pattern or extension not allowed: {item!r}"
                raise ValueError(msg)
        return v

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Ensure every extension starts with a period."""
        return ["." + ext.strip().lstrip(".") for ext in v]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> DebrisConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated DebrisConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DebrisConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> DebrisConfig:
    """Load configuration, falling back to defaults if no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return DebrisConfig()


def save_config(config: DebrisConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The DebrisConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
