"""Configuration management for recordlite."""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any
import toml
from pydantic import BaseModel, Field, ConfigDict, field_validator

from recordlite.models import ViewDef

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "recordlite.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TRUE_VALUES = ("1", "true", "yes", "on")


class CompilerConfig(BaseModel):
    """Compiler settings stored in recordlite.toml."""

    model_config = ConfigDict(
        extra="allow"
    )  # Allow additional fields for extensibility

    log_level: str = Field(default="WARNING", description="Logging level")
    strict_names: bool = Field(
        default=False, description="Require plain SQL identifiers for names"
    )
    skip_triggers: bool = Field(
        default=False, description="Never generate triggers"
    )
    skip_indices: bool = Field(default=False, description="Never generate indices")
    unsafe_drop_orphan_indices: bool = Field(
        default=False, description="Always drop orphan indices"
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level '{value}'")
        return level


class Config:
    """Manages recordlite configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_path: Path to the TOML file. If None, uses the
                RECORDLITE_CONFIG env var or ./recordlite.toml.
        """
        self.explicit = config_path is not None

        # Check environment variable first
        if config_path is None:
            env_path = os.environ.get("RECORDLITE_CONFIG")
            if env_path:
                config_path = Path(env_path)
                self.explicit = True

        self.config_path = (
            Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_FILE
        )
        self._config: Optional[CompilerConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> CompilerConfig:
        """Load configuration from disk, with environment variable overrides.

        A missing default file yields the defaults; a missing file that was
        asked for explicitly is an error.
        """
        data: Dict[str, Any] = {}
        if self.exists:
            with open(self.config_path, "r") as f:
                data = toml.load(f)
            logger.debug(f"Loaded configuration from {self.config_path}")
        elif self.explicit:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        # Apply environment variable overrides
        self._apply_env_overrides(data)

        self._config = CompilerConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_level := os.environ.get("RECORDLITE_LOG_LEVEL"):
            data["log_level"] = env_level

        if env_strict := os.environ.get("RECORDLITE_STRICT_NAMES"):
            data["strict_names"] = env_strict.strip().lower() in TRUE_VALUES

    @property
    def settings(self) -> CompilerConfig:
        if self._config is None:
            return self.load()
        return self._config

    def apply(self, view: ViewDef) -> ViewDef:
        """Return a copy of the view with the switches forced on by the config."""
        settings = self.settings
        return view.model_copy(
            update={
                "skip_triggers": view.skip_triggers or settings.skip_triggers,
                "skip_indices": view.skip_indices or settings.skip_indices,
                "unsafe_drop_orphan_indices": view.unsafe_drop_orphan_indices
                or settings.unsafe_drop_orphan_indices,
            }
        )
