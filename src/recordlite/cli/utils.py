"""Utility functions for CLI commands."""

import sys
import logging
from pathlib import Path
from typing import Optional, NoReturn

import typer
from rich.console import Console

from recordlite.config import Config, CompilerConfig
from recordlite.exceptions import InvalidSchemaError
from recordlite.loader import load_view_def
from recordlite.models import ViewDef

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def fail(message: str) -> NoReturn:
    """Print an error on stderr and exit with status 1."""
    err_console.print(f"[red]❌ {message}[/red]")
    raise typer.Exit(1)


def setup_logging(level: str) -> None:
    """Send log records to stderr so stdout only carries the SQL."""
    logging.basicConfig(
        level=level.upper(), format=LOG_FORMAT, stream=sys.stderr, force=True
    )


def get_config(config_path: Optional[Path], verbose: bool = False) -> Config:
    """Load configuration and configure logging from it.

    Returns:
        Config: A loaded configuration manager
    """
    config = Config(config_path)
    try:
        settings: CompilerConfig = config.load()
    except FileNotFoundError as e:
        fail(str(e))
    except ValueError as e:
        # toml decode errors and pydantic validation errors
        fail(f"Invalid configuration in {config.config_path}: {e}")

    setup_logging("DEBUG" if verbose else settings.log_level)
    return config


def read_view_def(path: Optional[Path]) -> ViewDef:
    """Read a view description from a file, or stdin when path is None or '-'."""
    if path is None or str(path) == "-":
        payload = sys.stdin.buffer.read()
        source = "stdin"
    else:
        try:
            payload = path.read_bytes()
        except OSError as e:
            fail(f"Failed opening path '{path}': {e}")
        source = str(path)

    try:
        return load_view_def(payload)
    except InvalidSchemaError as e:
        fail(f"Failed reading {source}: {e}")
