"""Loading view descriptions from JSON."""

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from recordlite.exceptions import InvalidSchemaError
from recordlite.models import ViewDef

logger = logging.getLogger(__name__)


def load_view_def(payload: Union[str, bytes]) -> ViewDef:
    """Parse a JSON view description.

    Args:
        payload: JSON document describing the view

    Returns:
        ViewDef: The parsed description

    Raises:
        InvalidSchemaError: If the payload is not valid UTF-8 JSON or has fields of
            the wrong type
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSchemaError(f"View description is not valid UTF-8: {e}") from e

    try:
        return ViewDef.model_validate_json(payload)
    except ValidationError as e:
        raise InvalidSchemaError(f"Invalid view description: {e}") from e


def load_view_def_file(path: Path) -> ViewDef:
    """Read and parse a JSON view description from a file.

    Raises:
        OSError: If the file cannot be read
        InvalidSchemaError: If the file does not hold a valid description
    """
    path = Path(path)
    logger.debug(f"Reading view description from {path}")
    return load_view_def(path.read_bytes())
