"""Strict JSON text parsing shared by inference and loading."""

import json
from typing import Any

from validation_builder.schema.errors import ParseError


def _reject_constant(name: str) -> Any:
    # json accepts NaN and +/-Infinity by default; they are not JSON
    raise ParseError(f"Invalid JSON: {name} is not a valid JSON value")


def parse_json_text(text: str) -> Any:
    """
    Decode JSON text.

    Raises:
        ParseError: If the text is malformed, uses NaN/Infinity literals,
            or is nested too deeply to decode
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {str(e)}") from e
    except RecursionError as e:
        raise ParseError("Invalid JSON: document is nested too deeply") from e
