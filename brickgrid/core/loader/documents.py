"""Reading raw JSON documents and checking them against their schema."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from ...errors import MalformedContent

__all__ = ["read_document", "check_document"]


def check_document(payload: Any, schema: Dict[str, Any], source: str) -> Dict[str, Any]:
    """Validate payload against schema; raise MalformedContent naming the source."""
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise MalformedContent(source, f"{location}: {e.message}") from e
    return payload


def read_document(path: Union[str, Path], schema: Optional[Dict[str, Any]] = None) -> Any:
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError as e:
        raise MalformedContent(str(file_path), "file not found") from e
    except json.JSONDecodeError as e:
        raise MalformedContent(str(file_path), f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedContent(str(file_path), f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise MalformedContent(str(file_path), f"cannot read file: {e.strerror or e}") from e
    if schema is None:
        return payload
    return check_document(payload, schema, str(file_path))
