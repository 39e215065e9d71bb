"""Script payload schema v1 — load and dump.

The dump keeps model field order and non-ASCII text as-is so exported files
stay readable in any editor (titles are often Cyrillic).
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from unitalks.models import Payload

SCHEMA_VERSION = 1


def load_payload(source: Union[str, bytes, dict, Path]) -> Payload:
    """Parse a Payload from JSON string, bytes, dict, or file Path.

    Raises:
        ValidationError: data does not conform to the Payload schema.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    return Payload.model_validate(data)


def dump_payload(payload: Payload, *, indent: int = 2) -> str:
    """Serialize a Payload to pretty-printed JSON with camelCase keys."""
    return json.dumps(payload.to_json_dict(), indent=indent, ensure_ascii=False)

