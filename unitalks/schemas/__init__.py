"""Versioned payload loaders."""

from unitalks.schemas.script_v1 import dump_payload, load_payload

__all__ = [
    "load_payload",
    "dump_payload",
]
