"""UniTalks interview script library."""

from unitalks.errors import (
    CorruptStore,
    InvalidFile,
    ParseFailure,
    ReadFailure,
    UniTalksError,
    ValidationFailure,
)
from unitalks.factory import EntityFactory
from unitalks.ids import IdAllocator
from unitalks.models import (
    Guest,
    ManifestEntry,
    Payload,
    Question,
    ScriptMeta,
    Section,
    Variation,
)
from unitalks.payload import build_payload, compute_meta
from unitalks.session import EditingSession

__all__ = [
    "IdAllocator",
    "EntityFactory",
    "EditingSession",
    "Question",
    "Variation",
    "Section",
    "Guest",
    "ScriptMeta",
    "Payload",
    "ManifestEntry",
    "build_payload",
    "compute_meta",
    "UniTalksError",
    "InvalidFile",
    "ReadFailure",
    "ParseFailure",
    "ValidationFailure",
    "CorruptStore",
]
