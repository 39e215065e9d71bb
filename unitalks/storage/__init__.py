# Script library persistence
from .kv import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from .library import MANIFEST_KEY, SCRIPTS_KEY, ScriptLibrary

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "FileKeyValueStore",
    "ScriptLibrary",
    "MANIFEST_KEY",
    "SCRIPTS_KEY",
]
