"""
library.py — Two-table script library over a string key-value medium.

Layout (two keys):

    unitalks_manifest   ← JSON array of ManifestEntry, newest-first
    unitalks_scripts    ← JSON object mapping script id → full Payload

The manifest lets callers list scripts without loading section bodies.
Both tables live on the same medium without a transaction: a failure between
the manifest write and the body write leaves a manifest entry with no body.
Callers treat a missing body as a deleted script.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from unitalks.errors import CorruptStore, ValidationFailure
from unitalks.models import ManifestEntry, Payload, Section
from unitalks.payload import compute_meta, format_timestamp, new_script_id, utc_now
from unitalks.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

MANIFEST_KEY = "unitalks_manifest"
SCRIPTS_KEY = "unitalks_scripts"

_MANIFEST_ADAPTER = TypeAdapter(List[ManifestEntry])
_BODIES_ADAPTER = TypeAdapter(Dict[str, Payload])
_SECTIONS_ADAPTER = TypeAdapter(List[Section])


class ScriptLibrary:
    """Save, list, load and delete scripts.

    Args:
        kv:     The backing key-value medium.
        strict: When False (default) a table that cannot be parsed reads as
                empty and a warning is logged.  When True, ``CorruptStore``
                is raised instead.
    """

    def __init__(self, kv: KeyValueStore, *, strict: bool = False) -> None:
        self.kv = kv
        self.strict = strict

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def get_manifest(self) -> List[ManifestEntry]:
        return self._read_table(MANIFEST_KEY, _MANIFEST_ADAPTER, "[]", list)

    def get_script_bodies(self) -> Dict[str, Payload]:
        return self._read_table(SCRIPTS_KEY, _BODIES_ADAPTER, "{}", dict)

    def get_script_by_id(self, script_id: str) -> Optional[Payload]:
        return self.get_script_bodies().get(script_id)

    def list_scripts(self) -> List[ManifestEntry]:
        """Manifest entries in display order (new scripts first)."""
        return self.get_manifest()

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    def save_to_manifest(self, payload: Payload) -> None:
        """Upsert the manifest entry for *payload*.

        An existing entry keeps its position; a new one is prepended.
        """
        manifest = self.get_manifest()
        entry = ManifestEntry.from_payload(payload)
        for idx, existing in enumerate(manifest):
            if existing.id == payload.id:
                manifest[idx] = entry
                break
        else:
            manifest.insert(0, entry)
        self._write_table(MANIFEST_KEY, _MANIFEST_ADAPTER, manifest)

    def save_script_body(self, payload: Payload) -> None:
        bodies = self.get_script_bodies()
        bodies[payload.id] = payload
        self._write_table(SCRIPTS_KEY, _BODIES_ADAPTER, bodies)

    def persist_script(self, payload: Payload) -> None:
        """Full save: manifest entry first, then the body."""
        self.save_to_manifest(payload)
        self.save_script_body(payload)
        logger.info("Saved script %s (%r)", payload.id, payload.title)

    def delete_script(self, script_id: str) -> None:
        manifest = [e for e in self.get_manifest() if e.id != script_id]
        self._write_table(MANIFEST_KEY, _MANIFEST_ADAPTER, manifest)
        bodies = self.get_script_bodies()
        bodies.pop(script_id, None)
        self._write_table(SCRIPTS_KEY, _BODIES_ADAPTER, bodies)
        logger.info("Deleted script %s", script_id)

    def import_payload(self, data: Any) -> Payload:
        """Validate an externally parsed script and store it.

        Missing ``id`` / ``savedAt`` are filled in on *data* itself; a
        missing ``meta`` is derived from the sections.

        Raises:
            ValidationFailure: *data* has no ``sections`` or does not fit the
                Payload shape.  Nothing is written in that case.
        """
        if not isinstance(data, dict) or data.get("sections") is None:
            raise ValidationFailure()

        if not data.get("id"):
            data["id"] = new_script_id()
        if not data.get("savedAt"):
            data["savedAt"] = format_timestamp(utc_now())

        try:
            if data.get("meta") is None:
                sections = _SECTIONS_ADAPTER.validate_python(data["sections"])
                data["meta"] = compute_meta(sections).model_dump(by_alias=True)
            payload = Payload.model_validate(data)
        except ValidationError as exc:
            raise ValidationFailure(
                f"Not a valid UniTalks script: {exc.error_count()} invalid field(s)"
            ) from exc

        self.persist_script(payload)
        return payload

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _read_table(self, key: str, adapter: TypeAdapter, empty: str, default: type):
        raw = self.kv.get(key)
        try:
            return adapter.validate_json(raw or empty)
        except ValidationError as exc:
            if self.strict:
                raise CorruptStore(f"Stored table {key!r} is unreadable") from exc
            logger.warning("Stored table %r is unreadable; treating it as empty", key)
            return default()

    def _write_table(self, key: str, adapter: TypeAdapter, value: Any) -> None:
        self.kv.set(key, adapter.dump_json(value, by_alias=True).decode("utf-8"))
        logger.debug("Wrote table %r", key)
