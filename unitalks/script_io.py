"""Script file export and import.

Export is synchronous: validate against the Script.v1.json contract, then
write ``<sanitized title>.json``.  Import is a two-stage pipeline: this
module only reads and parses (``read_json_file``); deciding whether the
parsed object is a script is ``ScriptLibrary.import_payload``'s job.
"""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import jsonschema

from unitalks.contract_validate import validate_script_model
from unitalks.errors import ContractViolation, InvalidFile, ParseFailure, ReadFailure
from unitalks.models import Payload
from unitalks.schemas.script_v1 import dump_payload
from unitalks.textutil import sanitize_filename

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


def payload_filename(payload: Payload) -> str:
    return sanitize_filename(payload.title or "script") + JSON_SUFFIX


def export_payload(payload: Payload, dest_dir: Union[str, Path]) -> Path:
    """Write *payload* as pretty-printed JSON into *dest_dir*.

    An existing file with the same name is overwritten.

    Raises:
        ContractViolation: the payload does not satisfy the Script.v1.json
            contract.  The file is not written in that case.
    """
    try:
        validate_script_model(payload)
    except jsonschema.ValidationError as exc:
        raise ContractViolation(f"Script violates the export contract: {exc.message}") from exc
    text = dump_payload(payload)

    dest = Path(dest_dir)
    dest.mkdir(parents=True, exist_ok=True)
    out_path = dest / payload_filename(payload)
    out_path.write_text(text, encoding="utf-8")
    logger.info("Exported script %s to %s", payload.id, out_path)
    return out_path


async def read_json_file(path: Optional[Union[str, Path]]) -> Any:
    """Read and parse a ``.json`` file.

    The extension is checked before anything is read.

    Raises:
        InvalidFile:  no path, or the name does not end in ``.json``.
        ReadFailure:  the file cannot be read or decoded as UTF-8.
        ParseFailure: the content is not valid JSON.
    """
    if path is None or not Path(path).name.endswith(JSON_SUFFIX):
        raise InvalidFile()

    try:
        raw = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadFailure() from exc

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseFailure() from exc


def read_json_file_sync(path: Optional[Union[str, Path]]) -> Any:
    """Blocking wrapper around ``read_json_file`` for callers without a loop."""
    return asyncio.run(read_json_file(path))
