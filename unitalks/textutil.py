"""Small string and copy helpers shared by the storage, I/O and CLI layers."""
from __future__ import annotations

import copy
import re
from datetime import datetime
from typing import Any, Optional, TypeVar

T = TypeVar("T")

# ASCII word characters, whitespace, Cyrillic (U+0400–U+04FF) and hyphen.
_FILENAME_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s\u0400-\u04FF-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_FILENAME_MAX = 80


def deep_clone(obj: T) -> T:
    """Return a structural copy of *obj* sharing no mutable substructure."""
    if hasattr(obj, "model_copy"):
        return obj.model_copy(deep=True)  # type: ignore[attr-defined]
    return copy.deepcopy(obj)


def sanitize_filename(title: Optional[str]) -> str:
    """Turn a script title into a safe file base name (no extension).

    >>> sanitize_filename("Hello, World!! / test")
    'Hello-World-test'
    """
    cleaned = _FILENAME_DISALLOWED.sub("", str(title or "script")).strip()
    cleaned = _WHITESPACE_RUN.sub("-", cleaned)[:_FILENAME_MAX]
    return cleaned or "script"


def esc_html(value: Any) -> str:
    return (
        str(value or "")
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def esc_attr(value: Any) -> str:
    return str(value or "").replace('"', "&quot;").replace("'", "&#39;")


def format_date(iso_str: Optional[str]) -> str:
    """Render an ISO-8601 timestamp as ``DD Mon YYYY`` ("—" when empty).

    Unparseable input is returned unchanged.
    """
    if not iso_str:
        return "—"
    # fromisoformat() only accepts the trailing "Z" from 3.11 on
    try:
        parsed = datetime.fromisoformat(iso_str.replace("Z", "+00:00"))
    except ValueError:
        return iso_str
    return parsed.strftime("%d %b %Y")


def format_runtime(minutes: Optional[int]) -> str:
    if not minutes:
        return "0 min"
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"
