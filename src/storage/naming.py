from __future__ import annotations

import re

from src.storage.errors import InvalidName

SEPARATORS_RE = re.compile(r"[\\/]")


def sanitize_name(name: str | None) -> str:
    """Return the base name of a client-supplied filename.

    Both ``/`` and ``\\`` are treated as separators so names coming from
    Windows clients (``C:\\Users\\me\\report.pdf``) reduce to ``report.pdf``.
    """
    if name is None:
        raise InvalidName("", "missing file name")
    base = SEPARATORS_RE.split(name)[-1].strip()
    if not base or base in (".", ".."):
        raise InvalidName(name, "file name is empty after sanitizing")
    if "\x00" in base:
        raise InvalidName(name, "file name contains a NUL byte")
    return base
