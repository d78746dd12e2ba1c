"""Small file helpers."""

from __future__ import annotations

import os


def read_whole_file(path: str | os.PathLike[str]) -> str:
    """Return the entire contents of the file at ``path``.

    Raises :class:`OSError` if the file cannot be opened.
    """
    with open(path, "rb") as f:
        return f.read().decode("utf-8", errors="surrogateescape")