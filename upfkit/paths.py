"""Filesystem path helpers."""

from __future__ import annotations

import os

from upfkit.log import UtltError

__all__ = ["get_abs_path", "MAX_FILE_PATH_STRLEN", "MAX_IFNAME_STRLEN"]

MAX_FILE_PATH_STRLEN = 128
MAX_IFNAME_STRLEN = 40


def get_abs_path(path):
    """Return the canonical absolute form of an existing path.

    Raises UtltError if the path is missing, empty, too long or cannot be resolved.
    """
    if path is None:
        raise UtltError("null string")
    path = os.fspath(path)
    if len(path) >= MAX_FILE_PATH_STRLEN:
        raise UtltError("string too long")
    if not path:
        raise UtltError("realpath fail : empty path")
    try:
        return os.path.realpath(path, strict=True)
    except OSError as exc:
        raise UtltError(f"realpath fail : {exc.strerror or exc}") from exc