# src/services/versioning.py
from __future__ import annotations

import base64
import itertools
import os
import threading
import time
from typing import Callable, Optional

from src.services.errors import InvalidFileName

# xid layout: 4 bytes unix seconds | 5 bytes per-process random | 3 bytes counter
_PROCESS_BYTES = os.urandom(5)
_COUNTER = itertools.count(int.from_bytes(os.urandom(3), "big"))
_COUNTER_LOCK = threading.Lock()

ID_LENGTH = 20


def new_id(now: Optional[float] = None) -> str:
    """
    Return a 20 char, lowercase base32hex id. Ids sort by creation second and
    never repeat within a process (the counter only wraps after 2**24 calls).
    """
    seconds = int(time.time() if now is None else now) & 0xFFFFFFFF
    with _COUNTER_LOCK:
        count = next(_COUNTER) & 0xFFFFFF
    raw = seconds.to_bytes(4, "big") + _PROCESS_BYTES + count.to_bytes(3, "big")
    return base64.b32hexencode(raw).decode("ascii").rstrip("=").lower()


def split_name(base: str):
    """Split 'stem.ext' on the last dot. Rejects names without a usable stem or extension."""
    if not base:
        raise InvalidFileName("File name is empty")
    if "/" in base or "\\" in base:
        raise InvalidFileName(f"File name must not contain a directory: {base!r}")

    stem, dot, ext = base.rpartition(".")
    if not dot:
        raise InvalidFileName(f"File name has no extension: {base!r}")
    if not stem or not ext:
        raise InvalidFileName(f"File name needs both a name and an extension: {base!r}")
    return stem, ext


def versioned_name(base: str, id_factory: Callable[[], str] = new_id) -> str:
    """'build.zip' -> 'build-<id>.zip'"""
    stem, ext = split_name(base)
    version = id_factory()
    if not version:
        raise InvalidFileName("Version id generator returned an empty id")
    return f"{stem}-{version}.{ext}"
