"""Storage path helpers shared by the blob store implementations."""

import os
import re
import time
from datetime import datetime

MAX_FILENAME_LENGTH = 255

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def sanitize_filename(filename: str) -> str:
    """
    Make a filename safe to use as a storage key.

    Strips directory components, replaces anything outside ``[a-zA-Z0-9._-]``
    and appends a millisecond timestamp so repeated names do not collide.
    """
    filename = os.path.basename(filename.replace("\\", "/"))
    filename = filename.replace("..", "_")
    filename = _UNSAFE_CHARS.sub("_", filename)
    filename = _REPEATED_UNDERSCORES.sub("_", filename)

    name, ext = os.path.splitext(filename)
    if not name:
        name = "file"
    ext = ext[:20]
    name = name[: MAX_FILENAME_LENGTH - len(ext) - 15]

    timestamp = int(time.time() * 1000)
    return f"{name}_{timestamp}{ext}"


def generate_storage_path(owner_id: str, filename: str, now: datetime | None = None) -> str:
    """Return ``owner/YYYY/MM/DD/filename``."""
    now = now or datetime.utcnow()
    owner = _UNSAFE_CHARS.sub("_", owner_id)
    return f"{owner}/{now.year:04d}/{now.month:02d}/{now.day:02d}/{filename}"
