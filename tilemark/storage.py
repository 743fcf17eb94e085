"""Optional on-disk copy of composed results.

The service can keep each PNG it returns, much like the original
``result.png`` on disk, but without overwriting: every result gets its
own file. Storage is off unless ``RESULT_DIR`` is set.

Environment variables:
    RESULT_DIR: Base directory for stored results (default: disabled).
"""

from __future__ import annotations

import logging
import os
import uuid

logger = logging.getLogger(__name__)

RESULT_DIR: str = os.getenv("RESULT_DIR", "")


def is_enabled() -> bool:
    return bool(RESULT_DIR)


def _ensure_dir(path: str) -> None:
    """Create parent directories for the given path if they do not exist."""
    os.makedirs(path, exist_ok=True)


def save_bytes(path: str, data: bytes) -> str:
    """Write ``data`` to ``path`` below ``RESULT_DIR``.

    Args:
        path: Relative path inside the result directory, e.g.
            ``'results/1234.png'``.
        data: Raw bytes to write.

    Returns:
        The relative path, with forward slashes.

    Raises:
        RuntimeError: If no result directory is configured.
    """
    if not RESULT_DIR:
        raise RuntimeError("RESULT_DIR is not configured; result storage is disabled.")
    dest_path = os.path.join(RESULT_DIR, path)
    _ensure_dir(os.path.dirname(dest_path))
    with open(dest_path, "wb") as f:
        f.write(data)
    logger.info("Saved %d bytes to %s", len(data), dest_path)
    return path.replace("\\", "/")


def save_result(png: bytes) -> str:
    """Store a composed PNG under a fresh name and return its relative path."""
    return save_bytes(f"results/{uuid.uuid4()}.png", png)
