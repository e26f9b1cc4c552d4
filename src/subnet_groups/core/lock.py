"""Locking for the local export store file."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from subnet_groups.errors import StoreLockError

if TYPE_CHECKING:
    from collections.abc import Iterator

try:
    import fcntl  # type: ignore[attr-defined]
except ImportError:  # pragma: no cover
    fcntl = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def store_lock(store_path: Path) -> Iterator[Path]:
    """Hold an exclusive lock on ``<store_path>.lock`` for the ``with`` body.

    Yields the store path so callers can write ``with store_lock(p) as path``.
    """
    if fcntl is None:  # pragma: no cover
        raise StoreLockError("Store locking is not supported on this platform")

    lock_path = Path(str(store_path) + ".lock")
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = lock_path.open("a+", encoding="utf-8")
    except OSError as e:
        raise StoreLockError(f"Cannot open lock file {lock_path}: {e}") from e

    with handle:
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            raise StoreLockError(f"Cannot lock {lock_path}: {e}") from e
        logger.debug("Acquired store lock %s", lock_path)
        try:
            yield store_path
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            logger.debug("Released store lock %s", lock_path)
