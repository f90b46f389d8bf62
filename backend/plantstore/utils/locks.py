import hashlib
import os
from typing import Optional

from filelock import FileLock

from plantstore.config import settings


def _lock_path(kind: str, user_id: str) -> str:
    # user ids are arbitrary strings; hash them into a safe file name
    digest = hashlib.sha1(user_id.encode("utf-8")).hexdigest()
    os.makedirs(settings.LOCKS_DIR, exist_ok=True)
    return os.path.join(settings.LOCKS_DIR, f"{kind}_{digest}.lock")


def user_lock(kind: str, user_id: str, timeout: Optional[int] = None):
    """
    Lock serializing read-modify-write of one user's aggregate.

    Returns the acquire proxy, so it is used directly as a context manager and
    raises ``filelock.Timeout`` when the wait exceeds ``timeout`` seconds.
    """
    if timeout is None:
        timeout = settings.LOCK_TIMEOUT_SECONDS
    return FileLock(_lock_path(kind, user_id)).acquire(timeout=timeout)
