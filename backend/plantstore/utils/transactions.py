import logging
from contextlib import contextmanager
from typing import Iterator

from filelock import Timeout as LockTimeout
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from plantstore.errors import Transient

log = logging.getLogger("plantstore.store")


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """
    Re-raise store and lock failures as ``Transient``.

    Errors produced by the services themselves (``StoreError`` subclasses) and
    anything unexpected pass through untouched.
    Usage:
        with translate_store_errors("cart.add_item"):
            ... DB work ...
    """
    try:
        yield
    except StaleDataError as e:
        log.warning("%s: concurrent modification detected: %s", operation, e)
        raise Transient("The record was modified concurrently; please retry") from e
    except IntegrityError as e:
        # only reachable through a lost race on a unique user_id or (parent, plant_id) pair
        log.warning("%s: write conflict: %s", operation, e.orig)
        raise Transient("Conflicting concurrent write; please retry") from e
    except (OperationalError, PoolTimeoutError) as e:
        log.warning("%s: store unavailable: %s", operation, e)
        raise Transient("The data store is temporarily unavailable") from e
    except DBAPIError as e:
        if e.connection_invalidated:
            log.warning("%s: connection lost: %s", operation, e)
            raise Transient("Lost connection to the data store") from e
        raise
    except LockTimeout as e:
        log.warning("%s: timed out waiting for lock %s", operation, e.lock_file)
        raise Transient("Another update for this user is in progress; please retry") from e


@contextmanager
def commit_or_rollback(session: Session) -> Iterator[Session]:
    """
    Commit the session when the block succeeds, roll back when it raises.
    Usage:
        with commit_or_rollback(db):
            repo.save(cart)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
