import importlib
import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from plantstore.config import settings

log = logging.getLogger("plantstore.db")

Base = declarative_base()

# every module that declares tables, so metadata is complete before create_all
MODEL_MODULES = [
    "plantstore.models.plant",
    "plantstore.models.cart",
    "plantstore.models.cart_item",
    "plantstore.models.wishlist",
    "plantstore.models.wishlist_item",
]


class Store:
    """
    Process-wide database handle.

    Owns the SQLAlchemy engine and session factory. ``connect()`` is called once
    at startup and ``disconnect()`` at shutdown; request handlers obtain
    sessions through ``session()`` and hand them to the services.
    """

    def __init__(self, url: str, timeout_seconds: int = 20):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def connected(self) -> bool:
        return self.engine is not None

    def _engine_kwargs(self) -> dict:
        if self.url.startswith("sqlite"):
            # busy timeout bounds how long a writer waits on a locked database
            return {
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": self.timeout_seconds,
                }
            }
        return {"pool_timeout": self.timeout_seconds, "pool_pre_ping": True}

    def connect(self) -> Engine:
        if self.engine is not None:
            return self.engine
        self.engine = create_engine(self.url, future=True, echo=False, **self._engine_kwargs())
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        log.info("connected to %s", self.engine.url.render_as_string(hide_password=True))
        return self.engine

    def disconnect(self) -> None:
        if self.engine is None:
            return
        masked = self.engine.url.render_as_string(hide_password=True)
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        log.info("disconnected from %s", masked)

    def session(self) -> Session:
        if self._session_factory is None:
            self.connect()
        return self._session_factory()


store = Store(settings.DATABASE_URL, timeout_seconds=settings.DB_TIMEOUT_SECONDS)


def init_db(reset: bool = False) -> None:
    """
    Create tables for every model module.

    With ``reset=True`` all tables are dropped first, which tests and
    ``RESET_DB=1`` use to start from a clean database.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    engine = store.connect()
    if reset:
        log.warning("resetting database: dropping all tables")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    log.info("database initialized (%d tables)", len(Base.metadata.tables))


def get_db() -> Iterator[Session]:
    db = store.session()
    try:
        yield db
    finally:
        db.close()
