import os
import tempfile
from decimal import Decimal

import pytest

# must be in place before plantstore.config is first imported
_TMP = tempfile.mkdtemp(prefix="plantstore-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["LOCKS_DIR"] = os.path.join(_TMP, "locks")
os.environ["ENVIRONMENT"] = "test"

from plantstore.db import init_db, store  # noqa: E402
from plantstore.models.plant import Plant  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    init_db(reset=True)
    yield
    store.disconnect()


def create_plant(name="Test Plant", price=299, available=True, categories=("Indoor",), **attrs):
    db = store.session()
    try:
        p = Plant(
            name=name,
            price=Decimal(str(price)),
            categories=list(categories),
            is_available=available,
            **attrs,
        )
        db.add(p)
        db.commit()
        return p.id
    finally:
        db.close()


def set_plant(plant_id, **values):
    db = store.session()
    try:
        p = db.get(Plant, plant_id)
        for key, value in values.items():
            setattr(p, key, value)
        db.commit()
    finally:
        db.close()


def delete_plant(plant_id):
    db = store.session()
    try:
        db.delete(db.get(Plant, plant_id))
        db.commit()
    finally:
        db.close()


@pytest.fixture
def make_plant():
    return create_plant


@pytest.fixture
def update_plant():
    return set_plant


@pytest.fixture
def remove_plant():
    return delete_plant
