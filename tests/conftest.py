import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# must be set before the app builds its settings and engine
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session  # noqa: E402

from taskmanager.backend.db.session import build_engine, create_all_tables, get_session  # noqa: E402
from taskmanager.backend.main import app  # noqa: E402


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    create_all_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def bare_engine():
    """An engine whose database has no tables, so every statement fails."""
    eng = build_engine("sqlite://")
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as s:
        yield s


def _client_for(eng):
    def _override():
        with Session(eng) as s:
            yield s

    app.dependency_overrides[get_session] = _override
    return TestClient(app)


@pytest.fixture
def client(engine):
    yield _client_for(engine)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(bare_engine):
    yield _client_for(bare_engine)
    app.dependency_overrides.clear()
