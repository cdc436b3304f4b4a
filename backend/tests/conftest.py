"""
Shared fixtures. Every test gets its own in-memory SQLite store so data never
leaks between tests; the module-level engine is pointed at memory too.
"""
import asyncio
import os
from contextlib import aclosing

os.environ.setdefault("DATABASE_URL", "sqlite://")  # before gainfunction.settings loads

import pytest
from fastapi.testclient import TestClient

from gainfunction.container import build_container
from gainfunction.db import get_db
from gainfunction.main import app
from gainfunction.settings import Settings


@pytest.fixture
def container():
    c = build_container(Settings(DATABASE_URL="sqlite://"))
    yield c
    c.close()


@pytest.fixture
def empty_container():
    """Store without the seeded exercise catalog."""
    c = build_container(Settings(DATABASE_URL="sqlite://", SEED_EXERCISES=False))
    yield c
    c.close()


@pytest.fixture
def client(container):
    def _get_db():
        db = container.session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


async def _wait_until(flow, predicate, timeout: float = 2.0):
    """Await the first snapshot of ``flow`` matching ``predicate``."""
    async def _watch():
        async with aclosing(flow.stream()) as states:
            async for state in states:
                if predicate(state):
                    return state

    return await asyncio.wait_for(_watch(), timeout)


@pytest.fixture
def wait_until():
    return _wait_until
