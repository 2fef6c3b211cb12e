from __future__ import annotations

import pytest
import structlog
from fastapi.testclient import TestClient
from structlog.testing import LogCapture

from posts.repository import PostRepository


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "blog.db")


@pytest.fixture
def logger():
    return structlog.get_logger("tests")


@pytest.fixture
async def repository(db_path, logger):
    repo = await PostRepository.initialize(db_path, logger=logger)
    yield repo
    await repo.close()


@pytest.fixture
def client(monkeypatch, db_path):
    monkeypatch.setenv("BLOG_DB_PATH", db_path)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def captured_logs(client):
    """
    Log entries emitted while the test runs, after context-var merging.

    The configured processor list is swapped in place so loggers bound before
    the test (e.g. the repository's) are captured too.
    """
    capture = LogCapture()
    processors = structlog.get_config()["processors"]
    saved = list(processors)
    processors[:] = [structlog.contextvars.merge_contextvars, capture]
    try:
        yield capture.entries
    finally:
        processors[:] = saved
