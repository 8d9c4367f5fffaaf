import os

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("BASE_PRICE_PER_PAGE", "10")
    monkeypatch.setenv("ANALYSIS_MAX_WORKERS", "2")

    from pagequote.core.settings import get_settings

    get_settings.cache_clear()

    from pagequote.main import app

    with TestClient(app) as test_client:
        yield test_client

    get_settings.cache_clear()
    os.environ.pop("BASE_PRICE_PER_PAGE", None)
