import os

import pytest

# The API module builds its manager at import time; keep tests off Redis
os.environ.setdefault("USE_REDIS", "0")

from game.manager import GameManager


@pytest.fixture
def manager():
    return GameManager(use_redis=False)


@pytest.fixture
def client(monkeypatch, manager):
    import app as app_module

    monkeypatch.setattr(app_module, "manager", manager)
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client
