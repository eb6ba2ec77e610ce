import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("TESTING", "true")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pagekit import create_app  # noqa: E402
from pagekit.config import TestConfig  # noqa: E402
from pagekit.security.session_store import SessionStore  # noqa: E402


class FakeClock:
    """Manually advanced wall clock for token timing tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def app(tmp_path):
    app = create_app(
        TestConfig,
        overrides={"ERROR_REPORT_DIRECTORY": str(tmp_path / "reports")},
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore({}, clock=clock)
