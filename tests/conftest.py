"""Shared fixtures: an isolated SQLite database and fake push delivery."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from jose import jwt

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "connection_notifier_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["PUSH_ENABLED"] = "false"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"

from notifier.config import get_settings  # noqa: E402

get_settings.cache_clear()

from notifier.application.use_cases.notifications import (  # noqa: E402
    NotificationDispatcher,
    PreferenceGate,
)
from notifier.domain.entities import PushOutcome  # noqa: E402
from notifier.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from notifier.infrastructure.security import ALGORITHM  # noqa: E402


class RecordingPushSender:
    """Push sender double returning scripted outcomes per token."""

    def __init__(self) -> None:
        self.outcomes: dict[str, PushOutcome | Exception] = {}
        self.sent: list[tuple[str, object]] = []

    async def send(self, token, message):
        self.sent.append((token, message))
        outcome = self.outcomes.get(token, PushOutcome.OK)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        return None

    def sent_tokens(self) -> list[str]:
        return [token for token, _ in self.sent]


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture
def push_sender() -> RecordingPushSender:
    return RecordingPushSender()


@pytest.fixture
def preference_gate() -> PreferenceGate:
    return PreferenceGate(SessionLocal, ttl_seconds=0)


@pytest.fixture
def dispatcher(push_sender, preference_gate) -> NotificationDispatcher:
    return NotificationDispatcher(
        session_factory=SessionLocal,
        push_sender=push_sender,
        preference_gate=preference_gate,
        max_concurrency=4,
    )


@pytest.fixture
def auth_headers():
    """Return a factory of bearer headers signed like the auth service does."""

    def build(user_id: int, *, expires_in: timedelta = timedelta(minutes=30)) -> dict[str, str]:
        claims = {"sub": str(user_id), "exp": datetime.now(timezone.utc) + expires_in}
        token = jwt.encode(claims, get_settings().secret_key, algorithm=ALGORITHM)
        return {"Authorization": f"Bearer {token}"}

    return build
