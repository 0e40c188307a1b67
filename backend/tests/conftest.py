import asyncio
import os
import tempfile
import uuid
from pathlib import Path

# Settings are read at import time, so the environment has to be ready first.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="summarizer-tests-"))
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENV"] = "test"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'api.db'}"
os.environ["SUMMARY_WEBHOOK_URL"] = "http://webhook.test/summarize"
os.environ.pop("DELETE_NOTIFY_WEBHOOK_URL", None)

import httpx
import pytest
from fastapi.testclient import TestClient

from api.deps import get_http_client
from core.database import build_engine, build_session_factory, init_db
from main import app
from models.user import User


class FakeWebhook:
    """Stands in for every outbound webhook call made through `get_http_client`."""

    def __init__(self) -> None:
        self.requests = []
        self.responder = lambda request: httpx.Response(200, text="")

    def reply(self, status_code: int = 200, **kwargs) -> None:
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def webhook(client):
    fake = FakeWebhook()

    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake.handler)) as http:
            yield http

    app.dependency_overrides[get_http_client] = _client
    yield fake
    app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def auth_headers(client):
    email = f"user-{uuid.uuid4().hex[:8]}@meetings.io"
    r = client.post("/api/v1/auth/signup", json={"email": email, "password": "s3cret-pass", "full_name": "Test User"})
    assert r.status_code == 201, r.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def run_db(tmp_path):
    """
    Run `fn(session, user)` against a fresh SQLite file inside its own event loop.
    """

    def _run(fn):
        async def _main():
            engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'unit.db'}")
            try:
                await init_db(engine)
                factory = build_session_factory(engine)
                async with factory() as session:
                    user = User(email="owner@meetings.io", password_hash="unused")
                    session.add(user)
                    await session.commit()
                    await session.refresh(user)
                    return await fn(session, user)
            finally:
                await engine.dispose()

        return asyncio.run(_main())

    return _run
