from __future__ import annotations

import asyncio
import json
import os
from typing import Any, Callable, List, Optional, Union

import pytest

# Settings are read at import time; point them at SQLite before anything imports studypod.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./studypod_test.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "warning")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from studypod.core.database import get_db, get_session_factory
from studypod.models import Base
from studypod.services.ai.study_ai_service import StudyAIService, get_ai_service
from studypod.services.chat.connection_handler import PodConnection
from studypod.services.chat.websocket_manager import PodConnectionManager, get_connection_manager


class FakeTransport:
    """Stands in for a WebSocket: records decoded frames, can fail or stall on send."""

    def __init__(self, *, fail: bool = False, delay: float = 0.0, on_send: Optional[Callable[[dict], None]] = None) -> None:
        self.sent: List[dict] = []
        self.closed = False
        self.fail = fail
        self.delay = delay
        self.on_send = on_send

    async def send_text(self, data: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("transport broken")
        frame = json.loads(data)
        if self.on_send is not None:
            self.on_send(frame)
        self.sent.append(frame)

    async def close(self, code: int = 1000) -> None:
        self.closed = True

    def events(self, event_type: Optional[str] = None) -> List[dict]:
        return [frame for frame in self.sent if event_type is None or frame["type"] == event_type]


Response = Union[str, Exception, Callable[[str], Union[str, Exception]]]


class FakeGeminiClient:
    """Scripted replacement for GeminiClient.generate"""

    def __init__(self, response: Response = "{}") -> None:
        self.response = response
        self.prompts: List[str] = []

    async def generate(self, prompt: str, json_mode: bool = False) -> str:
        self.prompts.append(prompt)
        response = self.response(prompt) if callable(self.response) else self.response
        if isinstance(response, Exception):
            raise response
        return response


def default_ai_response(prompt: str) -> str:
    if "harmful content" in prompt:
        return '{"isAppropriate": true, "reason": "", "suggestedEdit": ""}'
    if "compatibility score" in prompt:
        return '{"score": 80, "reasons": ["Same subject"], "compatibility": {"scheduleMatch": 70, "paceMatch": 90, "subjectMatch": 100, "goalAlignment": 60}}'
    if "study plan" in prompt:
        return '{"recommendations": [{"topic": "Limits", "difficulty": "beginner", "estimatedTime": 45, "resources": ["Khan Academy"], "tips": ["Draw graphs"]}]}'
    return "Break the problem into smaller steps."


@pytest.fixture
def fake_ai_client() -> FakeGeminiClient:
    return FakeGeminiClient(default_ai_response)


@pytest.fixture
def ai_service(fake_ai_client: FakeGeminiClient) -> StudyAIService:
    return StudyAIService(client=fake_ai_client)


@pytest.fixture
def session_factory(tmp_path) -> async_sessionmaker:
    """File-backed SQLite per test; NullPool so the engine is not tied to one event loop."""
    db_path = tmp_path / "studypod.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def db(session_factory: async_sessionmaker):
    async with session_factory() as session:
        yield session


@pytest.fixture
def manager() -> PodConnectionManager:
    return PodConnectionManager(send_timeout=0.5)


@pytest.fixture
def connect(manager: PodConnectionManager):
    """Register a fake transport with the manager and return its handler."""

    def _connect(transport: Optional[FakeTransport] = None, message_sender=None):
        return manager.register(transport or FakeTransport(), message_sender=message_sender)

    return _connect


@pytest.fixture
def client(session_factory: async_sessionmaker, ai_service: StudyAIService, manager: PodConnectionManager):
    from studypod.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    app.dependency_overrides[get_connection_manager] = lambda: manager

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def transport_of(connection: PodConnection) -> FakeTransport:
    return connection.transport


@pytest.fixture
def make_user(db: AsyncSession):
    from studypod.models.user import User

    async def _make(email: Optional[str] = None, **fields: Any) -> User:
        user = User(email=email or f"{os.urandom(4).hex()}@example.com", **fields)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_pod(db: AsyncSession):
    from studypod.models.study_pod import StudyPod

    async def _make(**fields: Any) -> StudyPod:
        fields.setdefault("name", "Calculus Crew")
        fields.setdefault("subject", "Mathematics")
        pod = StudyPod(**fields)
        db.add(pod)
        await db.commit()
        await db.refresh(pod)
        return pod

    return _make


def create_user_via_api(client: TestClient, email: str, **profile: Any) -> dict:
    res = client.post("/api/users", json={"email": email, "firstName": email.split("@")[0]})
    assert res.status_code == 201, res.text
    user = res.json()
    if profile:
        res = client.put("/api/profile", json=profile, headers=auth(user))
        assert res.status_code == 200, res.text
        user = res.json()
    return user


def create_pod_via_api(client: TestClient, owner: dict, **fields: Any) -> dict:
    payload = {"name": "Calculus Crew", "subject": "Mathematics", **fields}
    res = client.post("/api/pods", json=payload, headers=auth(owner))
    assert res.status_code == 201, res.text
    return res.json()


def auth(user: dict) -> dict:
    return {"X-User-Id": user["id"]}
