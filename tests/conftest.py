# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from itertools import count
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from threadline.api.v1.dependencies import get_revalidator
from threadline.core.security import create_access_token
from threadline.db.session import Base, enable_sqlite_foreign_keys
from threadline.db.session import get_db as app_get_session
from threadline.main import app as fastapi_app
from threadline.models import Community, Thread, User
from threadline.services import thread_service, user_service
from threadline.services.revalidation import RevalidationService

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_COMMUNITY_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def redis_client() -> MagicMock:
    """Stand-in for the Redis client behind the revalidation service."""
    return MagicMock()


@pytest.fixture()
def revalidator(redis_client: MagicMock) -> RevalidationService:
    return RevalidationService(redis_client, key="test:stale-paths")


@pytest.fixture(autouse=True)
def default_revalidator(
    monkeypatch: pytest.MonkeyPatch,
    revalidator: RevalidationService,
) -> None:
    """Keep actions called without an explicit revalidator away from a real Redis."""
    monkeypatch.setattr(thread_service, "get_revalidation_service", lambda: revalidator)
    monkeypatch.setattr(user_service, "get_revalidation_service", lambda: revalidator)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    revalidator: RevalidationService,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_revalidator] = lambda: revalidator
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_revalidator, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with unique ids and usernames."""

    def _make_user(external_id: str | None = None, **fields: object) -> User:
        n = next(_USER_COUNTER)
        user = User(
            external_id=external_id or f"user_{n}",
            username=str(fields.pop("username", f"member{n}")),
            name=str(fields.pop("name", f"Member {n}")),
            image=fields.pop("image", "https://img.example.com/avatar.png"),
            bio=fields.pop("bio", "Just here to read threads"),
            onboarded=bool(fields.pop("onboarded", True)),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_community(db_session: Session) -> Callable[..., Community]:
    """Return a factory persisting communities owned (and joined) by ``creator``."""

    def _make_community(creator: User, **fields: object) -> Community:
        n = next(_COMMUNITY_COUNTER)
        community = Community(
            external_id=str(fields.pop("external_id", f"org_{n}")),
            name=str(fields.pop("name", f"Community {n}")),
            username=str(fields.pop("username", f"community{n}")),
            image=fields.pop("image", None),
            bio=fields.pop("bio", "A place to talk"),
            created_by=creator,
        )
        community.members.append(creator)
        db_session.add(community)
        db_session.commit()
        db_session.refresh(community)
        return community

    return _make_community


@pytest.fixture()
def make_thread(db_session: Session) -> Callable[..., Thread]:
    """Return a factory persisting threads (replies when ``parent`` is given)."""

    def _make_thread(
        author: User,
        text: str = "Hello, threads",
        *,
        parent: Thread | None = None,
        community: Community | None = None,
    ) -> Thread:
        thread = Thread(
            text=text,
            author=author,
            parent=parent,
            community=community if parent is None else parent.community,
        )
        db_session.add(thread)
        db_session.commit()
        db_session.refresh(thread)
        return thread

    return _make_thread


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary persisted user."""
    return make_user("user_alice", username="alice", name="Alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("user_bob", username="bob", name="Bob")


@pytest.fixture()
def community(make_community: Callable[..., Community], test_user: User) -> Community:
    """Create a default test community owned by ``test_user``."""
    return make_community(test_user, external_id="org_test", username="testers", name="Testers")


def _bearer(viewer_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(viewer_id)}"}


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a helper building authorization headers for any viewer id."""
    return _bearer


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _bearer(test_user.external_id)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _bearer(other_user.external_id)
