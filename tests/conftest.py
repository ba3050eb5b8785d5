"""Shared fixtures for the TeamHub test-suite."""

from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from teamhub.domain.entities import Project, Task, User, UserRole  # noqa: E402
from teamhub.infrastructure.database import (  # noqa: E402
    build_engine,
    get_db,
    get_session_factory,
    initialize_database,
)
from teamhub.infrastructure.repositories import (  # noqa: E402
    ProjectRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from teamhub.infrastructure.security import create_access_token, get_password_hash  # noqa: E402

PASSWORD = "Secret123"


class RecordingPublisher:
    """Stand-in for the notification publisher that remembers dispatches."""

    def __init__(self) -> None:
        self.dispatched = []

    def dispatch(self, notification) -> None:
        self.dispatched.append(notification)


class RecordingRoomPublisher:
    def __init__(self) -> None:
        self.broadcasts = []

    def broadcast(self, room_id, *, event_type, payload, exclude_session=None) -> None:
        self.broadcasts.append(
            {
                "room_id": room_id,
                "event_type": event_type,
                "payload": payload,
                "exclude_session": exclude_session,
            }
        )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'teamhub.db'}")
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_password() -> str:
    return PASSWORD


@pytest.fixture(scope="session")
def password_hash() -> str:
    return get_password_hash(PASSWORD)


@pytest.fixture
def make_user(db_session, password_hash):
    """Return a factory creating users that log in with ``PASSWORD``."""

    def factory(name: str, *, role: UserRole = UserRole.MEMBER, email: str | None = None) -> User:
        return UserRepository(db_session).create(
            User(
                id=None,
                name=name,
                email=email or f"{name.lower()}@example.com",
                password=password_hash,
                role=role,
            )
        )

    return factory


@pytest.fixture
def workspace(db_session, make_user):
    """A team {A, B, C} working on a project managed by M, with one task."""

    manager = make_user("Manager", role=UserRole.MANAGER)
    alice = make_user("Alice")
    bob = make_user("Bob")
    carol = make_user("Carol")
    team = TeamRepository(db_session).create("Core", [alice.id, bob.id, carol.id])
    project = ProjectRepository(db_session).create(
        Project(id=None, name="Launch", manager_id=manager.id, team_id=team.id)
    )
    task = TaskRepository(db_session).create(
        Task(id=None, name="Write docs", project_id=project.id, created_by_id=manager.id)
    )
    return SimpleNamespace(
        manager=manager,
        alice=alice,
        bob=bob,
        carol=carol,
        team=team,
        project=project,
        task=task,
    )


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def room_publisher() -> RecordingRoomPublisher:
    return RecordingRoomPublisher()


@pytest.fixture
def client(session_factory):
    """Return a test client whose requests use the per-test database."""

    from main import create_app

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Return a helper building bearer headers for a user."""

    def build(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return build
