# backend/tests/unit/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orquestra.main import app
from orquestra.db import Base, get_db
from orquestra.dependencies import get_notification_dispatcher
from orquestra import models
from orquestra.auth import create_access_token
from orquestra.enums import UserRole


class RecordingDispatcher:
    """Stands in for the Celery dispatcher and remembers every call."""

    def __init__(self):
        self.calls = []

    def notify_project_addition(self, user_id, project_id, project_name):
        self.calls.append((user_id, project_id, project_name))


@pytest.fixture
def engine():
    # Fresh in-memory DB per test, one connection shared with TestClient's thread
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enforce FKs in SQLite (off by default otherwise)
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def dispatcher():
    return RecordingDispatcher()

@pytest.fixture(autouse=True)
def _override_dependencies(db_session, dispatcher):
    def _get_db():
        yield db_session
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    return TestClient(app)


def _make_user(db_session, name: str, email: str, role: UserRole) -> models.User:
    user = models.User(
        name=name,
        email=email,
        password_hash="not-a-real-hash",
        role=role.value,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def make_user(db_session):
    """Factory: make_user("Name", "x@example.com", UserRole.DEVELOPER)"""
    def _factory(name, email, role=UserRole.DEVELOPER):
        return _make_user(db_session, name, email, role)
    return _factory

@pytest.fixture
def creator(db_session):
    return _make_user(db_session, "Paula Manager", "paula@example.com", UserRole.PROJECT_MANAGER)

@pytest.fixture
def developer(db_session):
    return _make_user(db_session, "Dev Silva", "dev@example.com", UserRole.DEVELOPER)

@pytest.fixture
def outsider(db_session):
    return _make_user(db_session, "Olga Outsider", "olga@example.com", UserRole.DEVELOPER)

@pytest.fixture
def admin(db_session):
    return _make_user(db_session, "Ada Admin", "admin@example.com", UserRole.ADMIN)

@pytest.fixture
def headers_for():
    """Build bearer headers for a user"""
    def _headers(user):
        token = create_access_token(user.id, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _headers

@pytest.fixture
def make_project(db_session):
    """Create a project through the service so the creator membership exists"""
    from orquestra.schemas import ProjectCreate
    from orquestra.services.project_service import ProjectService

    def _factory(owner, name="Orquestra Launch", description="Initial rollout plan for Q1"):
        return ProjectService(db_session).create_project(
            ProjectCreate(name=name, description=description), owner.id
        )
    return _factory

@pytest.fixture
def populate_project(db_session):
    """
    Fill a project with 3 tasks (2 comments, 1 history entry, 1 tag link and
    1 assignee each), 2 documents with 2 versions each and 2 chat messages.
    """
    def _populate(project, author):
        tag = models.TaskTag(project_id=project.id, name="backend", color="#3366ff")
        db_session.add(tag)
        db_session.flush()

        for index in range(3):
            task = models.Task(project_id=project.id, title=f"Task {index + 1}")
            db_session.add(task)
            db_session.flush()
            db_session.add_all([
                models.TaskComment(task_id=task.id, user_id=author.id, content="first"),
                models.TaskComment(task_id=task.id, user_id=author.id, content="second"),
                models.TaskHistory(task_id=task.id, user_id=author.id, field_name="status",
                                   old_value="pending", new_value="in_progress"),
                models.TaskToTag(task_id=task.id, tag_id=tag.id),
                models.TaskAssignee(task_id=task.id, user_id=author.id),
            ])

        for index in range(2):
            document = models.Document(project_id=project.id, title=f"Doc {index + 1}", created_by=author.id)
            db_session.add(document)
            db_session.flush()
            for number in (1, 2):
                db_session.add(models.DocumentVersion(
                    document_id=document.id,
                    version_number=number,
                    file_path=f"uploads/doc-{document.id}-v{number}.pdf",
                    original_name="doc.pdf",
                    uploaded_by=author.id,
                ))

        db_session.add_all([
            models.ChatMessage(project_id=project.id, user_id=author.id, message="hello"),
            models.ChatMessage(project_id=project.id, user_id=author.id, message="welcome"),
        ])
        db_session.commit()
        return project
    return _populate
