# ================================
# TEST FIXTURES (tests/conftest.py)
# ================================

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from resource_admin.config import Settings
from resource_admin.core.database import create_db_engine, create_session_factory
from resource_admin.core.security import create_access_token
from resource_admin.main import create_app
from resource_admin.models import Base, Permission, Role, RolePermission, User, UserRole
from resource_admin.resources.registry import ResourceRegistry
from tests.sample_app import Author, AuthorResource, Post, PostResource


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        RESOURCE_MODULES=[],
        EXTERNAL_RESOURCE_MODULES=[],
        PER_PAGE=15,
        EXPORT_CHUNK_SIZE=2,
    )


@pytest.fixture
def session_factory(settings):
    """In-memory database shared by the test session and request sessions"""
    engine = create_db_engine(settings)
    Base.metadata.create_all(bind=engine)
    yield create_session_factory(settings, engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def resource_registry():
    registry = ResourceRegistry()
    registry.register(PostResource)
    registry.register(AuthorResource)
    return registry


@pytest.fixture
def app(settings, session_factory, resource_registry):
    return create_app(settings=settings, session_factory=session_factory, registry=resource_registry)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

# ================================
# PRINCIPALS
# ================================

def make_user(db, email: str, permissions=()):
    user = User(email=email, name=email.split("@")[0].title())
    if permissions:
        role = Role(name=f"role-{email}")
        for name in permissions:
            permission = db.query(Permission).filter(Permission.name == name).first() or Permission(name=name)
            role.role_permissions.append(RolePermission(permission=permission))
        user.user_roles.append(UserRole(role=role))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user, settings) -> dict:
    token = create_access_token({"sub": str(user.id)}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor(db):
    """User allowed to list posts but not authors"""
    return make_user(db, "editor@example.com", permissions=["view_any_post"])


@pytest.fixture
def auth_headers(editor, settings):
    return bearer(editor, settings)

# ================================
# RECORDS
# ================================

@pytest.fixture
def posts(db):
    """Four live posts and one soft-deleted one"""
    author = Author(name="Ada Lovelace")
    records = {
        "alpha": Post(title="Alpha", status="published", category="news", amount=10.0,
                      published_at=datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc), author=author),
        "beta": Post(title="Beta", status="published", category="tech", amount=20.0, author=author),
        "gamma": Post(title="Gamma", status="draft", category="news", amount=30.0),
        "delta": Post(title="Delta", status="draft", category="tech", amount=40.0),
        "epsilon": Post(title="Epsilon", status="archived", category="news", amount=50.0,
                        deleted_at=datetime(2024, 4, 1, tzinfo=timezone.utc)),
    }
    db.add_all(records.values())
    db.commit()
    for record in records.values():
        db.refresh(record)
    return records
