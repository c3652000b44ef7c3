"""Shared builders for tests: settings, an app on in-memory SQLite, and a bare DB session."""

from fastapi import FastAPI
from sqlalchemy.orm import Session

from gatehouse.core.config import Settings
from gatehouse.core.database import build_engine, build_session_factory
from gatehouse.core.security import hash_password
from gatehouse.main import create_app
from gatehouse.models import Base
from gatehouse.services.users import UserStore

TEST_SECRET = "test-session-secret-of-at-least-32-bytes"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests; ignores any .env file so results do not depend on the machine."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "SESSION_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_app(**overrides: object) -> FastAPI:
    """App bound to a fresh in-memory database with all tables created."""
    app = create_app(make_settings(**overrides))
    Base.metadata.create_all(app.state.engine)
    return app


def make_db() -> Session:
    """Standalone session on a fresh in-memory database with all tables created."""
    engine = build_engine(make_settings())
    Base.metadata.create_all(engine)
    return build_session_factory(engine)()


def add_user(app: FastAPI, name: str, email: str, password: str, role: str = "user") -> int:
    """Insert a user straight into the app's database (e.g. an admin, who cannot sign up)."""
    db = app.state.session_factory()
    try:
        return UserStore(db).create_user(name, email, hash_password(password, rounds=4), role)
    finally:
        db.close()
