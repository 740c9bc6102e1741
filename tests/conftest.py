import os

# Point the app at SQLite before anything imports app.core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.movie import Movie
from app.models.seat import Seat
from app.models.user import User
from app.schemas.showtime import ShowtimeCreate
from app.services.showtime_registry import add_showtime

PASSWORD = "secret123"


@pytest.fixture
def engine(tmp_path):
    # File database so several sessions (and threads) share one store
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email, mobile, role="user", full_name="Test User"):
    user = User(
        email=email,
        mobile_number=mobile,
        password_hash=get_password_hash(PASSWORD),
        full_name=full_name,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token(subject=str(user.id), role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db):
    return make_user(db, "alice@example.com", "9000000001", full_name="Alice")


@pytest.fixture
def other_user(db):
    return make_user(db, "bob@example.com", "9000000002", full_name="Bob")


@pytest.fixture
def admin(db):
    return make_user(db, "admin@example.com", "9000000009", role="admin", full_name="Admin")


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def movie(db):
    movie = Movie(title="Interstellar", duration_mins=169, genre="Sci-Fi")
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie


def future(hours=24):
    return datetime.now(timezone.utc) + timedelta(hours=hours)


def new_showtime(db, movie, screen_number=1, start_time=None, **prices):
    data = ShowtimeCreate(
        movie_id=movie.id,
        cinema_name="PVR Phoenix",
        location="Mumbai",
        screen_number=screen_number,
        start_time=start_time or future(),
        **prices,
    )
    return add_showtime(db, data)


@pytest.fixture
def showtime(db, movie):
    return new_showtime(db, movie)


@pytest.fixture
def seats_by_label(db, showtime):
    seats = db.query(Seat).filter(Seat.screen_id == showtime.screen_id).all()
    return {f"{s.row_label}{s.seat_number}": s for s in seats}
