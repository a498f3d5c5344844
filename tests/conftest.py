import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from volunteerhub.db.database import Base, get_db
from volunteerhub.main import app
from volunteerhub.models.user import User, UserRole
from tests.factories import make_user


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def company(db) -> User:
    return make_user(db, role=UserRole.COMPANY, first_name="Acme")


@pytest.fixture
def admin(db) -> User:
    return make_user(db, role=UserRole.ADMIN, first_name="Admin")


@pytest.fixture
def volunteer(db) -> User:
    return make_user(db, role=UserRole.VOLUNTEER, first_name="Alice")
