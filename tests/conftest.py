import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('BCRYPT_ROUNDS', '4')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from edufeedback.auth import jwt_handler  # noqa: E402
from edufeedback.database import Base, get_db  # noqa: E402
from edufeedback.main import app  # noqa: E402
from edufeedback.models.feedback import Feedback  # noqa: E402
from edufeedback.models.user import User  # noqa: E402
from edufeedback.stores.credential_store import CredentialStore  # noqa: E402


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Feedback.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[Feedback.__table__, User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
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
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name='Student One', email='student@college.edu', password='secret', role='student') -> int:
        return CredentialStore(db).register(name, email, password, role)

    return _make_user


@pytest.fixture
def auth_header():
    def _auth_header(user_id: int, role: str) -> dict:
        return {'Authorization': f'Bearer {jwt_handler.create_access_token(user_id, role)}'}

    return _auth_header
