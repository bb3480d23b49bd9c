import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api.deps import get_asset_client
from storefront.data.database import Base, get_db, make_engine
from storefront.data.models import UserModel
from storefront.main import create_app
from storefront.services.identity_service import IdentityService, hash_password
from tests.helpers import FakeAssetClient


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def assets():
    return FakeAssetClient()


@pytest.fixture()
def app(session_factory, assets):
    app = create_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_asset_client] = lambda: assets
    return app


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def make_user(db):
    def _make(username="budi", role="CUSTOMER", password="secret123"):
        user = UserModel(
            username=username,
            email=f"{username}@gmail.com",
            password=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def auth_headers():
    def _headers(user, now=None):
        token, _ = IdentityService().issue_token(user, now=now)
        return {"Authorization": f"Bearer {token}"}

    return _headers
