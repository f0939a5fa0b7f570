"""
Pytest configuration and shared fixtures for the Adfluence API tests.
"""

import os
import tempfile

# Settings are read when adfluence.config is first imported
os.environ.setdefault("JWT_SECRET_KEY", "test_jwt_secret_key_for_testing_only")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SEED_NICHES"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="adfluence-uploads-")

import pytest
from dataclasses import dataclass
from typing import Callable, Dict, Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from adfluence.main import app
from adfluence.config import settings
from adfluence.database import Base, get_db
from adfluence.models.account import Account
from adfluence.models.campaign import Campaign
from adfluence.models.enums import AccountRole
from adfluence.models.schemas import CampaignCreate, RegisterRequest
from adfluence.services.auth_service import AuthService
from adfluence.services.campaign_service import CampaignService
from adfluence.services.niche_service import seed_default_niches


TEST_PASSWORD = "Password123!"

# Database setup
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"


@dataclass
class Actor:
    """A registered account together with the token issued at registration."""
    account: Account
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """
    Create a fresh in-memory SQLite database for each test.
    """
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(test_db: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> str:
    """
    Point the upload store at a per-test directory.
    """
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(directory))
    return str(directory)


# Niche fixtures
@pytest.fixture
def niches(test_db: Session) -> Dict[str, object]:
    """
    Seed the default niche catalog and return it keyed by name.
    """
    seed_default_niches(test_db)
    from adfluence.models.niche import Niche
    return {niche.name: niche for niche in test_db.query(Niche).all()}


# Account fixtures
@pytest.fixture
def register(test_db: Session) -> Callable[..., Actor]:
    """
    Factory registering an account through the auth service.
    """
    counter = {"n": 0}

    def _register(role: AccountRole, email: str = None, name: str = None, password: str = TEST_PASSWORD) -> Actor:
        counter["n"] += 1
        role = AccountRole(role)
        email = email or f"{role.value}{counter['n']}@example.com"
        account, token = AuthService.register_account(
            test_db,
            RegisterRequest(name=name or f"{role.value.title()} {counter['n']}", email=email, password=password, role=role)
        )
        return Actor(account=account, token=token)

    return _register


@pytest.fixture
def brand(register) -> Actor:
    return register(AccountRole.BRAND, email="brand@example.com", name="Acme Brand")


@pytest.fixture
def agency(register) -> Actor:
    return register(AccountRole.AGENCY, email="agency@example.com", name="Reach Agency")


@pytest.fixture
def influencer(register) -> Actor:
    return register(AccountRole.INFLUENCER, email="creator@example.com", name="Casey Creator")


@pytest.fixture
def influencer2(register) -> Actor:
    return register(AccountRole.INFLUENCER, email="creator2@example.com", name="Robin Reels")


@pytest.fixture
def individual(register) -> Actor:
    return register(AccountRole.INDIVIDUAL, email="person@example.com", name="Pat Person")


# Campaign fixtures
@pytest.fixture
def make_campaign(test_db: Session, niches) -> Callable[..., Campaign]:
    """
    Factory creating a campaign through the campaign service.
    """
    def _make_campaign(creator: Actor, **overrides) -> Campaign:
        fields = {
            "title": "Summer launch",
            "description": "Short-form videos for our summer range",
            "niches": ["fashion"],
            "platforms": ["instagram"],
            "budget": 1000,
        }
        fields.update(overrides)
        return CampaignService.create_campaign(test_db, creator.account, CampaignCreate.model_validate(fields))

    return _make_campaign
