"""
Test configuration and fixtures
"""

import os

# Settings are read at import time; configure the environment first.
TEST_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
os.environ["OWNER_PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "100000"
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from horizon_api.app import app  # noqa: E402
from horizon_api.core.signer import MessageSigner  # noqa: E402
from horizon_api.database import get_db  # noqa: E402
from horizon_api.models import Base  # noqa: E402

# EIP-55 reference vectors
USER_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
CONTRACT_ADDRESS = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Mock init_db to prevent creating tables on the application engine
    with patch("horizon_api.app.init_db"):
        app.dependency_overrides[get_db] = override_get_db
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()


@pytest.fixture
def signer():
    """Signer holding the test key"""
    return MessageSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def sample_project_payload():
    """Project creation payload as sent by API clients"""
    return {
        "saleStart": "2025-03-01T00:00:00",
        "saleEnd": "2025-03-08T00:00:00",
        "registrationTimeStarts": "2025-02-20T00:00:00",
        "registrationTimeEnds": "2025-02-27T00:00:00",
        "tge": "2025-03-15T00:00:00",
        "unlockTime": "2025-03-15T12:00:00",
        "vestingPortionsUnlockTime": [1742040000, 1744718400, 1747310400],
        "vestingPercentPerPortion": [20, 30, 50],
    }
