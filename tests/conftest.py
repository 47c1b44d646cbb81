"""
Test configuration and fixtures.
Every test runs against a fresh in-memory SQLite database.
"""
import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ.pop("STRIPE_SECRET_KEY", None)

import pytest
from fastapi.testclient import TestClient

from teamaccess.api.main import app
from teamaccess.auth.models import SubscriptionTier
from teamaccess.storage.db import db
from tests.factories import create_user
from tests.utils import auth_headers_for


@pytest.fixture(autouse=True)
def setup_test_db():
    """Create tables before each test and drop them afterwards"""
    db.create_tables()
    yield
    db.drop_tables()


@pytest.fixture
def client():
    """Create FastAPI test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def owner():
    """Owner on a plan with room for three team members"""
    return create_user(email="owner@example.com", name="Olivia Owner", tier=SubscriptionTier.PRO)


@pytest.fixture
def auth_headers(owner):
    """Ajax headers for the owner"""
    return auth_headers_for(owner)
