"""Pytest configuration and fixtures."""
import os
from datetime import date, datetime, timedelta

os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.main import app
from app.config import settings
from app.models.goal import Goal
from app.models.round import Round


@pytest.fixture
def make_round():
    """
    Build Round models for the handicap and goal calculations.

    Rounds default to consecutive days going back from 2024-06-30 in the
    order they are created, so the first one built is the most recent.
    """
    counter = {"n": 0}

    def _make(differential=10.0, score=85, putts=32, fairways_hit=7, greens_hit=8,
              played_on=None, round_id=None):
        counter["n"] += 1
        now = datetime(2024, 7, 1)
        return Round(
            _id=round_id or f"round{counter['n']:03d}",
            user_id="user123",
            course_id="course123",
            tee_name="White",
            played_on=played_on or date(2024, 6, 30) - timedelta(days=counter["n"] - 1),
            score=score,
            putts=putts,
            fairways_hit=fairways_hit,
            greens_hit=greens_hit,
            differential=differential,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest.fixture
def make_goal():
    """Build Goal models that have not been achieved yet."""

    def _make(category, target_value, current_value=None, achieved=False, goal_id=None):
        now = datetime(2024, 1, 1)
        return Goal(
            _id=goal_id or str(ObjectId()),
            user_id="user123",
            name=f"{category} goal",
            category=category,
            target_value=target_value,
            current_value=current_value,
            achieved=achieved,
            completed_at=now if achieved else None,
            created_at=now,
            updated_at=now,
        )

    return _make


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Skips the test when no MongoDB server is reachable
    - Yields an async HTTP client for testing
    - Cleans up the test database after each test
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=1000)
    try:
        await test_client.admin.command("ping")
    except PyMongoError:
        test_client.close()
        pytest.skip("MongoDB is not available")

    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]

    # Override the database dependency
    from app.database import database
    original_db = database.db
    database.db = test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    await test_client.drop_database(test_db_name)

    database.db = original_db
    test_client.close()


@pytest_asyncio.fixture
async def auth_headers(app_client):
    """Register a golfer and return bearer headers for them."""
    await app_client.post(
        "/auth/register",
        json={"email": "golfer@example.com", "password": "password123", "name": "Golfer"},
    )
    response = await app_client.post(
        "/auth/login",
        json={"email": "golfer@example.com", "password": "password123"},
    )
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
