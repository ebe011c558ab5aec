"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- rules / rules_2025: Validated rule tables loaded from the bundled JSON
- today: Fixed reference date passed to date-relative calculations
- two_parent_family / single_parent_family: Frozen family snapshots
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
"""

import datetime
import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# The app module builds its engine at import time; keep tests off the file database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# ruff: noqa: E402
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foraldradagar.core.calculator import clear_projection_cache
from foraldradagar.core.models import (
    Child,
    Family,
    LeaveDayRecord,
    LeaveType,
    Multiplicity,
    Parent,
    ParentRole,
)
from foraldradagar.core.rules import clear_rules_cache
from foraldradagar.core.storage import load_rule_constants
from foraldradagar.database.database import Base, get_db
from foraldradagar.main import app
from foraldradagar.routes.shared import current_rules


def weekday_records(
    count: int,
    start: datetime.date = datetime.date(2026, 1, 5),
    leave_type: LeaveType = LeaveType.PARENTAL_LEAVE,
    is_planned: bool = False,
) -> tuple[LeaveDayRecord, ...]:
    """Skapar `count` loggade dagar på vardagar från och med start."""
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(LeaveDayRecord(date=current, leave_type=leave_type, is_planned=is_planned))
        current += datetime.timedelta(days=1)
    return tuple(days)


@pytest.fixture
def rules():
    return load_rule_constants(2026)


@pytest.fixture
def rules_2025():
    return load_rule_constants(2025)


@pytest.fixture
def today():
    return datetime.date(2026, 1, 15)


@pytest.fixture
def child():
    return Child(birth_date=datetime.date(2025, 12, 1), is_born=True)


@pytest.fixture
def two_parent_family(child):
    """Anna 35 000 kr/mån och Erik 45 000 kr/mån, inga uttagna dagar."""
    return Family(
        id=1,
        parents=(
            Parent(name="Anna", monthly_gross_income=Decimal("35000"), role=ParentRole.FIRST),
            Parent(name="Erik", monthly_gross_income=Decimal("45000"), role=ParentRole.SECOND),
        ),
        children=(child,),
    )


@pytest.fixture
def single_parent_family(child):
    return Family(
        id=2,
        parents=(Parent(name="Sara", monthly_gross_income=Decimal("30000"), role=ParentRole.FIRST),),
        children=(child,),
    )


@pytest.fixture
def twins_family():
    return Family(
        parents=(
            Parent(monthly_gross_income=Decimal("35000"), role=ParentRole.FIRST),
            Parent(monthly_gross_income=Decimal("35000"), role=ParentRole.SECOND),
        ),
        children=(Child(birth_date=datetime.date(2025, 12, 1), is_born=True, multiplicity=Multiplicity.TWINS),),
    )


@pytest.fixture(autouse=True)
def clear_caches():
    """Memoized projections and rule tables must not leak between tests."""
    yield
    clear_projection_cache()
    clear_rules_cache()


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    This fixture creates a fresh database for each test function,
    ensuring test isolation. The database is destroyed after each test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    # StaticPool: TestClient runs requests in another thread, all must share one connection
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_client(test_db, rules):
    """
    Create FastAPI TestClient with test database dependency override.

    The rule table is pinned to 2026 so amounts do not depend on the year
    the tests run in.

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[current_rules] = lambda: rules

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def onboarding_payload():
    return {
        "family_type": "two_parents",
        "stage": "born",
        "child_date": "2026-01-01",
        "parent1": {"name": "Anna", "monthly_income": "35000"},
        "parent2": {"name": "Erik", "monthly_income": "45000"},
        "days_taken_parent1": 10,
        "days_taken_parent2": 0,
        "priority": "equal_split",
        "knowledge_level": "beginner",
    }


@pytest.fixture
def created_family(test_client, onboarding_payload):
    response = test_client.post("/api/families", json=onboarding_payload)
    assert response.status_code == 201
    return response.json()
