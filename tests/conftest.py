"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from decimal import Decimal

# Configure the service shell before the app is imported
os.environ.setdefault("ENV", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from youthwork.main import app
from youthwork.policy.models import JobInput, PayType
from youthwork.rules.models import JobCategory, RuleTables
from youthwork.rules.tables import get_rule_tables


def build_job(**overrides) -> JobInput:
    """Build a compliant dog-walking job, with fields overridden."""
    fields = {
        "title": "Walk our dog",
        "category": JobCategory.DOG_WALKING,
        "description": "Friendly labrador needs a walk around the park",
        "pay_amount": Decimal("200"),
        "pay_type": PayType.HOURLY,
    }
    fields.update(overrides)
    return JobInput(**fields)


@pytest.fixture
def tables() -> RuleTables:
    """Process-wide rule tables."""
    return get_rule_tables()


@pytest.fixture
def job_payload() -> dict:
    """JSON body for a compliant dog-walking job."""
    return {
        "title": "Walk our dog",
        "category": "DOG_WALKING",
        "description": "Friendly labrador needs a walk around the park",
        "pay_amount": 200,
        "pay_type": "HOURLY",
    }


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_job() -> Callable[..., JobInput]:
    """Factory for job inputs based on a compliant dog-walking job."""
    return build_job
