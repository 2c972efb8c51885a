"""
Pytest configuration and fixtures for the pharmacy service tests.
"""

import os

# Point the service at throwaway backends before anything imports utils.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""

from datetime import date
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from domain.repositories.cache_repository import RecordCache
from infrastructure.models.base import Base
from infrastructure.models.member_orm import MemberORM
from infrastructure.models.provider_orm import ProviderORM
from main import app
from utils.dependencies import get_db

# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed "today" for age-based searches
TODAY = date(2024, 6, 15)


class InMemoryRecordCache(RecordCache):
    """Dictionary-backed cache that records every key it was asked for."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.reads = []

    async def get_string(self, key: str) -> Optional[str]:
        self.reads.append(key)
        return self.store.get(key)

    async def set_string(self, key: str, value: str) -> None:
        self.store[key] = value

    async def delete(self, key: str) -> None:
        self.store.pop(key, None)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def record_cache():
    return InMemoryRecordCache()


def make_member_row(**overrides) -> MemberORM:
    """Build a member row with sensible defaults."""
    values = {
        "member_number": "M000",
        "first_name": "Test",
        "last_name": "Member",
        "dob": date(1980, 1, 1),
        "gender": "Male",
        "address": "1 Test Street",
        "phone": "555-0100",
        "email": "test@example.com",
    }
    values.update(overrides)
    return MemberORM(**values)


def make_provider_row(**overrides) -> ProviderORM:
    """Build a provider row with sensible defaults."""
    values = {
        "provider_number": "P000",
        "name": "Test Provider",
        "npi": "1000000000",
        "address": "1 Clinic Road",
        "phone": "555-0200",
        "email": "provider@example.com",
        "specialty": "General Practice",
    }
    values.update(overrides)
    return ProviderORM(**values)


@pytest.fixture
def seed_members(db_session):
    """25 members, three of them with 'Kumar' in the last name."""
    last_names = ["Kumar", "Smith", "Kumaraswamy", "Jones", "Garcia"]
    genders = ["Male", "Female", "Other"]
    rows = []
    kumar_count = 0
    for i in range(25):
        last_name = last_names[i % len(last_names)]
        if "Kumar" in last_name:
            kumar_count += 1
            if kumar_count > 3:
                last_name = "Brown"
        rows.append(
            make_member_row(
                member_number=f"M{i:03d}",
                first_name=f"First{chr(65 + i)}",
                last_name=last_name,
                dob=date(1950 + i, 1 + i % 12, 1 + i % 28),
                gender=genders[i % len(genders)],
                email=f"member{i}@example.com",
            )
        )
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture
def seed_providers(db_session):
    """15 providers, five of them in Cardiology."""
    names = [
        "Zhang", "Adams", "Morales", "Baker", "Olsen",
        "Khan", "Evans", "Ito", "Reyes", "Novak",
        "Chen", "Dubois", "Fischer", "Haddad", "Lopez",
    ]
    rows = []
    for i, name in enumerate(names):
        rows.append(
            make_provider_row(
                provider_number=f"P{i:03d}",
                name=f"Dr. {name}",
                npi=f"{1000000000 + i}",
                specialty="Cardiology" if i % 3 == 0 else "Dermatology",
                email=f"{name.lower()}@clinic.example.com",
            )
        )
    db_session.add_all(rows)
    db_session.commit()
    return rows
