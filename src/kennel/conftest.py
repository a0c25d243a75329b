# src/kennel/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
This file provides fixtures available to all tests in the package.
"""

import os

# Set environment BEFORE importing any app modules
os.environ["KENNEL_ENV"] = "test"

from datetime import date, datetime, timedelta, timezone

import mongomock
import pytest

from kennel import db

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mongo_db():
    """
    Provide an in-memory database for one test.

    The db module is pointed at it, so every repository created during the
    test reads and writes this database. It is thrown away afterwards.
    """
    client = mongomock.MongoClient()
    database = client["kennel_test"]
    db.set_database_override(database)

    yield database

    db.clear_database_override()
    client.close()


class TickingClock:
    """A clock that moves one second forward on every reading."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def breed_repo(mongo_db, clock):
    """Provide a BreedRepository instance."""
    from kennel.breed import BreedRepository

    return BreedRepository(clock=clock)


@pytest.fixture
def dog_repo(mongo_db, breed_repo, clock):
    """Provide a DogRepository sharing the breed repository."""
    from kennel.dog import DogRepository

    return DogRepository(breeds=breed_repo, clock=clock)


@pytest.fixture
def catalog_repo(mongo_db, clock):
    """Provide the CatalogRepository façade."""
    from kennel.repository import CatalogRepository

    return CatalogRepository(clock=clock)


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def sample_breed(breed_repo) -> str:
    """Create a single test breed and return its id."""
    from kennel.breed import BreedCreate, Category

    return breed_repo.create(BreedCreate(category=Category.LARGE, name="Golden Retriever"))


@pytest.fixture
def sample_breeds(breed_repo) -> list[str]:
    """Create one breed per category."""
    from kennel.breed import BreedCreate, Category

    breeds = [
        (Category.SMALL, "Chihuahua"),
        (Category.MEDIUM, "Shiba Inu"),
        (Category.LARGE, "Labrador Retriever"),
        (Category.GIANT, "Great Dane"),
    ]
    return [breed_repo.create(BreedCreate(category=c, name=n)) for c, n in breeds]


def make_dog_create(breed_id: str, name: str = "Buddy", **overrides):
    """Build a DogCreate with sensible defaults."""
    from kennel.dog import BreedRef, DogCreate, Gender

    values = {
        "name": name,
        "breed": BreedRef(breed_id),
        "birthday": date(2020, 5, 17),
        "gender": Gender.MALE,
        "is_sterilized": True,
        "introduction": "Loves the beach.",
        "tags": ["friendly", "fetch"],
        "portrait_id": None,
    }
    values.update(overrides)
    return DogCreate(**values)


@pytest.fixture
def dog_create():
    """Provide the DogCreate builder to tests."""
    return make_dog_create


@pytest.fixture
def sample_dog(dog_repo, sample_breed):
    """Create a single dog owned by user-1."""
    return dog_repo.create("user-1", make_dog_create(sample_breed))


@pytest.fixture
def sample_dogs(dog_repo, sample_breed) -> list:
    """Create 10 dogs: even ones owned by user-1, odd ones by user-2."""
    return [
        dog_repo.create(
            "user-1" if i % 2 == 0 else "user-2",
            make_dog_create(sample_breed, name=f"Dog {i}"),
        )
        for i in range(10)
    ]


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app(mongo_db):
    """Create Flask application for testing."""
    from kennel.app import create_app

    app = create_app()
    app.config["TESTING"] = True

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
