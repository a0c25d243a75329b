"""
Tests for BreedRepository.

Run with: pytest src/kennel/breed/repository_test.py -v
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from kennel.breed import BreedCreate, BreedQuery, BreedUpdate, Category
from kennel.errors import InvalidIdentifier, StoreUnavailable
from kennel.query import Pagination


class TestCreate:
    """Tests for BreedRepository.create()"""

    @pytest.mark.parametrize(
        "category,name",
        [
            (Category.SMALL, "Chihuahua"),
            (Category.GIANT, "Great Dane"),
            ("Medium", "Shiba Inu"),  # plain string category
        ],
    )
    def test_create_success(self, breed_repo, mongo_db, category, name):
        breed_id = breed_repo.create(BreedCreate(category=category, name=name))

        doc = mongo_db["breeds"].find_one({"_id": ObjectId(breed_id)})
        assert doc["name"] == name
        assert doc["category"] == Category(category).value
        assert doc["created_at"] == doc["updated_at"]

    def test_create_strips_name(self, breed_repo):
        breed_id = breed_repo.create(BreedCreate(category=Category.SMALL, name="  Pug "))

        assert breed_repo.get(breed_id).name == "Pug"

    @pytest.mark.parametrize("name", ["", "   ", None, 5, ["Pug"]])
    def test_create_invalid_name_raises(self, breed_repo, name):
        with pytest.raises(ValueError):
            breed_repo.create(BreedCreate(category=Category.SMALL, name=name))

    def test_create_unknown_category_raises(self, breed_repo):
        with pytest.raises(ValueError):
            breed_repo.create(BreedCreate(category="Tiny", name="Pug"))

    def test_create_then_query_by_category(self, breed_repo):
        breed_repo.create(BreedCreate(category=Category.LARGE, name="Rottweiler"))

        page = breed_repo.query(BreedQuery(category_eq=Category.LARGE))

        assert any(b.name == "Rottweiler" and b.category is Category.LARGE for b in page.items)


class TestGet:
    """Tests for BreedRepository.get()"""

    def test_get_success(self, breed_repo, sample_breed):
        result = breed_repo.get(sample_breed)

        assert result.id == sample_breed
        assert result.name == "Golden Retriever"
        assert result.category is Category.LARGE
        assert result.created_at.tzinfo is not None

    def test_get_not_found(self, breed_repo):
        assert breed_repo.get(str(ObjectId())) is None

    def test_get_malformed_id_raises(self, breed_repo):
        with pytest.raises(InvalidIdentifier):
            breed_repo.get("golden")


class TestUpdate:
    """Tests for BreedRepository.update()"""

    def test_rename(self, breed_repo, sample_breed):
        before = breed_repo.get(sample_breed)

        updated = breed_repo.update(sample_breed, BreedUpdate(name="Golden"))

        after = breed_repo.get(sample_breed)
        assert updated is True
        assert after.name == "Golden"
        assert after.category is before.category
        assert after.updated_at > before.updated_at
        assert after.created_at == before.created_at

    def test_no_fields_is_noop(self, breed_repo, sample_breed):
        before = breed_repo.get(sample_breed)

        updated = breed_repo.update(sample_breed, BreedUpdate())

        assert updated is False
        assert breed_repo.get(sample_breed).updated_at == before.updated_at

    def test_missing_breed_returns_false(self, breed_repo):
        assert breed_repo.update(str(ObjectId()), BreedUpdate(name="Ghost")) is False

    def test_blank_name_raises(self, breed_repo, sample_breed):
        with pytest.raises(ValueError):
            breed_repo.update(sample_breed, BreedUpdate(name=" "))

    def test_non_string_name_raises(self, breed_repo, sample_breed):
        with pytest.raises(ValueError):
            breed_repo.update(sample_breed, BreedUpdate(name=5))

    def test_rename_strips_name(self, breed_repo, sample_breed):
        assert breed_repo.update(sample_breed, BreedUpdate(name="  Golden  ")) is True

        assert breed_repo.get(sample_breed).name == "Golden"


class TestDelete:
    """Tests for BreedRepository.delete()"""

    def test_delete_success(self, breed_repo, sample_breed):
        assert breed_repo.delete(sample_breed) is True
        assert breed_repo.get(sample_breed) is None

    def test_delete_twice(self, breed_repo, sample_breed):
        breed_repo.delete(sample_breed)

        assert breed_repo.delete(sample_breed) is False

    def test_delete_malformed_id_raises_before_store_call(self, breed_repo):
        with patch("kennel.db.get_collection") as get_collection:
            with pytest.raises(InvalidIdentifier):
                breed_repo.delete("not-an-id")

        get_collection.assert_not_called()


class TestQuery:
    """Tests for BreedRepository.query()"""

    def test_no_filter_returns_everything(self, breed_repo, sample_breeds, mongo_db):
        page = breed_repo.query(BreedQuery())

        assert [b.id for b in page.items] == sample_breeds
        assert page.total == len(page.items) == mongo_db["breeds"].count_documents({})

    def test_none_query_returns_everything(self, breed_repo, sample_breeds):
        page = breed_repo.query()

        assert page.total == len(sample_breeds)

    @pytest.mark.parametrize("category", list(Category))
    def test_filter_by_category(self, breed_repo, sample_breeds, category):
        page = breed_repo.query(BreedQuery(category_eq=category))

        assert page.total == 1
        assert page.items[0].category is category

    def test_filter_by_ids(self, breed_repo, sample_breeds):
        wanted = [sample_breeds[0], sample_breeds[2]]

        page = breed_repo.query(BreedQuery(id_in=wanted))

        assert [b.id for b in page.items] == wanted

    def test_empty_id_list_is_ignored(self, breed_repo, sample_breeds):
        page = breed_repo.query(BreedQuery(id_in=[]))

        assert page.total == len(sample_breeds)

    def test_pagination_total_is_unpaginated(self, breed_repo, sample_breeds):
        page = breed_repo.query(BreedQuery(), Pagination(limit=2, offset=1))

        assert [b.id for b in page.items] == sample_breeds[1:3]
        assert page.total == 4

    def test_malformed_id_filter_raises(self, breed_repo):
        with pytest.raises(InvalidIdentifier):
            breed_repo.query(BreedQuery(id_eq="xyz"))


class TestStoreFailures:
    """Driver errors are wrapped with the attempted operation"""

    @pytest.fixture
    def broken_collection(self):
        collection = MagicMock()
        error = ServerSelectionTimeoutError("no servers")
        collection.insert_one.side_effect = error
        collection.count_documents.side_effect = error
        collection.find.side_effect = error
        collection.delete_one.side_effect = error
        with patch("kennel.db.get_collection", return_value=collection):
            yield collection

    def test_query_failure(self, breed_repo, broken_collection):
        with pytest.raises(StoreUnavailable, match="failed to query breeds") as exc_info:
            breed_repo.query(BreedQuery(), Pagination(limit=5))

        assert isinstance(exc_info.value.__cause__, ServerSelectionTimeoutError)

    def test_create_failure(self, breed_repo, broken_collection):
        with pytest.raises(StoreUnavailable, match="failed to create breed"):
            breed_repo.create(BreedCreate(category=Category.SMALL, name="Pug"))

    def test_delete_failure(self, breed_repo, broken_collection):
        with pytest.raises(StoreUnavailable, match="failed to delete breed"):
            breed_repo.delete(str(ObjectId()))


class TestTimestamps:
    """Timestamps come from the injected clock and read back as UTC"""

    def test_created_at_from_clock(self, breed_repo, clock):
        breed_id = breed_repo.create(BreedCreate(category=Category.SMALL, name="Pug"))

        breed = breed_repo.get(breed_id)

        assert breed.created_at == clock.now
        assert breed.created_at > datetime(2024, 1, 1, tzinfo=timezone.utc)
