from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from bson import ObjectId

from kennel import db, ids
from kennel.breed.models import (
    BREED_PROJECTION,
    Breed,
    BreedCreate,
    BreedQuery,
    BreedUpdate,
    Category,
)
from kennel.errors import StoreUnavailable
from kennel.logger import get_logger
from kennel.query import Page, Pagination, build_predicate, find_page, merge_update

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def clean_name(name) -> str:
    """Strip a breed name, rejecting anything that is not a non-blank string."""
    if not isinstance(name, str):
        raise ValueError(f"breed name must be a string, got {type(name).__name__}")
    name = name.strip()
    if not name:
        raise ValueError("breed name must not be empty")
    return name


class BreedRepository:
    """
    Repository for breed data access.
    Encapsulates all queries against the breeds collection.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    @property
    def collection(self):
        return db.get_collection(db.BREEDS)

    def create(self, breed: BreedCreate) -> str:
        """Insert a new breed and return its id."""
        name = clean_name(breed.name)
        category = Category(breed.category)

        now = self.clock()
        with db.store_operation("failed to create breed"):
            result = self.collection.insert_one(
                {
                    "category": category.value,
                    "name": name,
                    "created_at": now,
                    "updated_at": now,
                }
            )
        if not isinstance(result.inserted_id, ObjectId):
            raise StoreUnavailable("failed to create breed", ValueError("invalid inserted id"))

        breed_id = ids.encode(result.inserted_id)
        logger.info(f"Created breed {breed_id} ({category.value} / {name})")
        return breed_id

    def get(self, breed_id: str) -> Optional[Breed]:
        """Get a breed by id."""
        oid = ids.decode(breed_id)
        with db.store_operation("failed to get breed"):
            doc = self.collection.find_one({"_id": oid}, BREED_PROJECTION)
        return Breed.from_document(doc) if doc else None

    def exists(self, oid: ObjectId) -> bool:
        with db.store_operation("failed to look up breed"):
            return self.collection.find_one({"_id": oid}, {"_id": 1}) is not None

    def find_by_ids(self, oids: Iterable[ObjectId]) -> dict[ObjectId, Breed]:
        """Fetch the given breeds in one round trip, keyed by ObjectId."""
        oids = list(set(oids))
        if not oids:
            return {}
        with db.store_operation("failed to resolve breeds"):
            docs = list(self.collection.find({"_id": {"$in": oids}}, BREED_PROJECTION))
        return {doc["_id"]: Breed.from_document(doc) for doc in docs}

    def update(self, breed_id: str, breed: BreedUpdate) -> bool:
        """
        Apply a partial update. Only the name of a breed is mutable.

        Returns True if the breed exists and was updated, False if it does
        not exist or no field was set.
        """
        oid = ids.decode(breed_id)
        if breed.name is not None:
            breed = replace(breed, name=clean_name(breed.name))

        changes = merge_update(breed, self.clock())
        if not changes:
            return False

        with db.store_operation("failed to update breed"):
            result = self.collection.update_one({"_id": oid}, {"$set": changes})
        return result.matched_count > 0

    def delete(self, breed_id: str) -> bool:
        """
        Delete a breed by id. Dogs referencing it are left untouched.

        Returns True if a breed was removed.
        """
        oid = ids.decode(breed_id)
        with db.store_operation("failed to delete breed"):
            result = self.collection.delete_one({"_id": oid})
        deleted = result.deleted_count > 0
        if deleted:
            logger.info(f"Deleted breed {breed_id}")
        return deleted

    def query(
        self,
        query: BreedQuery | None = None,
        pagination: Pagination | None = None,
        with_total: bool = True,
    ) -> Page[Breed]:
        """List breeds matching the query, optionally windowed, with the total count."""
        predicate = build_predicate(query)
        with db.store_operation("failed to query breeds"):
            page = find_page(
                self.collection,
                predicate,
                pagination=pagination,
                projection=BREED_PROJECTION,
                with_total=with_total,
            )
        return page.map(Breed.from_document)
