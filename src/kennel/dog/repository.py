from datetime import datetime
from typing import Callable, Optional

from bson import ObjectId

from kennel import db, ids
from kennel.breed.repository import BreedRepository, utcnow
from kennel.dog.models import DOG_PROJECTION, Dog, DogCreate, DogQuery, DogUpdate
from kennel.dog.resolver import BreedResolver
from kennel.errors import InvalidReference, StoreUnavailable
from kennel.logger import get_logger
from kennel.query import (
    Page,
    Pagination,
    build_predicate,
    find_page,
    merge_update,
    store_value,
)

logger = get_logger(__name__)


class DogRepository:
    """
    Repository for dog data access.
    Encapsulates all queries against the dogs collection. Breeds are read
    through the BreedRepository and resolved into every dog returned.
    """

    def __init__(
        self,
        breeds: BreedRepository | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.breeds = breeds or BreedRepository(clock=clock)
        self.resolver = BreedResolver(self.breeds)
        self.clock = clock

    @property
    def collection(self):
        return db.get_collection(db.DOGS)

    def _require_breed(self, breed_oid: ObjectId) -> None:
        if not self.breeds.exists(breed_oid):
            raise InvalidReference("breed", ids.encode(breed_oid))

    def create(self, owner_id: str, dog: DogCreate) -> Dog:
        """
        Insert a new dog owned by owner_id and return it with its breed resolved.

        Raises:
            InvalidIdentifier: the breed reference is malformed.
            InvalidReference: the breed does not exist.
        """
        breed_oid = dog.breed.to_store()
        if not owner_id:
            raise ValueError("owner_id must not be empty")
        self._require_breed(breed_oid)

        now = self.clock()
        with db.store_operation("failed to create dog"):
            result = self.collection.insert_one(
                {
                    "name": dog.name,
                    "gender": store_value(dog.gender),
                    "breed_id": breed_oid,
                    "birthday": store_value(dog.birthday),
                    "is_sterilized": dog.is_sterilized,
                    "introduction": dog.introduction,
                    "owner_id": owner_id,
                    "tags": list(dog.tags),
                    "portrait_id": dog.portrait_id,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            doc = self.collection.find_one({"_id": result.inserted_id}, DOG_PROJECTION)

        if doc is None:
            raise StoreUnavailable(
                "failed to create dog", LookupError(f"dog {result.inserted_id} not found after insert")
            )
        logger.info(f"Created dog {result.inserted_id} for owner {owner_id}")
        return self.resolver.resolve_one(doc)

    def get(self, dog_id: str) -> Optional[Dog]:
        """Get a dog by id, breed resolved."""
        oid = ids.decode(dog_id)
        with db.store_operation("failed to get dog"):
            doc = self.collection.find_one({"_id": oid}, DOG_PROJECTION)
        return self.resolver.resolve_one(doc) if doc else None

    def update(self, dog_id: str, dog: DogUpdate) -> bool:
        """
        Apply a partial update to a dog.

        Returns False without writing when no field is set, otherwise whether
        the dog exists. A new breed reference must point at an existing breed.
        """
        oid = ids.decode(dog_id)
        changes = merge_update(dog, self.clock())
        if not changes:
            return False
        if "breed_id" in changes:
            self._require_breed(changes["breed_id"])

        with db.store_operation("failed to update dog"):
            result = self.collection.update_one({"_id": oid}, {"$set": changes})
        return result.matched_count > 0

    def delete(self, dog_id: str) -> bool:
        """
        Delete a dog by id.

        Returns True if a dog was removed.
        """
        oid = ids.decode(dog_id)
        with db.store_operation("failed to delete dog"):
            result = self.collection.delete_one({"_id": oid})
        deleted = result.deleted_count > 0
        if deleted:
            logger.info(f"Deleted dog {dog_id}")
        return deleted

    def query(
        self,
        query: DogQuery | None = None,
        pagination: Pagination | None = None,
        with_total: bool = True,
    ) -> Page[Dog]:
        """List dogs matching the query with their breeds resolved."""
        predicate = build_predicate(query)
        with db.store_operation("failed to query dogs"):
            page = find_page(
                self.collection,
                predicate,
                pagination=pagination,
                projection=DOG_PROJECTION,
                with_total=with_total,
            )
        return Page(items=self.resolver.resolve(page.items), total=page.total)

    def exists(self, query: DogQuery) -> bool:
        """Whether any dog matches every set field of the query."""
        predicate = build_predicate(query)
        with db.store_operation("failed to check dog existence"):
            return self.collection.find_one(predicate.to_filter(), {"_id": 1}) is not None
