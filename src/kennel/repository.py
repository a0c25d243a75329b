"""
Repository façade for the catalog.

CatalogRepository is the public data-access contract: create/read/update/delete
for breeds and dogs, composed from BreedRepository and DogRepository. It holds
no state besides its collaborators and is safe to share between threads.

Every id-accepting operation decodes ids before any store call, raising
InvalidIdentifier on malformed input. Missing records on update/delete are
reported as False. Store failures surface as StoreUnavailable.
"""

from datetime import datetime
from typing import Callable, Optional

from kennel.breed import Breed, BreedCreate, BreedQuery, BreedRepository, BreedUpdate
from kennel.breed.repository import utcnow
from kennel.dog import Dog, DogCreate, DogQuery, DogRepository, DogUpdate
from kennel.query import Page, Pagination


class CatalogRepository:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.breeds = BreedRepository(clock=clock)
        self.dogs = DogRepository(breeds=self.breeds, clock=clock)

    # Breeds

    def create_breed(self, breed: BreedCreate) -> str:
        return self.breeds.create(breed)

    def get_breed(self, breed_id: str) -> Optional[Breed]:
        return self.breeds.get(breed_id)

    def update_breed(self, breed_id: str, breed: BreedUpdate) -> bool:
        return self.breeds.update(breed_id, breed)

    def delete_breed(self, breed_id: str) -> bool:
        return self.breeds.delete(breed_id)

    def query_breeds(
        self,
        query: BreedQuery | None = None,
        pagination: Pagination | None = None,
        with_total: bool = True,
    ) -> Page[Breed]:
        return self.breeds.query(query, pagination, with_total=with_total)

    # Dogs

    def create_dog(self, owner_id: str, dog: DogCreate) -> Dog:
        return self.dogs.create(owner_id, dog)

    def get_dog(self, dog_id: str) -> Optional[Dog]:
        return self.dogs.get(dog_id)

    def update_dog(self, dog_id: str, dog: DogUpdate) -> bool:
        return self.dogs.update(dog_id, dog)

    def delete_dog(self, dog_id: str) -> bool:
        return self.dogs.delete(dog_id)

    def query_dogs(
        self,
        query: DogQuery | None = None,
        pagination: Pagination | None = None,
        with_total: bool = True,
    ) -> Page[Dog]:
        return self.dogs.query(query, pagination, with_total=with_total)

    def exists_dog(self, query: DogQuery) -> bool:
        return self.dogs.exists(query)
