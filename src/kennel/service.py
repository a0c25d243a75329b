from kennel.breed import Breed, BreedCreate, BreedQuery, BreedUpdate
from kennel.dog import Dog, DogCreate, DogQuery, DogUpdate
from kennel.query import Page, Pagination
from kennel.repository import CatalogRepository


class CatalogService:
    """
    Use cases on top of the catalog repository.

    Callers pass an owner id they have already authenticated; deciding what a
    caller may do with the answers (e.g. is_owner_of_the_dog) is up to them.
    """

    def __init__(self, repository: CatalogRepository | None = None):
        self.repository = repository or CatalogRepository()

    def create_breed(self, breed: BreedCreate) -> str:
        return self.repository.create_breed(breed)

    def rename_breed(self, breed_id: str, name: str) -> bool:
        return self.repository.update_breed(breed_id, BreedUpdate(name=name))

    def delete_breed(self, breed_id: str) -> bool:
        return self.repository.delete_breed(breed_id)

    def query_breeds(self, query: BreedQuery, pagination: Pagination | None = None) -> Page[Breed]:
        return self.repository.query_breeds(query, pagination)

    def create_dog(self, owner_id: str, dog: DogCreate) -> Dog:
        return self.repository.create_dog(owner_id, dog)

    def update_dog(self, dog_id: str, dog: DogUpdate) -> bool:
        return self.repository.update_dog(dog_id, dog)

    def update_dog_portrait(self, dog_id: str, portrait_id: str) -> bool:
        """Point a dog at a new portrait image."""
        return self.repository.update_dog(dog_id, DogUpdate(portrait_id=portrait_id))

    def delete_dog(self, dog_id: str) -> bool:
        return self.repository.delete_dog(dog_id)

    def my_dogs(self, owner_id: str, pagination: Pagination | None = None) -> Page[Dog]:
        """
        Dogs owned by owner_id.

        Without pagination every dog of the owner is returned.
        """
        return self.repository.query_dogs(DogQuery(owner_id_eq=owner_id), pagination)

    def query_dogs(self, query: DogQuery, pagination: Pagination | None = None) -> Page[Dog]:
        return self.repository.query_dogs(query, pagination)

    def is_owner_of_the_dog(self, owner_id: str, dog_id: str) -> bool:
        return self.repository.exists_dog(DogQuery(id_eq=dog_id, owner_id_eq=owner_id))
