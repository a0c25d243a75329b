from bson import ObjectId

from kennel import ids
from kennel.breed.repository import BreedRepository
from kennel.dog.models import UNRESOLVED_BREED, Dog
from kennel.errors import InvalidIdentifier
from kennel.logger import get_logger

logger = get_logger(__name__)


def stored_breed_id(doc: dict) -> ObjectId | None:
    """
    Read the breed reference of a stored dog.

    References are stored as ObjectIds; hex strings written by older clients
    are accepted too. Anything else cannot resolve.
    """
    value = doc.get("breed_id")
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str):
        try:
            return ids.decode(value)
        except InvalidIdentifier:
            return None
    return None


class BreedResolver:
    """
    Splices breed snapshots into dogs at read time.

    Breeds for a whole batch of dogs are fetched with a single query. A dog
    whose breed no longer exists gets UNRESOLVED_BREED instead of failing the
    read.
    """

    def __init__(self, breeds: BreedRepository):
        self.breeds = breeds

    def resolve(self, docs: list[dict]) -> list[Dog]:
        refs = [stored_breed_id(doc) for doc in docs]
        known = self.breeds.find_by_ids(ref for ref in refs if ref is not None)

        dogs = []
        for doc, ref in zip(docs, refs):
            breed = known.get(ref) if ref is not None else None
            if breed is None:
                logger.warning(f"Dog {doc['_id']} references missing breed {doc.get('breed_id')}")
                breed = UNRESOLVED_BREED
            dogs.append(Dog.from_document(doc, breed))
        return dogs

    def resolve_one(self, doc: dict) -> Dog:
        return self.resolve([doc])[0]
