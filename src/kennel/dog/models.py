"""
Dog entities and the query/update structs the repository accepts.

A dog's breed has two shapes. On writes it is a BreedRef (an id only, stored
as ``breed_id``). On reads it is a BreedView snapshot spliced in by the
BreedResolver, or UNRESOLVED_BREED when the referenced breed is gone.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from kennel import ids
from kennel.breed.models import Breed
from kennel.query import IN, as_utc, filter_field, update_field

# The read-side breed snapshot is the breed entity itself
BreedView = Breed


class Gender(str, Enum):
    OTHER = "Other"
    MALE = "Male"
    FEMALE = "Female"


@dataclass(frozen=True)
class BreedRef:
    """Write-side reference to a breed by id."""

    id: str

    def to_store(self):
        return ids.decode(self.id)


@dataclass(frozen=True)
class UnresolvedBreed:
    """Marker for a dog whose breed no longer exists."""

    def to_dict(self):
        return None


UNRESOLVED_BREED = UnresolvedBreed()


@dataclass
class Dog:
    id: str
    name: str
    gender: Gender
    breed: BreedView | UnresolvedBreed
    birthday: date
    is_sterilized: bool
    introduction: str
    owner_id: str
    tags: list[str]
    portrait_id: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def breed_resolved(self) -> bool:
        return isinstance(self.breed, Breed)

    @classmethod
    def from_document(cls, doc: dict, breed: BreedView | UnresolvedBreed) -> "Dog":
        birthday = doc["birthday"]
        if isinstance(birthday, datetime):
            birthday = as_utc(birthday).date()
        return cls(
            id=ids.encode(doc["_id"]),
            name=doc["name"],
            gender=Gender(doc.get("gender") or Gender.OTHER),
            breed=breed,
            birthday=birthday,
            is_sterilized=bool(doc.get("is_sterilized", False)),
            introduction=doc.get("introduction") or "",
            owner_id=doc["owner_id"],
            tags=list(doc.get("tags") or []),
            portrait_id=doc.get("portrait_id"),
            created_at=as_utc(doc["created_at"]),
            updated_at=as_utc(doc["updated_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "breed": self.breed.to_dict(),
            "birthday": self.birthday.isoformat(),
            "is_sterilized": self.is_sterilized,
            "introduction": self.introduction,
            "owner_id": self.owner_id,
            "tags": self.tags,
            "portrait_id": self.portrait_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class DogCreate:
    name: str
    breed: BreedRef
    birthday: date
    gender: Gender = Gender.OTHER
    is_sterilized: bool = False
    introduction: str = ""
    tags: list[str] = field(default_factory=list)
    portrait_id: str | None = None

    def __post_init__(self):
        if isinstance(self.breed, str):
            self.breed = BreedRef(self.breed)
        self.gender = Gender(self.gender)


@dataclass
class DogUpdate:
    name: str | None = update_field()
    gender: Gender | None = update_field()
    breed: BreedRef | None = update_field("breed_id", encode=BreedRef.to_store)
    birthday: date | None = update_field()
    is_sterilized: bool | None = update_field()
    introduction: str | None = update_field()
    owner_id: str | None = update_field()
    tags: list[str] | None = update_field()
    portrait_id: str | None = update_field()

    def __post_init__(self):
        if isinstance(self.breed, str):
            self.breed = BreedRef(self.breed)
        if self.gender is not None:
            self.gender = Gender(self.gender)


@dataclass
class DogQuery:
    id_eq: str | None = filter_field("_id", encode=ids.decode)
    id_in: list[str] | None = filter_field("_id", op=IN, encode=ids.decode)
    owner_id_eq: str | None = filter_field("owner_id")
    breed_eq: str | None = filter_field("breed_id", encode=ids.decode)


# Fields returned by every dog read, before the breed is resolved
DOG_PROJECTION = {
    "name": 1,
    "gender": 1,
    "breed_id": 1,
    "birthday": 1,
    "is_sterilized": 1,
    "introduction": 1,
    "owner_id": 1,
    "tags": 1,
    "portrait_id": 1,
    "created_at": 1,
    "updated_at": 1,
}
