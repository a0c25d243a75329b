"""Breed entities and the query/update structs the repository accepts."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from kennel import ids
from kennel.query import IN, as_utc, filter_field, update_field


class Category(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    GIANT = "Giant"


@dataclass
class Breed:
    id: str
    category: Category
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, doc: dict) -> "Breed":
        return cls(
            id=ids.encode(doc["_id"]),
            category=Category(doc["category"]),
            name=doc["name"],
            created_at=as_utc(doc["created_at"]),
            updated_at=as_utc(doc["updated_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class BreedCreate:
    category: Category
    name: str


@dataclass
class BreedUpdate:
    name: str | None = update_field()


@dataclass
class BreedQuery:
    category_eq: Category | None = filter_field("category")
    id_eq: str | None = filter_field("_id", encode=ids.decode)
    id_in: list[str] | None = filter_field("_id", op=IN, encode=ids.decode)


# Fields returned by every breed read
BREED_PROJECTION = {"category": 1, "name": 1, "created_at": 1, "updated_at": 1}
