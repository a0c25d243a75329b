"""
Query construction helpers shared by the repositories.

Query and update structs are plain dataclasses whose fields all default to
None ("unset"). Fields declared with filter_field() / update_field() carry
the stored field name and an optional encoder in their metadata, so the
builders below only ever look at the populated fields:

    @dataclass
    class DogQuery:
        owner_id_eq: str | None = filter_field("owner_id")

    build_predicate(DogQuery(owner_id_eq="u1")).to_filter()
    # {"owner_id": "u1"}

Predicates are lists of typed clauses and are only turned into MongoDB filter
syntax by Predicate.to_filter(), at the store boundary.
"""

from collections import Counter
from dataclasses import dataclass, field, fields
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from pymongo import ASCENDING
from pymongo.collection import Collection

T = TypeVar("T")

EQ = "eq"
IN = "in"

# Every windowed query is ordered by creation time, ties broken by id
STABLE_SORT = [("created_at", ASCENDING), ("_id", ASCENDING)]


# =============================================================================
# Field Declarations
# =============================================================================


def filter_field(store_name: str, op: str = EQ, encode: Callable | None = None):
    """Declare an optional query field mapped to a stored field."""
    return field(default=None, metadata={"store": store_name, "op": op, "encode": encode})


def update_field(store_name: str | None = None, encode: Callable | None = None):
    """Declare an optional update field; the stored name defaults to the attribute name."""
    return field(default=None, metadata={"store": store_name, "encode": encode})


def store_value(value: Any) -> Any:
    """Convert a Python value into the form it is stored in."""
    if isinstance(value, Enum):
        return value.value
    # BSON has no date type; plain dates are stored as UTC midnight
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, (list, tuple)):
        return [store_value(v) for v in value]
    return value


def as_utc(value: datetime | None) -> datetime | None:
    """Driver datetimes come back naive unless the client is tz-aware; they are UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


# =============================================================================
# Predicate Builder
# =============================================================================


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any

    def to_filter(self) -> dict:
        return {self.field: self.value}


@dataclass(frozen=True)
class In:
    field: str
    values: tuple

    def to_filter(self) -> dict:
        return {self.field: {"$in": list(self.values)}}


@dataclass(frozen=True)
class Predicate:
    """A conjunction of clauses. No clauses matches every record."""

    clauses: tuple = ()

    def is_empty(self) -> bool:
        return not self.clauses

    def to_filter(self) -> dict:
        counts = Counter(c.field for c in self.clauses)
        if any(n > 1 for n in counts.values()):
            # Two clauses on one field cannot share a flat document
            return {"$and": [c.to_filter() for c in self.clauses]}
        result = {}
        for clause in self.clauses:
            result.update(clause.to_filter())
        return result


def build_predicate(query) -> Predicate:
    """
    Build a predicate from the populated fields of a query struct.

    Unset fields add no constraint. A list field that is set but empty is
    treated the same as an unset one. Encoders run here, so a malformed id
    fails before any store call is made.
    """
    if query is None:
        return Predicate()

    clauses = []
    for f in fields(query):
        if "store" not in f.metadata:
            continue
        value = getattr(query, f.name)
        if value is None:
            continue
        encode = f.metadata["encode"]
        if f.metadata["op"] == IN:
            if not value:
                continue
            values = [encode(v) if encode else store_value(v) for v in value]
            clauses.append(In(f.metadata["store"], tuple(values)))
        else:
            clauses.append(Eq(f.metadata["store"], encode(value) if encode else store_value(value)))
    return Predicate(tuple(clauses))


# =============================================================================
# Partial Update Merger
# =============================================================================


def merge_update(update, now: datetime) -> dict:
    """
    Build the field-set map for a partial update.

    Returns an empty dict when no field is set; otherwise the set fields plus
    ``updated_at``.
    """
    if update is None:
        return {}

    changes = {}
    for f in fields(update):
        if "store" not in f.metadata:
            continue
        value = getattr(update, f.name)
        if value is None:
            continue
        encode = f.metadata["encode"]
        changes[f.metadata["store"] or f.name] = encode(value) if encode else store_value(value)

    if changes:
        changes["updated_at"] = now
    return changes


# =============================================================================
# Paginated Query Executor
# =============================================================================


@dataclass(frozen=True)
class Pagination:
    """An (offset, limit) window over an ordered result set."""

    limit: int
    offset: int = 0

    def __post_init__(self):
        if self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must not be negative, got {self.offset}")

    @classmethod
    def from_page(cls, page: int, size: int) -> "Pagination":
        """Convert a 1-based page number and page size into a window."""
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        return cls(limit=size, offset=(page - 1) * size)


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int | None

    def map(self, fn: Callable[[Any], T]) -> "Page[T]":
        return Page(items=[fn(item) for item in self.items], total=self.total)


def find_page(
    collection: Collection,
    predicate: Predicate,
    pagination: Pagination | None = None,
    projection: dict | None = None,
    with_total: bool = True,
) -> Page[dict]:
    """
    Fetch matching documents, optionally windowed, with the total match count.

    Without pagination every match is returned and the total is the number
    of documents fetched. With pagination the total comes from a separate
    count over the same filter and is never itself windowed. with_total=False
    skips the count and leaves total as None.
    """
    query = predicate.to_filter()

    total = None
    if with_total and pagination is not None:
        total = collection.count_documents(query)

    cursor = collection.find(query, projection).sort(STABLE_SORT)
    if pagination is not None:
        cursor = cursor.skip(pagination.offset).limit(pagination.limit)
    items = list(cursor)

    if with_total and pagination is None:
        total = len(items)
    return Page(items=items, total=total)
