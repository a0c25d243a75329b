"""Translation between external id strings and store ObjectIds."""

from bson import ObjectId
from bson.errors import InvalidId

from kennel.errors import InvalidIdentifier


def decode(external) -> ObjectId:
    """
    Parse an external id string into an ObjectId.

    Only 24-character hex strings are accepted. ObjectId itself also takes
    12-byte values, which are never valid external ids.
    """
    if not isinstance(external, str) or len(external) != 24:
        raise InvalidIdentifier(external)
    try:
        return ObjectId(external)
    except (InvalidId, TypeError) as err:
        raise InvalidIdentifier(external) from err


def decode_many(externals) -> list[ObjectId]:
    """Decode every id, failing on the first malformed one."""
    return [decode(e) for e in externals]


def encode(internal: ObjectId) -> str:
    return str(internal)
