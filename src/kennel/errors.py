"""
Error taxonomy for the catalog.

Repositories raise these; the HTTP layer maps them to status codes.
Missing records on delete/update are reported as ``False`` results, not errors.
"""


class KennelError(Exception):
    """Base class for all catalog errors."""


class InvalidIdentifier(KennelError):
    """An id string is not a well-formed store identifier."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid identifier: {value!r}")


class InvalidReference(KennelError):
    """A referenced entity does not exist at the time of use."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} does not exist")


class StoreUnavailable(KennelError):
    """
    A store operation failed.

    The message names the attempted operation; the driver error is kept as
    ``__cause__`` when there is one.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause is not None else message)
