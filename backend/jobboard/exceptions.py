"""
Service-level exceptions.

Missing entities are not exceptions: services return ``None`` or an empty
list and routers turn that into a 404. The classes here cover the failures
callers must be able to tell apart.
"""


class JobBoardError(Exception):
    """Base class for errors raised by the job board services."""


class StorageUnavailable(JobBoardError):
    """The database could not be reached. Never reported as "no results"."""


class JobValidationError(JobBoardError):
    """An admin payload violates a data-model invariant."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class EntityInUse(JobBoardError):
    """A delete was refused because other records still reference the entity."""


class BlobStorageError(JobBoardError):
    """The blob storage service rejected or failed an upload."""
