"""Error taxonomy for the CSV ingestion pipeline.

Request-level errors (``MalformedInputError``, ``StoreConnectivityError``)
abort the whole upload. Everything else is row-level: it is turned into a
``RowOutcome`` by the orchestrator and the batch carries on.
"""
from enum import Enum


class ErrorKind(str, Enum):
    MALFORMED_INPUT = "MALFORMED_INPUT"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    MISSING_COLUMN = "MISSING_COLUMN"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
    AMBIGUOUS_ENDPOINT = "AMBIGUOUS_ENDPOINT"
    STORE_WRITE = "STORE_WRITE"
    STORE_CONNECTIVITY = "STORE_CONNECTIVITY"


class IngestionError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ─── Request-level ───

class MalformedInputError(IngestionError):
    """The uploaded payload cannot be decoded into rows."""
    kind = ErrorKind.MALFORMED_INPUT


class StoreConnectivityError(IngestionError):
    """The graph store cannot be reached (or refused our credentials)."""
    kind = ErrorKind.STORE_CONNECTIVITY


# ─── Row-level ───

class RowError(IngestionError):
    pass


class InvalidIdentifierError(RowError):
    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, value: str, role: str = "identifier"):
        super().__init__(f"Invalid {role} '{value}': expected letters, digits or underscore, not starting with a digit")
        self.value = value
        self.role = role


class MissingColumnError(RowError):
    """A reserved column is present in the header but empty in this row."""
    kind = ErrorKind.MISSING_COLUMN

    def __init__(self, column: str):
        super().__init__(f"Reserved column '{column}' is empty")
        self.column = column


class EndpointNotFound(RowError):
    kind = ErrorKind.ENDPOINT_NOT_FOUND


class AmbiguousEndpointError(RowError):
    kind = ErrorKind.AMBIGUOUS_ENDPOINT


class StoreWriteError(RowError):
    """The store rejected an otherwise well-formed query."""
    kind = ErrorKind.STORE_WRITE
