"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageError(ApplicationError):
    """Base for database failures surfaced through the connection pool. Never retried automatically."""


class ConnectTimeoutError(StorageError):
    """Raised when a new database connection cannot be established within the connect timeout."""


class PoolTimeoutError(StorageError):
    """Raised when waiting for a free pooled connection exceeds the acquire timeout."""


class PoolExhaustedError(StorageError):
    """Raised when the pool is saturated and waiting is disabled or the wait queue is full."""


class DatabaseUnavailableError(StorageError):
    """Raised on transport-level failures (connection refused, dropped, reset)."""


class QueryError(StorageError):
    """Raised when the statement itself fails on the server."""
