from __future__ import annotations


class StorageFailure(Exception):
    """The storage engine failed (I/O fault, corruption, constraint violation, closed handle)."""

    def __init__(self, operation: str, namespace: str, key: str, cause: BaseException | None = None):
        self.operation = operation
        self.namespace = namespace
        self.key = key
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} {namespace}/{key} failed{detail}")

    @property
    def details(self) -> str:
        return str(self.cause) if self.cause is not None else str(self)
