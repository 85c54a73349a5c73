# src/engine/errors.py
"""
Errors raised by the scan job store.

Each error carries its kind plus the operation and job id it happened in, so
callers can branch on ``kind`` (e.g. treat a conflicting create as idempotent)
instead of parsing messages. The backend exception, if any, is chained as
``__cause__``.
"""
import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    CORRUPTION = "corruption"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class JobStoreError(Exception):
    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, operation: str, job_id: str, message: Optional[str] = None):
        self.operation = operation
        self.job_id = job_id
        self.message = message or self.kind.value.replace("_", " ")
        super().__init__(f"{operation} scan job {job_id}: {self.message}")


class ScanJobConflictError(JobStoreError):
    kind = ErrorKind.CONFLICT


class ScanJobNotFoundError(JobStoreError):
    kind = ErrorKind.NOT_FOUND


class StorageError(JobStoreError):
    kind = ErrorKind.STORAGE


class CorruptionError(JobStoreError):
    kind = ErrorKind.CORRUPTION


class DeadlineExceededError(JobStoreError):
    kind = ErrorKind.DEADLINE_EXCEEDED
