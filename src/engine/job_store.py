# src/engine/job_store.py
"""
RedisJobStore: scan job records kept in Redis with a time-to-live.

Records live under ``{namespace}:scan-job:{job_id}`` so several adapter
instances can share one Redis. There is no delete: a record disappears when
its TTL runs out, and every successful write re-arms the TTL.

Updates are read-modify-write under WATCH, so a record changed by another
writer between the read and the write is re-read and the update retried
instead of being overwritten.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError, WatchError

from api.schemas import ScanReport
from engine.errors import (
    CorruptionError,
    DeadlineExceededError,
    JobStoreError,
    ScanJobConflictError,
    ScanJobNotFoundError,
    StorageError,
)
from engine.models import ScanJob, ScanJobStatus
from engine.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisJobStore:
    def __init__(
        self,
        client: redis.Redis,
        namespace: str,
        ttl: timedelta,
        operation_timeout: Optional[float] = None,
        max_update_retries: int = 5,
    ):
        self.client = client
        self.namespace = namespace
        self.ttl = ttl
        self.operation_timeout = operation_timeout
        self.max_update_retries = max_update_retries

    @classmethod
    def from_settings(cls, client: redis.Redis, settings: Settings) -> "RedisJobStore":
        return cls(
            client,
            namespace=settings.STORE_NAMESPACE,
            ttl=settings.SCAN_JOB_TTL,
            operation_timeout=settings.STORE_OPERATION_TIMEOUT,
            max_update_retries=settings.STORE_MAX_UPDATE_RETRIES,
        )

    def key_for(self, job_id: str) -> str:
        return f"{self.namespace}:scan-job:{job_id}"

    async def create(self, job: ScanJob, timeout: Optional[float] = None) -> None:
        """Save a new job. Raises ScanJobConflictError if the id is already taken."""
        value = self._encode("create", job)
        key = self.key_for(job.id)
        logger.debug(f"[job_id={job.id}] Saving scan job. status={job.status.value} key={key} expire={self.ttl}")
        created = await self._call("create", job.id, self.client.set(key, value, nx=True, ex=self.ttl), timeout)
        if not created:
            raise ScanJobConflictError("create", job.id, "scan job already exists")

    async def get(self, job_id: str, timeout: Optional[float] = None) -> Optional[ScanJob]:
        """Return the job, or None if it does not exist (or has expired)."""
        raw = await self._call("get", job_id, self.client.get(self.key_for(job_id)), timeout)
        if raw is None:
            return None
        return self._decode("get", job_id, raw)

    async def update_status(
        self,
        job_id: str,
        status: ScanJobStatus,
        error: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ScanJob:
        logger.debug(f"[job_id={job_id}] Updating status for scan job. new_status={status.value}")

        def apply(job: ScanJob) -> None:
            job.status = status
            if error is not None:
                job.error = error

        return await self._call("update_status", job_id, self._update("update_status", job_id, apply), timeout)

    async def update_report(self, job_id: str, report: ScanReport, timeout: Optional[float] = None) -> ScanJob:
        logger.debug(f"[job_id={job_id}] Updating report for scan job.")

        def apply(job: ScanJob) -> None:
            job.report = report

        return await self._call("update_report", job_id, self._update("update_report", job_id, apply), timeout)

    async def _update(self, operation: str, job_id: str, apply: Callable[[ScanJob], None]) -> ScanJob:
        key = self.key_for(job_id)
        async with self.client.pipeline(transaction=True) as pipe:
            for attempt in range(1, self.max_update_retries + 1):
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    if raw is None:
                        raise ScanJobNotFoundError(operation, job_id)
                    job = self._decode(operation, job_id, raw)
                    apply(job)
                    pipe.multi()
                    pipe.set(key, self._encode(operation, job), xx=True, ex=self.ttl)
                    (updated,) = await pipe.execute()
                except WatchError:
                    logger.debug(f"[job_id={job_id}] Scan job changed during {operation}, retrying. attempt={attempt}")
                    continue
                if not updated:
                    raise ScanJobNotFoundError(operation, job_id, "scan job expired during update")
                logger.debug(f"[job_id={job_id}] Updated scan job. status={job.status.value} key={key} expire={self.ttl}")
                return job
        raise ScanJobConflictError(
            operation, job_id, f"scan job kept changing, gave up after {self.max_update_retries} attempts"
        )

    async def _call(self, operation: str, job_id: str, awaitable: Awaitable[T], timeout: Optional[float]) -> T:
        if timeout is None:
            timeout = self.operation_timeout
        try:
            if timeout is None:
                return await awaitable
            return await asyncio.wait_for(awaitable, timeout)
        except JobStoreError:
            raise
        except asyncio.TimeoutError as exc:
            raise DeadlineExceededError(operation, job_id, f"no response within {timeout}s") from exc
        except UnicodeDecodeError as exc:
            raise CorruptionError(operation, job_id, f"stored value is not valid UTF-8: {exc}") from exc
        except RedisError as exc:
            raise StorageError(operation, job_id, str(exc)) from exc

    @staticmethod
    def _encode(operation: str, job: ScanJob) -> str:
        try:
            return job.encode()
        except ValueError as exc:
            raise StorageError(operation, job.id, f"marshalling scan job: {exc}") from exc

    @staticmethod
    def _decode(operation: str, job_id: str, raw) -> ScanJob:
        try:
            return ScanJob.decode(raw)
        except ValidationError as exc:
            raise CorruptionError(operation, job_id, f"unmarshalling scan job: {exc}") from exc
