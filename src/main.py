# src/main.py

from typing import Optional
import logging

import redis.asyncio as redis

from engine.db import create_redis_client
from engine.job_store import RedisJobStore
from engine.scan_service import ScanService
from engine.settings import Settings, get_settings
from tools.base import SystemClock
from tools.trivy_adapter import TrivyTransformer


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s %(levelname)s %(name)s %(message)s'
    )


def create_scan_service(settings: Optional[Settings] = None, client: Optional[redis.Redis] = None) -> ScanService:
    """
    Configure logging and wire the job store and the Trivy transformer into a ScanService.
    A Redis client is built from settings unless one is given.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    if client is None:
        client = create_redis_client(settings)
    store = RedisJobStore.from_settings(client, settings)
    transformer = TrivyTransformer(SystemClock(), settings.scanner_metadata())
    logging.getLogger(__name__).info(
        f"Scanner adapter ready. namespace={settings.STORE_NAMESPACE} ttl={settings.SCAN_JOB_TTL}"
    )
    return ScanService(store, transformer)
