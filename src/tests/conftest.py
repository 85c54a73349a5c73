from datetime import datetime, timedelta, timezone

import fakeredis
import pytest

from api.schemas import Artifact, Scanner
from engine.job_store import RedisJobStore
from tools.base import Clock
from tools.trivy_adapter import TrivyTransformer

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


class FixedClock(Clock):
    def __init__(self, now: datetime = NOW):
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def store(redis_client):
    return RedisJobStore(redis_client, namespace="test", ttl=timedelta(hours=1))


@pytest.fixture
def scanner():
    return Scanner(name="Trivy", vendor="Aqua Security", version="0.50.1")


@pytest.fixture
def transformer(scanner):
    return TrivyTransformer(FixedClock(), scanner)


@pytest.fixture
def artifact():
    return Artifact(
        repository="library/nginx",
        digest="sha256:6c3c624b58dbbcd3c0dd82b4c53f04194d1247c6eebdaab7c610cf7d66709b3b",
        tag="1.25",
        mime_type="application/vnd.docker.distribution.manifest.v2+json",
    )


@pytest.fixture
def now():
    return NOW
