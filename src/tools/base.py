from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List

from api.schemas import Artifact, ScanReport
from tools.trivy_models import TrivyVulnerability


class Clock(ABC):
    """Source of the current time, replaceable with a fixed clock in tests."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ReportTransformer(ABC):
    @abstractmethod
    def transform(self, artifact: Artifact, vulnerabilities: List[TrivyVulnerability]) -> ScanReport:
        pass
