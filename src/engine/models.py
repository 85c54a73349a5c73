# src/engine/models.py
import enum
from pydantic import BaseModel
from typing import Optional

from api.schemas import ScanReport


class ScanJobStatus(str, enum.Enum):
    QUEUED = "Queued"
    PENDING = "Pending"
    FINISHED = "Finished"
    FAILED = "Failed"


class ScanJob(BaseModel):
    id: str
    status: ScanJobStatus = ScanJobStatus.QUEUED
    error: Optional[str] = None
    report: Optional[ScanReport] = None

    def encode(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def decode(cls, raw) -> "ScanJob":
        return cls.model_validate_json(raw)
