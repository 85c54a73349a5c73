# src/api/schemas.py
# Pydantic models for the normalized vulnerability report served to Harbor.
# Dump with by_alias=True to get the wire field names.
from datetime import datetime
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from typing import Any, Annotated, Dict, List, Optional

from engine.severity import Severity


def _parse_severity(value: Any) -> Any:
    if isinstance(value, str):
        return Severity.from_label(value)
    return value


SeverityField = Annotated[
    Severity,
    BeforeValidator(_parse_severity),
    PlainSerializer(lambda severity: severity.label, return_type=str),
]


class Scanner(BaseModel):
    name: str
    vendor: str
    version: str


class Artifact(BaseModel):
    repository: str
    digest: str
    tag: Optional[str] = None
    mime_type: Optional[str] = None


class Layer(BaseModel):
    digest: Optional[str] = None
    diff_id: Optional[str] = None


class VulnerabilityItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    package: str
    installed_version: str = Field("", alias="version")
    fix_version: str = ""  # empty when no fix is available
    severity: SeverityField = Severity.UNKNOWN
    description: str = ""
    links: List[str] = Field(default_factory=list)
    layer: Optional[Layer] = None
    cwe_ids: List[str] = Field(default_factory=list)
    vendor_attributes: Dict[str, Any] = Field(default_factory=dict)


class ScanReport(BaseModel):
    generated_at: datetime
    scanner: Scanner
    artifact: Artifact
    severity: SeverityField = Severity.UNKNOWN
    vulnerabilities: List[VulnerabilityItem] = Field(default_factory=list)
