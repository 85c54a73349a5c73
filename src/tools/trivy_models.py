# src/tools/trivy_models.py
"""
Subset of Trivy's JSON report consumed by the transformer.
Field aliases follow Trivy's PascalCase keys; missing keys fall back to empty values.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class TrivyModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TrivyLayer(TrivyModel):
    digest: Optional[str] = Field(None, alias="Digest")
    diff_id: Optional[str] = Field(None, alias="DiffID")


class CVSSInfo(TrivyModel):
    v2_vector: Optional[str] = Field(None, alias="V2Vector")
    v3_vector: Optional[str] = Field(None, alias="V3Vector")
    v2_score: Optional[float] = Field(None, alias="V2Score")
    v3_score: Optional[float] = Field(None, alias="V3Score")


class TrivyVulnerability(TrivyModel):
    vulnerability_id: str = Field("", alias="VulnerabilityID")
    pkg_name: str = Field("", alias="PkgName")
    installed_version: str = Field("", alias="InstalledVersion")
    fixed_version: str = Field("", alias="FixedVersion")
    title: str = Field("", alias="Title")
    description: str = Field("", alias="Description")
    severity: str = Field("UNKNOWN", alias="Severity")
    primary_url: str = Field("", alias="PrimaryURL")
    references: Optional[List[str]] = Field(None, alias="References")
    layer: Optional[TrivyLayer] = Field(None, alias="Layer")
    cvss: Dict[str, CVSSInfo] = Field(default_factory=dict, alias="CVSS")
    cwe_ids: List[str] = Field(default_factory=list, alias="CweIDs")
