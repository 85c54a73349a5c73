# src/tools/trivy_adapter.py
from .base import Clock, ReportTransformer
from api.schemas import Artifact, Layer, ScanReport, Scanner, VulnerabilityItem
from engine.severity import TRIVY_SEVERITIES, Severity, highest_severity
from tools.trivy_models import CVSSInfo, TrivyLayer, TrivyVulnerability
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class TrivyTransformer(ReportTransformer):
    """
    Turns the vulnerability list of a Trivy scan into Harbor's normalized report.
    Never raises on odd input: unknown values degrade to empty or UNKNOWN.
    """

    def __init__(self, clock: Clock, scanner: Scanner):
        self.clock = clock
        self.scanner = scanner

    def transform(self, artifact: Artifact, vulnerabilities: List[TrivyVulnerability]) -> ScanReport:
        items = [
            VulnerabilityItem(
                id=v.vulnerability_id,
                package=v.pkg_name,
                installed_version=v.installed_version,
                fix_version=v.fixed_version,
                severity=self.to_severity(v.severity),
                description=v.description,
                links=self.to_links(v.primary_url, v.references),
                layer=self.to_layer(v.layer),
                cwe_ids=list(v.cwe_ids),
                vendor_attributes=self.to_vendor_attributes(v.cvss),
            )
            for v in vulnerabilities
        ]
        return ScanReport(
            generated_at=self.clock.now(),
            scanner=self.scanner,
            artifact=artifact,
            severity=highest_severity(item.severity for item in items),
            vulnerabilities=items,
        )

    @staticmethod
    def to_severity(severity: str) -> Severity:
        mapped = TRIVY_SEVERITIES.get(severity)
        if mapped is None:
            logger.warning(f"Unknown trivy severity: {severity!r}")
            return Severity.UNKNOWN
        return mapped

    @staticmethod
    def to_links(primary_url: str, references: Optional[List[str]]) -> List[str]:
        if primary_url:
            return [primary_url]
        if references is None:
            return []
        return list(references)

    @staticmethod
    def to_layer(layer: Optional[TrivyLayer]) -> Optional[Layer]:
        if layer is None:
            return None
        return Layer(digest=layer.digest, diff_id=layer.diff_id)

    @staticmethod
    def to_vendor_attributes(cvss: Dict[str, CVSSInfo]) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {}
        if cvss:
            attributes["CVSS"] = {
                source: info.model_dump(by_alias=True, exclude_none=True)
                for source, info in cvss.items()
            }
        return attributes
