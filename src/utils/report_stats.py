from api.schemas import ScanReport
from engine.severity import Severity


def calculate_vulnerability_stats(report: ScanReport) -> dict:
    """
    Calculate the number of vulnerabilities by severity (Unknown, Low, Medium, High, Critical).
    """
    severity_counts = {severity.label: 0 for severity in Severity}

    for item in report.vulnerabilities:
        severity_counts[item.severity.label] += 1

    return {
        "severity_counts": severity_counts,
        "total_vulnerabilities": len(report.vulnerabilities),
        "highest_severity": report.severity.label,
    }
