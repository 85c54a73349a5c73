# src/engine/severity.py
"""
Severity ordinals shared by the transformer and the report schema.
"""
from enum import IntEnum
from types import MappingProxyType
from typing import Iterable


class Severity(IntEnum):
    UNKNOWN = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown severity label: {label}") from None


# Trivy severity strings
TRIVY_SEVERITIES = MappingProxyType({
    "CRITICAL": Severity.CRITICAL,
    "HIGH": Severity.HIGH,
    "MEDIUM": Severity.MEDIUM,
    "LOW": Severity.LOW,
    "UNKNOWN": Severity.UNKNOWN,
})


def highest_severity(severities: Iterable[Severity]) -> Severity:
    """
    Return the highest severity, or UNKNOWN when there is none.
    Stops scanning as soon as CRITICAL is seen.
    """
    highest = Severity.UNKNOWN
    for severity in severities:
        if severity > highest:
            highest = severity
            if highest == Severity.CRITICAL:
                break
    return highest
