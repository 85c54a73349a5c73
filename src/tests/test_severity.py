import itertools

import pytest

from engine.severity import TRIVY_SEVERITIES, Severity, highest_severity


def test_highest_severity_of_nothing_is_unknown():
    assert highest_severity([]) == Severity.UNKNOWN


@pytest.mark.parametrize("severities", [
    [Severity.LOW],
    [Severity.LOW, Severity.MEDIUM],
    [Severity.HIGH, Severity.UNKNOWN, Severity.MEDIUM],
    [Severity.UNKNOWN, Severity.UNKNOWN],
])
def test_highest_severity_is_max(severities):
    assert highest_severity(severities) == max(severities)


def test_highest_severity_ignores_order():
    severities = [Severity.MEDIUM, Severity.CRITICAL, Severity.LOW, Severity.HIGH]
    for ordering in itertools.permutations(severities):
        assert highest_severity(ordering) == Severity.CRITICAL


def test_highest_severity_stops_at_critical():
    consumed = []

    def severities():
        for severity in (Severity.LOW, Severity.CRITICAL, Severity.HIGH):
            consumed.append(severity)
            yield severity

    assert highest_severity(severities()) == Severity.CRITICAL
    assert consumed == [Severity.LOW, Severity.CRITICAL]


def test_labels():
    assert [s.label for s in Severity] == ["Unknown", "Low", "Medium", "High", "Critical"]
    assert Severity.from_label("High") == Severity.HIGH
    with pytest.raises(ValueError) as exc_info:
        Severity.from_label("Negligible")
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__


def test_trivy_table_is_read_only():
    assert TRIVY_SEVERITIES["MEDIUM"] == Severity.MEDIUM
    with pytest.raises(TypeError):
        TRIVY_SEVERITIES["SEVERE"] = Severity.HIGH
