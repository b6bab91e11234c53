from votoclaro.core.models import Candidate, Station
from votoclaro.core.tally_check import check_tally

CANDIDATES = [Candidate(id="ana", name="Ana"), Candidate(id="luis", name="Luis")]


def test_valid_tally_has_no_findings() -> None:
    station = Station(id="m1", name="Mesa 1", total_eligible=100)

    report = check_tally(station, CANDIDATES, {"ana": "40", "luis": 35}, "5", "2")

    assert report.ok
    assert report.warnings == []
    assert report.votes == {"ana": 40, "luis": 35}
    assert (report.blank, report.null, report.total) == (5, 2, 82)


def test_negative_or_non_numeric_votes_are_errors() -> None:
    station = Station(id="m1", name="Mesa 1", total_eligible=100)

    report = check_tally(station, CANDIDATES, {"ana": "-1", "luis": "abc"})

    assert not report.ok
    assert len(report.errors) == 2
    assert "Ana" in report.errors[0]


def test_missing_candidate_entry_counts_as_zero() -> None:
    station = Station(id="m1", name="Mesa 1", total_eligible=0)

    report = check_tally(station, CANDIDATES, {"ana": 3})

    assert report.ok
    assert report.votes == {"ana": 3, "luis": 0}


def test_blank_and_null_are_coerced_leniently() -> None:
    station = Station(id="m1", name="Mesa 1", total_eligible=0)

    report = check_tally(station, CANDIDATES, {}, "x", "-3")

    assert report.ok
    assert (report.blank, report.null) == (0, 0)


def test_exceeding_eligible_voters_is_only_a_warning() -> None:
    station = Station(id="m1", name="Mesa 1", total_eligible=50)

    report = check_tally(station, CANDIDATES, {"ana": 40, "luis": 20}, 1, 0)

    assert report.ok
    assert len(report.warnings) == 1
    assert "61" in report.warnings[0]


def test_unknown_station_is_an_error() -> None:
    report = check_tally(None, CANDIDATES, {"ana": 1})

    assert not report.ok
