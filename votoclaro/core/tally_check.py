from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from votoclaro.core.models import Candidate, Station
from votoclaro.core.parsing import parse_non_negative_int, parse_vote_count


@dataclass
class TallyReport:
    votes: dict[str, int] = field(default_factory=dict)
    blank: int = 0
    null: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total(self) -> int:
        return sum(self.votes.values()) + self.blank + self.null


def check_tally(
    station: Station | None,
    candidates: Sequence[Candidate],
    raw_votes: Mapping[str, Any],
    raw_blank: Any = 0,
    raw_null: Any = 0,
) -> TallyReport:
    """Check form input for one station before it is handed to the repository.

    Candidate counts must be whole numbers >= 0; a missing entry counts as 0.
    Blank and null counts are coerced leniently. Going over the station's
    eligible voters is only a warning.
    """
    report = TallyReport()

    if station is None:
        report.errors.append("No station selected")
        return report

    for candidate in candidates:
        count = parse_vote_count(raw_votes.get(candidate.id, 0))
        if count is None:
            report.errors.append(
                f"Votes for '{candidate.name}' must be a non-negative integer: {raw_votes.get(candidate.id)!r}"
            )
            continue
        report.votes[candidate.id] = count

    report.blank = parse_non_negative_int(raw_blank)
    report.null = parse_non_negative_int(raw_null)

    if report.errors:
        return report

    if station.total_eligible > 0 and report.total > station.total_eligible:
        report.warnings.append(
            f"Total votes ({report.total}) exceed eligible voters ({station.total_eligible}) "
            f"at station '{station.name}'"
        )

    return report
