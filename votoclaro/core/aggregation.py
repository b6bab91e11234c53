from __future__ import annotations

from dataclasses import dataclass

from votoclaro.core.models import Candidate, Snapshot, Station, StationResult


def percentage(part: int | float, total: int | float) -> float:
    """Share of ``part`` in ``total`` as a percentage, 0.0 when ``total`` is not positive."""
    if total <= 0:
        return 0.0
    return part / total * 100


@dataclass(frozen=True)
class RankedCandidate:
    candidate: Candidate
    votes: int

    @property
    def id(self) -> str:
        return self.candidate.id

    @property
    def name(self) -> str:
        return self.candidate.name


@dataclass
class Stats:
    ranking: list[RankedCandidate]
    total_valid: int
    total_blank: int
    total_null: int
    total_cast: int
    total_eligible_sum: int
    participation_pct: float
    stations_processed: int
    stations_pending: int
    stations: list[Station]
    results: dict[str, StationResult]
    candidates: list[Candidate]

    @property
    def leader(self) -> RankedCandidate | None:
        return self.ranking[0] if self.ranking else None

    def share_of_valid(self, entry: RankedCandidate) -> float:
        return percentage(entry.votes, self.total_valid)

    def share_of_eligible(self, entry: RankedCandidate) -> float:
        return percentage(entry.votes, self.total_eligible_sum)

    def as_dict(self) -> dict:
        return {
            "ranking": [
                {
                    "id": entry.id,
                    "name": entry.name,
                    "party": entry.candidate.party,
                    "votes": entry.votes,
                    "share_of_valid": self.share_of_valid(entry),
                    "share_of_eligible": self.share_of_eligible(entry),
                }
                for entry in self.ranking
            ],
            "total_valid": self.total_valid,
            "total_blank": self.total_blank,
            "total_null": self.total_null,
            "total_cast": self.total_cast,
            "total_eligible_sum": self.total_eligible_sum,
            "participation_pct": self.participation_pct,
            "stations_processed": self.stations_processed,
            "stations_pending": self.stations_pending,
        }


def compute_stats(snapshot: Snapshot) -> Stats:
    candidates = snapshot.candidates
    stations = snapshot.stations
    results = snapshot.results

    total_eligible_sum = sum(station.total_eligible for station in stations)
    votes_by_candidate = {candidate.id: 0 for candidate in candidates}

    total_blank = 0
    total_null = 0
    stations_processed = 0
    for station in stations:
        result = results.get(station.id)
        if result is None:
            continue
        stations_processed += 1
        total_blank += result.blank
        total_null += result.null
        # Only ids of current candidates count; stale keys are skipped.
        for candidate in candidates:
            votes_by_candidate[candidate.id] += result.votes.get(candidate.id, 0)

    total_valid = sum(votes_by_candidate.values())
    total_cast = total_valid + total_blank + total_null

    ranking = sorted(
        (RankedCandidate(candidate=candidate, votes=votes_by_candidate[candidate.id]) for candidate in candidates),
        key=lambda entry: entry.votes,
        reverse=True,
    )

    return Stats(
        ranking=ranking,
        total_valid=total_valid,
        total_blank=total_blank,
        total_null=total_null,
        total_cast=total_cast,
        total_eligible_sum=total_eligible_sum,
        participation_pct=percentage(total_cast, total_eligible_sum),
        stations_processed=stations_processed,
        stations_pending=len(stations) - stations_processed,
        stations=stations,
        results=results,
        candidates=candidates,
    )
