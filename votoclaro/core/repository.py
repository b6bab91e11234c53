from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from votoclaro.core.aggregation import Stats, compute_stats
from votoclaro.core.errors import NotFoundError, ValidationError
from votoclaro.core.models import Candidate, Snapshot, Station, StationResult
from votoclaro.core.parsing import parse_non_negative_int
from votoclaro.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "votoclaro_pro_v2"


def new_id() -> str:
    return str(uuid.uuid4())


def _name_key(name: str) -> str:
    return name.casefold()


def _clean_name(name: str, taken: Sequence[Candidate | Station], exclude_id: str | None = None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(ValidationError.EMPTY_NAME, "Name must not be empty")
    key = _name_key(cleaned)
    for entity in taken:
        if entity.id != exclude_id and _name_key(entity.name) == key:
            raise ValidationError(ValidationError.DUPLICATE, f"'{cleaned}' already exists")
    return cleaned


class ElectionRepository:
    """Owns the current candidates, stations and results.

    Every successful mutation rewrites the whole snapshot to ``store`` under
    ``key``. Storage errors are logged and swallowed: the in-memory snapshot
    stays authoritative for the life of the process.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.key = key
        self.snapshot = Snapshot()

    def init(self) -> "ElectionRepository":
        self.snapshot = Snapshot()
        try:
            raw = self.store.get(self.key)
            if raw is None:
                logger.info("no stored snapshot under key=%s, starting empty", self.key)
                return self
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise ValueError("stored snapshot root must be an object")
            self.snapshot = Snapshot.from_wire(payload)
        except (OSError, ValueError) as exc:
            logger.warning("could not load snapshot key=%s, starting empty: %s", self.key, exc)
            self.snapshot = Snapshot()
            return self

        logger.info(
            "loaded snapshot key=%s candidates=%d stations=%d results=%d",
            self.key,
            len(self.snapshot.candidates),
            len(self.snapshot.stations),
            len(self.snapshot.results),
        )
        return self

    def reset(self) -> None:
        self.snapshot = Snapshot()
        try:
            self.store.delete(self.key)
        except OSError as exc:
            logger.warning("could not clear stored snapshot key=%s: %s", self.key, exc)
        logger.info("snapshot reset key=%s", self.key)

    def persist(self) -> bool:
        try:
            self.store.set(self.key, json.dumps(self.snapshot.to_wire(), ensure_ascii=False))
        except OSError as exc:
            logger.warning("snapshot not saved key=%s: %s", self.key, exc)
            return False
        return True

    # Candidates

    def get_candidates(self) -> list[Candidate]:
        return self.snapshot.candidates

    def get_candidate(self, candidate_id: str) -> Candidate | None:
        return next((c for c in self.snapshot.candidates if c.id == candidate_id), None)

    def add_candidate(self, name: str, party: str = "") -> Candidate:
        cleaned = _clean_name(name, self.snapshot.candidates)
        candidate = Candidate(id=new_id(), name=cleaned, party=(party or "").strip())
        self.snapshot.candidates.append(candidate)
        logger.debug("candidate added id=%s name=%s", candidate.id, candidate.name)
        self.persist()
        return candidate

    def edit_candidate(self, candidate_id: str, name: str, party: str = "") -> None:
        cleaned = _clean_name(name, self.snapshot.candidates, exclude_id=candidate_id)
        candidate = self.get_candidate(candidate_id)
        if candidate is None:
            raise NotFoundError("candidate", candidate_id)
        candidate.name = cleaned
        candidate.party = (party or "").strip()
        logger.debug("candidate edited id=%s", candidate_id)
        self.persist()

    def delete_candidate(self, candidate_id: str) -> None:
        self.snapshot.candidates = [c for c in self.snapshot.candidates if c.id != candidate_id]
        for result in self.snapshot.results.values():
            result.drop_candidate(candidate_id)
        logger.debug("candidate deleted id=%s", candidate_id)
        self.persist()

    # Stations

    def get_stations(self) -> list[Station]:
        return self.snapshot.stations

    def get_station(self, station_id: str) -> Station | None:
        return next((s for s in self.snapshot.stations if s.id == station_id), None)

    def add_station(self, name: str, location: str = "", total_eligible: Any = 0) -> Station:
        cleaned = _clean_name(name, self.snapshot.stations)
        station = Station(
            id=new_id(),
            name=cleaned,
            location=(location or "").strip(),
            total_eligible=parse_non_negative_int(total_eligible),
        )
        self.snapshot.stations.append(station)
        logger.debug("station added id=%s name=%s", station.id, station.name)
        self.persist()
        return station

    def edit_station(self, station_id: str, name: str, location: str = "", total_eligible: Any = 0) -> None:
        cleaned = _clean_name(name, self.snapshot.stations, exclude_id=station_id)
        station = self.get_station(station_id)
        if station is None:
            raise NotFoundError("station", station_id)
        station.name = cleaned
        station.location = (location or "").strip()
        station.total_eligible = parse_non_negative_int(total_eligible)
        logger.debug("station edited id=%s", station_id)
        self.persist()

    def delete_station(self, station_id: str) -> None:
        self.snapshot.stations = [s for s in self.snapshot.stations if s.id != station_id]
        self.snapshot.results.pop(station_id, None)
        logger.debug("station deleted id=%s", station_id)
        self.persist()

    # Results

    def get_results(self) -> dict[str, StationResult]:
        return self.snapshot.results

    def get_station_result(self, station_id: str) -> StationResult | None:
        return self.snapshot.results.get(station_id)

    def save_station_result(
        self,
        station_id: str,
        votes: Mapping[str, Any],
        blank: int | None = None,
        null: int | None = None,
    ) -> StationResult:
        # Accepts the flat wire form too; explicit blank/null win over its entries.
        parsed = StationResult.model_validate(dict(votes))
        result = StationResult.model_validate(
            {
                "votes": parsed.votes,
                "blank": parsed.blank if blank is None else blank,
                "null": parsed.null if null is None else null,
            }
        )
        self.snapshot.results[station_id] = result
        logger.debug("result saved station=%s total=%d", station_id, result.total)
        self.persist()
        return result

    def clear_station_result(self, station_id: str) -> None:
        self.snapshot.results.pop(station_id, None)
        logger.debug("result cleared station=%s", station_id)
        self.persist()

    def get_stats(self) -> Stats:
        return compute_stats(self.snapshot)
