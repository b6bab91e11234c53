from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

BLANK_KEY = "blancos"
NULL_KEY = "nulos"


class Candidate(BaseModel):
    id: str
    name: str
    party: str = ""


class Station(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    location: str = ""
    total_eligible: int = Field(default=0, alias="totalEligible")


class StationResult(BaseModel):
    """Tally for one station.

    Stored flat on the wire: candidate ids map straight to their counts next
    to the ``blancos`` and ``nulos`` entries.
    """

    votes: dict[str, int] = Field(default_factory=dict)
    blank: int = 0
    null: int = 0

    @model_validator(mode="before")
    @classmethod
    def unflatten(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "votes" in data:
            return data
        payload = dict(data)
        blank = payload.pop(BLANK_KEY, 0) or 0
        null = payload.pop(NULL_KEY, 0) or 0
        votes = {key: value or 0 for key, value in payload.items()}
        return {"votes": votes, "blank": blank, "null": null}

    @model_serializer(mode="plain")
    def flatten(self) -> dict[str, int]:
        return {**self.votes, BLANK_KEY: self.blank, NULL_KEY: self.null}

    def drop_candidate(self, candidate_id: str) -> None:
        self.votes.pop(candidate_id, None)

    @property
    def total(self) -> int:
        return sum(self.votes.values()) + self.blank + self.null


class Snapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidates: list[Candidate] = Field(default_factory=list)
    stations: list[Station] = Field(default_factory=list, alias="anforas")
    results: dict[str, StationResult] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_wire(cls, payload: dict[str, Any]) -> "Snapshot":
        return cls.model_validate(payload)
