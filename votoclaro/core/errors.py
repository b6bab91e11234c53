from __future__ import annotations


class ElectionError(Exception):
    pass


class ValidationError(ElectionError, ValueError):
    EMPTY_NAME = "empty name"
    DUPLICATE = "duplicate"

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class NotFoundError(ElectionError, LookupError):
    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id
