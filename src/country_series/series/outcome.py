"""Result channel for command-level operations."""

from enum import Enum

from attrs import define

SUCCESS = "success"
FAILURE = "failure"


class FailureReason(str, Enum):
    """Why an operation reported failure."""

    NOT_FOUND = "not_found"
    NO_VALID_DATA = "no_valid_data"
    DUPLICATE_INSERT = "duplicate_insert"
    PARSE_FAILURE = "parse_failure"
    SOURCE_UNAVAILABLE = "source_unavailable"
    DEGENERATE_FIT = "degenerate_fit"


@define(slots=True, frozen=True)
class Outcome:
    """Status of one operation plus an optional text payload."""

    ok: bool
    payload: str | None = None
    reason: FailureReason | None = None

    @classmethod
    def success(cls, payload: str | None = None) -> "Outcome":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, reason: FailureReason) -> "Outcome":
        return cls(ok=False, reason=reason)

    def render(self) -> str:
        """Return the line printed for this outcome."""
        if not self.ok:
            return FAILURE
        return self.payload if self.payload is not None else SUCCESS

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["FAILURE", "FailureReason", "Outcome", "SUCCESS"]
