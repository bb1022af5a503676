from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


@dataclass(frozen=True, slots=True)
class ActivityKey:
    """One user's relationship to one activity instance in a course."""

    user_id: int
    cm_id: int  # course module id


class CompletionState(IntEnum):
    """Completion tracking states, numbered as the host stores them."""

    INCOMPLETE = 0
    COMPLETE = 1
    COMPLETE_PASS = 2
    COMPLETE_FAIL = 3


class ActivityStatus(IntFlag):
    """Resolved status of a user for an activity.

    Each value is its own bit so callers can test membership in a
    combined mask; a resolver only ever returns one of them.
    """

    NOT_SUBMITTED = 1 << 0
    SUBMITTED = 1 << 1
    COMPLETED = 1 << 2
    COMPLETED_PASS = 1 << 3
    COMPLETED_FAIL = 1 << 4


ANY_COMPLETED = (
    ActivityStatus.COMPLETED
    | ActivityStatus.COMPLETED_PASS
    | ActivityStatus.COMPLETED_FAIL
)

# INCOMPLETE has no entry: it never overrides submission status.
COMPLETION_TO_STATUS: dict[CompletionState, ActivityStatus] = {
    CompletionState.COMPLETE: ActivityStatus.COMPLETED,
    CompletionState.COMPLETE_PASS: ActivityStatus.COMPLETED_PASS,
    CompletionState.COMPLETE_FAIL: ActivityStatus.COMPLETED_FAIL,
}
