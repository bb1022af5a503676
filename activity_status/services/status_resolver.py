"""Per-course snapshot of submission and completion facts.

A resolver runs two bulk queries when it is built and then answers any
number of (user, activity) lookups from memory:

  StatusResolver(course_id, repo)
    -> repo.find_submitted_activity_keys(course_id)   (frozen set)
    -> repo.find_completion_states(course_id)         (read-only mapping)
    -> is_submitted / get_completion_state / get_status

Completion tracking outranks submission: when an activity's completion
rule has fired, its state is the answer, whatever the submission table
says.  Lookups for unknown users or activities fall back to the defaults
(not submitted, incomplete) and never raise.

The snapshot is not refreshed.  Build a new resolver to see later writes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType

from activity_status.core.metrics import (
    SNAPSHOT_LOAD_DURATION,
    SNAPSHOT_LOADS,
    SNAPSHOT_ROWS,
    UNRECOGNIZED_COMPLETION_CODES,
)
from activity_status.db.engine import session_scope
from activity_status.models.status import (
    COMPLETION_TO_STATUS,
    ActivityKey,
    ActivityStatus,
    CompletionState,
)
from activity_status.repos.sql_status_repo import SqlActivityStatusRepo
from activity_status.repos.status_repo import ActivityStatusRepo

logger = logging.getLogger(__name__)


class StatusResolver:
    def __init__(self, course_id: int, repo: ActivityStatusRepo) -> None:
        self._course_id = course_id

        started = time.perf_counter()
        try:
            submitted = frozenset(repo.find_submitted_activity_keys(course_id))
            raw_completion = repo.find_completion_states(course_id)
        except Exception:
            SNAPSHOT_LOADS.labels(result="error").inc()
            raise
        elapsed = time.perf_counter() - started

        self._submitted: frozenset[ActivityKey] = submitted
        self._completion: Mapping[ActivityKey, CompletionState] = MappingProxyType(
            {key: _to_completion_state(code) for key, code in raw_completion.items()}
        )

        SNAPSHOT_LOADS.labels(result="ok").inc()
        SNAPSHOT_LOAD_DURATION.observe(elapsed)
        SNAPSHOT_ROWS.labels(source="submitted").inc(len(self._submitted))
        SNAPSHOT_ROWS.labels(source="completion").inc(len(self._completion))

        logger.info(
            "Status snapshot built for course %s: %d submitted, %d completion rows",
            course_id,
            len(self._submitted),
            len(self._completion),
            extra={
                "course_id": course_id,
                "submitted_count": len(self._submitted),
                "completion_count": len(self._completion),
                "duration_ms": round(elapsed * 1000, 2),
            },
        )

    @property
    def course_id(self) -> int:
        return self._course_id

    @property
    def submitted_count(self) -> int:
        return len(self._submitted)

    @property
    def completion_count(self) -> int:
        return len(self._completion)

    def is_submitted(self, user_id: int, cm_id: int) -> bool:
        """True if the user has a submitted assignment or a finished quiz attempt."""
        return ActivityKey(user_id, cm_id) in self._submitted

    def get_completion_state(self, user_id: int, cm_id: int) -> CompletionState:
        return self._completion.get(
            ActivityKey(user_id, cm_id), CompletionState.INCOMPLETE
        )

    def get_status(self, user_id: int, cm_id: int) -> ActivityStatus:
        """Resolve both signals into exactly one ActivityStatus flag."""
        status = ActivityStatus.NOT_SUBMITTED

        if self.is_submitted(user_id, cm_id):
            status = ActivityStatus.SUBMITTED

        # Completion state, when set, wins over submission.
        completion = self.get_completion_state(user_id, cm_id)
        return COMPLETION_TO_STATUS.get(completion, status)

    def has_status(self, user_id: int, cm_id: int, mask: ActivityStatus) -> bool:
        """True if the resolved status is one of the flags in ``mask``.

        e.g. ``has_status(u, cm, ActivityStatus.SUBMITTED | ANY_COMPLETED)``
        """
        return bool(self.get_status(user_id, cm_id) & mask)


def _to_completion_state(code: int) -> CompletionState:
    try:
        return CompletionState(code)
    except ValueError:
        # Newer host versions may add states; read them as incomplete.
        UNRECOGNIZED_COMPLETION_CODES.inc()
        logger.debug("Unrecognized completion state %r treated as incomplete", code)
        return CompletionState.INCOMPLETE


def load_status_resolver(course_id: int) -> StatusResolver:
    """Build a resolver from the configured database.

    The session is closed before returning; the resolver keeps no
    connection.  Raises RuntimeError when DATABASE_URL is not set.
    """
    with session_scope() as session:
        return StatusResolver(course_id, SqlActivityStatusRepo(session))
