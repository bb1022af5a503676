from __future__ import annotations

from typing import Protocol

from activity_status.models.status import ActivityKey


class ActivityStatusRepo(Protocol):
    def find_submitted_activity_keys(self, course_id: int) -> set[ActivityKey]: ...
    def find_completion_states(self, course_id: int) -> dict[ActivityKey, int]: ...


class InMemoryActivityStatusRepo:
    """Holds host facts per course; answers the same two queries as SQL.

    Only final submissions are recorded here; filtering drafts and
    in-progress attempts is the SQL repo's job and is tested there.
    """

    def __init__(self) -> None:
        self._submitted: dict[int, set[ActivityKey]] = {}
        self._completion: dict[int, dict[ActivityKey, int]] = {}

    def add_submission(self, course_id: int, user_id: int, cm_id: int) -> None:
        self._submitted.setdefault(course_id, set()).add(ActivityKey(user_id, cm_id))

    def add_completion(
        self, course_id: int, user_id: int, cm_id: int, completion_state: int
    ) -> None:
        # Host keeps one completion row per (user, activity); last write wins.
        self._completion.setdefault(course_id, {})[
            ActivityKey(user_id, cm_id)
        ] = completion_state

    def find_submitted_activity_keys(self, course_id: int) -> set[ActivityKey]:
        return set(self._submitted.get(course_id, ()))

    def find_completion_states(self, course_id: int) -> dict[ActivityKey, int]:
        return dict(self._completion.get(course_id, {}))
