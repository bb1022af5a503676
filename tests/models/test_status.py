from __future__ import annotations

import dataclasses

import pytest

from activity_status.models.status import (
    ANY_COMPLETED,
    COMPLETION_TO_STATUS,
    ActivityKey,
    ActivityStatus,
    CompletionState,
)


def test_status_flags_are_distinct_powers_of_two() -> None:
    values = [s.value for s in ActivityStatus]
    assert values == [1, 2, 4, 8, 16]


def test_completion_states_match_host_codes() -> None:
    assert CompletionState.INCOMPLETE == 0
    assert CompletionState.COMPLETE == 1
    assert CompletionState.COMPLETE_PASS == 2
    assert CompletionState.COMPLETE_FAIL == 3


def test_any_completed_mask_excludes_submission_flags() -> None:
    assert ActivityStatus.COMPLETED in ANY_COMPLETED
    assert ActivityStatus.COMPLETED_PASS in ANY_COMPLETED
    assert ActivityStatus.COMPLETED_FAIL in ANY_COMPLETED
    assert not ActivityStatus.SUBMITTED & ANY_COMPLETED
    assert not ActivityStatus.NOT_SUBMITTED & ANY_COMPLETED


def test_incomplete_never_maps_to_a_status() -> None:
    assert CompletionState.INCOMPLETE not in COMPLETION_TO_STATUS
    assert set(COMPLETION_TO_STATUS.values()) == {
        ActivityStatus.COMPLETED,
        ActivityStatus.COMPLETED_PASS,
        ActivityStatus.COMPLETED_FAIL,
    }


# ---- ActivityKey ----


def test_activity_key_equality_is_structural() -> None:
    assert ActivityKey(1, 23) == ActivityKey(user_id=1, cm_id=23)
    assert hash(ActivityKey(1, 23)) == hash(ActivityKey(1, 23))


def test_activity_key_has_no_separator_collisions() -> None:
    # "1#23" vs "12#3" style joins cannot collide with a structural key
    keys = {ActivityKey(1, 23), ActivityKey(12, 3), ActivityKey(123, 0)}
    assert len(keys) == 3


def test_activity_key_is_frozen() -> None:
    key = ActivityKey(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        key.user_id = 5  # type: ignore[misc]
