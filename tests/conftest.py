from __future__ import annotations

import itertools
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session

from activity_status.db.engine import Base
from activity_status.db.tables import (
    AssignSubmissionRow,
    CourseModuleCompletionRow,
    CourseModuleRow,
    CourseRow,
    ModuleRow,
    QuizAttemptRow,
)
from activity_status.repos.status_repo import InMemoryActivityStatusRepo

# Ensure repo root is on sys.path so `import activity_status` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Activity instance ids (assign.id, quiz.id, page.id) are unique per table
# in the host; a shared counter keeps them distinct here too.
_instance_ids = itertools.count(1)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Throwaway in-memory host database with the mapped tables."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo() -> InMemoryActivityStatusRepo:
    return InMemoryActivityStatusRepo()


# ---------------------------------------------------------------------------
# Host data helpers
# ---------------------------------------------------------------------------


def create_test_course(session: Session, shortname: str = "c1") -> CourseRow:
    course = CourseRow(shortname=shortname, enable_completion=1)
    session.add(course)
    session.flush()
    return course


def create_test_activity(
    session: Session, course_id: int, module_name: str, completion: int = 2
) -> CourseModuleRow:
    """Place a new activity of type ``module_name`` in the course."""
    module = session.scalars(
        select(ModuleRow).where(ModuleRow.name == module_name)
    ).one_or_none()
    if module is None:
        module = ModuleRow(name=module_name)
        session.add(module)
        session.flush()

    cm = CourseModuleRow(
        course_id=course_id,
        module_id=module.id,
        instance=next(_instance_ids),
        completion=completion,
    )
    session.add(cm)
    session.flush()
    return cm


def save_assign_submission(
    session: Session, cm: CourseModuleRow, user_id: int, status: str
) -> AssignSubmissionRow:
    """Insert or update the user's latest submission, as the host does."""
    submission = session.scalars(
        select(AssignSubmissionRow).where(
            AssignSubmissionRow.assignment_id == cm.instance,
            AssignSubmissionRow.user_id == user_id,
            AssignSubmissionRow.latest == 1,
        )
    ).one_or_none()
    if submission is None:
        submission = AssignSubmissionRow(
            assignment_id=cm.instance, user_id=user_id, latest=1
        )
        session.add(submission)
    submission.status = status
    session.flush()
    return submission


def add_quiz_attempt(
    session: Session, cm: CourseModuleRow, user_id: int, state: str, attempt: int = 1
) -> QuizAttemptRow:
    row = QuizAttemptRow(quiz_id=cm.instance, user_id=user_id, state=state, attempt=attempt)
    session.add(row)
    session.flush()
    return row


def set_completion(
    session: Session, cm: CourseModuleRow, user_id: int, state: int
) -> CourseModuleCompletionRow:
    row = session.scalars(
        select(CourseModuleCompletionRow).where(
            CourseModuleCompletionRow.course_module_id == cm.id,
            CourseModuleCompletionRow.user_id == user_id,
        )
    ).one_or_none()
    if row is None:
        row = CourseModuleCompletionRow(course_module_id=cm.id, user_id=user_id)
        session.add(row)
    row.completion_state = int(state)
    session.flush()
    return row
