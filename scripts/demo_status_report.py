"""Demo: build a throwaway host database and print resolved statuses.

Run with:
    python scripts/demo_status_report.py

Set LOG_JSON=true to see the snapshot log line as JSON.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from activity_status.core.config import SETTINGS
from activity_status.core.logging import setup_logging
from activity_status.db.engine import Base
from activity_status.db.tables import (
    AssignSubmissionRow,
    CourseModuleCompletionRow,
    CourseModuleRow,
    CourseRow,
    ModuleRow,
    QuizAttemptRow,
)
from activity_status.models.status import ActivityStatus, CompletionState
from activity_status.repos.sql_status_repo import SqlActivityStatusRepo
from activity_status.services.status_resolver import StatusResolver

STUDENTS = {101: "ana", 102: "ben", 103: "cho"}


def _seed(session: Session) -> tuple[int, dict[int, str]]:
    course = CourseRow(shortname="demo", enable_completion=1)
    assign = ModuleRow(name="assign")
    quiz = ModuleRow(name="quiz")
    page = ModuleRow(name="page")
    session.add_all([course, assign, quiz, page])
    session.flush()

    essay = CourseModuleRow(course_id=course.id, module_id=assign.id, instance=1)
    quiz_cm = CourseModuleRow(course_id=course.id, module_id=quiz.id, instance=1)
    reading = CourseModuleRow(course_id=course.id, module_id=page.id, instance=1)
    session.add_all([essay, quiz_cm, reading])
    session.flush()

    session.add_all(
        [
            # ana: essay submitted, waiting for a grade
            AssignSubmissionRow(assignment_id=1, user_id=101, status="submitted"),
            # ben: essay still a draft; quiz finished and passed
            AssignSubmissionRow(assignment_id=1, user_id=102, status="draft"),
            QuizAttemptRow(quiz_id=1, user_id=102, state="finished"),
            CourseModuleCompletionRow(
                course_module_id=quiz_cm.id,
                user_id=102,
                completion_state=int(CompletionState.COMPLETE_PASS),
            ),
            # cho: read the page; quiz attempt still open
            CourseModuleCompletionRow(
                course_module_id=reading.id,
                user_id=103,
                completion_state=int(CompletionState.COMPLETE),
            ),
            QuizAttemptRow(quiz_id=1, user_id=103, state="inprogress"),
        ]
    )
    session.flush()
    return course.id, {essay.id: "essay", quiz_cm.id: "quiz", reading.id: "reading"}


def main() -> None:
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        course_id, activities = _seed(session)
        status = StatusResolver(course_id, SqlActivityStatusRepo(session))
    engine.dispose()

    # The resolver answers from its snapshot; the database is gone.
    print(f"{'student':<8}" + "".join(f"{name:<16}" for name in activities.values()))
    for user_id, name in STUDENTS.items():
        cells = [status.get_status(user_id, cm_id).name for cm_id in activities]
        print(f"{name:<8}" + "".join(f"{cell:<16}" for cell in cells))

    waiting = sorted(
        {
            STUDENTS[user_id]
            for user_id in STUDENTS
            for cm_id in activities
            if status.has_status(user_id, cm_id, ActivityStatus.SUBMITTED)
        }
    )
    print(f"awaiting grading: {', '.join(waiting) or 'nobody'}")


if __name__ == "__main__":
    main()
