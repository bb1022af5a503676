"""SQL implementation of ActivityStatusRepo over the host course database."""

from __future__ import annotations

from sqlalchemy import select, union
from sqlalchemy.orm import Session

from activity_status.db.tables import (
    AssignSubmissionRow,
    CourseModuleCompletionRow,
    CourseModuleRow,
    ModuleRow,
    QuizAttemptRow,
)
from activity_status.models.status import ActivityKey

# Only finalized work counts; drafts and in-progress attempts do not.
ASSIGN_SUBMITTED_STATUS = "submitted"
QUIZ_SUBMITTED_STATES = ("finished", "abandoned")


class SqlActivityStatusRepo:
    """Satisfies the ActivityStatusRepo Protocol using SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_submitted_activity_keys(self, course_id: int) -> set[ActivityKey]:
        assign_stmt = (
            select(
                AssignSubmissionRow.user_id.label("user_id"),
                CourseModuleRow.id.label("cm_id"),
            )
            .select_from(AssignSubmissionRow)
            .join(
                CourseModuleRow,
                CourseModuleRow.instance == AssignSubmissionRow.assignment_id,
            )
            .join(ModuleRow, ModuleRow.id == CourseModuleRow.module_id)
            .where(
                CourseModuleRow.course_id == course_id,
                ModuleRow.name == "assign",
                AssignSubmissionRow.status == ASSIGN_SUBMITTED_STATUS,
            )
        )
        quiz_stmt = (
            select(
                QuizAttemptRow.user_id.label("user_id"),
                CourseModuleRow.id.label("cm_id"),
            )
            .select_from(QuizAttemptRow)
            .join(CourseModuleRow, CourseModuleRow.instance == QuizAttemptRow.quiz_id)
            .join(ModuleRow, ModuleRow.id == CourseModuleRow.module_id)
            .where(
                CourseModuleRow.course_id == course_id,
                ModuleRow.name == "quiz",
                QuizAttemptRow.state.in_(QUIZ_SUBMITTED_STATES),
            )
        )

        # UNION (not UNION ALL) dedupes multiple attempts per user.
        rows = self._session.execute(union(assign_stmt, quiz_stmt)).all()
        return {ActivityKey(user_id=int(r.user_id), cm_id=int(r.cm_id)) for r in rows}

    def find_completion_states(self, course_id: int) -> dict[ActivityKey, int]:
        stmt = (
            select(
                CourseModuleCompletionRow.user_id,
                CourseModuleCompletionRow.course_module_id,
                CourseModuleCompletionRow.completion_state,
            )
            .join(
                CourseModuleRow,
                CourseModuleRow.id == CourseModuleCompletionRow.course_module_id,
            )
            .where(CourseModuleRow.course_id == course_id)
        )
        return {
            ActivityKey(user_id=int(user_id), cm_id=int(cm_id)): int(state)
            for user_id, cm_id, state in self._session.execute(stmt)
        }
