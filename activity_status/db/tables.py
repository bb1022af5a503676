"""Read-only mappings of the host course database.

Only the tables and columns the status queries touch are mapped.  Column
names follow the host schema (``course``, ``userid``, ``completionstate``);
attribute names are snake_case.  This component owns none of these tables
and never writes to them.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from activity_status.db.engine import Base

# SQLite only autoincrements INTEGER PRIMARY KEY, not BIGINT.
_Id = BigInteger().with_variant(Integer, "sqlite")


class CourseRow(Base):
    __tablename__ = "course"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    shortname: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    enable_completion: Mapped[int] = mapped_column(
        "enablecompletion", Integer, nullable=False, default=0
    )


class ModuleRow(Base):
    """Activity type registry: one row per plugin (assign, quiz, page, ...)."""

    __tablename__ = "modules"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)


class CourseModuleRow(Base):
    """One activity instance placed in a course."""

    __tablename__ = "course_modules"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    course_id: Mapped[int] = mapped_column(
        "course", BigInteger, ForeignKey("course.id"), nullable=False
    )
    module_id: Mapped[int] = mapped_column(
        "module", BigInteger, ForeignKey("modules.id"), nullable=False
    )
    # Id of the row in the activity's own table (assign.id, quiz.id, ...)
    instance: Mapped[int] = mapped_column(BigInteger, nullable=False)
    completion: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )  # 0 none|1 manual|2 automatic


class AssignSubmissionRow(Base):
    __tablename__ = "assign_submission"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    assignment_id: Mapped[int] = mapped_column("assignment", BigInteger, nullable=False)
    user_id: Mapped[int] = mapped_column("userid", BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="new"
    )  # new|draft|submitted|reopened
    attempt_number: Mapped[int] = mapped_column(
        "attemptnumber", BigInteger, nullable=False, default=0
    )
    latest: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class QuizAttemptRow(Base):
    __tablename__ = "quiz_attempts"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    quiz_id: Mapped[int] = mapped_column("quiz", BigInteger, nullable=False)
    user_id: Mapped[int] = mapped_column("userid", BigInteger, nullable=False)
    attempt: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    state: Mapped[str] = mapped_column(
        String(16), nullable=False, default="inprogress"
    )  # inprogress|overdue|finished|abandoned


class CourseModuleCompletionRow(Base):
    __tablename__ = "course_modules_completion"

    id: Mapped[int] = mapped_column(_Id, primary_key=True)
    course_module_id: Mapped[int] = mapped_column(
        "coursemoduleid", BigInteger, ForeignKey("course_modules.id"), nullable=False
    )
    user_id: Mapped[int] = mapped_column("userid", BigInteger, nullable=False)
    completion_state: Mapped[int] = mapped_column(
        "completionstate", Integer, nullable=False, default=0
    )  # 0 incomplete|1 complete|2 complete-pass|3 complete-fail
    time_modified: Mapped[int] = mapped_column(
        "timemodified", BigInteger, nullable=False, default=0
    )

    __table_args__ = (UniqueConstraint("userid", "coursemoduleid"),)
