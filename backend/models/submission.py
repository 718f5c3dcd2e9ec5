"""Submission model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String
from backend.database import Base

MODULE_SUBMISSION = "module"
QUESTION_SUBMISSION = "question"


class Submission(Base):
    """A student's answers to a module or to a single practice question."""
    __tablename__ = "submissions"
    __table_args__ = (
        Index("idx_submissions_student_course", "student_id", "course_id"),
        Index("idx_submissions_student_submitted", "student_id", "submitted_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # References users.id without a constraint; practice answers may name any student id.
    student_id = Column(Integer, nullable=False, index=True)
    course_id = Column(String, nullable=True)
    module_id = Column(String, nullable=True)
    question_id = Column(String, nullable=True)
    submission_type = Column(String, nullable=False)
    answers = Column(JSON, nullable=False, default=list)
    submitted_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
