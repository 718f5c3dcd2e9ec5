from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.models.submission import Submission


class SubmissionRepository(Protocol):
    def create(self, submission: Submission) -> Submission: ...

    def find_by_id(self, submission_id: int) -> Submission | None: ...

    def find_by_student(self, student_id: int, course_id: str | None = None) -> list[Submission]: ...


class SqlAlchemySubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, submission: Submission) -> Submission:
        self.db.add(submission)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(submission)
        return submission

    def find_by_id(self, submission_id: int) -> Submission | None:
        return self.db.query(Submission).filter(Submission.id == submission_id).first()

    def find_by_student(self, student_id: int, course_id: str | None = None) -> list[Submission]:
        query = self.db.query(Submission).filter(Submission.student_id == student_id)
        if course_id is not None:
            query = query.filter(Submission.course_id == course_id)
        return query.order_by(Submission.submitted_at.desc(), Submission.id.desc()).all()
