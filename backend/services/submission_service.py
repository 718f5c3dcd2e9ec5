import logging
from datetime import datetime, timezone
from typing import Any

from backend.core.errors import AuthorizationError, InvalidInputError, NotFoundError
from backend.models.submission import MODULE_SUBMISSION, QUESTION_SUBMISSION, Submission
from backend.models.user import User
from backend.repositories.submission_repository import SubmissionRepository

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(self, submissions: SubmissionRepository):
        self.submissions = submissions

    def submit_module(
        self,
        student: User,
        module_id: str,
        course_id: str,
        answers: list[dict[str, Any]],
    ) -> Submission:
        if not answers:
            raise InvalidInputError('Answers are required')

        submission = self.submissions.create(
            Submission(
                student_id=student.id,
                course_id=course_id,
                module_id=module_id,
                submission_type=MODULE_SUBMISSION,
                answers=answers,
                submitted_at=datetime.now(timezone.utc),
            )
        )
        logger.info('Student %s submitted module %s (submission %s)', student.id, module_id, submission.id)
        return submission

    def list_for_student(self, student: User) -> list[Submission]:
        return self.submissions.find_by_student(student.id)

    def get_for_student(self, student: User, submission_id: int) -> Submission:
        submission = self.submissions.find_by_id(submission_id)
        if submission is None:
            raise NotFoundError('Submission not found')
        if submission.student_id != student.id:
            logger.warning('Student %s denied access to submission %s', student.id, submission_id)
            raise AuthorizationError('Not authorized to view this submission')
        return submission

    def list_for_course(self, student: User, course_id: str) -> list[Submission]:
        return self.submissions.find_by_student(student.id, course_id=course_id)

    def submit_single_question(
        self,
        student_id: int,
        question_id: str,
        answer: Any,
        course_id: str | None = None,
        module_id: str | None = None,
    ) -> Submission:
        """Record a practice answer for whichever student id the caller names.

        This path is unauthenticated and the id is not checked, so the stored
        record carries no ownership guarantee.
        """
        return self.submissions.create(
            Submission(
                student_id=student_id,
                course_id=course_id,
                module_id=module_id,
                question_id=question_id,
                submission_type=QUESTION_SUBMISSION,
                answers=[{'question_id': question_id, 'answer': answer}],
                submitted_at=datetime.now(timezone.utc),
            )
        )
