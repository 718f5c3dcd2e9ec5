from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator

from backend.auth.dependencies import get_current_user, get_submission_service
from backend.core.responses import api_response
from backend.models.submission import Submission
from backend.models.user import User
from backend.services.submission_service import SubmissionService

router = APIRouter(tags=['submissions'])


class AnswerItem(BaseModel):
    question_id: str
    answer: Any = None

    @field_validator('question_id')
    @classmethod
    def validate_question_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Question id is required.')
        return normalized


class SubmitModuleRequest(BaseModel):
    course_id: str
    answers: list[AnswerItem]

    @field_validator('course_id')
    @classmethod
    def validate_course_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Course id is required.')
        return normalized


class SubmitSingleQuestionRequest(BaseModel):
    question_id: str
    answer: Any
    course_id: str | None = None
    module_id: str | None = None

    @field_validator('question_id')
    @classmethod
    def validate_question_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Question id is required.')
        return normalized


class SubmissionResponse(BaseModel):
    id: int
    student_id: int
    course_id: str | None = None
    module_id: str | None = None
    question_id: str | None = None
    submission_type: str
    answers: list[dict[str, Any]]
    submitted_at: datetime

    class Config:
        from_attributes = True


def serialize_submission(submission: Submission) -> dict:
    return SubmissionResponse.model_validate(submission).model_dump(mode='json')


@router.post('/{module_id}/submit', status_code=status.HTTP_201_CREATED)
def submit_module(
    module_id: str,
    data: SubmitModuleRequest,
    current_user: User = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
):
    submission = submission_service.submit_module(
        student=current_user,
        module_id=module_id,
        course_id=data.course_id,
        answers=[answer.model_dump() for answer in data.answers],
    )
    return api_response(status.HTTP_201_CREATED, 'Module submitted successfully', serialize_submission(submission))


@router.get('/student')
def get_submissions_by_student(
    current_user: User = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
):
    submissions = submission_service.list_for_student(current_user)
    return api_response(
        status.HTTP_200_OK,
        'Submissions fetched successfully',
        [serialize_submission(submission) for submission in submissions],
    )


@router.get('/course/{course_id}')
def get_submissions_by_course_and_student(
    course_id: str,
    current_user: User = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
):
    submissions = submission_service.list_for_course(current_user, course_id)
    return api_response(
        status.HTTP_200_OK,
        'Submissions fetched successfully',
        [serialize_submission(submission) for submission in submissions],
    )


@router.get('/{submission_id}')
def get_submission_by_id(
    submission_id: int,
    current_user: User = Depends(get_current_user),
    submission_service: SubmissionService = Depends(get_submission_service),
):
    submission = submission_service.get_for_student(current_user, submission_id)
    return api_response(status.HTTP_200_OK, 'Submission fetched successfully', serialize_submission(submission))


# Practice submissions are intentionally unauthenticated; the student comes from the path.
@router.post('/{student_id}/singlequestion', status_code=status.HTTP_201_CREATED)
def submit_single_question(
    student_id: int,
    data: SubmitSingleQuestionRequest,
    submission_service: SubmissionService = Depends(get_submission_service),
):
    submission = submission_service.submit_single_question(
        student_id=student_id,
        question_id=data.question_id,
        answer=data.answer,
        course_id=data.course_id,
        module_id=data.module_id,
    )
    return api_response(status.HTTP_201_CREATED, 'Question submitted successfully', serialize_submission(submission))
