from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas.context import UserContext
from app.schemas.submission import (
    StudentSnapshot,
    Submission,
    SubmissionCreate,
    SubmissionInput,
    SubmissionReview,
    SubmissionStats,
    SubmissionStatus,
)
from app.core.deps import get_store
from app.core.exceptions import NotFoundError, ValidationError
from app.policy.deadline import can_submit
from app.services.auth_service import AuthService
from app.services.submission_store import SubmissionStore, newest_first


router = APIRouter()

StoreDep = Annotated[SubmissionStore, Depends(get_store)]
UserDep = Annotated[UserContext, Depends(AuthService.get_current_user)]


def _visible_submissions(
    store: SubmissionStore,
    user: UserContext,
    search: Optional[str] = None,
    status_filter: Optional[SubmissionStatus] = None,
    assignment_id: Optional[str] = None,
) -> List[Submission]:
    if user.is_instructor:
        return store.submissions_for_instructor(
            user.user_id, search=search, status=status_filter, assignment_id=assignment_id
        )
    return newest_first(store.submissions_by_student(user.user_id))


@router.post("/submissions", status_code=status.HTTP_201_CREATED, response_model=Submission)
async def create_submission_endpoint(
    submission: SubmissionInput,
    user: UserDep,
    store: StoreDep,
):
    try:
        assignment = store.get_assignment(submission.assignmentId)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    # stessa regola della lista assignment e del bottone "Resubmit"
    prior = store.latest_submission(assignment.id, user.user_id)
    if not can_submit(assignment, prior, store.clock()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Submission not allowed: assignment overdue or already submitted",
        )

    try:
        return await store.create_submission(
            SubmissionCreate(
                studentId=user.user_id,
                student=StudentSnapshot(name=user.name, email=user.email),
                **submission.model_dump(),
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/submissions", response_model=list[Submission])
async def list_submissions_endpoint(
    user: UserDep,
    store: StoreDep,
    search: Optional[str] = None,
    status_filter: Annotated[Optional[SubmissionStatus], Query(alias="status")] = None,
    assignment_id: Annotated[Optional[str], Query(alias="assignmentId")] = None,
):
    return _visible_submissions(store, user, search, status_filter, assignment_id)


@router.get("/submissions/stats", response_model=SubmissionStats)
async def submission_stats_endpoint(
    user: UserDep,
    store: StoreDep,
):
    return store.status_counts(_visible_submissions(store, user))


@router.get("/submissions/{submission_id}", response_model=Submission)
async def get_submission_endpoint(
    submission_id: str,
    user: UserDep,
    store: StoreDep,
):
    try:
        return store.get_submission(submission_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/submissions/{submission_id}/review", response_model=Submission)
async def review_submission_endpoint(
    submission_id: str,
    review: SubmissionReview,
    user: UserDep,
    store: StoreDep,
):
    try:
        return await store.review_submission(submission_id, review)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
