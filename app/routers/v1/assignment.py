from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentInput,
    DeadlineInfo,
    StudentAssignmentView,
)
from app.schemas.context import UserContext
from app.schemas.submission import Submission
from app.core.deps import get_store
from app.core.exceptions import NotFoundError, ValidationError
from app.policy.deadline import can_submit, deadline_status, is_resubmission, sort_assignments
from app.services.auth_service import AuthService
from app.services.submission_store import SubmissionStore


router = APIRouter()

StoreDep = Annotated[SubmissionStore, Depends(get_store)]
UserDep = Annotated[UserContext, Depends(AuthService.get_current_user)]


def _student_view(store: SubmissionStore, assignment: Assignment, student_id: str, now) -> StudentAssignmentView:
    prior = store.latest_submission(assignment.id, student_id)
    ds = deadline_status(assignment, now)
    eligible = can_submit(assignment, prior, now)
    return StudentAssignmentView(
        **assignment.model_dump(),
        deadlineStatus=DeadlineInfo(
            urgency=ds.urgency.value,
            daysLeft=ds.days_left,
            hoursLeft=ds.hours_left,
            label=ds.label,
        ),
        submission=prior,
        canSubmit=eligible,
        isResubmission=eligible and is_resubmission(prior),
    )


@router.post("/assignments", status_code=status.HTTP_201_CREATED)
async def create_assignment_endpoint(
    assignment: AssignmentInput,
    user: UserDep,
    store: StoreDep,
):
    try:
        created = await store.create_assignment(
            AssignmentCreate(instructorId=user.user_id, **assignment.model_dump())
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    location = f"/api/v1/assignments/{created.id}"
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Assignment created successfully.", "id": created.id},
        headers={"Location": location},
    )


@router.get("/assignments", response_model=list[Assignment])
async def list_assignments_endpoint(
    user: UserDep,
    store: StoreDep,
):
    if user.is_instructor:
        return store.assignments_by_instructor(user.user_id)
    return sort_assignments(store.list_assignments(), store.clock())


@router.get("/assignments/board", response_model=list[StudentAssignmentView])
async def assignment_board_endpoint(
    user: UserDep,
    store: StoreDep,
):
    """Vista studente: stato deadline, ultima consegna ed eleggibilita' per ogni assignment."""
    now = store.clock()
    return [
        _student_view(store, a, user.user_id, now)
        for a in sort_assignments(store.list_assignments(), now)
    ]


@router.get("/assignments/available", response_model=list[Assignment])
async def available_assignments_endpoint(
    user: UserDep,
    store: StoreDep,
):
    return store.available_assignments(user.user_id)


@router.get("/assignments/{assignment_id}", response_model=Assignment)
async def get_assignment_endpoint(
    assignment_id: str,
    user: UserDep,
    store: StoreDep,
):
    try:
        return store.get_assignment(assignment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/assignments/{assignment_id}/submissions", response_model=list[Submission])
async def assignment_submissions_endpoint(
    assignment_id: str,
    user: UserDep,
    store: StoreDep,
):
    try:
        store.get_assignment(assignment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return store.submissions_by_assignment(assignment_id)
