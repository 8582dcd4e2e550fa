from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.schemas.submission import Submission

class AssignmentInput(BaseModel):
    title: str
    description: str
    deadline: datetime

class AssignmentCreate(AssignmentInput):
    instructorId: str

class Assignment(AssignmentCreate):
    id: str

class DeadlineInfo(BaseModel):
    urgency: str
    daysLeft: int
    hoursLeft: int
    label: str

class StudentAssignmentView(Assignment):
    deadlineStatus: DeadlineInfo
    submission: Optional[Submission] = None
    canSubmit: bool
    isResubmission: bool = False
