from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

SubmissionStatus = Literal["pending", "accepted", "rejected"]

# Snapshot di visualizzazione catturati al momento della consegna.
# Possono divergere dai record correnti: riflettono cio' che era vero allora.
class StudentSnapshot(BaseModel):
    name: str
    email: str

class AssignmentSnapshot(BaseModel):
    title: str

class SubmissionCreate(BaseModel):
    assignmentId: str
    studentId: str
    submissionUrl: str
    note: Optional[str] = None
    student: Optional[StudentSnapshot] = None
    assignment: Optional[AssignmentSnapshot] = None

class Submission(SubmissionCreate):
    id: str
    status: SubmissionStatus = "pending"
    feedback: Optional[str] = None
    submittedAt: datetime

class SubmissionReview(BaseModel):
    status: SubmissionStatus
    feedback: Optional[str] = None

class SubmissionStats(BaseModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0

class SubmissionInput(BaseModel):
    assignmentId: str
    submissionUrl: str
    note: Optional[str] = None
