# app/services/submission_store.py
import logging
import time
from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFoundError, ValidationError
from app.database.persistence import PersistenceAdapter
from app.policy.deadline import as_utc, can_submit, sort_assignments, utc_now
from app.schemas.assignment import Assignment, AssignmentCreate
from app.schemas.submission import (
    AssignmentSnapshot,
    Submission,
    SubmissionCreate,
    SubmissionReview,
    SubmissionStats,
    SubmissionStatus,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ACTIVE_STATUSES = frozenset({"pending", "accepted"})


class IdGenerator:
    """
    Id = millisecondi epoch in decimale. Se il clock non e' avanzato si usa last + 1,
    quindi gli id sono unici nel processo e crescenti nell'ordine di creazione.
    """

    def __init__(self, clock_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000):
        self._clock_ms = clock_ms
        self._last = 0

    def prime(self, existing_ids: Iterable[str]) -> None:
        # evita collisioni con gli id gia' persistiti
        for raw in existing_ids:
            # solo cifre ASCII: isdigit() accetta anche "²", che int() non converte
            if raw.isascii() and raw.isdigit():
                self._last = max(self._last, int(raw))

    def __call__(self) -> str:
        self._last = max(self._clock_ms(), self._last + 1)
        return str(self._last)


def _coerce(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def _require(field: str, value: Optional[str]) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"Field '{field}' is required")


class SubmissionStore:
    """
    Unico proprietario delle collezioni di Assignment e Submission.

    Le mutazioni validano tutto prima di toccare lo stato (niente scritture parziali),
    poi fanno flush sul PersistenceAdapter. Le query ritornano sempre liste nuove di copie.
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Optional[IdGenerator] = None,
        enforce_single_active: bool = True,
    ):
        self.persistence = persistence
        self.clock = clock
        self.id_factory = id_factory or IdGenerator()
        self.enforce_single_active = enforce_single_active
        self._assignments: List[Assignment] = []
        self._submissions: List[Submission] = []
        self._ready = False

    # ------------------------------------------------------------------ lifecycle

    async def initialize(self) -> None:
        self._assignments, self._submissions = await self.persistence.load()
        self.id_factory.prime(a.id for a in self._assignments)
        self.id_factory.prime(s.id for s in self._submissions)
        self._ready = True
        logger.info(
            "Store pronto: %d assignment, %d submission",
            len(self._assignments), len(self._submissions),
        )

    def _ensure_ready(self) -> None:
        if not self._ready:
            raise RuntimeError("Store non inizializzato: chiamare initialize() prima")

    async def _flush(self) -> None:
        await self.persistence.save(self._assignments, self._submissions)

    # ------------------------------------------------------------------ mutations

    async def create_assignment(self, data: Union[AssignmentCreate, Mapping[str, Any]]) -> Assignment:
        self._ensure_ready()
        data = _coerce(AssignmentCreate, data)
        _require("title", data.title)
        _require("description", data.description)

        fields = data.model_dump(include=set(AssignmentCreate.model_fields))
        assignment = Assignment(id=self.id_factory(), **fields)
        self._assignments.append(assignment)
        logger.info("Assignment %s creato da %s", assignment.id, assignment.instructorId)
        await self._flush()
        return assignment.model_copy(deep=True)

    async def create_submission(self, data: Union[SubmissionCreate, Mapping[str, Any]]) -> Submission:
        self._ensure_ready()
        data = _coerce(SubmissionCreate, data)
        _require("submissionUrl", data.submissionUrl)
        _require("studentId", data.studentId)

        assignment = self._find_assignment(data.assignmentId)
        if assignment is None:
            raise NotFoundError(f"Assignment {data.assignmentId} not found")

        if self.enforce_single_active:
            prior = self._latest_submission(data.assignmentId, data.studentId)
            if prior is not None and prior.status in ACTIVE_STATUSES:
                raise ValidationError(
                    f"Student {data.studentId} already has a {prior.status} submission "
                    f"for assignment {data.assignmentId}"
                )

        fields = data.model_dump(include=set(SubmissionCreate.model_fields) - {"note", "assignment"})
        # note vuota o solo spazi -> omessa; altrimenti testo invariato
        note = data.note if data.note and data.note.strip() else None
        submission = Submission(
            **fields,
            id=self.id_factory(),
            note=note,
            # snapshot di visualizzazione: titolo corrente se il chiamante non lo fornisce
            assignment=AssignmentSnapshot(title=data.assignment.title if data.assignment else assignment.title),
            status="pending",
            submittedAt=self.clock(),
        )
        self._submissions.append(submission)
        logger.info(
            "Submission %s per assignment %s da studente %s",
            submission.id, submission.assignmentId, submission.studentId,
        )
        await self._flush()
        return submission.model_copy(deep=True)

    async def review_submission(
        self,
        submission_id: str,
        updates: Union[SubmissionReview, Mapping[str, Any]],
    ) -> Submission:
        self._ensure_ready()
        updates = _coerce(SubmissionReview, updates)
        submission = self._find_submission(submission_id)
        if submission is None:
            raise NotFoundError(f"Submission {submission_id} not found")

        # merge in place: identita' e altri campi invariati
        submission.status = updates.status
        if "feedback" in updates.model_fields_set:
            feedback = (updates.feedback or "").strip()
            submission.feedback = feedback or None
        logger.info("Submission %s revisionata: %s", submission.id, submission.status)
        await self._flush()
        return submission.model_copy(deep=True)

    # ------------------------------------------------------------------ queries

    def _find_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return next((a for a in self._assignments if a.id == assignment_id), None)

    def _find_submission(self, submission_id: str) -> Optional[Submission]:
        return next((s for s in self._submissions if s.id == submission_id), None)

    def _latest_submission(self, assignment_id: str, student_id: str) -> Optional[Submission]:
        for s in reversed(self._submissions):
            if s.assignmentId == assignment_id and s.studentId == student_id:
                return s
        return None

    def list_assignments(self) -> List[Assignment]:
        self._ensure_ready()
        return [a.model_copy(deep=True) for a in self._assignments]

    def list_submissions(self) -> List[Submission]:
        self._ensure_ready()
        return [s.model_copy(deep=True) for s in self._submissions]

    def get_assignment(self, assignment_id: str) -> Assignment:
        self._ensure_ready()
        assignment = self._find_assignment(assignment_id)
        if assignment is None:
            raise NotFoundError(f"Assignment {assignment_id} not found")
        return assignment.model_copy(deep=True)

    def get_submission(self, submission_id: str) -> Submission:
        self._ensure_ready()
        submission = self._find_submission(submission_id)
        if submission is None:
            raise NotFoundError(f"Submission {submission_id} not found")
        return submission.model_copy(deep=True)

    def assignments_by_instructor(self, instructor_id: str) -> List[Assignment]:
        self._ensure_ready()
        return [a.model_copy(deep=True) for a in self._assignments if a.instructorId == instructor_id]

    def submissions_by_student(self, student_id: str) -> List[Submission]:
        self._ensure_ready()
        return [s.model_copy(deep=True) for s in self._submissions if s.studentId == student_id]

    def submissions_by_assignment(self, assignment_id: str) -> List[Submission]:
        self._ensure_ready()
        return [s.model_copy(deep=True) for s in self._submissions if s.assignmentId == assignment_id]

    def latest_submission(self, assignment_id: str, student_id: str) -> Optional[Submission]:
        """Consegna piu' recente per la coppia (assignment, studente): e' la 'prior' di can_submit."""
        self._ensure_ready()
        prior = self._latest_submission(assignment_id, student_id)
        return prior.model_copy(deep=True) if prior else None

    def available_assignments(self, student_id: str, now: Optional[datetime] = None) -> List[Assignment]:
        self._ensure_ready()
        now = now or self.clock()
        available = [
            a for a in self._assignments
            if can_submit(a, self._latest_submission(a.id, student_id), now)
        ]
        return [a.model_copy(deep=True) for a in sort_assignments(available, now)]

    def submissions_for_instructor(
        self,
        instructor_id: str,
        *,
        search: Optional[str] = None,
        status: Optional[SubmissionStatus] = None,
        assignment_id: Optional[str] = None,
    ) -> List[Submission]:
        """
        Coda di revisione: submission sugli assignment dell'istruttore, piu' recenti prima.
        `search` cerca (case-insensitive) nel nome studente e nel titolo assignment degli snapshot.
        """
        self._ensure_ready()
        owned = {a.id for a in self._assignments if a.instructorId == instructor_id}
        needle = search.strip().lower() if search else ""

        def matches(s: Submission) -> bool:
            if s.assignmentId not in owned:
                return False
            if status and s.status != status:
                return False
            if assignment_id and s.assignmentId != assignment_id:
                return False
            if needle:
                name = s.student.name.lower() if s.student else ""
                title = s.assignment.title.lower() if s.assignment else ""
                return needle in name or needle in title
            return True

        selected = [s for s in self._submissions if matches(s)]
        return [s.model_copy(deep=True) for s in newest_first(selected)]

    @staticmethod
    def status_counts(submissions: Iterable[Submission]) -> SubmissionStats:
        stats = SubmissionStats()
        for s in submissions:
            stats.total += 1
            setattr(stats, s.status, getattr(stats, s.status) + 1)
        return stats


def newest_first(submissions: Iterable[Submission]) -> List[Submission]:
    # a parita' di submittedAt vince l'ultima inserita (sort stabile su input invertito)
    return sorted(reversed(list(submissions)), key=lambda s: as_utc(s.submittedAt), reverse=True)
