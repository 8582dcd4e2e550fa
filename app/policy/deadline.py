# app/policy/deadline.py
"""
Regole pure su deadline ed eleggibilita'.

Nessuno stato: tutte le funzioni ricevono `now` esplicitamente, cosi' la stessa
regola viene usata identica da lista assignment, form di consegna e bottone
di riconsegna.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from app.schemas.assignment import Assignment
from app.schemas.submission import Submission

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


class Urgency(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"    # meno di 24h
    SOON = "soon"        # al massimo 3 giorni
    PLENTY = "plenty"    # piu' di 3 giorni


class DeadlineStatus(NamedTuple):
    urgency: Urgency
    days_left: int
    hours_left: int
    label: str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(ts: datetime) -> datetime:
    # i timestamp naive (es. dati seed) sono interpretati come UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def is_overdue(assignment: Assignment, now: datetime) -> bool:
    # confine aperto: esattamente alla deadline NON e' ancora scaduto
    return as_utc(now) > as_utc(assignment.deadline)


def deadline_status(assignment: Assignment, now: datetime) -> DeadlineStatus:
    if is_overdue(assignment, now):
        return DeadlineStatus(Urgency.OVERDUE, 0, 0, "Overdue")

    remaining = (as_utc(assignment.deadline) - as_utc(now)).total_seconds()
    # remaining >= 0 qui, quindi int() tronca verso zero
    days_left = int(remaining // SECONDS_PER_DAY)
    hours_left = int(remaining // SECONDS_PER_HOUR)

    if days_left < 1:
        return DeadlineStatus(Urgency.URGENT, days_left, hours_left, f"{hours_left}h left")
    if days_left <= 3:
        return DeadlineStatus(Urgency.SOON, days_left, hours_left, f"{days_left} days left")
    return DeadlineStatus(Urgency.PLENTY, days_left, hours_left, f"{days_left} days left")


def urgency(assignment: Assignment, now: datetime) -> Urgency:
    return deadline_status(assignment, now).urgency


def can_submit(
    assignment: Assignment,
    prior_submission: Optional[Submission],
    now: datetime,
) -> bool:
    """
    True se lo studente puo' consegnare (o riconsegnare) adesso:
    assignment non scaduto e nessuna consegna precedente, oppure l'ultima e' stata rifiutata.
    """
    if is_overdue(assignment, now):
        return False
    return prior_submission is None or prior_submission.status == "rejected"


def is_resubmission(prior_submission: Optional[Submission]) -> bool:
    return prior_submission is not None and prior_submission.status == "rejected"


def sort_assignments(assignments: Iterable[Assignment], now: datetime) -> List[Assignment]:
    """Prima i non scaduti, poi gli scaduti; dentro ogni gruppo per deadline crescente."""
    return sorted(
        assignments,
        key=lambda a: (is_overdue(a, now), as_utc(a.deadline)),
    )
