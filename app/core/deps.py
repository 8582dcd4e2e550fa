from fastapi import Request
from app.services.submission_store import SubmissionStore

def get_store(request: Request) -> SubmissionStore:
    store = getattr(request.app.state, "submission_store", None)
    if store is None:
        raise RuntimeError("Store non inizializzato")
    return store
