class StoreError(Exception):
    """Base per gli errori dello store di assignment/submission."""


class ValidationError(StoreError):
    """Input mancante o malformato (title, description, deadline, submissionUrl...)."""


class NotFoundError(StoreError):
    """Riferimento a un assignment o a una submission inesistente."""


class PersistenceError(StoreError):
    """Lettura o scrittura sul backing store fallita."""
