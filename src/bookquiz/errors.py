"""Quiz exceptions."""


class QuizError(Exception):
    """Base class for quiz errors."""


class PersistenceError(QuizError):
    """A persistence client could not store a session or partial profile."""


class PayloadNotReadyError(QuizError):
    """Recommendations requested before the quiz reached results."""
