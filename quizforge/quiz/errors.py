from __future__ import annotations


class QuizError(Exception):
    pass


class QuizValidationError(QuizError):
    """User input rejected before any state change."""


class QuizServiceError(QuizError):
    """The text-generation service answered with a non-success status or was unreachable."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"service unreachable: {body}")
        else:
            super().__init__(f"service error: {status_code} {body}")


class QuizFormatError(QuizError):
    """The service reply could not be turned into question records."""


class InvalidTransitionError(QuizError):
    pass


class GenerationInProgressError(QuizError):
    pass


class InvalidAnswerOptionError(QuizError):
    pass
