from quizforge.quiz.errors import (
    GenerationInProgressError,
    InvalidAnswerOptionError,
    InvalidTransitionError,
    QuizError,
    QuizFormatError,
    QuizServiceError,
    QuizValidationError,
)
from quizforge.quiz.types import QuestionRecord, QuizSessionState, SessionPhase

__all__ = [
    "GenerationInProgressError",
    "InvalidAnswerOptionError",
    "InvalidTransitionError",
    "QuestionRecord",
    "QuizError",
    "QuizFormatError",
    "QuizServiceError",
    "QuizSessionState",
    "QuizValidationError",
    "SessionPhase",
]
