from __future__ import annotations

from quizforge.quiz.types import QuestionRecord

_SAMPLE_QUESTIONS: tuple[QuestionRecord, ...] = (
    QuestionRecord(
        question="What does HTML stand for?",
        options=(
            "HyperText Markup Language",
            "HighText Machine Language",
            "HyperTransfer Markup Language",
            "None of the above",
        ),
        answer="HyperText Markup Language",
    ),
    QuestionRecord(
        question="Which company created JavaScript?",
        options=("Netscape", "Microsoft", "Sun Microsystems", "IBM"),
        answer="Netscape",
    ),
    QuestionRecord(
        question="Which tag links a CSS file?",
        options=("<css>", "<link>", "<style>", "<script>"),
        answer="<link>",
    ),
    QuestionRecord(
        question="React is mainly used for building?",
        options=("Database", "Connectivity", "User Interface", "Server"),
        answer="User Interface",
    ),
    QuestionRecord(
        question="Which hook is for state in React?",
        options=("useEffect", "useState", "useMemo", "useRef"),
        answer="useState",
    ),
)


def get_sample_questions() -> tuple[QuestionRecord, ...]:
    """Returns the built-in offline quiz. Same records on every call."""
    return _SAMPLE_QUESTIONS
