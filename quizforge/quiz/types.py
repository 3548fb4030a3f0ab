from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SessionPhase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    AWAITING_INPUT = "AWAITING_INPUT"
    GENERATING = "GENERATING"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


@dataclass(frozen=True, slots=True)
class QuestionRecord:
    question: str
    options: tuple[str, str, str, str]
    answer: str

    def as_dict(self) -> dict[str, object]:
        return {
            "question": self.question,
            "options": list(self.options),
            "answer": self.answer,
        }


@dataclass(frozen=True, slots=True)
class QuizSessionState:
    phase: SessionPhase = SessionPhase.NOT_STARTED
    name: str = ""
    input_text: str = ""
    questions: tuple[QuestionRecord, ...] = field(default_factory=tuple)
    current_index: int = 0
    score: int = 0
    finished: bool = False
    generation_id: str = ""

    @property
    def total_questions(self) -> int:
        return len(self.questions)
