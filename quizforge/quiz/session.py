"""Quiz session state machine.

Every transition takes the current ``QuizSessionState`` and returns a new one;
nothing here mutates its input or touches the network. Phases move strictly
forward: NOT_STARTED, AWAITING_INPUT, GENERATING, IN_PROGRESS, FINISHED.
A failed generation drops back to AWAITING_INPUT, "new quiz" returns there
from FINISHED, and "restart" clears everything from any phase.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Union

from quizforge.quiz.errors import (
    InvalidAnswerOptionError,
    InvalidTransitionError,
    QuizValidationError,
)
from quizforge.quiz.generation import require_topic_text
from quizforge.quiz.sample_bank import get_sample_questions
from quizforge.quiz.types import QuestionRecord, QuizSessionState, SessionPhase

EMPTY_NAME_MESSAGE = "Enter your name"


@dataclass(frozen=True, slots=True)
class StartQuiz:
    name: str


@dataclass(frozen=True, slots=True)
class BeginGeneration:
    text: str
    generation_id: str = ""


@dataclass(frozen=True, slots=True)
class GenerationSucceeded:
    questions: tuple[QuestionRecord, ...]
    generation_id: str = ""


@dataclass(frozen=True, slots=True)
class GenerationFailed:
    generation_id: str = ""


@dataclass(frozen=True, slots=True)
class UseSample:
    pass


@dataclass(frozen=True, slots=True)
class SubmitAnswer:
    option: str


@dataclass(frozen=True, slots=True)
class MakeNewQuiz:
    pass


@dataclass(frozen=True, slots=True)
class RestartApp:
    pass


QuizEvent = Union[
    StartQuiz,
    BeginGeneration,
    GenerationSucceeded,
    GenerationFailed,
    UseSample,
    SubmitAnswer,
    MakeNewQuiz,
    RestartApp,
]


def initial_state() -> QuizSessionState:
    return QuizSessionState()


def _require_phase(state: QuizSessionState, *allowed: SessionPhase) -> None:
    if state.phase not in allowed:
        raise InvalidTransitionError(f"not allowed in phase {state.phase.value}")


def start(state: QuizSessionState, name: str) -> QuizSessionState:
    _require_phase(state, SessionPhase.NOT_STARTED)
    if not name or not name.strip():
        raise QuizValidationError(EMPTY_NAME_MESSAGE)
    return replace(state, phase=SessionPhase.AWAITING_INPUT, name=name.strip())


def begin_generation(
    state: QuizSessionState, text: str, generation_id: str = ""
) -> QuizSessionState:
    _require_phase(state, SessionPhase.AWAITING_INPUT)
    require_topic_text(text)
    return replace(
        state,
        phase=SessionPhase.GENERATING,
        input_text=text,
        questions=(),
        current_index=0,
        score=0,
        finished=False,
        generation_id=generation_id,
    )


def _populate(state: QuizSessionState, questions: Sequence[QuestionRecord]) -> QuizSessionState:
    if not questions:
        raise InvalidTransitionError("cannot start a quiz without questions")
    return replace(
        state,
        phase=SessionPhase.IN_PROGRESS,
        questions=tuple(questions),
        current_index=0,
        score=0,
        finished=False,
        generation_id="",
    )


def complete_generation(
    state: QuizSessionState, questions: Sequence[QuestionRecord]
) -> QuizSessionState:
    _require_phase(state, SessionPhase.GENERATING)
    return _populate(state, questions)


def fail_generation(state: QuizSessionState) -> QuizSessionState:
    _require_phase(state, SessionPhase.GENERATING)
    return replace(state, phase=SessionPhase.AWAITING_INPUT, questions=(), generation_id="")


def load_sample(state: QuizSessionState) -> QuizSessionState:
    _require_phase(state, SessionPhase.AWAITING_INPUT)
    return _populate(state, get_sample_questions())


def current_question(state: QuizSessionState) -> QuestionRecord | None:
    if state.phase is not SessionPhase.IN_PROGRESS:
        return None
    return state.questions[state.current_index]


def is_correct_option(question: QuestionRecord, option: str) -> bool:
    return option == question.answer


def submit_answer(state: QuizSessionState, option: str) -> QuizSessionState:
    _require_phase(state, SessionPhase.IN_PROGRESS)
    question = state.questions[state.current_index]
    if option not in question.options:
        raise InvalidAnswerOptionError(option)

    score = state.score + 1 if is_correct_option(question, option) else state.score
    if state.current_index + 1 < len(state.questions):
        return replace(state, score=score, current_index=state.current_index + 1)
    return replace(state, score=score, finished=True, phase=SessionPhase.FINISHED)


def new_quiz(state: QuizSessionState) -> QuizSessionState:
    _require_phase(state, SessionPhase.FINISHED)
    return QuizSessionState(phase=SessionPhase.AWAITING_INPUT, name=state.name)


def restart(state: QuizSessionState) -> QuizSessionState:  # noqa: ARG001
    return initial_state()


def apply_event(state: QuizSessionState, event: QuizEvent) -> QuizSessionState:
    if isinstance(event, StartQuiz):
        return start(state, event.name)
    if isinstance(event, BeginGeneration):
        return begin_generation(state, event.text, event.generation_id)
    if isinstance(event, GenerationSucceeded):
        return complete_generation(state, event.questions)
    if isinstance(event, GenerationFailed):
        return fail_generation(state)
    if isinstance(event, UseSample):
        return load_sample(state)
    if isinstance(event, SubmitAnswer):
        return submit_answer(state, event.option)
    if isinstance(event, MakeNewQuiz):
        return new_quiz(state)
    if isinstance(event, RestartApp):
        return restart(state)
    raise ValueError(f"Unsupported quiz event: {event!r}")
