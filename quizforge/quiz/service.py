from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from quizforge.quiz import generation
from quizforge.quiz.session import (
    BeginGeneration,
    GenerationFailed,
    GenerationSucceeded,
    MakeNewQuiz,
    RestartApp,
    StartQuiz,
    SubmitAnswer,
    UseSample,
    is_correct_option,
)
from quizforge.quiz.store import QuizSessionStore, new_generation_id
from quizforge.quiz.types import QuizSessionState

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class AnswerResult:
    state: QuizSessionState
    is_correct: bool
    selected_option: str
    correct_answer: str


class QuizSessionService:
    @staticmethod
    def start(store: QuizSessionStore, session_id: str, *, name: str) -> QuizSessionState:
        state = store.apply(session_id, StartQuiz(name=name))
        logger.info("quiz_session_started")
        return state

    @staticmethod
    async def generate(store: QuizSessionStore, session_id: str, *, text: str) -> QuizSessionState:
        generation_id = new_generation_id()
        store.apply(session_id, BeginGeneration(text=text, generation_id=generation_id))
        try:
            questions = await generation.generate_questions(text)
        except (Exception, asyncio.CancelledError) as exc:
            store.resolve_generation(session_id, GenerationFailed(generation_id=generation_id))
            logger.warning("quiz_generation_failed", error_type=type(exc).__name__)
            raise
        return store.resolve_generation(
            session_id, GenerationSucceeded(questions=questions, generation_id=generation_id)
        )

    @staticmethod
    def use_sample(store: QuizSessionStore, session_id: str) -> QuizSessionState:
        state = store.apply(session_id, UseSample())
        logger.info("quiz_sample_loaded", questions=state.total_questions)
        return state

    @staticmethod
    def answer(store: QuizSessionStore, session_id: str, *, option: str) -> AnswerResult:
        previous, state = store.transition(session_id, SubmitAnswer(option=option))
        question = previous.questions[previous.current_index]
        is_correct = is_correct_option(question, option)
        logger.info(
            "quiz_answer_submitted",
            is_correct=is_correct,
            question_number=previous.current_index + 1,
        )
        if state.finished:
            logger.info("quiz_finished", score=state.score, total_questions=state.total_questions)
        return AnswerResult(
            state=state,
            is_correct=is_correct,
            selected_option=option,
            correct_answer=question.answer,
        )

    @staticmethod
    def new_quiz(store: QuizSessionStore, session_id: str) -> QuizSessionState:
        return store.apply(session_id, MakeNewQuiz())

    @staticmethod
    def restart(store: QuizSessionStore, session_id: str) -> QuizSessionState:
        return store.apply(session_id, RestartApp())
