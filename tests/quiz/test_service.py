from __future__ import annotations

import asyncio

import pytest

from quizforge.quiz import generation
from quizforge.quiz.errors import QuizServiceError
from quizforge.quiz.service import QuizSessionService
from quizforge.quiz.store import QuizSessionStore
from quizforge.quiz.types import QuestionRecord, SessionPhase

QUESTIONS = (
    QuestionRecord(question="Q1", options=("a", "b", "c", "d"), answer="a"),
    QuestionRecord(question="Q2", options=("a", "b", "c", "d"), answer="d"),
)


def _started_store() -> QuizSessionStore:
    store = QuizSessionStore()
    QuizSessionService.start(store, "s1", name="Ana")
    return store


@pytest.mark.asyncio
async def test_generate_stores_generated_questions(monkeypatch) -> None:
    async def fake_generate(text: str) -> tuple[QuestionRecord, ...]:
        return QUESTIONS

    monkeypatch.setattr(generation, "generate_questions", fake_generate)
    store = _started_store()

    state = await QuizSessionService.generate(store, "s1", text="Oceans")

    assert state.phase is SessionPhase.IN_PROGRESS
    assert store.get("s1").questions == QUESTIONS


@pytest.mark.asyncio
async def test_generate_marks_session_generating_while_call_is_pending(monkeypatch) -> None:
    seen_phases: list[SessionPhase] = []
    store = _started_store()

    async def fake_generate(text: str) -> tuple[QuestionRecord, ...]:
        seen_phases.append(store.get("s1").phase)
        return QUESTIONS

    monkeypatch.setattr(generation, "generate_questions", fake_generate)

    await QuizSessionService.generate(store, "s1", text="Oceans")

    assert seen_phases == [SessionPhase.GENERATING]


@pytest.mark.asyncio
async def test_generate_failure_reverts_session_and_reraises(monkeypatch) -> None:
    async def fake_generate(text: str) -> tuple[QuestionRecord, ...]:
        raise QuizServiceError(503, "overloaded")

    monkeypatch.setattr(generation, "generate_questions", fake_generate)
    store = _started_store()

    with pytest.raises(QuizServiceError):
        await QuizSessionService.generate(store, "s1", text="Oceans")

    state = store.get("s1")
    assert state.phase is SessionPhase.AWAITING_INPUT
    assert state.questions == ()


@pytest.mark.asyncio
async def test_cancelled_generation_does_not_leave_session_stuck(monkeypatch) -> None:
    async def fake_generate(text: str) -> tuple[QuestionRecord, ...]:
        raise asyncio.CancelledError

    monkeypatch.setattr(generation, "generate_questions", fake_generate)
    store = _started_store()

    with pytest.raises(asyncio.CancelledError):
        await QuizSessionService.generate(store, "s1", text="Oceans")

    assert store.get("s1").phase is SessionPhase.AWAITING_INPUT


def test_answer_reports_correctness_against_answered_question() -> None:
    store = _started_store()
    QuizSessionService.use_sample(store, "s1")

    wrong = QuizSessionService.answer(store, "s1", option="None of the above")
    right = QuizSessionService.answer(store, "s1", option="Netscape")

    assert wrong.is_correct is False
    assert wrong.correct_answer == "HyperText Markup Language"
    assert right.is_correct is True
    assert right.state.score == 1
    assert right.state.current_index == 2


def test_new_quiz_and_restart() -> None:
    store = _started_store()
    QuizSessionService.use_sample(store, "s1")
    for option in ("HyperText Markup Language", "Netscape", "<link>", "User Interface", "useState"):
        result = QuizSessionService.answer(store, "s1", option=option)
    assert result.state.score == 5

    state = QuizSessionService.new_quiz(store, "s1")
    assert state.phase is SessionPhase.AWAITING_INPUT
    assert state.name == "Ana"

    state = QuizSessionService.restart(store, "s1")
    assert state.phase is SessionPhase.NOT_STARTED


@pytest.mark.asyncio
async def test_late_result_of_restarted_generation_does_not_leak_into_new_one(monkeypatch) -> None:
    gates = {"Old": asyncio.Event(), "New": asyncio.Event()}
    results = {
        "Old": (QuestionRecord(question="OLD topic?", options=("a", "b", "c", "d"), answer="a"),),
        "New": (QuestionRecord(question="NEW topic?", options=("a", "b", "c", "d"), answer="a"),),
    }

    async def fake_generate(text: str) -> tuple[QuestionRecord, ...]:
        await gates[text].wait()
        return results[text]

    monkeypatch.setattr(generation, "generate_questions", fake_generate)
    store = _started_store()

    old_task = asyncio.create_task(QuizSessionService.generate(store, "s1", text="Old"))
    await asyncio.sleep(0)
    QuizSessionService.restart(store, "s1")
    QuizSessionService.start(store, "s1", name="Ana")
    new_task = asyncio.create_task(QuizSessionService.generate(store, "s1", text="New"))
    await asyncio.sleep(0)

    gates["Old"].set()
    await old_task
    state = store.get("s1")
    assert state.phase is SessionPhase.GENERATING
    assert state.input_text == "New"

    gates["New"].set()
    new_state = await new_task
    assert new_state.phase is SessionPhase.IN_PROGRESS
    assert [question.question for question in new_state.questions] == ["NEW topic?"]
