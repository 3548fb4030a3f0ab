from __future__ import annotations

from typing import NoReturn

import structlog
from fastapi import APIRouter, HTTPException, Request, Response

from quizforge.core.config import get_settings
from quizforge.quiz.errors import (
    GenerationInProgressError,
    InvalidAnswerOptionError,
    InvalidTransitionError,
    QuizFormatError,
    QuizServiceError,
    QuizValidationError,
)
from quizforge.quiz.service import QuizSessionService
from quizforge.quiz.session import current_question
from quizforge.quiz.store import QuizSessionStore, new_session_id
from quizforge.quiz.types import QuizSessionState

from .quiz_models import (
    AnswerRequest,
    AnswerResponse,
    GenerateQuizRequest,
    QuestionView,
    QuizStateResponse,
    StartQuizRequest,
)

router = APIRouter(prefix="/api/quiz", tags=["quiz"])
logger = structlog.get_logger(__name__)

SESSION_COOKIE = "quizforge_session"
SESSION_COOKIE_MAX_AGE_SECONDS = 24 * 60 * 60
QUIZ_STORE = QuizSessionStore(idle_ttl_seconds=SESSION_COOKIE_MAX_AGE_SECONDS)


def _session_id(request: Request, response: Response) -> str:
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        return session_id

    session_id = new_session_id()
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=get_settings().session_cookie_secure,
    )
    return session_id


def _state_fields(state: QuizSessionState) -> dict[str, object]:
    question = current_question(state)
    return {
        "phase": state.phase.value,
        "name": state.name,
        "input_text": state.input_text,
        "current_index": state.current_index,
        "total_questions": state.total_questions,
        "score": state.score,
        "finished": state.finished,
        "question": (
            QuestionView(
                number=state.current_index + 1,
                text=question.question,
                options=list(question.options),
            )
            if question is not None
            else None
        ),
    }


def _as_response(state: QuizSessionState) -> QuizStateResponse:
    return QuizStateResponse(**_state_fields(state))


def _raise_transition_error(exc: Exception) -> NoReturn:
    if isinstance(exc, QuizValidationError):
        raise HTTPException(
            status_code=422,
            detail={"code": "E_VALIDATION", "message": str(exc)},
        ) from exc
    if isinstance(exc, GenerationInProgressError):
        raise HTTPException(status_code=409, detail={"code": "E_GENERATION_IN_PROGRESS"}) from exc
    if isinstance(exc, InvalidTransitionError):
        raise HTTPException(status_code=409, detail={"code": "E_INVALID_STATE"}) from exc
    if isinstance(exc, InvalidAnswerOptionError):
        raise HTTPException(status_code=422, detail={"code": "E_INVALID_OPTION"}) from exc
    raise exc


@router.get("")
async def get_state(request: Request, response: Response) -> QuizStateResponse:
    session_id = _session_id(request, response)
    return _as_response(QUIZ_STORE.get(session_id))


@router.post("/start")
async def start_quiz(
    payload: StartQuizRequest, request: Request, response: Response
) -> QuizStateResponse:
    session_id = _session_id(request, response)
    try:
        state = QuizSessionService.start(QUIZ_STORE, session_id, name=payload.name)
    except (QuizValidationError, InvalidTransitionError) as exc:
        _raise_transition_error(exc)
    return _as_response(state)


@router.post("/generate")
async def generate_quiz(
    payload: GenerateQuizRequest, request: Request, response: Response
) -> QuizStateResponse:
    session_id = _session_id(request, response)
    try:
        state = await QuizSessionService.generate(QUIZ_STORE, session_id, text=payload.text)
    except QuizServiceError as exc:
        raise HTTPException(
            status_code=502,
            detail={
                "code": "E_SERVICE",
                "status": exc.status_code,
                "body": exc.body,
                "message": f"Failed to generate quiz: {exc}",
            },
        ) from exc
    except QuizFormatError as exc:
        raise HTTPException(
            status_code=502,
            detail={"code": "E_FORMAT", "message": f"Failed to generate quiz: {exc}"},
        ) from exc
    except (QuizValidationError, GenerationInProgressError, InvalidTransitionError) as exc:
        _raise_transition_error(exc)
    return _as_response(state)


@router.post("/sample")
async def use_sample_quiz(request: Request, response: Response) -> QuizStateResponse:
    session_id = _session_id(request, response)
    try:
        state = QuizSessionService.use_sample(QUIZ_STORE, session_id)
    except (GenerationInProgressError, InvalidTransitionError) as exc:
        _raise_transition_error(exc)
    return _as_response(state)


@router.post("/answer")
async def answer_question(
    payload: AnswerRequest, request: Request, response: Response
) -> AnswerResponse:
    session_id = _session_id(request, response)
    try:
        result = QuizSessionService.answer(QUIZ_STORE, session_id, option=payload.option)
    except (InvalidAnswerOptionError, InvalidTransitionError) as exc:
        _raise_transition_error(exc)
    return AnswerResponse(
        **_state_fields(result.state),
        is_correct=result.is_correct,
        selected_option=result.selected_option,
        correct_answer=result.correct_answer,
    )


@router.post("/new")
async def make_new_quiz(request: Request, response: Response) -> QuizStateResponse:
    session_id = _session_id(request, response)
    try:
        state = QuizSessionService.new_quiz(QUIZ_STORE, session_id)
    except InvalidTransitionError as exc:
        _raise_transition_error(exc)
    return _as_response(state)


@router.post("/restart")
async def restart_app(request: Request, response: Response) -> QuizStateResponse:
    session_id = _session_id(request, response)
    state = QuizSessionService.restart(QUIZ_STORE, session_id)
    logger.info("quiz_session_restarted")
    return _as_response(state)
