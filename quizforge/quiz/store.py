from __future__ import annotations

import secrets
from threading import Lock
from time import monotonic
from typing import Callable

import structlog

from quizforge.quiz.errors import GenerationInProgressError
from quizforge.quiz.session import (
    BeginGeneration,
    GenerationFailed,
    GenerationSucceeded,
    QuizEvent,
    RestartApp,
    UseSample,
    apply_event,
    initial_state,
)
from quizforge.quiz.types import QuizSessionState, SessionPhase

logger = structlog.get_logger(__name__)

SESSION_ID_BYTES = 16
GENERATION_ID_BYTES = 8
DEFAULT_IDLE_TTL_SECONDS = 24 * 60 * 60
PRUNE_INTERVAL_SECONDS = 60.0
_GENERATION_EVENTS = (BeginGeneration, UseSample)
_GENERATION_RESULTS = (GenerationSucceeded, GenerationFailed)


def new_session_id() -> str:
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def new_generation_id() -> str:
    return secrets.token_hex(GENERATION_ID_BYTES)


class QuizSessionStore:
    """Process-local map of browser session id to quiz state.

    States are immutable, so the lock only has to cover the read-transition-write
    of a single reference. Sessions idle for longer than ``idle_ttl_seconds`` are
    evicted, and a restart drops the entry outright.
    """

    def __init__(
        self,
        *,
        idle_ttl_seconds: float = DEFAULT_IDLE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._states: dict[str, QuizSessionState] = {}
        self._touched_at: dict[str, float] = {}
        self._idle_ttl_seconds = idle_ttl_seconds
        self._clock = clock
        self._next_prune_at = 0.0
        self._lock = Lock()

    def _prune(self, *, now: float) -> None:
        if now < self._next_prune_at:
            return
        cutoff = now - self._idle_ttl_seconds
        expired = [key for key, touched_at in self._touched_at.items() if touched_at < cutoff]
        for key in expired:
            self._forget(key)
        if expired:
            logger.info("quiz_sessions_evicted", count=len(expired))
        self._next_prune_at = now + min(PRUNE_INTERVAL_SECONDS, self._idle_ttl_seconds)

    def _forget(self, session_id: str) -> None:
        self._states.pop(session_id, None)
        self._touched_at.pop(session_id, None)

    def _current(self, session_id: str, *, now: float) -> QuizSessionState:
        touched_at = self._touched_at.get(session_id)
        if touched_at is not None and touched_at < now - self._idle_ttl_seconds:
            self._forget(session_id)
        return self._states.get(session_id) or initial_state()

    def _store(self, session_id: str, state: QuizSessionState, *, now: float) -> None:
        self._states[session_id] = state
        self._touched_at[session_id] = now

    def get(self, session_id: str) -> QuizSessionState:
        with self._lock:
            return self._current(session_id, now=self._clock())

    def transition(
        self, session_id: str, event: QuizEvent
    ) -> tuple[QuizSessionState, QuizSessionState]:
        """Applies `event` and returns the (previous, new) state pair."""
        now = self._clock()
        with self._lock:
            self._prune(now=now)
            state = self._current(session_id, now=now)
            if state.phase is SessionPhase.GENERATING and isinstance(event, _GENERATION_EVENTS):
                raise GenerationInProgressError(session_id)
            new_state = apply_event(state, event)
            if isinstance(event, RestartApp):
                self._forget(session_id)
            else:
                self._store(session_id, new_state, now=now)
            return state, new_state

    def apply(self, session_id: str, event: QuizEvent) -> QuizSessionState:
        return self.transition(session_id, event)[1]

    def resolve_generation(
        self, session_id: str, event: GenerationSucceeded | GenerationFailed
    ) -> QuizSessionState:
        """Applies a generation outcome only to the request that started it."""
        if not isinstance(event, _GENERATION_RESULTS):
            raise ValueError(f"Unsupported generation result: {event!r}")
        now = self._clock()
        with self._lock:
            state = self._current(session_id, now=now)
            if (
                state.phase is not SessionPhase.GENERATING
                or state.generation_id != event.generation_id
            ):
                logger.info(
                    "quiz_generation_result_discarded",
                    phase=state.phase.value,
                    outcome=type(event).__name__,
                )
                return state
            new_state = apply_event(state, event)
            self._store(session_id, new_state, now=now)
            return new_state

    def clear(self) -> None:
        with self._lock:
            self._states.clear()
            self._touched_at.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
