from __future__ import annotations

from pydantic import BaseModel, Field


class StartQuizRequest(BaseModel):
    name: str = Field(max_length=120)


class GenerateQuizRequest(BaseModel):
    text: str = Field(max_length=20_000)


class AnswerRequest(BaseModel):
    option: str = Field(max_length=1_000)


class QuestionView(BaseModel):
    number: int = Field(ge=1)
    text: str
    options: list[str]


class QuizStateResponse(BaseModel):
    phase: str
    name: str
    input_text: str
    current_index: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    score: int = Field(ge=0)
    finished: bool
    question: QuestionView | None = None


class AnswerResponse(QuizStateResponse):
    is_correct: bool
    selected_option: str
    correct_answer: str
