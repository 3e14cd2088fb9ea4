from __future__ import annotations

from typing import Annotated, List

from pydantic import BaseModel, Field, model_validator


class QuestionSet(BaseModel):
    questions: List[str] = Field(min_length=1)
    ideal_answers: List[str]

    @model_validator(mode="after")
    def _check_aligned(self) -> "QuestionSet":
        if len(self.questions) != len(self.ideal_answers):
            raise ValueError("every question needs exactly one ideal answer")
        return self


class AnswerFeedback(BaseModel):
    score: float = Field(ge=0.0, le=100.0)
    strengths: List[str] = Field(default_factory=list)
    areas_to_improve: List[str] = Field(default_factory=list)
    suggestion: str = ""


Percent = Annotated[float, Field(ge=0.0, le=100.0)]


class AnswerScores(BaseModel):
    clarity: Percent
    relevance: Percent
    depth: Percent
    examples: Percent
    overall: Percent


class AnswerEvaluation(BaseModel):
    """Single-answer evaluation with a model answer and 0-100 scores."""

    ideal_answer: str
    evaluation_criteria: List[str] = Field(default_factory=list)
    score_breakdown: AnswerScores
    feedback: str = ""


class ResumeAnalysis(BaseModel):
    skills: List[str] = Field(default_factory=list)
    suggested_role: str = ""
    strengths: List[str] = Field(default_factory=list)
    areas_to_improve: List[str] = Field(default_factory=list)
    suggestions: str = ""
