from __future__ import annotations

from typing import Annotated, List

from pydantic import BaseModel, Field


Score = Annotated[float, Field(ge=0.0, le=10.0)]


class ScoreBreakdown(BaseModel):
    correctness: Score
    completeness: Score
    depth: Score
    clarity: Score


class QuestionEvaluation(BaseModel):
    question_number: int = Field(ge=1)
    user_answer: str = ""
    ideal_answer: str = ""
    score: Score
    remarks: str = ""
    score_breakdown: ScoreBreakdown
    improvement_tips: List[str] = Field(default_factory=list)


class OverallStatistics(BaseModel):
    average_score: Score
    total_questions: int = Field(ge=0)
    strengths: List[str] = Field(default_factory=list)
    critical_weaknesses: List[str] = Field(default_factory=list)
    overall_grade: str
    harsh_but_helpful_feedback: str = ""
    recommendation: str = ""


class EvaluationResult(BaseModel):
    evaluations: List[QuestionEvaluation]
    overall_statistics: OverallStatistics
