"""Offline scoring used when the model call or its output cannot be trusted.

Scores come from answer length alone. The result is deliberately crude; its
job is to keep the response shape intact, not to judge the answer.
"""
from __future__ import annotations

import random
from typing import List, Optional, Tuple

from models import (
    NO_ANSWER,
    SKIPPED,
    EvaluationRequest,
    EvaluationResult,
    OverallStatistics,
    QuestionEvaluation,
    ScoreBreakdown,
)
from utils.config import FallbackScoringConfig
from .grades import letter_grade


ABSENT = "absent"
SHORT = "short"
SUBSTANTIVE = "substantive"

SENTINELS = frozenset({NO_ANSWER, SKIPPED})

ANSWERED_REMARKS = (
    "Automated evaluation was unavailable, so this score reflects the length and "
    "structure of your answer rather than its content."
)
ANSWERED_TIPS = [
    "Add more specific examples from your own experience.",
    "Use the STAR method (Situation, Task, Action, Result) to structure the answer.",
    "Quantify your impact with concrete metrics where possible.",
]
ABSENT_REMARKS = "No answer was provided for this question."
ABSENT_TIPS = [
    "Always attempt an answer, even a partial one.",
    "If you are unsure, explain how you would approach the problem.",
    "Practice this question type until you can answer it with confidence.",
]

FALLBACK_STRENGTHS = [
    "Completed the interview session",
    "Attempted to engage with the questions",
]
FALLBACK_WEAKNESSES = [
    "Answers need more specific, concrete examples",
    "Responses would benefit from clearer structure",
    "Technical depth should be demonstrated more explicitly",
]
FALLBACK_FEEDBACK = (
    "Your answers were scored with a simplified method because detailed evaluation "
    "was unavailable. Treat these scores as a rough signal: interviewers expect "
    "specific examples, measurable outcomes and a clear structure in every answer."
)
FALLBACK_RECOMMENDATION = (
    "Practice answering with the STAR method, prepare two or three concrete stories "
    "for common questions, and retake the interview for a detailed evaluation."
)


def classify_answer(answer: Optional[str], config: Optional[FallbackScoringConfig] = None) -> str:
    cfg = config or FallbackScoringConfig()
    text = (answer or "").strip()
    if not text or text in SENTINELS:
        return ABSENT
    if len(text) < cfg.short_answer_chars:
        return SHORT
    return SUBSTANTIVE


class FallbackScorer:
    def __init__(self, config: Optional[FallbackScoringConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or FallbackScoringConfig()
        self.rng = rng or random.Random()

    def _score_range(self, bucket: str) -> Tuple[int, int]:
        return {
            ABSENT: self.config.absent_range,
            SHORT: self.config.short_range,
            SUBSTANTIVE: self.config.substantive_range,
        }[bucket]

    def score_answer(self, number: int, user_answer: str, ideal_answer: str) -> QuestionEvaluation:
        bucket = classify_answer(user_answer, self.config)
        present = bucket != ABSENT
        low, high = self._score_range(bucket)
        base = self.rng.randint(low, high)
        jitter = self.rng.uniform(-self.config.jitter, self.config.jitter)
        composite = round(min(10.0, max(0.0, base + jitter)), 2)

        if present:
            breakdown = ScoreBreakdown(
                correctness=base,
                completeness=max(1, base - 1),
                depth=max(1.0, base - 0.5),
                clarity=base,
            )
        else:
            breakdown = ScoreBreakdown(correctness=1, completeness=1, depth=1, clarity=2)

        return QuestionEvaluation(
            question_number=number,
            user_answer=user_answer,
            ideal_answer=ideal_answer,
            score=composite,
            remarks=ANSWERED_REMARKS if present else ABSENT_REMARKS,
            score_breakdown=breakdown,
            improvement_tips=list(ANSWERED_TIPS if present else ABSENT_TIPS),
        )

    def score(self, request: EvaluationRequest) -> EvaluationResult:
        evaluations: List[QuestionEvaluation] = [
            self.score_answer(i + 1, answer, ideal)
            for i, (answer, ideal) in enumerate(zip(request.answers, request.ideal_answers))
        ]
        scores = [e.score for e in evaluations]
        average = round(sum(scores) / len(scores), 1) if scores else 0.0
        return EvaluationResult(
            evaluations=evaluations,
            overall_statistics=OverallStatistics(
                average_score=average,
                total_questions=len(request.questions),
                strengths=list(FALLBACK_STRENGTHS),
                critical_weaknesses=list(FALLBACK_WEAKNESSES),
                overall_grade=letter_grade(average, self.config),
                harsh_but_helpful_feedback=FALLBACK_FEEDBACK,
                recommendation=FALLBACK_RECOMMENDATION,
            ),
        )
