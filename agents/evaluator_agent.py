from __future__ import annotations

import json
from typing import Optional

from models import NO_ANSWER, SKIPPED, EvaluationRequest, EvaluationResult
from parsers import ResponseParseError, parse_evaluation_result, resume_excerpt
from scoring import FallbackScorer
from tools.llm_client import LLMClient, LLMError
from utils.config import load_scoring_config
from utils.telemetry import Telemetry
from .base_agent import BaseAgent


EVALUATOR_SYSTEM = (
    "You are a strict, experienced interviewer grading a full mock interview. "
    "Respond with a single JSON object and nothing else."
)

EVALUATION_TEMPERATURE = 0.3
EVALUATION_MAX_TOKENS = 8192

METRICS = (
    "1. Correctness (0-10): is the answer factually and technically right? "
    "0 = wrong or irrelevant, 10 = fully correct.\n"
    "2. Completeness (0-10): does it cover the key points of the ideal answer? "
    "0 = covers nothing, 10 = covers everything important.\n"
    "3. Depth (0-10): does it show real understanding, examples and tradeoffs? "
    "0 = superficial, 10 = expert-level insight.\n"
    "4. Clarity (0-10): is it well structured and easy to follow? "
    "0 = incoherent, 10 = crisp and well organized."
)

OUTPUT_SHAPE = {
    "evaluations": [
        {
            "question_number": 1,
            "user_answer": "<the candidate's answer, verbatim>",
            "ideal_answer": "<the ideal answer, verbatim>",
            "score": 0.0,
            "remarks": "<2-3 sentences of direct feedback>",
            "score_breakdown": {"correctness": 0, "completeness": 0, "depth": 0, "clarity": 0},
            "improvement_tips": ["<specific tip>", "<specific tip>"],
        }
    ],
    "overall_statistics": {
        "average_score": 0.0,
        "total_questions": 0,
        "strengths": ["<strength>"],
        "critical_weaknesses": ["<weakness>"],
        "overall_grade": "<A, B+, B, C+, C or D>",
        "harsh_but_helpful_feedback": "<honest paragraph>",
        "recommendation": "<what to practice next>",
    },
}


def build_evaluation_prompt(request: EvaluationRequest) -> str:
    sections = []
    excerpt = resume_excerpt(request.resume_text)
    if excerpt:
        sections.append(
            "CANDIDATE RESUME (excerpt, for context only; do not score the resume):\n" + excerpt
        )

    sections.append(
        f"Evaluate the candidate's answers to the following {len(request.questions)} interview questions. "
        "Score every answer on these four metrics:\n" + METRICS
    )

    items = []
    for i, (question, ideal, answer) in enumerate(
        zip(request.questions, request.ideal_answers, request.answers), start=1
    ):
        items.append(
            f"QUESTION {i}: {question}\n"
            f"IDEAL ANSWER {i}: {ideal}\n"
            f"USER ANSWER {i}: {answer if answer.strip() else NO_ANSWER}"
        )
    sections.append("\n\n".join(items))

    sections.append(
        "RULES:\n"
        "- The composite score of each question is a number from 0 to 10 that reflects the four metrics.\n"
        f'- If the user answer is "{NO_ANSWER}" or "{SKIPPED}", score it 1-3 on every metric and say so in the remarks.\n'
        "- Copy each user answer and ideal answer verbatim into the result.\n"
        f"- Return exactly {len(request.questions)} evaluations, numbered from 1, in the order given.\n"
        "- average_score is the mean of the composite scores; overall_grade uses "
        "A (>=8), B+ (>=7), B (>=6), C+ (>=5), C (>=4), otherwise D.\n"
        "- Be harsh but helpful; do not inflate scores."
    )

    sections.append(
        "Respond ONLY with JSON in exactly this shape, with no markdown and no extra text:\n"
        + json.dumps(OUTPUT_SHAPE, indent=2)
    )
    return "\n\n".join(sections)


class EvaluatorAgent(BaseAgent):
    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        scorer: Optional[FallbackScorer] = None,
        telemetry: Optional[Telemetry] = None,
    ):
        super().__init__("evaluator", "Scores a full set of interview answers", llm)
        self.scorer = scorer or FallbackScorer(load_scoring_config())
        self.telemetry = telemetry or Telemetry()

    async def bulk_evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        if not request.questions:
            self.llm.require_api_key()
            return self.scorer.score(request)

        prompt = build_evaluation_prompt(request)
        try:
            with self.telemetry.timer("evaluation_ms"):
                raw = await self.acomplete(
                    EVALUATOR_SYSTEM,
                    prompt,
                    temperature=EVALUATION_TEMPERATURE,
                    max_tokens=EVALUATION_MAX_TOKENS,
                )
            result = parse_evaluation_result(raw, expected_count=len(request.questions))
        except (LLMError, ResponseParseError) as e:
            self.logger.warning(f"Using evaluator fallback for {len(request.questions)} questions: {e}")
            self.telemetry.incr("evaluations_fallback")
            return self.scorer.score(request)

        self.telemetry.incr("evaluations_llm")
        self.logger.info(
            f"Evaluated {len(result.evaluations)} answers, "
            f"average {result.overall_statistics.average_score} ({result.overall_statistics.overall_grade})"
        )
        return result
