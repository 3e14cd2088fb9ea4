from __future__ import annotations

from typing import Optional

from models import NO_ANSWER, SKIPPED, AnswerEvaluation, AnswerFeedback
from parsers import parse_model
from tools.llm_client import LLMClient
from .base_agent import BaseAgent


FEEDBACK_SYSTEM = (
    "You are a helpful interview coach. Give specific, honest feedback on a single answer."
)

NO_ANSWER_TEXT = "No answer was provided for this question"


def _answer_or_placeholder(answer: Optional[str]) -> str:
    if not answer or not answer.strip() or answer.strip() in {NO_ANSWER, SKIPPED}:
        return NO_ANSWER_TEXT
    return answer


def build_feedback_prompt(question: str, answer: Optional[str]) -> str:
    return (
        f"Question: {question}\n\nAnswer: {_answer_or_placeholder(answer)}\n\n"
        "Provide detailed feedback on this interview answer. Evaluate the quality, clarity and "
        "completeness of the response and suggest improvements.\n"
        "Format the response as a JSON object with these properties: "
        '"score" (0-100), "strengths" (array of strings), "areas_to_improve" (array of strings), '
        '"suggestion" (string).'
    )


def build_answer_evaluation_prompt(question: str, answer: Optional[str]) -> str:
    return (
        f"Question: {question}\n\nUser's Answer: {_answer_or_placeholder(answer)}\n\n"
        "Provide a comprehensive evaluation including:\n"
        "1. An ideal answer for this question, 3-4 sentences at most\n"
        "2. Evaluation criteria for what makes a good answer\n"
        "3. Score breakdown (clarity, relevance, depth, examples, overall - each out of 100)\n"
        "4. Detailed feedback on the user's answer, or a note that no answer was provided\n\n"
        "Format the response as a JSON object with these properties:\n"
        '{"ideal_answer": "...", "evaluation_criteria": ["..."], '
        '"score_breakdown": {"clarity": 0, "relevance": 0, "depth": 0, "examples": 0, "overall": 0}, '
        '"feedback": "..."}'
    )


class FeedbackAgent(BaseAgent):
    def __init__(self, llm: Optional[LLMClient] = None):
        super().__init__("feedback", "Gives feedback on one answer", llm)

    async def feedback(self, question: str, answer: Optional[str]) -> AnswerFeedback:
        raw = await self.acomplete(
            FEEDBACK_SYSTEM, build_feedback_prompt(question, answer), temperature=0.3, max_tokens=1024
        )
        return parse_model(raw, AnswerFeedback)

    async def evaluate(self, question: str, answer: Optional[str]) -> AnswerEvaluation:
        """Score one answer 0-100 and produce a model answer for it."""
        raw = await self.acomplete(
            FEEDBACK_SYSTEM, build_answer_evaluation_prompt(question, answer), temperature=0.3, max_tokens=1024
        )
        return parse_model(raw, AnswerEvaluation)
