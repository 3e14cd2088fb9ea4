from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from models import EvaluationRequest
from tools.credentials import StaticCredentialProvider


SUBSTANTIVE_ANSWER = (
    "I led a team of 5 engineers to deliver a payment system, reducing latency by 30% through caching."
)


class FakeLLMClient:
    """Stands in for LLMClient; replays canned completions or raises."""

    def __init__(self, responses: Optional[List[str]] = None, error: Optional[Exception] = None, api_key: str = "test-key"):
        self.responses = list(responses or [])
        self.error = error
        self.credentials = StaticCredentialProvider({"gemini": api_key} if api_key else {})
        self.calls: List[Dict[str, Any]] = []

    def require_api_key(self) -> str:
        return self.credentials.get_api_key("gemini")

    async def acomplete(self, system_prompt, messages, temperature=0.2, max_tokens=1024) -> str:
        self.require_api_key()
        self.calls.append(
            {
                "system": system_prompt,
                "content": messages[0].content,
                "documents": list(messages[0].documents),
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def model_evaluation_payload(n: int, score: float = 7.5) -> Dict[str, Any]:
    return {
        "evaluations": [
            {
                "question_number": i + 1,
                "user_answer": f"answer {i + 1}",
                "ideal_answer": f"ideal {i + 1}",
                "score": score,
                "remarks": "Solid answer.",
                "score_breakdown": {"correctness": 8, "completeness": 7, "depth": 7, "clarity": 8},
                "improvement_tips": ["Add metrics"],
            }
            for i in range(n)
        ],
        "overall_statistics": {
            "average_score": score,
            "total_questions": n,
            "strengths": ["Structured answers"],
            "critical_weaknesses": ["Few metrics"],
            "overall_grade": "B+",
            "harsh_but_helpful_feedback": "Good, not great.",
            "recommendation": "Practice quantifying impact.",
        },
    }


def model_evaluation_text(n: int, fence: str = "") -> str:
    body = json.dumps(model_evaluation_payload(n))
    if fence:
        return f"{fence}\n{body}\n```"
    return body


@pytest.fixture
def two_question_request() -> EvaluationRequest:
    return EvaluationRequest(
        questions=["Q1", "Q2"],
        answers=["No answer provided", SUBSTANTIVE_ANSWER],
        ideal_answers=["...", "..."],
    )


@pytest.fixture
def fake_llm():
    def _make(**kwargs) -> FakeLLMClient:
        return FakeLLMClient(**kwargs)
    return _make
