from __future__ import annotations

import json
import re
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from models import EvaluationResult


T = TypeVar("T", bound=BaseModel)

_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?```\s*$")
_NUMBERED = re.compile(r"^\d+[.)]\s*")


class ResponseParseError(ValueError):
    """Model output did not match the expected JSON shape."""


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    cleaned = (text or "").strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json(text: str) -> Any:
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ResponseParseError("empty model response")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"model response is not valid JSON: {e}") from e


def parse_model(text: str, model: Type[T]) -> T:
    data = parse_json(text)
    if not isinstance(data, dict):
        raise ResponseParseError(f"expected a JSON object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"model response failed validation: {e}") from e


def parse_evaluation_result(text: str, expected_count: Optional[int] = None) -> EvaluationResult:
    data = parse_json(text)
    if not isinstance(data, dict):
        raise ResponseParseError("expected a JSON object with evaluations and overall_statistics")
    missing = [k for k in ("evaluations", "overall_statistics") if k not in data]
    if missing:
        raise ResponseParseError(f"missing required fields: {', '.join(missing)}")
    try:
        result = EvaluationResult.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"evaluation failed validation: {e}") from e
    if expected_count is not None and len(result.evaluations) != expected_count:
        raise ResponseParseError(
            f"expected {expected_count} evaluations, got {len(result.evaluations)}"
        )
    n = len(result.evaluations)
    if result.overall_statistics.total_questions != n:
        raise ResponseParseError(
            f"total_questions is {result.overall_statistics.total_questions} for {n} evaluations"
        )
    numbers = [e.question_number for e in result.evaluations]
    if numbers != list(range(1, n + 1)):
        raise ResponseParseError(f"question numbers must run 1..{n} in order, got {numbers}")
    return result


def parse_question_list(text: str, limit: int = 15) -> List[str]:
    """Read a JSON array of questions, or salvage numbered/question lines from prose."""
    try:
        data = parse_json(text)
    except ResponseParseError:
        data = None
    if isinstance(data, list) and all(isinstance(q, str) for q in data):
        questions = [q.strip() for q in data if q.strip()]
    else:
        questions = []
        for line in (text or "").splitlines():
            line = line.strip()
            if line and (_NUMBERED.match(line) or "?" in line):
                questions.append(_NUMBERED.sub("", line).strip())
    questions = questions[:limit]
    if not questions:
        raise ResponseParseError("no questions found in model response")
    return questions
