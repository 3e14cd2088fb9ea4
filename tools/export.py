from __future__ import annotations

import json
from typing import Any

from models import EvaluationResult


def summarize(result: EvaluationResult) -> dict[str, Any]:
    stats = result.overall_statistics
    return {
        "total_questions": stats.total_questions,
        "average_score": stats.average_score,
        "overall_grade": stats.overall_grade,
        "scores": [e.score for e in result.evaluations],
    }


def save_result_json(result: EvaluationResult, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(), f, indent=2)
