from __future__ import annotations

from typing import Optional

from utils.config import FallbackScoringConfig


def letter_grade(average_score: float, config: Optional[FallbackScoringConfig] = None) -> str:
    cfg = config or FallbackScoringConfig()
    for minimum, grade in cfg.grade_bands:
        if average_score >= minimum:
            return grade
    return cfg.lowest_grade
