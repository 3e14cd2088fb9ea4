from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import os


DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1"


@dataclass
class AppConfig:
    gemini_api_key: Optional[str]
    openai_api_key: Optional[str]
    anthropic_api_key: Optional[str]
    model_preference: str
    gemini_api_base: str
    request_timeout_seconds: Optional[float]
    max_retries: int
    log_level: str


@dataclass(frozen=True)
class FallbackScoringConfig:
    """Tuning constants for the offline scorer.

    None of these are validated business rules; they are kept stable so that
    fallback results stay comparable with earlier reports.
    """

    short_answer_chars: int = 50
    absent_range: Tuple[int, int] = (1, 2)
    short_range: Tuple[int, int] = (3, 5)
    substantive_range: Tuple[int, int] = (5, 8)
    jitter: float = 0.75
    # (minimum average, grade), checked top-down
    grade_bands: Tuple[Tuple[float, str], ...] = (
        (8.0, "A"),
        (7.0, "B+"),
        (6.0, "B"),
        (5.0, "C+"),
        (4.0, "C"),
    )
    lowest_grade: str = "D"


def _optional_timeout(raw: str) -> Optional[float]:
    value = float(raw)
    return value if value > 0 else None


def load_config() -> AppConfig:
    return AppConfig(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
        openai_api_key=(
            os.getenv("OPENAI_API_KEY")
            or os.getenv("OPENAI_KEY")
            or os.getenv("OPEN_API_KEY")
        ),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        model_preference=os.getenv("MODEL_PREFERENCE", "gemini:gemini-2.0-flash"),
        gemini_api_base=os.getenv("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE).rstrip("/"),
        request_timeout_seconds=_optional_timeout(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
        max_retries=max(1, int(os.getenv("MAX_RETRIES", "1"))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def load_scoring_config() -> FallbackScoringConfig:
    defaults = FallbackScoringConfig()
    return FallbackScoringConfig(
        short_answer_chars=int(os.getenv("FALLBACK_SHORT_ANSWER_CHARS", str(defaults.short_answer_chars))),
        jitter=float(os.getenv("FALLBACK_JITTER", str(defaults.jitter))),
    )
