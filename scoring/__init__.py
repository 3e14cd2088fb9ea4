from .fallback import ABSENT, SHORT, SUBSTANTIVE, FallbackScorer, classify_answer
from .grades import letter_grade

__all__ = [
    "ABSENT",
    "SHORT",
    "SUBSTANTIVE",
    "FallbackScorer",
    "classify_answer",
    "letter_grade",
]
