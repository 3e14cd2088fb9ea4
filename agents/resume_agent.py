from __future__ import annotations

from typing import Optional

from models import ResumeAnalysis
from parsers import parse_model
from tools.llm_client import InlineDocument, LLMClient
from .base_agent import BaseAgent


RESUME_SYSTEM = "You are a career advisor who reviews resumes for software and business roles."

RESUME_ANALYSIS_PROMPT = (
    "Analyze this resume and provide insights. Extract key skills, suggest a suitable job role "
    "and give constructive feedback.\n"
    "Format the response as a JSON object with these properties:\n"
    '{"skills": ["..."], "suggested_role": "Most suitable job role", "strengths": ["..."], '
    '"areas_to_improve": ["..."], "suggestions": "Overall suggestions for improvement"}'
)


def pdf_document(data: str) -> InlineDocument:
    return InlineDocument(mime_type="application/pdf", data=data, filename="resume.pdf")


class ResumeAgent(BaseAgent):
    def __init__(self, llm: Optional[LLMClient] = None):
        super().__init__("resume", "Analyzes an uploaded resume", llm)

    async def analyze(self, resume_pdf: str) -> ResumeAnalysis:
        """Analyze a resume given as bare base64 PDF data."""
        raw = await self.acomplete(
            RESUME_SYSTEM,
            RESUME_ANALYSIS_PROMPT,
            temperature=0.3,
            max_tokens=1024,
            documents=[pdf_document(resume_pdf)],
        )
        return parse_model(raw, ResumeAnalysis)
