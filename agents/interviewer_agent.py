from __future__ import annotations

from typing import List, Optional

from models import QuestionSet
from parsers import parse_model, parse_question_list, resume_excerpt
from tools.llm_client import LLMClient
from .base_agent import BaseAgent
from .resume_agent import pdf_document


INTERVIEWER_SYSTEM = (
    "You are a senior interviewer preparing a mock interview. Questions must be specific, "
    "realistic and answerable in two minutes of speech."
)

ROLE_QUESTION_COUNT = 15

FOCUS = {
    "basic_hr_technical": (
        "Mix common HR and behavioral questions (motivation, teamwork, conflict, strengths) "
        "with general technical questions suitable for most software roles."
    ),
    "role_based": "Focus on the skills, tools and situations specific to the role of {job_role}.",
    "resume_based": (
        "Ask about the projects, technologies and experience listed in the candidate's resume, "
        "probing what the candidate actually did and learned."
    ),
}


def build_role_questions_prompt(job_role: str, count: int = ROLE_QUESTION_COUNT) -> str:
    return (
        f"Generate a list of {count} interview questions for the following job role: {job_role}.\n"
        "The questions should be challenging and cover both technical and soft skills.\n"
        "Format the response as a JSON array of question strings only.\n\n"
        "Example format:\n"
        '["What is your experience with...", "How would you handle...", "Describe a time when..."]'
    )


def build_question_set_prompt(
    interview_type: str,
    count: int,
    job_role: Optional[str] = None,
    resume_text: Optional[str] = None,
    resume_attached: bool = False,
) -> str:
    parts = [
        f"Generate exactly {count} interview questions, each with a concise ideal answer "
        "(3-4 sentences) that a strong candidate would give.",
        FOCUS[interview_type].format(job_role=job_role or "the target role"),
    ]
    excerpt = resume_excerpt(resume_text)
    if excerpt:
        parts.append("CANDIDATE RESUME (excerpt):\n" + excerpt)
    if resume_attached:
        parts.append("The candidate's resume is attached as a PDF.")
    parts.append(
        "Respond ONLY with a JSON object of this shape, with ideal_answers[i] answering questions[i]:\n"
        '{"questions": ["..."], "ideal_answers": ["..."]}'
    )
    return "\n\n".join(parts)


class InterviewerAgent(BaseAgent):
    def __init__(self, llm: Optional[LLMClient] = None):
        super().__init__("interviewer", "Generates interview questions and ideal answers", llm)

    async def interview_questions(self, job_role: str) -> List[str]:
        raw = await self.acomplete(
            INTERVIEWER_SYSTEM, build_role_questions_prompt(job_role), temperature=0.7, max_tokens=2048
        )
        return parse_question_list(raw, limit=ROLE_QUESTION_COUNT)

    async def question_set(
        self,
        interview_type: str,
        count: int,
        job_role: Optional[str] = None,
        resume_text: Optional[str] = None,
        resume_pdf: Optional[str] = None,
    ) -> QuestionSet:
        prompt = build_question_set_prompt(
            interview_type, count, job_role, resume_text, resume_attached=bool(resume_pdf)
        )
        documents = [pdf_document(resume_pdf)] if resume_pdf else None
        raw = await self.acomplete(
            INTERVIEWER_SYSTEM, prompt, temperature=0.7, max_tokens=8192, documents=documents
        )
        qset = parse_model(raw, QuestionSet)
        if len(qset.questions) != count:
            self.logger.info(f"Model returned {len(qset.questions)} questions, requested {count}")
        return QuestionSet(questions=qset.questions[:count], ideal_answers=qset.ideal_answers[:count])
