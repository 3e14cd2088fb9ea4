from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from parsers.resume_parser import pdf_base64_payload


NO_ANSWER = "No answer provided"
SKIPPED = "Question skipped"


class RequestBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class EvaluationRequest(RequestBase):
    """Questions with the candidate's and the ideal answers, index-aligned."""

    type: Literal["bulk-evaluation"] = "bulk-evaluation"
    questions: List[str]
    answers: List[str] = Field(validation_alias=AliasChoices("answers", "userAnswers", "user_answers"))
    ideal_answers: List[str] = Field(validation_alias=AliasChoices("idealAnswers", "ideal_answers"))
    resume_text: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("resumeText", "resume_text")
    )

    @model_validator(mode="after")
    def _check_aligned(self) -> "EvaluationRequest":
        n = len(self.questions)
        if len(self.answers) != n or len(self.ideal_answers) != n:
            raise ValueError(
                f"questions, answers and idealAnswers must have the same length "
                f"(got {n}, {len(self.answers)}, {len(self.ideal_answers)})"
            )
        return self


class InterviewQuestionsRequest(RequestBase):
    type: Literal["interview-questions"] = "interview-questions"
    prompt: str = Field(min_length=1)


class HRTechnicalRequest(RequestBase):
    type: Literal["generate-hr-technical"] = "generate-hr-technical"
    question_count: int = Field(
        default=10, ge=1, le=50, validation_alias=AliasChoices("questionCount", "question_count")
    )


class ResumeAttachment(BaseModel):
    """A resume uploaded as a PDF, base64 or data-URL encoded."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resume_base64: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("resumeBase64", "resume_base64")
    )

    @field_validator("resume_base64")
    @classmethod
    def _normalize(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return pdf_base64_payload(value)


class InterviewSetRequest(RequestBase):
    type: Literal["generate-interview-set"] = "generate-interview-set"
    interview_type: Literal["basic_hr_technical", "role_based", "resume_based"] = Field(
        validation_alias=AliasChoices("interviewType", "interview_type")
    )
    question_count: int = Field(
        default=10, ge=1, le=50, validation_alias=AliasChoices("questionCount", "question_count")
    )
    job_role: Optional[str] = Field(default=None, validation_alias=AliasChoices("jobRole", "job_role"))
    resume_text: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("resumeText", "resume_text")
    )
    prompt: Optional[ResumeAttachment] = None

    @property
    def resume_pdf(self) -> Optional[str]:
        return self.prompt.resume_base64 if self.prompt else None

    @model_validator(mode="after")
    def _check_context(self) -> "InterviewSetRequest":
        if self.interview_type == "role_based" and not (self.job_role or "").strip():
            raise ValueError("jobRole is required for role_based interviews")
        if self.interview_type == "resume_based" and not ((self.resume_text or "").strip() or self.resume_pdf):
            raise ValueError("resumeText or prompt.resumeBase64 is required for resume_based interviews")
        return self


class AnswerPrompt(BaseModel):
    question: str
    answer: str = ""


class FeedbackRequest(RequestBase):
    type: Literal["feedback"] = "feedback"
    prompt: AnswerPrompt


class AnswerEvaluationRequest(RequestBase):
    """One question and answer, sent at the top level or inside ``prompt``."""

    type: Literal["evaluation"] = "evaluation"
    question: str = Field(min_length=1)
    answer: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_prompt(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("prompt"), dict):
            merged = dict(data["prompt"])
            merged.update({k: v for k, v in data.items() if k != "prompt"})
            return merged
        return data


class ResumePrompt(BaseModel):
    resume: str

    @field_validator("resume")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return pdf_base64_payload(value)


class ResumeAnalysisRequest(RequestBase):
    type: Literal["resume-analysis"] = "resume-analysis"
    prompt: ResumePrompt
