from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel

from models import (
    AnswerEvaluationRequest,
    EvaluationRequest,
    FeedbackRequest,
    HRTechnicalRequest,
    InterviewQuestionsRequest,
    InterviewSetRequest,
    ResumeAnalysisRequest,
)
from scoring import FallbackScorer
from tools.llm_client import LLMClient
from utils.logging import get_logger
from utils.telemetry import Telemetry
from .evaluator_agent import EvaluatorAgent
from .feedback_agent import FeedbackAgent
from .interviewer_agent import InterviewerAgent
from .resume_agent import ResumeAgent


Handler = Callable[[Any], Awaitable[Any]]


class InvalidRequestType(ValueError):
    def __init__(self, request_type: Any):
        super().__init__("Invalid request type")
        self.request_type = request_type


class OrchestratorAgent:
    """Routes a request body to the agent that serves its `type`."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        scorer: Optional[FallbackScorer] = None,
        telemetry: Optional[Telemetry] = None,
    ):
        self.logger = get_logger("agent.orchestrator")
        self.telemetry = telemetry or Telemetry()
        llm = llm or LLMClient()
        self.evaluator = EvaluatorAgent(llm, scorer=scorer, telemetry=self.telemetry)
        self.interviewer = InterviewerAgent(llm)
        self.feedback = FeedbackAgent(llm)
        self.resume = ResumeAgent(llm)
        self._routes: Dict[str, Tuple[Type[BaseModel], Handler]] = {
            "bulk-evaluation": (EvaluationRequest, self._bulk_evaluation),
            "interview-questions": (InterviewQuestionsRequest, self._interview_questions),
            "generate-hr-technical": (HRTechnicalRequest, self._hr_technical),
            "generate-interview-set": (InterviewSetRequest, self._interview_set),
            "feedback": (FeedbackRequest, self._feedback),
            "evaluation": (AnswerEvaluationRequest, self._evaluation),
            "resume-analysis": (ResumeAnalysisRequest, self._resume_analysis),
        }

    @property
    def request_types(self) -> list[str]:
        return sorted(self._routes)

    async def dispatch(self, payload: Any) -> Any:
        request_type = payload.get("type") if isinstance(payload, dict) else None
        route = self._routes.get(request_type) if isinstance(request_type, str) else None
        if route is None:
            self.logger.warning(f"Rejected request with type={request_type!r}")
            raise InvalidRequestType(request_type)
        model, handler = route
        request = model.model_validate(payload)
        self.telemetry.incr(f"requests:{request_type}")
        self.logger.info(f"Handling request type={request_type}")
        return await handler(request)

    async def _bulk_evaluation(self, request: EvaluationRequest) -> Dict[str, Any]:
        result = await self.evaluator.bulk_evaluate(request)
        return result.model_dump()

    async def _interview_questions(self, request: InterviewQuestionsRequest) -> list[str]:
        return await self.interviewer.interview_questions(request.prompt)

    async def _hr_technical(self, request: HRTechnicalRequest) -> Dict[str, Any]:
        qset = await self.interviewer.question_set("basic_hr_technical", request.question_count)
        return qset.model_dump()

    async def _interview_set(self, request: InterviewSetRequest) -> Dict[str, Any]:
        qset = await self.interviewer.question_set(
            request.interview_type,
            request.question_count,
            job_role=request.job_role,
            resume_text=request.resume_text,
            resume_pdf=request.resume_pdf,
        )
        return qset.model_dump()

    async def _feedback(self, request: FeedbackRequest) -> Dict[str, Any]:
        fb = await self.feedback.feedback(request.prompt.question, request.prompt.answer)
        return fb.model_dump()

    async def _evaluation(self, request: AnswerEvaluationRequest) -> Dict[str, Any]:
        evaluation = await self.feedback.evaluate(request.question, request.answer)
        return evaluation.model_dump()

    async def _resume_analysis(self, request: ResumeAnalysisRequest) -> Dict[str, Any]:
        analysis = await self.resume.analyze(request.prompt.resume)
        return analysis.model_dump()
