from .evaluation import EvaluationResult, OverallStatistics, QuestionEvaluation, ScoreBreakdown
from .questions import AnswerEvaluation, AnswerFeedback, AnswerScores, QuestionSet, ResumeAnalysis
from .requests import (
    NO_ANSWER,
    SKIPPED,
    AnswerEvaluationRequest,
    AnswerPrompt,
    EvaluationRequest,
    FeedbackRequest,
    HRTechnicalRequest,
    InterviewQuestionsRequest,
    InterviewSetRequest,
    ResumeAnalysisRequest,
    ResumeAttachment,
    ResumePrompt,
)

__all__ = [
    "NO_ANSWER",
    "SKIPPED",
    "AnswerEvaluation",
    "AnswerEvaluationRequest",
    "AnswerFeedback",
    "AnswerPrompt",
    "AnswerScores",
    "EvaluationRequest",
    "EvaluationResult",
    "FeedbackRequest",
    "HRTechnicalRequest",
    "InterviewQuestionsRequest",
    "InterviewSetRequest",
    "OverallStatistics",
    "QuestionEvaluation",
    "QuestionSet",
    "ResumeAnalysis",
    "ResumeAnalysisRequest",
    "ResumeAttachment",
    "ResumePrompt",
    "ScoreBreakdown",
]
