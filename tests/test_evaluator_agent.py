import asyncio
import json
import random

import httpx
import pytest

from agents.evaluator_agent import (
    EVALUATION_MAX_TOKENS,
    EVALUATION_TEMPERATURE,
    EvaluatorAgent,
    build_evaluation_prompt,
)
from models import EvaluationRequest
from scoring import FallbackScorer
from tools.credentials import MissingCredentialError, StaticCredentialProvider
from tools.llm_client import LLMClient, LLMError, UpstreamHTTPError
from utils.config import AppConfig
from utils.telemetry import Telemetry

from conftest import model_evaluation_text


def _request(resume_text=None):
    return EvaluationRequest(
        questions=["What is a closure?", "Tell me about a conflict."],
        answers=["A function bundled with its lexical scope.", "Question skipped"],
        ideal_answers=["A closure captures variables from its enclosing scope.", "Use STAR."],
        resume_text=resume_text,
    )


def test_prompt_lists_metrics_questions_and_answers():
    prompt = build_evaluation_prompt(_request())
    for metric in ("Correctness (0-10)", "Completeness (0-10)", "Depth (0-10)", "Clarity (0-10)"):
        assert metric in prompt
    assert "QUESTION 1: What is a closure?" in prompt
    assert "IDEAL ANSWER 1: A closure captures variables from its enclosing scope." in prompt
    assert "USER ANSWER 2: Question skipped" in prompt
    assert '"No answer provided" or "Question skipped", score it 1-3' in prompt
    assert "Return exactly 2 evaluations" in prompt
    assert "CANDIDATE RESUME" not in prompt


def test_prompt_embeds_output_shape():
    prompt = build_evaluation_prompt(_request())
    shape = json.loads(prompt[prompt.index("{"):])
    assert set(shape) == {"evaluations", "overall_statistics"}
    assert set(shape["evaluations"][0]["score_breakdown"]) == {"correctness", "completeness", "depth", "clarity"}
    assert "harsh_but_helpful_feedback" in shape["overall_statistics"]


def test_prompt_includes_truncated_resume():
    resume = "Jane Doe\n\n" + "python " * 400
    prompt = build_evaluation_prompt(_request(resume_text=resume))
    head, _, _ = prompt.partition("Evaluate the candidate's answers")
    assert head.startswith("CANDIDATE RESUME")
    excerpt = head.split("\n", 1)[1].strip()
    assert len(excerpt) <= 1000
    assert excerpt.startswith("Jane Doe\npython")


def test_empty_answer_is_shown_as_no_answer():
    req = EvaluationRequest(questions=["Q"], answers=["  "], ideal_answers=["I"])
    assert "USER ANSWER 1: No answer provided" in build_evaluation_prompt(req)


def test_uses_model_result_when_well_formed(fake_llm):
    llm = fake_llm(responses=[model_evaluation_text(2, "```json")])
    telemetry = Telemetry()
    agent = EvaluatorAgent(llm, telemetry=telemetry)
    result = asyncio.run(agent.bulk_evaluate(_request()))
    assert len(result.evaluations) == 2
    assert result.overall_statistics.harsh_but_helpful_feedback == "Good, not great."
    assert llm.calls[0]["temperature"] == EVALUATION_TEMPERATURE
    assert llm.calls[0]["max_tokens"] == EVALUATION_MAX_TOKENS
    assert telemetry.counters["evaluations_llm"] == 1
    assert telemetry.timings["evaluation_ms"].count == 1


@pytest.mark.parametrize(
    "error",
    [UpstreamHTTPError(503, '{"error": {"message": "overloaded"}}'), LLMError("Unexpected response format")],
)
def test_upstream_failure_switches_to_fallback(fake_llm, error):
    telemetry = Telemetry()
    agent = EvaluatorAgent(fake_llm(error=error), scorer=FallbackScorer(rng=random.Random(1)), telemetry=telemetry)
    result = asyncio.run(agent.bulk_evaluate(_request()))
    assert len(result.evaluations) == 2
    assert result.overall_statistics.total_questions == 2
    assert 0.25 <= result.evaluations[1].score <= 2.75
    assert telemetry.counters["evaluations_fallback"] == 1


@pytest.mark.parametrize(
    "raw",
    ["Sorry, I can't do that.", model_evaluation_text(1), '{"evaluations": []}'],
)
def test_unusable_output_switches_to_fallback(fake_llm, raw):
    agent = EvaluatorAgent(fake_llm(responses=[raw]))
    result = asyncio.run(agent.bulk_evaluate(_request()))
    assert [e.question_number for e in result.evaluations] == [1, 2]
    assert result.evaluations[0].user_answer == "A function bundled with its lexical scope."


def test_missing_key_is_fatal(fake_llm):
    agent = EvaluatorAgent(fake_llm(api_key=""))
    with pytest.raises(MissingCredentialError):
        asyncio.run(agent.bulk_evaluate(_request()))


def test_missing_key_is_fatal_for_empty_requests(fake_llm):
    agent = EvaluatorAgent(fake_llm(api_key=""))
    empty = EvaluationRequest(questions=[], answers=[], ideal_answers=[])
    with pytest.raises(MissingCredentialError):
        asyncio.run(agent.bulk_evaluate(empty))


def test_request_rejects_misaligned_lists():
    with pytest.raises(ValueError, match="same length"):
        EvaluationRequest(questions=["a", "b"], answers=["x"], ideal_answers=["i", "j"])


def test_request_accepts_wire_aliases():
    req = EvaluationRequest.model_validate(
        {"questions": ["q"], "userAnswers": ["a"], "idealAnswers": ["i"], "resumeText": "cv"}
    )
    assert (req.answers, req.ideal_answers, req.resume_text) == (["a"], ["i"], "cv")


@pytest.mark.parametrize("body", [[1, 2], {"candidates": ["oops"]}, {"candidates": [{"content": {"parts": ["x"]}}]}])
def test_malformed_gemini_body_switches_to_fallback(body):
    def handler(request):
        return httpx.Response(200, json=body)

    config = AppConfig(
        gemini_api_key=None,
        openai_api_key=None,
        anthropic_api_key=None,
        model_preference="gemini:gemini-2.0-flash",
        gemini_api_base="https://gemini.test/v1",
        request_timeout_seconds=5.0,
        max_retries=1,
        log_level="INFO",
    )
    llm = LLMClient(
        config=config,
        credentials=StaticCredentialProvider({"gemini": "secret"}),
        transport=httpx.MockTransport(handler),
    )
    telemetry = Telemetry()
    agent = EvaluatorAgent(llm, scorer=FallbackScorer(rng=random.Random(3)), telemetry=telemetry)
    result = asyncio.run(agent.bulk_evaluate(_request()))
    assert [e.question_number for e in result.evaluations] == [1, 2]
    assert telemetry.counters["evaluations_fallback"] == 1


def test_misnumbered_model_output_switches_to_fallback(fake_llm):
    payload = json.loads(model_evaluation_text(2))
    payload["evaluations"].reverse()
    agent = EvaluatorAgent(fake_llm(responses=[json.dumps(payload)]))
    result = asyncio.run(agent.bulk_evaluate(_request()))
    assert [e.question_number for e in result.evaluations] == [1, 2]
    assert result.evaluations[1].user_answer == "Question skipped"
