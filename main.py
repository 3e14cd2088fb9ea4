import argparse
import asyncio
import json
import random
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from agents.evaluator_agent import EvaluatorAgent
from models import EvaluationRequest, EvaluationResult
from parsers import read_text_file
from scoring import FallbackScorer
from tools.export import save_result_json, summarize
from utils.config import load_config, load_scoring_config
from utils.logging import get_logger, setup_logging

load_dotenv(find_dotenv(), override=False)


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a set of interview answers.")
    parser.add_argument("request", help="JSON file with questions, answers and idealAnswers")
    parser.add_argument("--resume", help="plain-text resume used as context")
    parser.add_argument("--out", default="evaluation_result.json", help="where to write the result JSON")
    parser.add_argument("--fallback-only", action="store_true", help="skip the model and use offline scoring")
    parser.add_argument("--seed", type=int, help="seed for offline scoring")
    return parser


def load_request(path: str, resume_path: Optional[str]) -> EvaluationRequest:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if resume_path:
        data["resumeText"] = read_text_file(resume_path)
    return EvaluationRequest.model_validate(data)


async def run_cli(argv: Optional[List[str]] = None) -> EvaluationResult:
    args = build_parser().parse_args(argv)
    cfg = load_config()
    setup_logging(cfg.log_level)

    request = load_request(args.request, args.resume)
    scorer = FallbackScorer(load_scoring_config(), random.Random(args.seed))
    if args.fallback_only:
        result = scorer.score(request)
    else:
        result = await EvaluatorAgent(scorer=scorer).bulk_evaluate(request)

    save_result_json(result, args.out)
    summary = summarize(result)
    print(f"Average score: {summary['average_score']:.1f}/10 ({summary['overall_grade']}) "
          f"across {summary['total_questions']} questions")
    print(f"Saved evaluation to {args.out}")
    return result


def main() -> None:
    try:
        asyncio.run(run_cli())
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)


if __name__ == "__main__":
    main()
