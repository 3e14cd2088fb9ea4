from .resume_parser import pdf_base64_payload, read_text_file, resume_excerpt
from .response_parser import (
    ResponseParseError,
    parse_evaluation_result,
    parse_json,
    parse_model,
    parse_question_list,
    strip_code_fences,
)

__all__ = [
    "ResponseParseError",
    "parse_evaluation_result",
    "parse_json",
    "parse_model",
    "parse_question_list",
    "pdf_base64_payload",
    "read_text_file",
    "resume_excerpt",
    "strip_code_fences",
]
