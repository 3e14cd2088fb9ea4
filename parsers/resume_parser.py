from __future__ import annotations

import base64
import binascii
import re
from typing import Optional


RESUME_EXCERPT_CHARS = 1000

_PDF_DATA_URL = re.compile(r"^data:application/pdf;base64,", re.IGNORECASE)


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read().strip()


def resume_excerpt(resume_text: Optional[str], limit: int = RESUME_EXCERPT_CHARS) -> str:
    """Collapse blank lines and keep the first `limit` characters."""
    if not resume_text:
        return ""
    lines = [line.rstrip() for line in resume_text.strip().splitlines() if line.strip()]
    return "\n".join(lines)[:limit]


def pdf_base64_payload(value: str) -> str:
    """Return the bare base64 data of an uploaded PDF.

    Accepts a data URL (``data:application/pdf;base64,...``), anything carrying a
    ``base64,`` marker, or plain base64. Raises ``ValueError`` when what remains
    is empty or does not decode.
    """
    data = value.strip()
    if "base64," in data:
        data = data.split("base64,", 1)[1]
    else:
        data = _PDF_DATA_URL.sub("", data)
    data = "".join(data.split())
    if not data:
        raise ValueError("resume must contain base64-encoded PDF data")
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("resume is not valid base64 data") from e
    return data
