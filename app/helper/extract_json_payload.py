"""
Description:
Extract structured payloads from free-form replies of the generation endpoint.

The endpoint is asked for JSON but frequently wraps it in commentary, markdown code
fences or reasoning blocks. This module locates the first balanced JSON array or
object in the reply, decodes it, and validates it against the shape each endpoint
expects. For question lists only, replies without a usable JSON array fall back to
line splitting.

Arguments:
- text: The raw text reply from the generation endpoint.

Returns:
- A list of question strings, or an InterviewFeedbackResponse.

Raises:
- ParseError: When no structured payload can be recovered (raw text attached).
- PayloadShapeError: When a payload was recovered but has the wrong shape.

Dependencies:
- json: For decoding the extracted payload.
- pydantic: For validating the feedback structure.
- app.constants.regex_patterns: For cleanup and line-splitting patterns.
- loguru: For logging parse failures.
"""
import json
from typing import Any, List, Optional
from pydantic import ValidationError as PydanticValidationError
from loguru import logger
from app.constants.regex_patterns import REGEX_PATTERNS
from app.errors.exceptions import ParseError, PayloadShapeError
from app.schemas.generation_schemas.interview_feedback import InterviewFeedbackResponse

_CLOSERS = {"[": "]", "{": "}"}
_FEEDBACK_TEXT_FIELDS = ("question", "answer", "betterAnswer", "feedback")

def strip_reasoning(text: str) -> str:
    """Remove <think> reasoning blocks and stray think tags."""
    text = REGEX_PATTERNS['think_block'].sub('', text)
    return REGEX_PATTERNS['think_tag'].sub('', text)

def find_balanced(text: str, start: int) -> Optional[str]:
    """
    Return the balanced bracket substring opening at text[start], or None.

    Brackets inside JSON string literals are ignored, as are escaped quotes.

    Example:
        >>> find_balanced('x ["a]", ["b"]] y', 2)
        '["a]", ["b"]]'
    """
    stack = []
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in ']}':
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return text[start:index + 1]
    return None

def extract_json_payload(text: str, opener: str) -> Any:
    """
    Decode the first balanced JSON value that starts with `opener`.

    Each occurrence of the opener is tried in order; the first candidate that is
    both balanced and valid JSON wins.

    Args:
        text (str): Text that may contain a JSON value.
        opener (str): "[" for arrays, "{" for objects.

    Returns:
        The decoded value, or None when no candidate decodes.
    """
    if opener not in _CLOSERS:
        raise ValueError(f"Unsupported opener: {opener!r}")
    position = text.find(opener)
    while position != -1:
        candidate = find_balanced(text, position)
        if candidate is not None:
            try:
                return json.loads(candidate)
            except json.JSONDecodeError:
                pass
        position = text.find(opener, position + 1)
    return None

def split_question_lines(text: str) -> List[str]:
    """
    Recover questions from a plain-text reply.

    Numbering and bullet prefixes are stripped and blank lines dropped. When any
    line carried a list marker or reads as a question, only those lines are kept,
    so preambles such as "Here are your questions:" are skipped. Otherwise every
    line not ending in ":" is kept, provided there are at least two of them; a
    single unmarked line is treated as unparseable prose.
    """
    questions = []
    plain_lines = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or REGEX_PATTERNS['code_fence'].match(line):
            continue
        emphasis = REGEX_PATTERNS['emphasis'].match(line)
        if emphasis:
            line = emphasis.group(2).strip()
        stripped = REGEX_PATTERNS['numbered_prefix'].sub('', line, count=1)
        if stripped == line:
            stripped = REGEX_PATTERNS['bullet_prefix'].sub('', line, count=1)
        has_marker = stripped != line
        stripped = stripped.strip().strip('"').strip()
        if not stripped:
            continue
        if has_marker or stripped.endswith('?'):
            questions.append(stripped)
        elif not stripped.endswith(':'):
            plain_lines.append(stripped)
    if questions:
        return questions
    return plain_lines if len(plain_lines) > 1 else []

def _preview(text: str, limit: int = 200) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."

def _validate_question_list(payload: Any, raw_text: str) -> List[str]:
    if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
        raise PayloadShapeError("Gemini response did not contain a list of questions", raw_text=raw_text)
    questions = [item.strip() for item in payload if item.strip()]
    if not questions:
        raise PayloadShapeError("No questions generated", raw_text=raw_text)
    return questions

def parse_question_list(text: str) -> List[str]:
    """
    Parse a question list from a generation reply.

    Example:
        >>> parse_question_list('Here you go: ["Q1", "Q2"]')
        ['Q1', 'Q2']
    """
    cleaned = strip_reasoning(text or "")
    payload = extract_json_payload(cleaned, "[")
    if payload is not None:
        return _validate_question_list(payload, text)

    logger.warning("No JSON array in question reply, falling back to line splitting")
    questions = split_question_lines(cleaned)
    if not questions:
        logger.error(f"Could not recover questions from reply: {_preview(text or '')}")
        raise ParseError("Failed to parse questions from Gemini response", raw_text=text)
    return questions

def _normalize_feedback_entries(entries: List[Any]) -> List[Any]:
    normalized = []
    for entry in entries:
        if isinstance(entry, dict):
            entry = {key: ("" if key in _FEEDBACK_TEXT_FIELDS and value is None else value)
                     for key, value in entry.items()}
        normalized.append(entry)
    return normalized

def parse_feedback(text: str) -> InterviewFeedbackResponse:
    """
    Parse a scored feedback object from a generation reply.

    Raises:
        ParseError: When the reply holds no JSON object.
        PayloadShapeError: When overallScore is not numeric, questionFeedback is
            not a list, or the entries fail validation.
    """
    cleaned = strip_reasoning(text or "")
    payload = extract_json_payload(cleaned, "{")
    if payload is None:
        logger.error(f"No JSON object in feedback reply: {_preview(text or '')}")
        raise ParseError("Failed to parse feedback from Gemini response", raw_text=text)

    score = payload.get("overallScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise PayloadShapeError("Gemini feedback is missing a numeric overallScore", raw_text=text)
    entries = payload.get("questionFeedback")
    if not isinstance(entries, list):
        raise PayloadShapeError("Gemini feedback is missing the questionFeedback list", raw_text=text)

    payload = {**payload, "questionFeedback": _normalize_feedback_entries(entries)}
    if payload.get("overallFeedback") is None:
        payload["overallFeedback"] = ""
    try:
        return InterviewFeedbackResponse.model_validate(payload)
    except PydanticValidationError as e:
        logger.error(f"Feedback payload failed validation: {e}")
        raise PayloadShapeError("Gemini feedback did not match the expected structure", raw_text=text) from e
