"""JSON parsing and validation of generation service replies.

The model is asked for a bare JSON object but is known to wrap it in markdown
fences or surround it with commentary. Parsing happens in three steps:
- clean_response_text: trim and drop every fence marker
- find_json_object: decode the first complete JSON object in the text
- parse_commit_result: validate that object into a CommitResult
"""

import json
import logging
import re
from typing import Optional

from pydantic import ValidationError

from .errors import MalformedUpstreamResponse
from .models import CommitResult

logger = logging.getLogger(__name__)

# Opening fences may carry a language tag (```json); closing fences never do.
FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)

EXPECTED_ALTERNATIVES = 3

_decoder = json.JSONDecoder()


def clean_response_text(raw_response: str) -> str:
    """Trim the reply and remove fence markers wherever they occur.

    Examples:
        '```json\\n{"a": 1}\\n```' -> '{"a": 1}'
        'Sure!\\n```\\n{"a": 1}\\n```\\nDone.' -> 'Sure!\\n{"a": 1}\\nDone.'
        '{"a": 1}' -> '{"a": 1}'
    """
    cleaned = raw_response.strip()
    cleaned = FENCE_PATTERN.sub("", cleaned)
    return cleaned.strip()


def find_json_object(text: str) -> Optional[dict]:
    """Return the first JSON object that decodes cleanly from the text.

    Decoding is attempted from each '{' in turn, so braces in prose before the
    object are skipped and anything after the object is ignored. Braces inside
    JSON strings are handled by the decoder.

    Returns:
        The decoded object, or None if no '{' starts a valid JSON object.
    """
    start = text.find("{")
    while start != -1:
        try:
            candidate, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            candidate = None
        if isinstance(candidate, dict):
            return candidate
        start = text.find("{", start + 1)
    return None


def parse_commit_result(raw_response: str) -> CommitResult:
    """Parse the generation service reply into a CommitResult.

    Args:
        raw_response: The raw text returned by the generation service.

    Returns:
        The validated CommitResult. Alternatives are returned as supplied.

    Raises:
        MalformedUpstreamResponse: If no JSON object can be found or it does
            not have the commit result shape.
    """
    cleaned = clean_response_text(raw_response)
    parsed = find_json_object(cleaned)

    if parsed is None:
        logger.error(f"Could not find JSON in response: {raw_response!r}")
        raise MalformedUpstreamResponse("Could not parse response from AI")

    try:
        result = CommitResult.model_validate(parsed)
    except ValidationError as e:
        logger.error(f"Invalid response structure from AI: {e}\nRaw response: {raw_response!r}")
        raise MalformedUpstreamResponse("Invalid response structure from AI") from e

    if not result.alternatives:
        logger.warning("Generated commit result has no alternatives.")
    elif len(result.alternatives) != EXPECTED_ALTERNATIVES:
        logger.warning(
            f"Expected {EXPECTED_ALTERNATIVES} alternatives, got {len(result.alternatives)}."
        )

    return result
