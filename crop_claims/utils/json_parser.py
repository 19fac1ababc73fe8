import json
import re
from typing import Any, Dict, List, Optional, Union

from crop_claims.utils.logging import get_logger

LOGGER = get_logger(__name__)

_OBJECT_PATTERN = re.compile(r"(\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\})", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    return cleaned.strip()


def parse_json_safely(text: Optional[str]) -> Union[Dict[str, Any], List[Any], None]:
    """Parse JSON from model output, handling common LLM formatting issues.

    Handles:
    - Markdown code blocks (```json ... ```)
    - Leading/trailing whitespace
    - Prose wrapped around a single JSON object

    Args:
        text: The text containing JSON

    Returns:
        Parsed JSON value or None if parsing fails
    """
    if not text:
        return None

    cleaned_text = strip_code_fences(text)

    try:
        return json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        LOGGER.warning(f"Initial JSON parse failed: {e}, attempting repairs...")

        # Parse just until the error position (trailing garbage after a valid object)
        if e.pos > 0:
            try:
                return json.loads(cleaned_text[:e.pos].strip())
            except json.JSONDecodeError:
                pass

        match = _OBJECT_PATTERN.search(cleaned_text)
        if match:
            try:
                return json.loads(match.group(1))
            except json.JSONDecodeError:
                pass

        LOGGER.error(f"Failed to parse JSON: {e}")
        return None
