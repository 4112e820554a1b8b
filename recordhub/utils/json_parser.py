import json
import re
from typing import Any, Optional

from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Greedy: from the first "{" to the last "}" so nested objects stay intact
_JSON_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")


def extract_json_span(text: str) -> str:
    """Return the outermost ``{...}`` span of ``text``, or ``text`` itself.

    Model replies often wrap the payload in prose or markdown fences; only the
    span between the first opening and the last closing brace is kept.
    """
    match = _JSON_OBJECT_SPAN.search(text)
    return match.group(0) if match else text


def parse_json_safely(text: Optional[str]) -> Optional[Any]:
    """Parse JSON from an LLM reply without raising.

    Args:
        text: Raw model output

    Returns:
        The decoded value, or None if nothing parseable was found
    """
    if not text:
        return None

    candidate = extract_json_span(text)
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError) as e:
        LOGGER.warning(f"Failed to parse JSON from model response: {e}")
        return None
