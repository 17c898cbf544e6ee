"""
Robust JSON recovery for LLM completions.

PROBLEM
-------
Models are told to return a single line of raw JSON, but they still wrap it
in markdown fences, break it over several lines or append a friendly remark:

    ```json
    {"score": 72, "label": "Startup-Ready"}
    ```
    Hope this helps!

SOLUTION
--------
1. Drop every ``` fence marker (with or without a language tag).
2. Collapse whitespace runs to single spaces.
3. Parse. If that fails, parse the greedy first-'{' to last-'}' slice.

No key or type validation happens here; a parseable but odd payload is
returned as-is.
"""
import json
import re
from typing import Any, Dict

from .errors import ParseError


_FENCE_RE = re.compile(r"```[a-zA-Z0-9_-]*")
_WHITESPACE_RE = re.compile(r"\s+")
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers anywhere in the text."""
    return _FENCE_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse all whitespace (newlines included) into single spaces."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _loads_object(text: str) -> Dict[str, Any]:
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected JSON object, got {type(parsed).__name__}")
    return parsed


def sanitize(raw_text: str) -> Dict[str, Any]:
    """
    Turn a raw completion into a parsed JSON object.

    Args:
        raw_text: Text content returned by the model

    Returns:
        The parsed JSON object

    Raises:
        ParseError: If no JSON object can be recovered; the error keeps
            the untouched raw_text for diagnostics

    Examples:
        >>> sanitize('```json\\n{"a":1}\\n```')
        {'a': 1}
        >>> sanitize('Sure! Here it is: {"a": 1} Good luck!')
        {'a': 1}
    """
    if not raw_text or not isinstance(raw_text, str):
        raise ParseError("Empty or non-text response from model", raw_text=raw_text)

    cleaned = collapse_whitespace(strip_code_fences(raw_text))

    try:
        return _loads_object(cleaned)
    except ValueError:
        pass

    match = _OBJECT_RE.search(cleaned)
    if match:
        try:
            return _loads_object(collapse_whitespace(match.group(0)))
        except ValueError as e:
            raise ParseError(f"Invalid JSON from model: {e}", raw_text=raw_text) from e

    raise ParseError("Invalid JSON from model: no JSON object found", raw_text=raw_text)
