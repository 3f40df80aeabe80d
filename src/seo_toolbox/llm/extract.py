"""Recover a JSON object embedded in free-form model output.

Models wrap their JSON in prose, markdown fences or both. A single left-to-right
pass keeps a stack of open braces and tracks string/escape state, recording
every brace pair that balances. Braces inside string literals and trailing JSON
blocks do not confuse it, and the cost stays linear in the length of the text.
"""

import json
from itertools import islice
from typing import Any, Dict, Iterator, Optional, Tuple

from ..errors import ExtractionError

# A stray double quote in prose can misalign string state for the rest of a pass.
# A pass that ends inside a string is retried from the next brace, a bounded number of times.
MAX_SCAN_PASSES = 8

# Upper bound on parse attempts per response; deeply nested junk would otherwise cost one json.loads per level
MAX_CANDIDATES = 200


def iter_json_candidates(text: str) -> Iterator[str]:
    """
    Yield every balanced {...} span, ordered by start position.
    Braces that never close yield nothing.
    """
    spans: Dict[int, int] = {}
    start = text.find("{")
    passes = 0
    while start != -1 and passes < MAX_SCAN_PASSES:
        passes += 1
        closed, ended_in_string = _scan(text, start)
        spans.update(closed)
        if not ended_in_string:
            break
        start = text.find("{", start + 1)

    for begin in sorted(spans):
        yield text[begin:spans[begin] + 1]


def _scan(text: str, start: int) -> Tuple[Dict[int, int], bool]:
    """Map each opening brace at or after start to its closing brace; report an unterminated string."""
    closed: Dict[int, int] = {}
    open_braces = []
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            open_braces.append(i)
        elif ch == "}" and open_braces:
            closed[open_braces.pop()] = i
    return closed, in_string


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Return the first embedded JSON object that parses, or None.
    Never raises on malformed input.
    """
    if not text:
        return None
    for candidate in islice(iter_json_candidates(text), MAX_CANDIDATES):
        try:
            value = json.loads(candidate)
        except (ValueError, RecursionError):
            # A prose fragment like "{domain}" can precede the real object
            continue
        if isinstance(value, dict):
            return value
    return None


def extract_json_strict(text: Optional[str]) -> Dict[str, Any]:
    """Like extract_json() but raises ExtractionError when nothing usable is found."""
    value = extract_json(text)
    if value is None:
        raise ExtractionError("No structured data found in the response")
    return value
