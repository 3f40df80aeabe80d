"""Generic synthesizer for fallback results.

synthesize() walks a field-spec tree and produces a fully populated result.
It is the floor of the recovery chain and has nothing beneath it.
"""

import random
from typing import Any, Dict, List, Optional

from .fields import Bound, Context, FieldSpec


def synthesize(spec: FieldSpec, context: Context, rng: Optional[random.Random] = None) -> Any:
    """
    Generate one synthetic result.

    Args:
        spec: Root field spec of the tool's fallback table
        context: Subject values available to Text/Each specs (domain, keyword, params...)
        rng: Randomness source; a fresh unseeded Random per call when omitted

    Returns:
        Plain JSON-compatible data shaped like the tool's result model
    """
    rng = rng or random.Random()
    return spec.generate(dict(context), rng, {})


def numeric_bounds(spec: FieldSpec) -> List[Bound]:
    """
    List (path, lo, hi) for every numeric range in a fallback table.
    When several specs share a path (list items, switch cases) their ranges are merged.
    """
    merged: Dict[str, Bound] = {}
    for path, lo, hi in spec.bounds(""):
        if path in merged:
            _, old_lo, old_hi = merged[path]
            lo, hi = min(lo, old_lo), max(hi, old_hi)
        merged[path] = (path, lo, hi)
    return list(merged.values())


def lookup(data: Dict[str, Any], path: str) -> List[Any]:
    """
    Resolve a bounds path such as "top_backlinks[].domain_authority" against data.
    Returns every value found; list segments fan out.
    """
    values: List[Any] = [data]
    for segment in path.split("."):
        is_list = segment.endswith("[]")
        key = segment[:-2] if is_list else segment
        next_values = []
        for value in values:
            if not isinstance(value, dict) or key not in value:
                continue
            child = value[key]
            if is_list:
                next_values.extend(child or [])
            else:
                next_values.append(child)
        values = next_values
    return values
