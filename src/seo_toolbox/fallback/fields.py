"""Declarative field specs for synthetic fallback results.

A tool describes the shape of its fallback result as a tree of these specs.
Numeric specs carry their own [lo, hi) bounds so the bounds live in one table
per tool and can be listed with numeric_bounds().
"""

from __future__ import annotations

import copy
import math
import random
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

Context = Dict[str, Any]
Bound = Tuple[str, float, float]


class FieldSpec:
    def generate(self, ctx: Context, rng: random.Random, parent: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def bounds(self, path: str) -> Iterator[Bound]:
        return iter(())


class IntRange(FieldSpec):
    """Integer drawn uniformly from [lo, lo + span)."""

    def __init__(self, lo: int, span: int):
        if span < 1:
            raise ValueError("span must be at least 1")
        self.lo = lo
        self.span = span

    @property
    def hi(self) -> int:
        return self.lo + self.span

    def generate(self, ctx, rng, parent):
        return rng.randrange(self.lo, self.hi)

    def bounds(self, path):
        yield (path, self.lo, self.hi)


class FloatRange(FieldSpec):
    """Float drawn from [lo, lo + span), truncated to `digits` decimals."""

    def __init__(self, lo: float, span: float, digits: int = 2):
        if span <= 0:
            raise ValueError("span must be positive")
        self.lo = lo
        self.span = span
        self.digits = digits

    @property
    def hi(self) -> float:
        return self.lo + self.span

    def generate(self, ctx, rng, parent):
        value = self.lo + rng.random() * self.span
        scale = 10 ** self.digits
        # Truncate rather than round so the upper bound stays exclusive
        return max(self.lo, math.floor(value * scale) / scale)

    def bounds(self, path):
        yield (path, self.lo, self.hi)


class Choice(FieldSpec):
    def __init__(self, options: Sequence[Any]):
        if not options:
            raise ValueError("Choice needs at least one option")
        self.options = list(options)

    def generate(self, ctx, rng, parent):
        return copy.deepcopy(rng.choice(self.options))


class Const(FieldSpec):
    def __init__(self, value: Any):
        self.value = value

    def generate(self, ctx, rng, parent):
        # Results never share mutable state
        return copy.deepcopy(self.value)


class Text(FieldSpec):
    """String rendered with str.format against the subject context, e.g. "{stem} guide"."""

    def __init__(self, template: str):
        self.template = template

    def generate(self, ctx, rng, parent):
        return self.template.format(**ctx)


class Fmt(FieldSpec):
    """String built from a generated value, e.g. Fmt("{}s", FloatRange(0.5, 1.5, 1)) -> "1.2s"."""

    def __init__(self, template: str, spec: FieldSpec):
        self.template = template
        self.spec = spec

    def generate(self, ctx, rng, parent):
        return self.template.format(self.spec.generate(ctx, rng, parent))


class Hex(FieldSpec):
    """Random bytes as uppercase hex, colon-separated like certificate fingerprints."""

    def __init__(self, nbytes: int, sep: str = ":"):
        self.nbytes = nbytes
        self.sep = sep

    def generate(self, ctx, rng, parent):
        return self.sep.join(f"{rng.randrange(256):02X}" for _ in range(self.nbytes))


class Flag(FieldSpec):
    """Boolean that is True with probability `rate`."""

    def __init__(self, rate: float):
        self.rate = rate

    def generate(self, ctx, rng, parent):
        return rng.random() < self.rate


class Derived(FieldSpec):
    """Value computed from sibling fields generated earlier in the same object."""

    def __init__(self, fn: Callable[[Dict[str, Any], Context], Any]):
        self.fn = fn

    def generate(self, ctx, rng, parent):
        return self.fn(parent, ctx)


class Maybe(FieldSpec):
    """Wrapped spec, or None with probability `none_rate`."""

    def __init__(self, spec: FieldSpec, none_rate: float):
        self.spec = spec
        self.none_rate = none_rate

    def generate(self, ctx, rng, parent):
        if rng.random() < self.none_rate:
            return None
        return self.spec.generate(ctx, rng, parent)

    def bounds(self, path):
        return self.spec.bounds(path)


class Switch(FieldSpec):
    """Pick a spec by a context value, e.g. different score ranges per device type."""

    def __init__(self, key: str, cases: Dict[Any, FieldSpec]):
        self.key = key
        self.cases = cases

    def generate(self, ctx, rng, parent):
        return self.cases[ctx[self.key]].generate(ctx, rng, parent)

    def bounds(self, path):
        for spec in self.cases.values():
            yield from spec.bounds(path)


class Obj(FieldSpec):
    """Object whose fields are generated in declaration order."""

    def __init__(self, fields: Dict[str, FieldSpec]):
        self.fields = fields

    def generate(self, ctx, rng, parent):
        out: Dict[str, Any] = {}
        for name, spec in self.fields.items():
            out[name] = spec.generate(ctx, rng, out)
        return out

    def bounds(self, path):
        prefix = f"{path}." if path else ""
        for name, spec in self.fields.items():
            yield from spec.bounds(prefix + name)


class Share:
    """
    An integer total split across the items of a list.
    The total is a number or the name of a field generated earlier in the
    enclosing object. With `by` (a field name or a function of the item) the
    split is proportional to that weight, so the largest item gets the largest share.
    """

    def __init__(self, total: Union[int, str], by: Union[str, Callable[[Dict[str, Any]], float], None] = None):
        self.total = total
        self.by = by

    def resolve(self, parent: Dict[str, Any]) -> int:
        return parent[self.total] if isinstance(self.total, str) else self.total

    def weights(self, items: List[Dict[str, Any]]) -> Optional[List[float]]:
        if self.by is None:
            return None
        if callable(self.by):
            return [self.by(item) for item in items]
        return [item[self.by] for item in items]


class _ListSpec(FieldSpec):
    """
    Shared behaviour for list specs.
    `shares` maps a field name of each item to a Share (or a plain int total);
    after generation those integer fields are rewritten to sum exactly to the total.
    """

    def __init__(self, shares: Optional[Dict[str, Union[int, Share]]] = None):
        self.shares = {
            field: share if isinstance(share, Share) else Share(share)
            for field, share in (shares or {}).items()
        }

    def _item_specs(self, ctx: Context) -> List[Tuple[FieldSpec, Context]]:
        raise NotImplementedError

    def generate(self, ctx, rng, parent):
        items = [spec.generate(item_ctx, rng, {}) for spec, item_ctx in self._item_specs(ctx)]
        for field, share in self.shares.items():
            parts = split_total(share.resolve(parent), len(items), rng, share.weights(items))
            for item, part in zip(items, parts):
                item[field] = part
        return items

    def _share_bounds(self, path: str) -> Iterator[Bound]:
        for field, share in self.shares.items():
            # Totals taken from a sibling field have no static bound
            if not isinstance(share.total, str):
                yield (f"{path}[].{field}", 0, share.total + 1)


class Items(_ListSpec):
    """A fixed list of item specs, one output element per spec."""

    def __init__(self, *specs: FieldSpec, shares: Optional[Dict[str, Union[int, Share]]] = None):
        super().__init__(shares)
        self.specs = specs

    def _item_specs(self, ctx):
        return [(spec, ctx) for spec in self.specs]

    def bounds(self, path):
        for spec in self.specs:
            for bound in spec.bounds(f"{path}[]"):
                if not any(bound[0] == f"{path}[].{field}" for field in self.shares):
                    yield bound
        yield from self._share_bounds(path)


class Each(_ListSpec):
    """
    One item per value of a list in the context, e.g. one ranking per tracked keyword.
    Each item sees the value under `as_name`.
    """

    def __init__(self, key: str, as_name: str, spec: FieldSpec, shares: Optional[Dict[str, Union[int, Share]]] = None):
        super().__init__(shares)
        self.key = key
        self.as_name = as_name
        self.spec = spec

    def _item_specs(self, ctx):
        return [(self.spec, {**ctx, self.as_name: value}) for value in ctx.get(self.key, [])]

    def bounds(self, path):
        yield from self.spec.bounds(f"{path}[]")
        yield from self._share_bounds(path)


def split_total(
    total: int, parts: int, rng: random.Random, weights: Optional[Sequence[float]] = None
) -> List[int]:
    """
    Split an integer total into `parts` non-negative integers that sum to it exactly.
    Weights (random when not given or all zero) are apportioned with the largest-remainder method.
    """
    if parts <= 0:
        return []
    if weights is None or sum(weights) <= 0:
        weights = [rng.random() + 0.1 for _ in range(parts)]
    weight_sum = sum(weights)
    raw = [total * w / weight_sum for w in weights]
    result = [int(math.floor(r)) for r in raw]
    remainder = total - sum(result)
    by_fraction = sorted(range(parts), key=lambda i: raw[i] - result[i], reverse=True)
    for i in by_fraction[:remainder]:
        result[i] += 1
    return result
