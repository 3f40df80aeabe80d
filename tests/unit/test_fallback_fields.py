import random

import pytest

from seo_toolbox.fallback.fields import (
    Choice, Const, Derived, Each, FloatRange, Fmt, Hex, IntRange, Items, Maybe, Obj, Share, Switch, Text,
    split_total,
)
from seo_toolbox.fallback.synth import lookup, numeric_bounds, synthesize


@pytest.mark.parametrize("total,parts", [(100, 5), (100, 3), (100, 1), (7, 10), (0, 4)])
def test_split_total_sums_exactly(total, parts):
    """
    WHY: Percentage breakdowns in fallback results must add up to 100 exactly.
    HOW: Split several totals into several parts with seeded randomness.
    EXPECTED: Parts are non-negative integers summing to the total.
    """
    rng = random.Random(3)
    for _ in range(20):
        result = split_total(total, parts, rng)
        assert len(result) == parts
        assert sum(result) == total
        assert all(isinstance(p, int) and p >= 0 for p in result)


def test_split_total_with_no_parts():
    assert split_total(100, 0, random.Random()) == []


def test_ranges_respect_half_open_bounds():
    rng = random.Random(11)
    ints = [IntRange(5, 3).generate({}, rng, {}) for _ in range(200)]
    floats = [FloatRange(0.5, 1.0, 1).generate({}, rng, {}) for _ in range(200)]
    assert set(ints) <= {5, 6, 7}
    assert all(0.5 <= f < 1.5 for f in floats)


def test_invalid_span_is_rejected():
    with pytest.raises(ValueError):
        IntRange(10, 0)
    with pytest.raises(ValueError):
        FloatRange(1.0, 0)


def test_obj_generates_in_declaration_order_for_derived_fields():
    """
    WHY: Derived values (net growth, grades) read siblings generated before them.
    HOW: Declare two ranges and a Derived field that subtracts them.
    EXPECTED: The derived value matches the generated siblings.
    """
    spec = Obj({
        "new": IntRange(100, 50),
        "lost": IntRange(10, 20),
        "net": Derived(lambda parent, ctx: parent["new"] - parent["lost"]),
    })
    out = synthesize(spec, {}, random.Random(1))
    assert out["net"] == out["new"] - out["lost"]


def test_text_and_each_render_from_context():
    spec = Obj({
        "domain": Text("{domain}"),
        "rows": Each("keywords", "kw", Obj({"keyword": Text("{kw} on {domain}")})),
    })
    out = synthesize(spec, {"domain": "example.com", "keywords": ["a", "b"]})
    assert out == {"domain": "example.com", "rows": [{"keyword": "a on example.com"}, {"keyword": "b on example.com"}]}


def test_const_values_are_not_shared_between_results():
    spec = Obj({"tips": Const(["one", "two"])})
    first = synthesize(spec, {})
    first["tips"].append("three")
    assert synthesize(spec, {})["tips"] == ["one", "two"]


def test_switch_maybe_and_fmt():
    spec = Obj({
        "score": Switch("device", {"mobile": IntRange(1, 1), "desktop": IntRange(9, 1)}),
        "never": Maybe(IntRange(1, 5), none_rate=1.0),
        "size": Fmt("{} KB", Const(42)),
        "pick": Choice(["only"]),
    })
    assert synthesize(spec, {"device": "mobile"}) == {"score": 1, "never": None, "size": "42 KB", "pick": "only"}
    assert synthesize(spec, {"device": "desktop"})["score"] == 9


def test_numeric_bounds_merge_and_replace_share_fields():
    """
    WHY: The bounds table is how tests and readers see each field's allowed range.
    HOW: Build list items with overlapping ranges and a share field, then list bounds.
    EXPECTED: Overlapping paths merge to one range; share fields report [0, total].
    """
    spec = Obj({
        "rows": Items(
            Obj({"count": IntRange(10, 10), "pct": IntRange(0, 1)}),
            Obj({"count": IntRange(30, 5), "pct": IntRange(0, 1)}),
            shares={"pct": 100},
        ),
    })
    bounds = {path: (lo, hi) for path, lo, hi in numeric_bounds(spec)}
    assert bounds == {"rows[].count": (10, 35), "rows[].pct": (0, 101)}


def test_lookup_fans_out_over_lists():
    data = {"rows": [{"a": {"b": 1}}, {"a": {"b": 2}}], "top": 3}
    assert lookup(data, "rows[].a.b") == [1, 2]
    assert lookup(data, "top") == [3]
    assert lookup(data, "missing.path") == []


def test_split_total_follows_explicit_weights():
    rng = random.Random(0)
    assert split_total(100, 3, rng, [1, 1, 2]) == [25, 25, 50]
    assert split_total(10, 3, rng, [5, 3, 2]) == [5, 3, 2]
    # Remainders go to the largest fractions
    assert split_total(100, 3, rng, [1, 1, 1]) == [34, 33, 33]
    assert sum(split_total(100, 3, rng, [0, 0, 0])) == 100


def test_share_total_can_come_from_a_sibling_field():
    """
    WHY: Some breakdowns partition a count generated in the same object, not a fixed 100.
    HOW: Generate a total first, then a list whose counts share that total by weight.
    EXPECTED: The counts sum to the generated total and the heaviest item gets the most.
    """
    spec = Obj({
        "total": IntRange(40, 30),
        "parts": Items(
            Obj({"name": Const("a"), "weight": Const(1), "count": Const(0)}),
            Obj({"name": Const("b"), "weight": Const(3), "count": Const(0)}),
            shares={"count": Share("total", by="weight")},
        ),
    })
    for seed in range(10):
        data = synthesize(spec, {}, random.Random(seed))
        counts = [p["count"] for p in data["parts"]]
        assert sum(counts) == data["total"]
        assert counts[1] > counts[0]
    assert ("parts[].count", 0, 71) not in numeric_bounds(spec)


def test_hex_and_choice_values():
    rng = random.Random(5)
    fingerprint = Hex(4).generate({}, rng, {})
    assert len(fingerprint.split(":")) == 4
    assert fingerprint == fingerprint.upper()
    assert len(Hex(8, sep="").generate({}, rng, {})) == 16

    options = [{"tags": ["a"]}]
    picked = Choice(options).generate({}, rng, {})
    picked["tags"].append("b")
    assert options == [{"tags": ["a"]}]
