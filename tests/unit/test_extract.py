import time

from seo_toolbox.errors import ExtractionError
from seo_toolbox.llm.extract import extract_json, extract_json_strict, iter_json_candidates
import pytest


def test_extract_json_from_prose_wrapper():
    """
    WHY: Models routinely wrap their JSON in an introduction and a sign-off.
    HOW: Feed text with prose before and after one JSON object.
    EXPECTED: The embedded object is returned as a dict.
    """
    text = 'Sure! Here is the analysis:\n{"domain": "example.com", "total_backlinks": 12345}\nHope this helps.'
    assert extract_json(text) == {"domain": "example.com", "total_backlinks": 12345}


def test_extract_json_from_markdown_fence():
    text = '```json\n{"keywords": [{"url": "a.com"}]}\n```'
    assert extract_json(text) == {"keywords": [{"url": "a.com"}]}


def test_braces_inside_strings_do_not_break_nesting():
    """
    WHY: Anchor texts and descriptions may contain literal braces or escaped quotes.
    HOW: Put "}" and an escaped quote inside string values of the object.
    EXPECTED: The whole object parses, with the string values intact.
    """
    text = 'Result: {"anchor_text": "click } here", "note": "say \\"hi\\" {", "n": 1} done'
    assert extract_json(text) == {"anchor_text": "click } here", "note": 'say "hi" {', "n": 1}


def test_prose_fragment_before_real_object_is_skipped():
    """
    WHY: A model may echo a placeholder like "{domain}" in its prose before the JSON.
    HOW: Text starts with "{domain}" and then contains the real object.
    EXPECTED: The invalid fragment is skipped and the real object is returned.
    """
    text = 'I analyzed {domain} for you: {"domain": "example.com"}'
    assert extract_json(text) == {"domain": "example.com"}


def test_first_of_multiple_objects_wins():
    text = 'First {"a": 1} and then {"b": 2}'
    assert extract_json(text) == {"a": 1}


def test_nested_object_is_returned_whole():
    text = 'x {"outer": {"inner": {"deep": [1, 2, {"k": "v"}]}}} y'
    assert extract_json(text) == {"outer": {"inner": {"deep": [1, 2, {"k": "v"}]}}}


@pytest.mark.parametrize("text", [
    None,
    "",
    "No structured data here at all.",
    '{"unterminated": "object"',
    "{not json}",
])
def test_no_json_returns_none(text):
    """
    WHY: Extraction failure must be a value, not an exception, so the pipeline can fall back.
    HOW: Feed empty input, plain prose, an unclosed object and a brace pair that is not JSON.
    EXPECTED: extract_json returns None and does not raise.
    """
    assert extract_json(text) is None


def test_strict_extraction_raises():
    with pytest.raises(ExtractionError):
        extract_json_strict("The model refused to answer.")


def test_candidates_are_ordered_by_start_position():
    text = '{"a": {"b": 1}} tail {"c": 2}'
    candidates = list(iter_json_candidates(text))
    assert candidates[0] == '{"a": {"b": 1}}'
    assert candidates[1] == '{"b": 1}'
    assert candidates[-1] == '{"c": 2}'


@pytest.mark.parametrize("text,expected", [
    ("{" * 50000 + ' {"a": 1}', {"a": 1}),
    ("{" * 50000, None),
    ("{" * 50000 + "}" * 50000, None),
])
def test_runs_of_unbalanced_braces_stay_fast(text, expected):
    """
    WHY: A reply full of unclosed braces must not stall the request; rescanning from every brace is quadratic.
    HOW: Extract from 50k opening braces, with and without a trailing object, and from 50k nested empty braces.
    EXPECTED: The trailing object is found, junk yields None, and each call finishes well under a second or two.
    """
    started = time.perf_counter()
    assert extract_json(text) == expected
    assert time.perf_counter() - started < 2.0


def test_stray_quote_before_the_object_is_recovered():
    """
    WHY: An unmatched quote in prose flips string state, hiding the real object behind it.
    HOW: Put an opening brace and a lone quote before a valid object.
    EXPECTED: The scan restarts at a later brace and finds {"a": 1}.
    """
    assert extract_json('{oops "unclosed {"a": 1}') == {"a": 1}
