"""
Pytest configuration and shared fixtures for sjzon tests.

Provides immutable test data fixtures and a structural view of document
trees so tests can compare whole trees at once.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import sjzon


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for document test case data.

    Holds test input and expected behavior for consistent test execution.
    For failing cases ``expected_output`` is the expected error position.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


def structure(node: sjzon.Node) -> Any:
    """
    Converts a tree into plain Python values for comparison.

    Arrays become lists and objects become tuples of ``(name, value)``
    pairs, so member order and duplicate names are preserved and an empty
    object does not compare equal to an empty array. Members without a
    retained name are keyed by their hash.
    """
    kind = node.kind
    if kind is sjzon.NodeKind.ARRAY:
        return [structure(child) for child in node]
    if kind is sjzon.NodeKind.OBJECT:
        return tuple(
            (
                child.name if child.name is not None else child.name_hash,
                structure(child),
            )
            for child in node
        )
    return node.value


PASS1 = """[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]"""


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides standard JSON documents that must parse successfully.

    The relaxed dialect accepts every JSON_checker pass document, since
    each of them has an object or array at the top level.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data=PASS1,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def relaxed_pass_cases() -> list[JsonTestCase]:
    """
    Provides documents that use the relaxations of the dialect.

    Each case carries the expected structure of the parsed tree.
    """
    return [
        JsonTestCase(
            "implicit top-level object",
            "x=5",
            expected_output=(("x", 5),),
        ),
        JsonTestCase(
            "bareword keys",
            "{a:1,b:[1,2,3]}",
            expected_output=(("a", 1), ("b", [1, 2, 3])),
        ),
        JsonTestCase(
            "equals as separator",
            '{"k" = "v", other = null}',
            expected_output=(("k", "v"), ("other", None)),
        ),
        JsonTestCase(
            "commas are optional",
            "{a:1 b:2 c:[true false null]}",
            expected_output=(
                ("a", 1),
                ("b", 2),
                ("c", [True, False, None]),
            ),
        ),
        JsonTestCase(
            "line comment before document",
            '// note\n{"k": "v"}',
            expected_output=(("k", "v"),),
        ),
        JsonTestCase(
            "block comments between tokens",
            "/* a */ {/* b */ a /* c */ = /* d */ 1 // e\n}",
            expected_output=(("a", 1),),
        ),
        JsonTestCase(
            "multi-line implicit object",
            'name = "demo"\r\nsize: 3\n// list of tags\ntags = ["x" "y"]\n',
            expected_output=(
                ("name", "demo"),
                ("size", 3),
                ("tags", ["x", "y"]),
            ),
        ),
        JsonTestCase(
            "keywords as keys",
            "{null: 1, true = 2, false: 3}",
            expected_output=(("null", 1), ("true", 2), ("false", 3)),
        ),
        JsonTestCase(
            "identifiers with digits and underscores",
            "_private_1 = 1\nCamelCase2 = 2",
            expected_output=(("_private_1", 1), ("CamelCase2", 2)),
        ),
        JsonTestCase(
            "duplicate keys are kept in order",
            "{a:1, a:2}",
            expected_output=(("a", 1), ("a", 2)),
        ),
        JsonTestCase(
            "empty document",
            "",
            expected_output=(),
        ),
        JsonTestCase(
            "comments only",
            "  // nothing here\n/* or here */\n",
            expected_output=(),
        ),
        JsonTestCase(
            "empty containers",
            "{a:{} b:[]}",
            expected_output=(("a", ()), ("b", [])),
        ),
        JsonTestCase(
            "top-level array",
            "[1, 2 3]",
            expected_output=[1, 2, 3],
        ),
    ]


@pytest.fixture
def relaxed_fail_cases() -> list[JsonTestCase]:
    """
    Provides documents that must fail, with the expected error position.
    """
    fail_docs = [
        ("missing value", '{"k": }', 6),
        ("trailing comma in array", "[1,]", 3),
        ("leading comma in array", "[,1]", 1),
        ("double comma in array", "[1,,2]", 3),
        ("trailing comma in object", "{a:1,}", 5),
        ("trailing comma in implicit object", "a=1,", 4),
        ("unclosed array", "[1 2", 4),
        ("unclosed object", "{a:1", 4),
        ("missing separator", "{a 1}", 3),
        ("number as key", "{1: 2}", 1),
        ("closing brace in implicit object", "a=1}", 3),
        ("keyword prefix", "[nullx]", 1),
        ("keyword prefix as value", "{a: truex}", 4),
        ("bareword value", "{a: b}", 4),
        ("leading zero", '{"a": 01}', 6),
        ("missing fraction digits", "[1.]", 3),
        ("missing exponent digits", "[1e]", 3),
        ("lone minus", "[-]", 2),
        ("unterminated string", '["abc', 1),
        ("unterminated block comment", "/* open {a:1}", 0),
        ("unterminated trailing comment", "{a: 1} /* x", 7),
        ("extra data", "{a:1} b", 6),
        ("stray slash", "[1] /", 4),
        ("short unicode escape", '["\\u12"]', 2),
        ("non-hex unicode escape", '["\\uzzzz"]', 2),
        ("unexpected character", "x: @", 3),
        ("byte order mark", "\ufeff{}", 0),
        ("single quotes", "['x']", 1),
        ("mismatched bracket", '["mismatch"}', 11),
    ]
    return [
        JsonTestCase(description, doc, True, pos)
        for description, doc, pos in fail_docs
    ]
