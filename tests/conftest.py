"""
Pytest configuration and shared fixtures for dejsonc tests.

Provides immutable JSONC documents paired with their expected JSON output,
rejected documents with their error details, and strict JSON documents that
must come through conversion untouched.
"""

from dataclasses import dataclass

import pytest

import dejsonc


@dataclass(frozen=True)
class JsoncTestCase:
    """
    Immutable container for one conversion scenario.

    Either expected_output is the exact JSON text the input must become, or
    error_type/error_pos describe how conversion must fail.
    """

    description: str
    input_data: str
    expected_output: str | None = None
    error_type: type[dejsonc.JSONCError] | None = None
    error_pos: int | None = None
    valid_json: bool = True

    @property
    def should_fail(self) -> bool:
        return self.error_type is not None


@pytest.fixture
def jsonc_conversion_cases() -> list[JsoncTestCase]:
    """
    Provides JSONC documents with the exact JSON text they convert to.
    """
    return [
        JsoncTestCase("trailing comma in array", "[1,2,3,]", "[1,2,3]"),
        JsoncTestCase("trailing comma in object", '{"a":1,}', '{"a":1}'),
        JsoncTestCase("separators kept", "[1, 2, 3]", "[1, 2, 3]"),
        JsoncTestCase(
            "trailing comma before comment",
            "[1, 2, /* x */]",
            "[1, 2]",
        ),
        JsoncTestCase(
            "line comment keeps newline",
            '{"a":1 // c\n}',
            '{"a":1 \n}',
        ),
        JsoncTestCase(
            "block comment between tokens",
            '{/* c */"a":1}',
            '{"a":1}',
        ),
        JsoncTestCase(
            "doc comment",
            '{\n  /**\n   * docs\n   */\n  "a": 1\n}',
            '{\n  \n  "a": 1\n}',
        ),
        JsoncTestCase(
            "trailing comma across newlines and comments",
            "[\n  1,\n  2, // two\n  // end\n]",
            "[\n  1,\n  2]",
        ),
        JsoncTestCase(
            "separator followed by comment",
            '{"a": 1, /* b */ "b": 2}',
            '{"a": 1,  "b": 2}',
        ),
        JsoncTestCase(
            "separator followed by line comment",
            '[1, // one\n 2]',
            "[1, \n 2]",
        ),
        JsoncTestCase(
            "nested trailing commas",
            '{"a": [1, [2,],], "b": {"c": {},},}',
            '{"a": [1, [2]], "b": {"c": {}}}',
        ),
        JsoncTestCase(
            "comment inside value position",
            '{"a": /* v */ 1}',
            '{"a":  1}',
        ),
        JsoncTestCase(
            "comment at end of input",
            '{"a": 1} // done',
            '{"a": 1} ',
        ),
        JsoncTestCase(
            "comment markers inside strings",
            '{"url": "http://x/*y*/", "c": "a,]"}',
            '{"url": "http://x/*y*/", "c": "a,]"}',
        ),
        JsoncTestCase(
            "block comment with stars",
            "[1 /*** a * b ***/]",
            "[1 ]",
        ),
        JsoncTestCase(
            "crlf line endings",
            '{\r\n  "a": 1, // c\r\n}',
            '{\r\n  "a": 1}',
        ),
        JsoncTestCase(
            "crlf after line comment kept",
            '[1 // c\r\n]',
            "[1 \r\n]",
        ),
        JsoncTestCase(
            "empty containers untouched",
            '{"a": [], "b": {}}',
            '{"a": [], "b": {}}',
        ),
        JsoncTestCase(
            "unicode content",
            '{"名前": "値", // コメント\n"emoji": "😀",}',
            '{"名前": "値", \n"emoji": "😀"}',
        ),
        JsoncTestCase("empty input", "", "", valid_json=False),
        JsoncTestCase(
            "only a comment", "// nothing here", "", valid_json=False
        ),
        JsoncTestCase(
            "lone slash passes through", "[1/2]", "[1/2]", valid_json=False
        ),
    ]


@pytest.fixture
def jsonc_fail_cases() -> list[JsoncTestCase]:
    """
    Provides JSONC documents that must be rejected, with the error class and
    the offset the error must point at.
    """
    return [
        JsoncTestCase(
            "unterminated string",
            '{"a": "b}',
            error_type=dejsonc.UnterminatedStringError,
            error_pos=6,
        ),
        JsoncTestCase(
            "unterminated key",
            '{"a',
            error_type=dejsonc.UnterminatedStringError,
            error_pos=1,
        ),
        JsoncTestCase(
            "backslash at end of string",
            '["abc\\',
            error_type=dejsonc.UnterminatedStringError,
            error_pos=1,
        ),
        JsoncTestCase(
            "unterminated block comment",
            '{"a":1 /* }',
            error_type=dejsonc.UnterminatedCommentError,
            error_pos=7,
        ),
        JsoncTestCase(
            "unterminated block comment after comma",
            "[1, /* ]",
            error_type=dejsonc.UnterminatedCommentError,
            error_pos=4,
        ),
        JsoncTestCase(
            "comment opener is not its own closer",
            "[1 /*/ ]",
            error_type=dejsonc.UnterminatedCommentError,
            error_pos=3,
        ),
        JsoncTestCase(
            "short unicode escape",
            '["\\u12"]',
            error_type=dejsonc.InvalidEscapeError,
            error_pos=2,
        ),
        JsoncTestCase(
            "non-hex unicode escape",
            '["\\u12g4"]',
            error_type=dejsonc.InvalidEscapeError,
            error_pos=2,
        ),
        JsoncTestCase(
            "unicode escape cut by end of input",
            '"\\u00',
            error_type=dejsonc.InvalidEscapeError,
            error_pos=1,
        ),
        JsoncTestCase(
            "comma at end of input",
            "[1,",
            error_type=dejsonc.UnexpectedEndOfInputError,
            error_pos=3,
        ),
        JsoncTestCase(
            "comma followed only by trivia",
            "[1, // more\n  /* later */ ",
            error_type=dejsonc.UnexpectedEndOfInputError,
            error_pos=26,
        ),
    ]


@pytest.fixture
def json_pass_documents() -> list[str]:
    """
    Provides strict JSON documents from the json.org JSON_checker suite.

    These contain comment markers and commas inside strings as well as odd
    whitespace, and must come through conversion byte for byte.
    """
    return [
        # https://json.org/JSON_checker/test/pass1.json
        """[
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
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
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
,"rosebud"]""",
        # https://json.org/JSON_checker/test/pass2.json
        '[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        # https://json.org/JSON_checker/test/pass3.json
        """{
    "JSON Test Pattern pass3": {
        "The outermost value": "must be an object or array.",
        "In this test": "It is an object."
    }
}""",
        "null",
        '"spam, // eggs /* ham */"',
        "[1, 2, 3]",
        '{"key": "value", "k": "v"}',
    ]
