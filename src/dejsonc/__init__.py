"""
JSONC to JSON transcoding library.

Turns JSON with comments and trailing commas into standards-compliant JSON by
removing ``//`` line comments, ``/* */`` block comments and commas that sit
directly before a closing ``]`` or ``}``. Every other character of the input
is reproduced in its original order, so the output can be handed straight to
the standard library json module or any other strict parser.
"""

import json
import logging
import os
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import TypeAlias
from typing import Any
from typing import ClassVar

from ._utf8_mapper import UTF8PositionMapper

__version__ = "0.1.0"

Position: TypeAlias = int

logger = logging.getLogger(__name__)

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "DEJSONC_PROFILE" in os.environ

# Insignificant whitespace as defined by RFC 8259
WHITESPACE = frozenset(" \t\n\r")
CLOSING_BRACKETS = frozenset("]}")
OPENING_BRACKETS = frozenset("[{")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
SIMPLE_ESCAPES = frozenset('"\\/bfnrt')

_PLAIN_RUN = re.compile(r'[^"/,\[\]{}]+')
_STRING_RUN = re.compile(r'[^"\\]+')
_WHITESPACE_RUN = re.compile(r"[ \t\n\r]+")
_LINE_END = re.compile(r"[\n\r]")
_NOT_LINE_BREAK = re.compile(r"[^\n\r]")


@dataclass
class HotPathStats:
    """Statistics for one profiled hot path."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a call with its duration and the characters it covered."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager timing a hot path into the shared stats table."""

        def __init__(self, func_name: str, chars: int = 0) -> None:
            self.func_name = func_name
            self.chars = chars
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.setdefault(
                self.func_name, HotPathStats(self.func_name)
            )
            stats.record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class ErrorKind(Enum):
    """The ways a JSONC document can be rejected by the transcoder."""

    UNTERMINATED_STRING = "unterminated_string"
    UNTERMINATED_COMMENT = "unterminated_comment"
    INVALID_ESCAPE = "invalid_escape"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"


class JSONCError(ValueError):
    """
    Reports a JSONC document that cannot be turned into JSON.

    Carries the offending character offset together with the line and column
    it falls on, mirroring json.JSONDecodeError so callers can handle both
    the same way.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    @property
    def byte_pos(self) -> Position:
        """Offset of the error within the UTF-8 encoding of the document."""
        if not self.doc:
            return self.pos
        return UTF8PositionMapper(self.doc).char_to_byte(self.pos)

    def __reduce__(self) -> tuple[type["JSONCError"], tuple[str, str, int]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class UnterminatedStringError(JSONCError):
    kind = ErrorKind.UNTERMINATED_STRING


class UnterminatedCommentError(JSONCError):
    kind = ErrorKind.UNTERMINATED_COMMENT


class InvalidEscapeError(JSONCError):
    kind = ErrorKind.INVALID_ESCAPE


class UnexpectedEndOfInputError(JSONCError):
    kind = ErrorKind.UNEXPECTED_END_OF_INPUT


class Mode(Enum):
    """
    Lexical context of the scanner at the current cursor position.

    Exactly one mode is active at a time; the escape flag of the transcoder
    only has meaning while the mode is IN_STRING.
    """

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


@dataclass(frozen=True)
class ConvertConfig:
    """
    Configures transcoding behavior with immutable settings.

    preserve_positions blanks removed characters with spaces instead of
    deleting them, so offsets in the output line up with the input.
    strict_escapes rejects backslash escapes that JSON does not define.
    """

    preserve_positions: bool = False
    strict_escapes: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.preserve_positions, bool):
            raise TypeError("preserve_positions must be a boolean")
        if not isinstance(self.strict_escapes, bool):
            raise TypeError("strict_escapes must be a boolean")


@dataclass(frozen=True)
class PendingComma:
    """
    Outcome of looking past a comma for the next significant character.

    kept holds the whitespace (and, when positions are preserved, the blanked
    comments) between the comma and next_pos, ready to be emitted should the
    comma turn out to be an ordinary separator.
    """

    pos: Position
    depth: int
    next_pos: Position
    next_char: str
    kept: tuple[str, ...]
    comments: int

    @property
    def is_trailing(self) -> bool:
        return self.next_char in CLOSING_BRACKETS


def _line_comment_end(text: str, start: Position) -> Position:
    """Returns the offset of the line break ending the comment at start."""
    match = _LINE_END.search(text, start)
    return match.start() if match else len(text)


def _block_comment_end(text: str, start: Position) -> Position:
    """Returns the offset just past the comment at start, or -1 if unclosed."""
    end = text.find("*/", start + 2)
    return -1 if end == -1 else end + 2


def _blank(span: str) -> str:
    return _NOT_LINE_BREAK.sub(" ", span)


class JsoncTranscoder:
    """
    Scans JSONC text once and writes the equivalent JSON.

    A small state machine over Mode decides how each character is treated.
    The only lookahead happens on a comma in NORMAL mode, where the scanner
    peeks past whitespace and comments to see whether a closing bracket
    follows. One instance handles one document.
    """

    def __init__(self, text: str, config: ConvertConfig | None = None):
        self.text = text
        self.config = config or ConvertConfig()
        self.pos = 0
        self.length = len(text)
        self.mode = Mode.NORMAL
        self.escape_pending = False
        self.depth = 0
        self.comments_removed = 0
        self.commas_removed = 0
        self._token_start = 0
        self._out: list[str] = []

    def peek(self, offset: int = 0) -> str:
        """Returns the character offset places ahead, or '' past the end."""
        index = self.pos + offset
        return self.text[index] if index < self.length else ""

    def convert(self) -> str:
        """Runs the scan to completion and returns the JSON text."""
        with ProfileContext("convert", self.length):
            while self.pos < self.length:
                if self.mode is Mode.NORMAL:
                    self._scan_normal()
                elif self.mode is Mode.IN_STRING:
                    self._scan_string()
                elif self.mode is Mode.IN_LINE_COMMENT:
                    self._scan_line_comment()
                else:
                    self._scan_block_comment()

            self._finish()
            return "".join(self._out)

    def _drop(self, span: str) -> None:
        if self.config.preserve_positions:
            self._out.append(_blank(span))

    def _scan_normal(self) -> None:
        run = _PLAIN_RUN.match(self.text, self.pos)
        if run:
            self._out.append(run.group())
            self.pos = run.end()
            return

        char = self.text[self.pos]
        if char == '"':
            self._token_start = self.pos
            self.mode = Mode.IN_STRING
        elif char == "/" and self.peek(1) == "/":
            self._token_start = self.pos
            self.mode = Mode.IN_LINE_COMMENT
            return
        elif char == "/" and self.peek(1) == "*":
            self._token_start = self.pos
            self.mode = Mode.IN_BLOCK_COMMENT
            return
        elif char == ",":
            self._resolve_comma()
            return
        elif char in OPENING_BRACKETS:
            self.depth += 1
        elif char in CLOSING_BRACKETS:
            self.depth -= 1

        # a lone "/" is not comment syntax and passes through like any value
        self._out.append(char)
        self.pos += 1

    def _scan_string(self) -> None:
        with ProfileContext("scan_string"):
            if self.escape_pending:
                self._scan_escape()
                return

            run = _STRING_RUN.match(self.text, self.pos)
            if run:
                self._out.append(run.group())
                self.pos = run.end()
                return

            char = self.text[self.pos]
            self._out.append(char)
            self.pos += 1
            if char == "\\":
                self.escape_pending = True
            else:
                self.mode = Mode.NORMAL

    def _scan_escape(self) -> None:
        """Passes the escaped character (and any \\u digits) through."""
        backslash = self.pos - 1
        char = self.text[self.pos]

        if char == "u":
            digits = self.text[self.pos + 1 : self.pos + 5]
            if len(digits) < 4 or not HEX_DIGITS.issuperset(digits):
                raise InvalidEscapeError(
                    f"Invalid \\uXXXX escape sequence: \\u{digits}",
                    self.text,
                    backslash,
                )
            self._out.append(char + digits)
            self.pos += 5
        elif self.config.strict_escapes and char not in SIMPLE_ESCAPES:
            raise InvalidEscapeError(
                f"Invalid escape sequence: \\{char}", self.text, backslash
            )
        else:
            self._out.append(char)
            self.pos += 1

        self.escape_pending = False

    def _scan_line_comment(self) -> None:
        end = _line_comment_end(self.text, self.pos)
        self._drop(self.text[self.pos : end])
        self.comments_removed += 1
        self.pos = end
        self.mode = Mode.NORMAL

    def _scan_block_comment(self) -> None:
        end = _block_comment_end(self.text, self.pos)
        if end == -1:
            # left in IN_BLOCK_COMMENT so _finish reports it
            self.pos = self.length
            return

        self._drop(self.text[self.pos : end])
        self.comments_removed += 1
        self.pos = end
        self.mode = Mode.NORMAL

    def _resolve_comma(self) -> None:
        pending = self.lookahead(self.pos)
        self.comments_removed += pending.comments

        if pending.is_trailing:
            self._drop(self.text[pending.pos : pending.next_pos])
            self.commas_removed += 1
        else:
            self._out.append(",")
            self._out.extend(pending.kept)

        self.pos = pending.next_pos

    def lookahead(self, comma_pos: Position) -> PendingComma:
        """
        Finds the first significant character after the comma at comma_pos.

        Skips whitespace, line comments and block comments without touching
        the output or the cursor. Raises UnexpectedEndOfInputError when the
        document ends first and UnterminatedCommentError when a block
        comment in the skipped span is never closed.
        """
        with ProfileContext("lookahead"):
            text = self.text
            blank_comments = self.config.preserve_positions
            kept: list[str] = []
            comments = 0
            i = comma_pos + 1

            while i < self.length:
                char = text[i]
                if char in WHITESPACE:
                    end = _WHITESPACE_RUN.match(text, i).end()  # type: ignore[union-attr]
                    kept.append(text[i:end])
                elif text.startswith("//", i):
                    end = _line_comment_end(text, i)
                    comments += 1
                    if blank_comments:
                        kept.append(_blank(text[i:end]))
                elif text.startswith("/*", i):
                    end = _block_comment_end(text, i)
                    if end == -1:
                        raise UnterminatedCommentError(
                            "Unterminated comment starting at", text, i
                        )
                    comments += 1
                    if blank_comments:
                        kept.append(_blank(text[i:end]))
                else:
                    return PendingComma(
                        pos=comma_pos,
                        depth=self.depth,
                        next_pos=i,
                        next_char=char,
                        kept=tuple(kept),
                        comments=comments,
                    )
                i = end

            raise UnexpectedEndOfInputError(
                "Unexpected end of input after ','", text, self.length
            )

    def _finish(self) -> None:
        """Rejects documents that end inside a string or block comment."""
        if self.mode is Mode.IN_STRING:
            raise UnterminatedStringError(
                "Unterminated string starting at", self.text, self._token_start
            )
        if self.mode is Mode.IN_BLOCK_COMMENT:
            raise UnterminatedCommentError(
                "Unterminated comment starting at",
                self.text,
                self._token_start,
            )


def convert(s: str, **kwargs: Any) -> str:
    """
    Converts JSONC text into JSON text.

    Removes comments and trailing commas and leaves everything else as it
    was. Keyword arguments build the ConvertConfig for this call.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSONC object must be str, not {type(s).__name__}"
        )

    config = ConvertConfig(**kwargs)
    transcoder = JsoncTranscoder(s, config)
    try:
        result = transcoder.convert()
    except JSONCError as e:
        logger.debug(f"Rejected JSONC document ({e.kind.value}): {e}")
        raise

    logger.debug(
        f"Converted {transcoder.length} characters: removed "
        f"{transcoder.comments_removed} comments and "
        f"{transcoder.commas_removed} trailing commas"
    )
    return result


def loads(
    s: str,
    *,
    preserve_positions: bool = False,
    strict_escapes: bool = False,
    **kwargs: Any,
) -> Any:
    """
    Parses JSONC text into Python objects.

    The text is converted first; the remaining keyword arguments are handed
    to json.loads along with the result.
    """
    converted = convert(
        s,
        preserve_positions=preserve_positions,
        strict_escapes=strict_escapes,
    )
    return json.loads(converted, **kwargs)


def load(fp: IO[str], **kwargs: Any) -> Any:
    """
    Parses JSONC from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


__all__ = [
    "ConvertConfig",
    "ErrorKind",
    "HotPathStats",
    "InvalidEscapeError",
    "JSONCError",
    "JsoncTranscoder",
    "Mode",
    "PendingComma",
    "UnexpectedEndOfInputError",
    "UnterminatedCommentError",
    "UnterminatedStringError",
    "clear_hot_path_stats",
    "convert",
    "get_hot_path_stats",
    "load",
    "loads",
]
