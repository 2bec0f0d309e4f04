"""
Relaxed JSON document parser with an editable tree.

Parses a JSON dialect with optional top-level braces, bareword keys, ``=``
as well as ``:`` between keys and values, optional commas and ``//`` /
``/* */`` comments into a ``Document``. Documents can be queried, edited
and rendered back to compact or formatted text.
"""

import logging
import math
import os
import string
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import Any
from typing import Final

from ._arena import NIL
from ._arena import NodeArena
from ._errors import AllocationError
from ._errors import DanglingReferenceError
from ._errors import JSONDecodeError
from ._errors import Position
from ._errors import SerializationError
from ._errors import TreeError
from ._murmur import key_hash
from ._murmur import murmur3_32
from ._tree import Document
from ._tree import Node
from ._tree import NodeKind
from ._tree import NumberForm
from ._utf8_mapper import UTF8PositionMapper

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final = 256

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "SJZON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, chars_to_process: int = 0):
            self.func_name = func_name
            self.chars = chars_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:
    # Zero-cost in production - ignore arguments to nullcontext
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


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    OBJECT_START = "object_start"
    OBJECT_END = "object_end"
    ARRAY_START = "array_start"
    ARRAY_END = "array_end"
    COMMA = "comma"
    SEPARATOR = "separator"
    STRING = "string"
    NUMBER = "number"
    LITERAL = "literal"
    IDENTIFIER = "identifier"


_DIGITS: Final = frozenset(string.digits)
_HEX_DIGITS: Final = frozenset(string.hexdigits)
_WORD_START: Final = frozenset(string.ascii_letters + "_")
_WORD_CHARS: Final = _WORD_START | _DIGITS

_STRUCTURAL: Final = {
    "{": TokenType.OBJECT_START,
    "}": TokenType.OBJECT_END,
    "[": TokenType.ARRAY_START,
    "]": TokenType.ARRAY_END,
    ",": TokenType.COMMA,
    ":": TokenType.SEPARATOR,
    "=": TokenType.SEPARATOR,
}

_KEYWORDS: Final = {
    "null": NodeKind.NULL,
    "true": NodeKind.TRUE,
    "false": NodeKind.FALSE,
}

_KEY_TOKENS: Final = frozenset(
    {TokenType.STRING, TokenType.IDENTIFIER, TokenType.LITERAL}
)


@dataclass(frozen=True)
class JsonToken:
    """Represents a token with position information."""

    type: TokenType
    value: str
    start: Position
    end: Position


class JsonLexer:
    """
    Tokenizes relaxed JSON input.

    Character-by-character scanning. Whitespace is any character with a
    code point up to 32; ``//`` line comments and ``/* */`` block comments
    are skipped wherever whitespace is. Barewords are scanned as a whole,
    so a keyword is only recognized when it is not followed by further
    identifier characters.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips whitespace and comments until neither remains."""
        with ProfileContext("skip_whitespace"):
            text = self.text
            pos = self.pos
            while pos < self.length:
                char = text[pos]
                if char <= " ":
                    pos += 1
                elif text.startswith("//", pos):
                    while pos < self.length and text[pos] not in "\n\r":
                        pos += 1
                elif text.startswith("/*", pos):
                    end = text.find("*/", pos + 2)
                    if end < 0:
                        self.pos = pos
                        raise JSONDecodeError(
                            "Unterminated comment", text, pos
                        )
                    pos = end + 2
                else:
                    break
            self.pos = pos

    def scan_string(self) -> JsonToken:
        """Scans a quoted string token including quotes."""
        with ProfileContext("scan_string"):
            start = self.pos
            if self.advance() != '"':
                raise JSONDecodeError("Expected string", self.text, start)

            while self.pos < self.length:
                char = self.advance()
                if char == '"':
                    return JsonToken(
                        TokenType.STRING,
                        self.text[start : self.pos],
                        start,
                        self.pos,
                    )
                elif char == "\\":
                    # Skip escaped character
                    if self.pos < self.length:
                        self.advance()

            raise JSONDecodeError(
                "Unterminated string starting at", self.text, start
            )

    def _scan_integer_part(self, start: Position) -> None:
        """Scans the integer part of a number."""
        if self.peek() not in _DIGITS:
            raise JSONDecodeError("Invalid number", self.text, self.pos)

        if self.peek() == "0":
            self.advance()
            if self.peek() in _DIGITS:
                raise JSONDecodeError(
                    "Leading zeros not allowed", self.text, start
                )
        else:
            while self.peek() in _DIGITS:
                self.advance()

    def _scan_decimal_part(self) -> None:
        """Scans the decimal part of a number if present."""
        if self.peek() == ".":
            self.advance()
            if self.peek() not in _DIGITS:
                raise JSONDecodeError(
                    "Invalid decimal number", self.text, self.pos
                )
            while self.peek() in _DIGITS:
                self.advance()

    def _scan_exponent_part(self) -> None:
        """Scans the exponent part of a number if present."""
        if self.peek() in "eE":
            self.advance()
            if self.peek() in "+-":
                self.advance()
            if self.peek() not in _DIGITS:
                raise JSONDecodeError("Invalid exponent", self.text, self.pos)
            while self.peek() in _DIGITS:
                self.advance()

    def scan_number(self) -> JsonToken:
        """Scans a number token."""
        with ProfileContext("scan_number"):
            start = self.pos

            if self.peek() == "-":
                self.advance()

            self._scan_integer_part(start)
            self._scan_decimal_part()
            self._scan_exponent_part()

            return JsonToken(
                TokenType.NUMBER, self.text[start : self.pos], start, self.pos
            )

    def scan_word(self) -> JsonToken:
        """Scans a bareword: a keyword literal or an identifier."""
        with ProfileContext("scan_word"):
            start = self.pos
            while self.peek() in _WORD_CHARS:
                self.advance()

            word = self.text[start : self.pos]
            kind = (
                TokenType.LITERAL if word in _KEYWORDS else TokenType.IDENTIFIER
            )
            return JsonToken(kind, word, start, self.pos)

    def next_token(self) -> JsonToken | None:
        """Returns the next token or None if at end."""
        self.skip_whitespace()

        if self.pos >= self.length:
            return None

        char = self.peek()
        start = self.pos

        if char in _STRUCTURAL:
            self.advance()
            return JsonToken(_STRUCTURAL[char], char, start, self.pos)
        elif char == '"':
            return self.scan_string()
        elif char == "-" or char in _DIGITS:
            return self.scan_number()
        elif char in _WORD_START:
            return self.scan_word()
        else:
            raise JSONDecodeError("Unexpected character", self.text, start)


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``keep_names`` retains member names as text next to their hashes,
    which serialization needs. ``max_depth`` bounds array/object nesting
    and ``max_nodes`` bounds the number of nodes in the resulting document.
    """

    keep_names: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    max_nodes: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.keep_names, bool):
            raise TypeError("keep_names must be a boolean")
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_nodes is not None and (
            isinstance(self.max_nodes, bool)
            or not isinstance(self.max_nodes, int)
            or self.max_nodes < 1
        ):
            raise ValueError("max_nodes must be a positive integer or None")


@dataclass(frozen=True)
class DumpConfig:
    """
    Configures serialization with immutable settings.

    ``formatted`` selects the indented, multi-line layout; ``indent`` is
    the per-level indentation string, or a number of spaces. ``max_depth``
    bounds array/object nesting, trees built in code included.
    """

    formatted: bool = False
    indent: str | int = "\t"
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.formatted, bool):
            raise TypeError("formatted must be a boolean")
        if isinstance(self.indent, bool) or not isinstance(
            self.indent, str | int
        ):
            raise TypeError("indent must be a string or an integer")
        if isinstance(self.indent, int) and self.indent < 0:
            raise ValueError("indent must not be negative")
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


class JsonParser:
    """
    Recursive descent parser building a ``Document`` from a token stream.

    A document is a braced object, a bracketed array, or an implicit
    object whose members run to the end of the input. Commas are optional
    between elements and members, but may only appear directly before one.
    """

    def __init__(self, lexer: JsonLexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.current_token: JsonToken | None = None
        self.depth = 0
        self.document = Document(
            keep_names=config.keep_names, max_nodes=config.max_nodes
        )

    def advance_token(self) -> JsonToken | None:
        """Advances to next token and returns it."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def expect_token(self, expected: TokenType, description: str) -> JsonToken:
        """Expects a specific token type and advances."""
        if not self.current_token or self.current_token.type is not expected:
            raise JSONDecodeError(
                f"Expecting {description}", self.lexer.text, self.error_pos
            )
        token = self.current_token
        self.advance_token()
        return token

    @property
    def error_pos(self) -> Position:
        """Position of the current token, or of the end of input."""
        if self.current_token:
            return self.current_token.start
        return self.lexer.pos

    def _at(self, token_type: TokenType) -> bool:
        return (
            self.current_token is not None
            and self.current_token.type is token_type
        )

    def _enter(self, pos: Position) -> None:
        self.depth += 1
        if self.depth > self.config.max_depth:
            raise JSONDecodeError(
                "Maximum nesting depth exceeded", self.lexer.text, pos
            )

    def _leave(self) -> None:
        self.depth -= 1

    def parse_document(self) -> Document:
        """Parses the whole input and returns the finished document."""
        if self.lexer.text.startswith("\ufeff"):
            raise JSONDecodeError(
                "Document should not start with a BOM (Byte Order Mark)",
                self.lexer.text,
                0,
            )

        self.advance_token()

        if self._at(TokenType.OBJECT_START) or self._at(TokenType.ARRAY_START):
            root = self.parse_value()
            if self.current_token:
                raise JSONDecodeError(
                    "Extra data", self.lexer.text, self.current_token.start
                )
        else:
            root = self.parse_object(implicit=True)

        self.document._set_root(root)
        return self.document

    def parse_value(self) -> int:
        """Parses any value at the current token and returns its node."""
        token = self.current_token
        if not token:
            raise JSONDecodeError(
                "Expecting value", self.lexer.text, self.lexer.pos
            )

        if token.type is TokenType.LITERAL:
            self.advance_token()
            return self.document._new(_KEYWORDS[token.value])
        elif token.type is TokenType.NUMBER:
            number, form = _parse_number_content(token.value)
            self.advance_token()
            return self.document._new(NodeKind.NUMBER, number, form)
        elif token.type is TokenType.STRING:
            text = _parse_string_content(token, self.lexer.text)
            self.advance_token()
            return self.document._new(NodeKind.STRING, text)
        elif token.type is TokenType.OBJECT_START:
            return self.parse_object()
        elif token.type is TokenType.ARRAY_START:
            return self.parse_array()
        else:
            raise JSONDecodeError(
                "Expecting value", self.lexer.text, token.start
            )

    def parse_array(self) -> int:
        """Parses an array; commas between elements are optional."""
        with ProfileContext("parse_array"):
            opening = self.expect_token(TokenType.ARRAY_START, "'['")
            self._enter(opening.start)
            array = self.document._new(NodeKind.ARRAY)

            tail = NIL
            while True:
                if not self.current_token:
                    raise JSONDecodeError(
                        "Expecting ']' delimiter",
                        self.lexer.text,
                        self.lexer.pos,
                    )
                if self._at(TokenType.ARRAY_END):
                    self.advance_token()
                    break
                if tail != NIL and self._at(TokenType.COMMA):
                    self.advance_token()

                child = self.parse_value()
                self.document._link(array, child, tail)
                tail = child

            self._leave()
            return array

    def parse_object(self, implicit: bool = False) -> int:
        """
        Parses an object.

        With ``implicit`` set there is no opening brace and the members
        run until the end of the input instead of a closing brace.
        """
        with ProfileContext("parse_object"):
            if implicit:
                self._enter(self.error_pos)
            else:
                opening = self.expect_token(TokenType.OBJECT_START, "'{'")
                self._enter(opening.start)
            obj = self.document._new(NodeKind.OBJECT)

            tail = NIL
            while True:
                if not self.current_token:
                    if implicit:
                        break
                    raise JSONDecodeError(
                        "Expecting '}' delimiter",
                        self.lexer.text,
                        self.lexer.pos,
                    )
                if not implicit and self._at(TokenType.OBJECT_END):
                    self.advance_token()
                    break
                if tail != NIL and self._at(TokenType.COMMA):
                    self.advance_token()

                child = self._parse_member()
                self.document._link(obj, child, tail)
                tail = child

            self._leave()
            return obj

    def _parse_member(self) -> int:
        """Parses ``key (':' | '=') value`` and returns the named value."""
        token = self.current_token
        if not token or token.type not in _KEY_TOKENS:
            raise JSONDecodeError(
                "Expecting property name", self.lexer.text, self.error_pos
            )

        if token.type is TokenType.STRING:
            key = _parse_string_content(token, self.lexer.text)
        else:
            key = token.value
        self.advance_token()

        self.expect_token(TokenType.SEPARATOR, "':' or '=' delimiter")
        child = self.parse_value()
        self.document._set_name(child, key)
        return child


_ESCAPES_IN: Final = {
    '"': '"',
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _process_escape_sequence(
    inner: str, i: int, doc: str, offset: Position
) -> tuple[str, int]:
    """
    Process a single escape sequence and return the character and new
    position.

    Unknown escapes stand for the escaped character itself. ``\\uXXXX``
    yields the code point as is; surrogate pairs are not combined.
    """
    next_char = inner[i + 1]

    if next_char in _ESCAPES_IN:
        return _ESCAPES_IN[next_char], i + 2
    elif next_char == "u":
        hex_digits = inner[i + 2 : i + 6]
        if len(hex_digits) == 4 and all(c in _HEX_DIGITS for c in hex_digits):
            return chr(int(hex_digits, 16)), i + 6
        raise JSONDecodeError(
            f"Invalid unicode escape sequence: \\u{hex_digits}",
            doc,
            offset + i,
        )
    else:
        return next_char, i + 2


def _parse_string_content(token: JsonToken, doc: str) -> str:
    """Decodes a scanned string token, handling escape sequences."""
    with ProfileContext("parse_string", len(token.value)):
        inner = token.value[1:-1]
        if "\\" not in inner:
            return inner

        offset = token.start + 1
        result = []
        i = 0
        while i < len(inner):
            if inner[i] == "\\":
                char, i = _process_escape_sequence(inner, i, doc, offset)
                result.append(char)
            else:
                result.append(inner[i])
                i += 1

        return "".join(result)


def _parse_number_content(content: str) -> tuple[float, NumberForm]:
    """Converts a scanned number token into its value and lexical form."""
    with ProfileContext("parse_number", len(content)):
        if "." in content or "e" in content or "E" in content:
            return float(content), NumberForm.REAL
        return float(content), NumberForm.INTEGER


_last_error_pos: Position | None = None


def get_error_pos() -> Position | None:
    """
    Returns where the last failed ``loads`` call stopped.

    None when the last call succeeded. Only meaningful until the next
    parse call.
    """
    return _last_error_pos


def _parse_document(s: str, config: ParseConfig) -> Document:
    """Runs the parser over ``s`` and records the outcome."""
    global _last_error_pos

    with ProfileContext("parse_document", len(s)):
        lexer = JsonLexer(s)
        parser = JsonParser(lexer, config)
        try:
            document = parser.parse_document()
        except JSONDecodeError as exc:
            _last_error_pos = exc.pos
            logger.debug("Parse failed at position %d: %s", exc.pos, exc.msg)
            raise
        except AllocationError:
            _last_error_pos = lexer.pos
            logger.debug("Parse ran out of nodes at position %d", lexer.pos)
            raise

        _last_error_pos = None
        logger.debug("Parsed document with %d nodes", len(document.arena))
        return document


def _parse_bytes(data: bytes, config: ParseConfig) -> Document:
    """Parses UTF-8 input, reporting error offsets in bytes as well."""
    global _last_error_pos

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        pos = len(data[: exc.start].decode("utf-8"))
        _last_error_pos = pos
        err = JSONDecodeError(
            "Document is not valid UTF-8",
            data.decode("utf-8", "replace"),
            pos,
        )
        err.byte_pos = exc.start
        raise err from exc

    try:
        return _parse_document(text, config)
    except JSONDecodeError as exc:
        exc.byte_pos = UTF8PositionMapper(text).char_to_byte(exc.pos)
        raise


def loads(s: str | bytes | bytearray, **kwargs: Any) -> Document:
    """
    Parses a relaxed JSON document into a ``Document``.

    Accepts text or UTF-8 bytes. Keyword arguments populate
    ``ParseConfig``. Raises ``JSONDecodeError`` on malformed input and
    ``AllocationError`` when ``max_nodes`` is exceeded.
    """
    config = ParseConfig(**kwargs)

    if isinstance(s, bytes | bytearray):
        return _parse_bytes(bytes(s), config)
    if not isinstance(s, str):
        raise TypeError(
            f"the document must be str or bytes, not {type(s).__name__}"
        )

    return _parse_document(s, config)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> Document:
    """
    Parses a document from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


_ESCAPES_OUT: Final = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_INT_MIN: Final = -(2**31)
_INT_MAX: Final = 2**31 - 1


def _encode_string(s: str) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        escaped = _ESCAPES_OUT.get(char)
        if escaped is not None:
            result.append(escaped)
        elif char < " ":
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: float) -> str:
    """
    Renders a number.

    Integral values inside the 32-bit range print as integers. Other
    integral values print without a fraction, very small or very large
    values in exponent notation and the rest with six decimals.
    """
    if not math.isfinite(n):
        raise SerializationError(
            "Out of range float values are not JSON compliant"
        )

    truncated = math.trunc(n)
    epsilon = sys.float_info.epsilon
    if abs(truncated - n) <= epsilon and _INT_MIN <= n <= _INT_MAX:
        return str(truncated)
    if abs(math.floor(n) - n) <= epsilon:
        return f"{n:.0f}"
    if abs(n) < 1.0e-6 or abs(n) > 1.0e9:
        return f"{n:e}"
    return f"{n:f}"


def _get_indent_string(indent: str | int, level: int) -> str:
    """Generate indentation string for given level."""
    if isinstance(indent, int):
        return " " * (indent * level)
    return indent * level


def _encode_array(
    node: Node, depth: int, config: DumpConfig, active: set[int]
) -> str:
    """Encode array, one level deeper for its elements."""
    items = [
        _encode_node(child, depth + 1, config, active) for child in node
    ]
    if not items:
        return "[]"

    separator = ", " if config.formatted else ","
    return "[" + separator.join(items) + "]"


def _encode_object(
    node: Node, depth: int, config: DumpConfig, active: set[int]
) -> str:
    """Encode object; formatted output puts one member per line."""
    depth += 1
    members = []
    for child in node:
        if child.name is None:
            raise SerializationError(
                "Member names were not retained; parse with keep_names=True"
            )
        value = _encode_node(child, depth, config, active)
        members.append((_encode_string(child.name), value))

    if not config.formatted:
        pairs = [f"{key}:{value}" for key, value in members]
        return "{" + ",".join(pairs) + "}"

    inner_indent = _get_indent_string(config.indent, depth)
    outer_indent = _get_indent_string(config.indent, depth - 1)
    separator = ":\t" if config.indent == "\t" else ": "

    lines = ["{\n"]
    for i, (key, value) in enumerate(members):
        lines.append(f"{inner_indent}{key}{separator}{value}")
        if i < len(members) - 1:
            lines.append(",")
        lines.append("\n")
    lines.append(f"{outer_indent}}}")
    return "".join(lines)


def _encode_node(
    node: Node, depth: int, config: DumpConfig, active: set[int]
) -> str:
    """Encode any node, following references to their targets."""
    kind = node.kind
    if kind is NodeKind.NULL:
        return "null"
    elif kind is NodeKind.TRUE:
        return "true"
    elif kind is NodeKind.FALSE:
        return "false"
    elif kind is NodeKind.NUMBER:
        return _encode_number(node.number)
    elif kind is NodeKind.STRING:
        return _encode_string(node.string)

    target = node.target.index
    if target in active:
        raise SerializationError("Circular reference detected")
    if len(active) >= config.max_depth:
        raise SerializationError("Maximum nesting depth exceeded")
    active.add(target)
    try:
        if kind is NodeKind.ARRAY:
            return _encode_array(node, depth, config, active)
        return _encode_object(node, depth, config, active)
    finally:
        active.discard(target)


def dumps(obj: Node | Document, **kwargs: Any) -> str:
    """
    Renders a node, or a document's root, back to text.

    Keyword arguments populate ``DumpConfig``. Either the whole text is
    produced or ``SerializationError`` is raised.
    """
    config = DumpConfig(**kwargs)

    if isinstance(obj, Document):
        root = obj.root
        if root is None:
            raise SerializationError("Document has no root")
        obj = root
    if not isinstance(obj, Node):
        raise TypeError(
            f"Object of type {type(obj).__name__} is not a document node"
        )

    with ProfileContext("dumps"):
        return _encode_node(obj, 0, config, set())


def dump(obj: Node | Document, fp: IO[str], **kwargs: Any) -> None:
    """
    Renders a node, or a document's root, into a text file.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AllocationError",
    "DanglingReferenceError",
    "Document",
    "DumpConfig",
    "HotPathStats",
    "JSONDecodeError",
    "JsonLexer",
    "JsonParser",
    "JsonToken",
    "Node",
    "NodeArena",
    "NodeKind",
    "NumberForm",
    "ParseConfig",
    "SerializationError",
    "TokenType",
    "TreeError",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "get_error_pos",
    "get_hot_path_stats",
    "key_hash",
    "load",
    "loads",
    "murmur3_32",
]
