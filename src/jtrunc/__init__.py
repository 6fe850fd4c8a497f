"""
Single-pass JSON string truncation over raw bytes.

Locates every string literal in a JSON byte sequence and rewrites it
(truncation, masking or arbitrary substitution) while copying all other
bytes through untouched. No parse tree is built: the scanner only tracks
quote and escape state, so nesting depth is irrelevant.
"""

import logging
import os
import time
from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any
from typing import TypeAlias

from jtrunc._transformer import Container
from jtrunc._transformer import KVInfo
from jtrunc._transformer import Masking
from jtrunc._transformer import Transformer
from jtrunc._transformer import default_mask
from jtrunc._transformer import default_string_transformer

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

Position: TypeAlias = int

# Byte-like inputs accepted by the scanning entry points
BytesLike = bytes | bytearray | memoryview

QUOTE = b'"'
ESCAPE = b"\\"
COLON = b":"

_ESCAPE_BYTE = ord(ESCAPE)

DEFAULT_PADDING = 20

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JTRUNC_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during scanning."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Records a function call with timing and byte processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, nbytes: int = 0):
            self.func_name = func_name
            self.nbytes = nbytes
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.nbytes)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, nbytes: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class UnclosedStringError(ValueError):
    """
    Raised when the input ends inside an opened string literal.

    Carries the offset of the opening quote plus line/column numbers
    derived from the raw bytes, so callers can point at the culprit.
    """

    def __init__(self, msg: str, doc: bytes = b"", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Byte-based line and column numbers
        self.lineno = doc.count(b"\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind(b"\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")


@dataclass(frozen=True)
class StringLiteral:
    """
    A string literal found in the input, quotes excluded.

    ``start`` is the offset right after the opening quote and ``end`` the
    offset of the closing quote, so ``data[start:end] == content``.
    """

    content: bytes
    start: Position
    end: Position


# Rewrites one literal's content; the result is written between quotes
LiteralTransform: TypeAlias = Callable[[StringLiteral], bytes]


def _is_escaped(data: bytes, start: Position, quote_pos: Position) -> bool:
    """Checks for an odd run of backslashes right before ``quote_pos``."""
    run = 0
    pos = quote_pos - 1
    while pos >= start and data[pos] == _ESCAPE_BYTE:
        run += 1
        pos -= 1
    return run % 2 == 1


class StringScanner:
    """
    Forward-only scanner yielding every string literal in a JSON buffer.

    Jumps between quote characters instead of stepping byte by byte; the
    bytes in between belong to the structure and are left to the caller.
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.length = len(data)

    def __iter__(self) -> Iterator[StringLiteral]:
        while (literal := self.next_literal()) is not None:
            yield literal

    def next_literal(self) -> StringLiteral | None:
        """Returns the next literal or None if no quote is left."""
        with ProfileContext("next_literal"):
            opening = self.data.find(QUOTE, self.pos)
            if opening == -1:
                self.pos = self.length
                return None

            start = opening + 1
            closing = self._find_closing_quote(start)
            self.pos = closing + 1
            return StringLiteral(self.data[start:closing], start, closing)

    def _find_closing_quote(self, start: Position) -> Position:
        """Finds the first unescaped quote at or after ``start``."""
        search_from = start
        while True:
            candidate = self.data.find(QUOTE, search_from)
            if candidate == -1:
                raise UnclosedStringError(
                    "Unterminated string", self.data, start - 1
                )
            if not _is_escaped(self.data, start, candidate):
                return candidate
            search_from = candidate + 1


def is_key(data: bytes, end: Position) -> bool:
    """
    Tells whether the literal closed at ``end`` is an object key.

    A colon reached before any further quote makes it a key; anything
    else (another literal first, or end of input) makes it a value.
    """
    with ProfileContext("is_key"):
        next_quote = data.find(QUOTE, end + 1)
        limit = next_quote if next_quote != -1 else len(data)
        return data.find(COLON, end + 1, limit) != -1


def render_truncated(
    content: bytes,
    max_chars: int,
    start: Position,
    end: Position,
    padding: int = DEFAULT_PADDING,
) -> bytes:
    """
    Shortens ``content`` once it reaches ``max_chars`` bytes.

    Keeps ``padding`` bytes at each end and puts a marker in between
    telling how far the literal went over budget and where it sat in the
    input. A non-positive ``max_chars`` disables truncation.
    """
    with ProfileContext("render_truncated", len(content)):
        length = len(content)
        if max_chars <= 0 or length < max_chars:
            return content

        if max_chars < padding:
            padding = max_chars // 2

        marker = b" **escaped %d chars at [%d:%d]** " % (
            length - max_chars,
            start,
            end,
        )
        return content[:padding] + marker + content[length - padding :]


@dataclass(frozen=True)
class TruncateConfig:
    """
    Configures truncation with immutable settings.

    ``max_chars`` of zero or less means no truncation; ``value_only``
    leaves object keys untouched.
    """

    max_chars: int = 0
    value_only: bool = False
    padding: int = DEFAULT_PADDING

    def __post_init__(self) -> None:
        if isinstance(self.max_chars, bool) or not isinstance(
            self.max_chars, int
        ):
            raise TypeError("max_chars must be an integer")
        if not isinstance(self.value_only, bool):
            raise TypeError("value_only must be a boolean")
        if isinstance(self.padding, bool) or not isinstance(self.padding, int):
            raise TypeError("padding must be an integer")
        if self.padding < 0:
            raise ValueError("padding must be a non-negative integer")


def _as_bytes(data: BytesLike) -> bytes:
    """Validates scanner input and normalizes it to immutable bytes."""
    if isinstance(data, str):
        raise TypeError("the JSON input must be bytes, not str")
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(
            f"the JSON input must be bytes-like, not {type(data).__name__}"
        )
    return data if isinstance(data, bytes) else bytes(data)


def transform_strings(
    data: BytesLike,
    transform: LiteralTransform,
    *,
    value_only: bool = False,
) -> bytes:
    """
    Rewrites every string literal in ``data`` with ``transform``.

    Bytes outside literals are copied verbatim. With ``value_only`` set,
    literals classified as object keys are written back unchanged.
    """
    if not callable(transform):
        raise TypeError("transform must be callable")

    doc = _as_bytes(data)
    with ProfileContext("transform_strings", len(doc)):
        out = bytearray()
        written = 0
        seen = 0
        rewritten = 0

        for literal in StringScanner(doc):
            seen += 1
            # Gap up to and including the opening quote
            out += doc[written : literal.start]

            if value_only and is_key(doc, literal.end):
                out += literal.content
            else:
                replacement = transform(literal)
                if replacement != literal.content:
                    rewritten += 1
                out += replacement

            # Closing quote goes out with the next gap
            written = literal.end

        out += doc[written:]

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Scanned %d bytes: %d string literals, %d rewritten",
            len(doc),
            seen,
            rewritten,
        )
    return bytes(out)


def truncate(data: BytesLike, **kwargs: Any) -> bytes:
    """
    Truncates string literals according to ``TruncateConfig(**kwargs)``.
    """
    config = TruncateConfig(**kwargs)

    def _render(literal: StringLiteral) -> bytes:
        return render_truncated(
            literal.content,
            config.max_chars,
            literal.start,
            literal.end,
            config.padding,
        )

    return transform_strings(data, _render, value_only=config.value_only)


def truncate_all_strings(data: BytesLike, max_chars: int) -> bytes:
    """Truncates every string literal, object keys included."""
    return truncate(data, max_chars=max_chars)


def truncate_value_strings(data: BytesLike, max_chars: int) -> bytes:
    """Truncates string values only; object keys are left as they are."""
    return truncate(data, max_chars=max_chars, value_only=True)


__all__ = [
    "Container",
    "HotPathStats",
    "KVInfo",
    "Masking",
    "StringLiteral",
    "StringScanner",
    "Transformer",
    "TruncateConfig",
    "UnclosedStringError",
    "clear_hot_path_stats",
    "default_mask",
    "default_string_transformer",
    "get_hot_path_stats",
    "is_key",
    "render_truncated",
    "transform_strings",
    "truncate",
    "truncate_all_strings",
    "truncate_value_strings",
]
