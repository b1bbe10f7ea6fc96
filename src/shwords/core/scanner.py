"""
Quote-aware word scanner.

Splits a byte range into words the way a POSIX shell tokenizes them, without
any expansion. Quoting rules follow POSIX.1-2024 section 2.2:

- 2.2.1 an unquoted backslash preserves the literal value of the next byte;
- 2.2.2 single quotes preserve every byte literally, a single quote cannot
  occur inside them;
- 2.2.3 inside double quotes a backslash only escapes ``$``, backquote,
  backslash, newline and ``"``.

Malformed input is never an error: unterminated quotes run to the end of the
source, a trailing unquoted backslash is dropped and a trailing backslash
inside double quotes is kept literally.
"""

from __future__ import annotations

from enum import Enum

from shwords.core.buffer import Buffer

# C isspace() in the "C" locale
WHITESPACE = frozenset(b" \t\n\v\f\r")

# Bytes a backslash escapes inside double quotes (POSIX.1-2024 2.2.3)
DOUBLE_QUOTE_ESCAPES = frozenset(b'$`\\\n"')

BACKSLASH = ord("\\")
SINGLE_QUOTE = ord("'")
DOUBLE_QUOTE = ord('"')


class QuoteState(Enum):
    """Quoting context of the byte under the cursor."""

    UNQUOTED = "unquoted"
    SINGLE_QUOTED = "single"
    DOUBLE_QUOTED = "double"


class Scanner:
    """Pull-based word splitter over an immutable source view.

    The source is never copied or mutated; ``point`` walks the half-open
    range ``[start, end)``. Tokens are written into ``buffer`` and returned
    as borrowed views.
    """

    def __init__(
        self,
        source: bytes | bytearray | memoryview | None = None,
        start: int = 0,
        end: int | None = None,
        buffer: Buffer | None = None,
    ):
        self.buffer = buffer if buffer is not None else Buffer()
        self.source: memoryview | None = None
        self.start = 0
        self.end = 0
        self.point = 0
        if source is not None:
            self.init(source, start, end)

    def init(
        self,
        source: bytes | bytearray | memoryview,
        start: int = 0,
        end: int | None = None,
    ) -> None:
        """Set the source range and put the cursor at its start.

        The buffer is left alone: the next token resets it anyway.
        """
        view = memoryview(source).cast("B")
        if end is None:
            end = len(view)
        if not 0 <= start <= end <= len(view):
            raise ValueError(
                f"invalid source range [{start}, {end}) for {len(view)} bytes"
            )
        self.source = view
        self.start = start
        self.end = end
        self.point = start

    def _skip_whitespace(self) -> None:
        source = self.source
        while self.point < self.end and source[self.point] in WHITESPACE:
            self.point += 1

    def next_token(self) -> memoryview | None:
        """Chop the next word off the source.

        Returns a view of the word (the NUL terminator stays in the buffer),
        or None once only whitespace is left. The view is invalidated by the
        next call on this instance; copy it with ``bytes()`` to keep it.
        """
        if self.source is None:
            return None

        self._skip_whitespace()
        if self.point >= self.end:
            return None

        buf = self.buffer
        buf.reset()
        source = self.source
        end = self.end
        state = QuoteState.UNQUOTED

        while self.point < end:
            byte = source[self.point]

            if state is QuoteState.SINGLE_QUOTED:
                if byte == SINGLE_QUOTE:
                    state = QuoteState.UNQUOTED
                else:
                    buf.append(byte)
                self.point += 1

            elif state is QuoteState.DOUBLE_QUOTED:
                if byte == DOUBLE_QUOTE:
                    state = QuoteState.UNQUOTED
                    self.point += 1
                elif byte == BACKSLASH:
                    self.point += 1
                    # Unfinished escape: keep the backslash and stop here
                    if self.point >= end:
                        buf.append(BACKSLASH)
                        return self._finish()
                    escaped = source[self.point]
                    if escaped not in DOUBLE_QUOTE_ESCAPES:
                        buf.append(BACKSLASH)
                    buf.append(escaped)
                    self.point += 1
                else:
                    buf.append(byte)
                    self.point += 1

            elif state is QuoteState.UNQUOTED:
                if byte == SINGLE_QUOTE:
                    state = QuoteState.SINGLE_QUOTED
                    self.point += 1
                elif byte == DOUBLE_QUOTE:
                    state = QuoteState.DOUBLE_QUOTED
                    self.point += 1
                elif byte == BACKSLASH:
                    self.point += 1
                    # A trailing backslash has nothing to escape and is dropped
                    if self.point < end:
                        buf.append(source[self.point])
                        self.point += 1
                elif byte in WHITESPACE:
                    self.point += 1
                    return self._finish()
                else:
                    buf.append(byte)
                    self.point += 1

            else:
                raise AssertionError(f"unreachable quote state: {state!r}")

        return self._finish()

    def _finish(self) -> memoryview:
        length = self.buffer.count
        self.buffer.terminate()
        return self.buffer.view(length)

    def __iter__(self):
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token
