"""
Shlex: a word splitter and a quoting string builder in one reusable object.

Splitting::

    s = Shlex(b"cc -o 'hello world' main.c")
    for token in s:
        print(bytes(token))
    s.free()

Joining::

    s = Shlex()
    s.append_quoted(b"foo")
    s.append_quoted(b"Hello, World")
    print(bytes(s.join()))  # foo 'Hello, World'
    s.free()

Both modes share one growing buffer. Every view handed out by next_token()
or join() aliases that buffer and is invalidated by the next call on the
same instance. Calling init() or reset() between inputs reuses the memory
already allocated; free() gives it back.

Allocation failure while growing the buffer raises MemoryError, which is
never caught here.
"""

from __future__ import annotations

from collections.abc import Iterable

from shwords.core import quoter
from shwords.core.buffer import Buffer
from shwords.core.scanner import Scanner

# surrogateescape lets arbitrary bytes survive the str round trip
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def _as_bytes(word) -> memoryview:
    """Byte view of a bytes-like word. Raises TypeError for str and friends."""
    return memoryview(word).cast("B")


class Shlex(Scanner):
    """Splits words out of a source range and joins words into a quoted string."""

    def reset(self) -> None:
        """Forget the source and the buffer contents, keeping the allocation.

        Use this before joining on an instance that was just splitting:
        the last token is still sitting in the buffer.
        """
        self.source = None
        self.start = 0
        self.end = 0
        self.point = 0
        self.buffer.reset()

    def free(self) -> None:
        """Deallocate the buffer and zero out the instance."""
        self.reset()
        self.buffer.release()

    def append_quoted(self, word) -> None:
        """Append word to the joined string, quoting shell-unsafe bytes."""
        quoter.append_quoted(self.buffer, _as_bytes(word))

    def append_quoted_sized(self, word, n: int) -> None:
        """Same as append_quoted() but only for the first n bytes of word."""
        data = _as_bytes(word)
        if not 0 <= n <= len(data):
            raise ValueError(f"size {n} out of range for {len(data)} bytes")
        quoter.append_quoted(self.buffer, data[:n])

    def append_quoted_cstr(self, word) -> None:
        """Same as append_quoted() but stops at the first NUL byte."""
        data = _as_bytes(word)
        n = bytes(data).find(0)
        if n < 0:
            n = len(data)
        quoter.append_quoted(self.buffer, data[:n])

    def join(self) -> memoryview:
        """Finish the joined string and return a view of it.

        The buffer is reset right away, so more append_quoted() calls start a
        fresh string. Copy the result with bytes() if you need to keep it.
        """
        return quoter.join(self.buffer)

    def __enter__(self) -> Shlex:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.free()


def split_words(source, start: int = 0, end: int | None = None) -> list[bytes]:
    """Split source into a list of owned words."""
    with Shlex(source, start, end) as s:
        return [bytes(token) for token in s]


def join_words(words: Iterable) -> bytes:
    """Join words into a single string that splits back into them."""
    with Shlex() as s:
        for word in words:
            s.append_quoted(word)
        return bytes(s.join())


def quote(word) -> bytes:
    """Quote one word for safe use in a POSIX shell."""
    return quoter.quote(_as_bytes(word))


def split_str(text: str) -> list[str]:
    """Text counterpart of split_words()."""
    source = text.encode(TEXT_ENCODING, TEXT_ERRORS)
    return [word.decode(TEXT_ENCODING, TEXT_ERRORS) for word in split_words(source)]


def join_str(words: Iterable[str]) -> str:
    """Text counterpart of join_words()."""
    joined = join_words(word.encode(TEXT_ENCODING, TEXT_ERRORS) for word in words)
    return joined.decode(TEXT_ENCODING, TEXT_ERRORS)
