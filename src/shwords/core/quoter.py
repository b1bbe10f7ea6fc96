"""Shell quoting for word joining."""

from __future__ import annotations

from shwords.core.buffer import Buffer

# Punctuation that never needs quoting, on top of ASCII letters and digits
SAFE_PUNCTUATION = b"_@%+=:,./-"

SAFE_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyz"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    b"0123456789" + SAFE_PUNCTUATION
)

# Close the single quote, emit ' inside double quotes, reopen the single quote
ESCAPED_SINGLE_QUOTE = b"'\"'\"'"

EMPTY_WORD = b"''"

SPACE = ord(" ")
SINGLE_QUOTE = ord("'")


def needs_quoting(word: bytes) -> bool:
    """Return True if word contains a byte outside the safe set."""
    for byte in word:
        if byte not in SAFE_BYTES:
            return True
    return False


def append_quoted(buf: Buffer, word: bytes) -> None:
    """Append word to buf, quoted if needed and space-separated from any previous word.

    Uses single quotes (no escape processing inside them), with embedded
    single quotes written as '"'"'. Empty words become ''.
    """
    if buf.count > 0:
        buf.append(SPACE)

    if not word:
        buf.extend(EMPTY_WORD)
        return

    if not needs_quoting(word):
        buf.extend(word)
        return

    buf.append(SINGLE_QUOTE)
    for byte in word:
        if byte == SINGLE_QUOTE:
            buf.extend(ESCAPED_SINGLE_QUOTE)
        else:
            buf.append(byte)
    buf.append(SINGLE_QUOTE)


def join(buf: Buffer) -> memoryview:
    """Terminate the accumulated string and reset buf for the next join.

    The returned view stays readable until buf is written to again.
    """
    length = buf.count
    buf.terminate()
    buf.reset()
    return buf.view(length)


def quote(word: bytes) -> bytes:
    """Quote a single word, returning an owned copy."""
    buf = Buffer()
    append_quoted(buf, word)
    return buf.tobytes()
