"""Tests for shell quoting and joining."""

import pytest

from shwords.core.buffer import Buffer
from shwords.core.quoter import append_quoted, join, needs_quoting, quote


class TestQuote:
    def test_empty_string(self):
        assert quote(b"") == b"''"

    def test_simple_word(self):
        assert quote(b"hello") == b"hello"

    def test_with_spaces(self):
        assert quote(b"hello world") == b"'hello world'"

    def test_with_single_quote(self):
        assert quote(b"a'b") == b"'a'\"'\"'b'"

    def test_only_single_quote(self):
        assert quote(b"'") == b"''\"'\"''"

    @pytest.mark.parametrize(
        "word",
        [
            b"foo-bar_baz.txt",
            b"/path/to/file",
            b"key=value",
            b"user@host:22",
            b"50%",
            b"a+b,c",
            b"ABCxyz0189",
        ],
    )
    def test_safe_words_never_quoted(self, word):
        assert not needs_quoting(word)
        assert quote(word) == word

    @pytest.mark.parametrize(
        "word,expected",
        [
            (b"$HOME", b"'$HOME'"),
            (b"a*b", b"'a*b'"),
            (b"a;b", b"'a;b'"),
            (b"~", b"'~'"),
            (b'say "hi"', b"'say \"hi\"'"),
            (b"back\\slash", b"'back\\slash'"),
            (b"new\nline", b"'new\nline'"),
            (b"caf\xc3\xa9", b"'caf\xc3\xa9'"),
        ],
    )
    def test_special_chars(self, word, expected):
        assert needs_quoting(word)
        assert quote(word) == expected


class TestJoin:
    def _join(self, words):
        buf = Buffer()
        for word in words:
            append_quoted(buf, word)
        return bytes(join(buf))

    def test_simple(self):
        assert self._join([b"foo", b"bar", b"baz"]) == b"foo bar baz"

    def test_with_spaces(self):
        assert self._join([b"foo", b"bar baz"]) == b"foo 'bar baz'"

    def test_embedded_quotes(self):
        words = [b"foo", b"bar", b"baz", b"Hello, 'World'"]
        assert self._join(words) == b"foo bar baz 'Hello, '\"'\"'World'\"'\"''"

    def test_empty_arg(self):
        assert self._join([b"echo", b""]) == b"echo ''"

    def test_empty_list(self):
        assert self._join([]) == b""

    def test_join_terminates_and_resets(self):
        buf = Buffer()
        append_quoted(buf, b"foo")
        result = join(buf)
        assert bytes(result) == b"foo"
        assert buf.count == 0
        assert buf.data[3] == 0

    def test_next_join_starts_fresh(self):
        buf = Buffer()
        append_quoted(buf, b"first")
        join(buf)
        append_quoted(buf, b"second")
        assert bytes(join(buf)) == b"second"

    def test_result_invalidated_by_next_append(self):
        buf = Buffer()
        append_quoted(buf, b"abc")
        result = join(buf)
        append_quoted(buf, b"xyz")
        assert bytes(result) == b"xyz"
