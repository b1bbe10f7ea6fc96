"""Splitting a joined string gives back the joined words."""

import pytest

from shwords import Shlex, join_words, split_words


@pytest.mark.parametrize(
    "words",
    [
        [],
        [b""],
        [b"", b""],
        [b"foo", b"bar", b"baz", b"Hello, 'World'"],
        [b"a'b"],
        [b"'", b"''", b'"', b'""'],
        [b"it's", b'"quoted"', b"mixed'\"quotes"],
        [b"back\\slash", b"\\", b"trailing\\"],
        [b"new\nline", b"tab\there", b"   "],
        [b"$HOME", b"`cmd`", b"$(cmd)", b"*.py", b"a;b|c&d"],
        [b"caf\xc3\xa9", b"\xff\xfe\x80"],
        [b"-I./raylib/", b"-C", b'link-args=-L"./hello world" -lm -lc', b"-O3"],
        [b"x" * 600, b"y'" * 100],
    ],
)
def test_split_of_join_is_identity(words):
    assert split_words(join_words(words)) == words


def test_one_instance_for_both_directions():
    words = [b"foo", b"bar", b"baz", b"Hello, 'World'"]
    with Shlex() as s:
        for word in words:
            s.append_quoted(word)
        source = bytes(s.join())
        s.init(source)
        assert [bytes(token) for token in s] == words


@pytest.mark.parametrize("word", [b"simple", b"a/b/c.txt", b"--flag=value", b"x@y:z"])
def test_safe_word_joins_unchanged(word):
    assert join_words([word]) == word
