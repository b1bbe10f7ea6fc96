"""Command-line front end for shwords.

Commands:
- split: split text into shell words, one per line (or NUL-terminated with -0)
- join: quote words into a single line that splits back into them
- demo: run the splitting/joining showcase

Input bytes come from arguments, a file or stdin; results go to stdout as raw
bytes, so non-UTF-8 input survives untouched.

Exit codes:
- 0: Success.
- 1: Configuration error.
- 2: Usage error.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import BinaryIO

from shwords import __version__
from shwords.core.config import (
    DEFAULT_ENCODING,
    Config,
    configure_logging,
    load_config,
    log_debug,
    log_event,
)
from shwords.core.lexer import TEXT_ERRORS, Shlex

DEMO_SOURCES = [
    b"Foo Bar",
    b"Foo\\ Bar",
    b"Foo\\ \\ Bar",
    b"-foo -bar -baz",
    b"'-foo -bar -baz'",
    b"\"Hello, World\"     'Foo Bar'",
    b'-I"./raylib/" -C link-args="-L\\"./hello world\\" -lm -lc" -O3',
]

DEMO_JOINS = [
    [b"foo", b"bar", b"baz"],
    [b"foo", b"bar baz"],
    [b"foo", b"bar", b"baz", b"Hello, 'World'"],
    [b"a'b"],
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shwords",
        description="Split and join POSIX shell words without running a shell.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="config file (skips the usual lookup)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    split = sub.add_parser("split", help="split text into words")
    split.add_argument("text", nargs="*", help="text to split (default: stdin)")
    split.add_argument("-f", "--file", type=Path, help="read the text from FILE")
    split.add_argument("-0", "--null", action="store_true", help="NUL-terminate output words")

    join = sub.add_parser("join", help="join words into one quoted line")
    join.add_argument("words", nargs="*", help="words to join")
    join.add_argument(
        "-0", "--null", action="store_true", help="read NUL-separated words from stdin"
    )

    sub.add_parser("demo", help="show splitting and joining examples")
    return parser


def _split(args, config: Config, shlex: Shlex, stdin: BinaryIO, stdout: BinaryIO) -> None:
    encoding = config.encoding or DEFAULT_ENCODING
    if args.file is not None:
        source = args.file.read_bytes()
    elif args.text:
        source = " ".join(args.text).encode(encoding, TEXT_ERRORS)
    else:
        source = stdin.read()

    terminator = b"\0" if args.null or config.null else b"\n"
    shlex.init(source)
    count = 0
    for token in shlex:
        stdout.write(token)
        stdout.write(terminator)
        count += 1
    log_event("split", text=source.decode(encoding, "replace"), words=count)


def _read_null_words(stdin: BinaryIO) -> list[bytes]:
    data = stdin.read()
    if not data:
        return []
    words = data.split(b"\0")
    # A final terminator does not start another word
    if words[-1] == b"":
        words.pop()
    return words


def _join(args, config: Config, shlex: Shlex, stdin: BinaryIO, stdout: BinaryIO) -> None:
    encoding = config.encoding or DEFAULT_ENCODING
    if args.null or (config.null and not args.words):
        words = _read_null_words(stdin)
    else:
        words = [word.encode(encoding, TEXT_ERRORS) for word in args.words]

    shlex.reset()
    for word in words:
        shlex.append_quoted(word)
    joined = shlex.join()
    stdout.write(joined)
    stdout.write(b"\n")
    log_event("join", text=bytes(joined).decode(encoding, "replace"), words=len(words))


def run_demo(shlex: Shlex, stdout: BinaryIO) -> None:
    """Print the splitting, joining and splitting-of-joined showcase."""
    stdout.write(b"=== SPLITTING ===\n")
    for i, source in enumerate(DEMO_SOURCES):
        if i > 0:
            stdout.write(b"---\n")
        shlex.init(source)
        for token in shlex:
            stdout.write(b"   " + token + b"\n")
    stdout.write(b"\n")

    stdout.write(b"=== JOINING ===\n")
    shlex.reset()
    for words in DEMO_JOINS:
        for word in words:
            shlex.append_quoted(word)
        stdout.write(b"    " + shlex.join() + b"\n")
    stdout.write(b"\n")

    stdout.write(b"=== SPLITTING JOINED ===\n")
    for word in DEMO_JOINS[2]:
        shlex.append_quoted(word)
    # The joined view dies with the next call, and init() is about to scan it
    source = bytes(shlex.join())
    shlex.init(source)
    for token in shlex:
        stdout.write(b"    " + token + b"\n")
    log_debug("demo", sources=len(DEMO_SOURCES), joins=len(DEMO_JOINS))


def main(
    argv: list[str] | None = None,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    if stdin is None:
        stdin = sys.stdin.buffer
    if stdout is None:
        stdout = sys.stdout.buffer

    try:
        config = load_config(Path.cwd(), args.config)
    except (OSError, ValueError) as e:
        print(f"shwords: config error: {e}", file=sys.stderr)
        return 1
    if args.verbose:
        config.verbose = True
    configure_logging(config)
    log_debug("config_loaded", command=args.command, log=str(config.log))

    with Shlex() as shlex:
        if args.command == "split":
            _split(args, config, shlex, stdin, stdout)
        elif args.command == "join":
            _join(args, config, shlex, stdin, stdout)
        else:
            run_demo(shlex, stdout)
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
