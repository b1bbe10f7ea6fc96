"""
Shared test fixtures for shwords tests.
"""

import io
import logging

import pytest
import structlog

from shwords.core import config as config_module
from shwords.core.lexer import Shlex


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the real ~/.shwords/config, $SHWORDS_CONFIG and cwd out of tests."""
    monkeypatch.setattr(config_module, "USER_CONFIG", tmp_path / "home" / ".shwords" / "config")
    monkeypatch.delenv(config_module.ENV_CONFIG, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield workdir

    config_module._logger = None
    config_module._log_full = False
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        # Only the handlers configure_logging() installs; pytest keeps its own
        if isinstance(handler, logging.FileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def shlex():
    """A fresh Shlex instance, freed after the test."""
    s = Shlex()
    yield s
    s.free()


@pytest.fixture
def split():
    """Split bytes, copying every token out of the buffer."""

    def _split(source: bytes) -> list[bytes]:
        s = Shlex(source)
        return [bytes(token) for token in s]

    return _split


@pytest.fixture
def run():
    """Run the CLI with byte stdin; return (exit code, stdout bytes)."""
    from shwords.shwords import main

    def _run(*argv: str, stdin: bytes = b"") -> tuple[int, bytes]:
        out = io.BytesIO()
        code = main(list(argv), stdin=io.BytesIO(stdin), stdout=out)
        return code, out.getvalue()

    return _run
