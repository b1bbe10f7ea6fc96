"""shwords configuration and logging setup."""

import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path

import structlog

USER_CONFIG = Path.home() / ".shwords" / "config"
PROJECT_CONFIG_NAME = ".shwords"
ENV_CONFIG = "SHWORDS_CONFIG"

DEFAULT_ENCODING = "utf-8"


@dataclass
class Config:
    """Parsed configuration."""

    null: bool = False  # NUL-separated words on stdin/stdout
    verbose: bool = False
    log: Path | None = None  # None = no logging
    log_full: bool = False  # log the raw input too (requires log path)
    encoding: str | None = None  # None = DEFAULT_ENCODING
    """Encoding used to turn command-line text into bytes."""


# === Config Loading ===


def _find_project_config(cwd: Path) -> Path | None:
    """Walk up from cwd to find .shwords file."""
    current = cwd.resolve()
    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # reached root
            return None
        current = parent


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Settings in overlay win if set."""
    return replace(
        base,
        null=overlay.null if overlay.null else base.null,
        verbose=overlay.verbose if overlay.verbose else base.verbose,
        log=overlay.log if overlay.log is not None else base.log,
        log_full=overlay.log_full if overlay.log_full else base.log_full,
        encoding=overlay.encoding
        if overlay.encoding is not None
        else base.encoding,
    )


def _load_file(config: Config, path: Path) -> Config:
    try:
        overlay = parse_config(path.read_text())
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from None
    return _merge_configs(config, overlay)


def load_config(cwd: Path, override: Path | None = None) -> Config:
    """Load config from ~/.shwords/config, .shwords, and $SHWORDS_CONFIG. Last one wins.

    An explicit override path replaces the whole lookup.
    """
    if override is not None:
        return _load_file(Config(), override)

    config = Config()

    # 1. User config (lowest priority)
    if USER_CONFIG.is_file():
        config = _load_file(config, USER_CONFIG)

    # 2. Project config (walk up from cwd)
    project_path = _find_project_config(cwd)
    if project_path is not None:
        config = _load_file(config, project_path)

    # 3. Env override (highest priority)
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _load_file(config, env_config_path)

    return config


def parse_config(text: str) -> Config:
    """Parse config text into Config object. Raises ValueError on syntax errors."""
    settings: dict[str, bool | str | Path] = {}

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        directive = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        try:
            if directive == "set":
                _apply_setting(settings, rest)
            else:
                raise ValueError(f"unknown directive '{directive}'")
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    return Config(
        null=settings.get("null", False),
        verbose=settings.get("verbose", False),
        log=settings.get("log"),
        log_full=settings.get("log_full", False),
        encoding=settings.get("encoding"),
    )


def _apply_setting(settings: dict[str, bool | str | Path], rest: str) -> None:
    """Parse and apply a 'set' directive. Raises ValueError on invalid setting."""
    if not rest:
        raise ValueError("'set' requires a setting name")

    parts = rest.split(None, 1)
    key = parts[0].lower()
    value = parts[1] if len(parts) > 1 else None
    key_normalized = key.replace("-", "_")

    # Boolean settings (no value required)
    if key_normalized in ("null", "verbose", "log_full"):
        if value is not None:
            raise ValueError(f"'{key}' takes no value")
        settings[key_normalized] = True

    # Path settings
    elif key_normalized == "log":
        if value is None:
            raise ValueError("'log' requires a path")
        settings[key_normalized] = Path(value).expanduser()

    elif key_normalized == "encoding":
        if value is None:
            raise ValueError("'encoding' requires a codec name")
        try:
            "".encode(value)
        except LookupError:
            raise ValueError(f"unknown encoding '{value}'") from None
        settings[key_normalized] = value

    else:
        raise ValueError(f"unknown setting '{key}'")


# === Logging ===

_logger: structlog.BoundLogger | None = None
_log_full = False


class _Tee:
    """File-like fan-out so one PrintLogger can feed several streams."""

    def __init__(self, *streams):
        self.streams = streams

    def write(self, data: str) -> None:
        for stream in self.streams:
            stream.write(data)

    def flush(self) -> None:
        for stream in self.streams:
            stream.flush()


def configure_logging(config: Config) -> None:
    """Configure logging based on config settings. Call once at startup.

    JSON lines go to the configured log file; verbose mode lowers the level
    to debug and also writes to stderr. Without either, logging stays off.
    """
    global _logger, _log_full
    _log_full = config.log_full

    if config.log is None and not config.verbose:
        _logger = None
        return

    level = logging.DEBUG if config.verbose else logging.INFO
    streams = []
    if config.log is not None:
        # Ensure log directory exists
        config.log.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log)
        file_handler.setLevel(level)
        logging.basicConfig(format="%(message)s", handlers=[file_handler], level=level, force=True)
        streams.append(file_handler.stream)
    if config.verbose:
        streams.append(sys.stderr)
    stream = streams[0] if len(streams) == 1 else _Tee(*streams)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
    _logger = structlog.get_logger()


def log_event(event: str, text: str | None = None, **fields) -> None:
    """Log an operation. No-op if logging not configured.

    The raw input text is only recorded when log-full is set.
    """
    if _logger is None:
        return
    if _log_full and text is not None:
        fields["text"] = text
    _logger.info(event, **fields)


def log_debug(event: str, **fields) -> None:
    if _logger is None:
        return
    _logger.debug(event, **fields)
