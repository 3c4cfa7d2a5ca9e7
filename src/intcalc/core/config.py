"""
intcalc.toml loading.

The file has three optional tables, [repl], [parser] and [logging]. Missing
keys keep their defaults; present keys must have the right type.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .expression_lang.parser import Associativity

CONFIG_FILENAME = "intcalc.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReplConfig:
    """Interactive session settings."""

    prompt: str = "=> "
    quit_commands: list[str] = field(default_factory=lambda: ["quit", "exit"])
    show_banner: bool = True


@dataclass
class ParserConfig:
    """Tokenizer and parser settings."""

    associativity: Associativity = Associativity.RIGHT
    ignore_whitespace: bool = True
    scan_strings: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class CalcConfig:
    repl: ReplConfig = field(default_factory=ReplConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def find_config(start: Path) -> Path | None:
    """Return ``start/intcalc.toml`` if it exists."""
    candidate = start / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def _get_bool(table: dict, key: str, default: bool, section: str, path: Path) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{path}: {section}.{key} must be true or false, got {value!r}")
    return value


def load_config(path: Path | None = None) -> CalcConfig:
    """
    Load an intcalc.toml file.

    With no path, look in the current directory and fall back to defaults.
    An explicit path must exist.

    Raises:
        ConfigError: If the file is missing, not valid TOML, or has bad values.
    """
    if path is None:
        path = find_config(Path.cwd())
        if path is None:
            return CalcConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    repl_data = data.get("repl", {})
    parser_data = data.get("parser", {})
    logging_data = data.get("logging", {})

    quit_commands = repl_data.get("quit_commands", ["quit", "exit"])
    if not isinstance(quit_commands, list) or not all(isinstance(c, str) for c in quit_commands):
        raise ConfigError(f"{path}: repl.quit_commands must be a list of strings")

    prompt = repl_data.get("prompt", "=> ")
    if not isinstance(prompt, str):
        raise ConfigError(f"{path}: repl.prompt must be a string")

    repl_config = ReplConfig(
        prompt=prompt,
        quit_commands=quit_commands,
        show_banner=_get_bool(repl_data, "show_banner", True, "repl", path),
    )

    associativity = parser_data.get("associativity", "right")
    try:
        associativity = Associativity(str(associativity).lower())
    except ValueError as e:
        raise ConfigError(
            f"{path}: parser.associativity must be 'right' or 'left', got {associativity!r}"
        ) from e

    parser_config = ParserConfig(
        associativity=associativity,
        ignore_whitespace=_get_bool(parser_data, "ignore_whitespace", True, "parser", path),
        scan_strings=_get_bool(parser_data, "scan_strings", True, "parser", path),
    )

    level = str(logging_data.get("level", "WARNING")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"{path}: logging.level must be one of {', '.join(_LOG_LEVELS)}")

    return CalcConfig(
        repl=repl_config,
        parser=parser_config,
        logging=LoggingConfig(level=level),
    )
