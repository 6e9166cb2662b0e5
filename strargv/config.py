"""Options file loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import toml
from platformdirs import user_config_dir

from .tokenizer import DEFAULT_SEPARATORS, TokenizerException, tokenize


# Custom exceptions
class ConfigException(Exception):
    """Base exception for options file errors."""

    pass


class InvalidConfig(ConfigException):
    """Raised when an options file cannot be read or has the wrong shape."""

    pass


@dataclass
class OptionError:
    """Represents an option string that failed to tokenize."""

    message: str
    key: str
    path: str


@dataclass
class OptionsFile:
    """Named option strings loaded from a TOML file."""

    path: str
    separators: str = DEFAULT_SEPARATORS
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class OptionsStats:
    """Statistics about a validated options file."""

    option_count: int
    token_count: int


def get_config_dir() -> Path:
    """Get the per-user configuration directory."""
    return Path(user_config_dir("strargv"))


def default_config_path() -> str:
    """Get the default options file path."""
    return str(get_config_dir() / "options.toml")


def load_options(path: Optional[str] = None) -> OptionsFile:
    """
    Load named option strings from a TOML file.

    Args:
        path: The options file (default: options.toml in the user config dir)

    Returns:
        The parsed options file

    Raises:
        InvalidConfig: If the file is missing, not TOML, or has non-string values
    """
    if path is None:
        path = default_config_path()

    if not os.path.isfile(path):
        raise InvalidConfig(f"Options file '{path}' does not exist")

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise InvalidConfig(f"Cannot read options file '{path}': {e}")

    separators = content.get("separators", DEFAULT_SEPARATORS)
    if not isinstance(separators, str):
        raise InvalidConfig(f"'separators' in '{path}' must be a string")
    if not separators.isascii():
        raise InvalidConfig(f"'separators' in '{path}' must be ASCII characters")

    options = content.get("options", {})
    if not isinstance(options, dict):
        raise InvalidConfig(f"'options' in '{path}' must be a table")

    for key, value in options.items():
        if not isinstance(value, str):
            raise InvalidConfig(f"Option '{key}' in '{path}' must be a string")

    return OptionsFile(path=path, separators=separators, options=dict(options))


def check_options(options_file: OptionsFile) -> tuple[OptionsStats, list[OptionError]]:
    """
    Tokenize every option string in a file, collecting failures.

    Returns:
        Statistics for the file and the list of errors, in file order
    """
    errors: list[OptionError] = []
    token_count = 0

    for key, value in options_file.options.items():
        try:
            with tokenize(value, options_file.separators) as argv:
                token_count += len(argv)
        except TokenizerException as e:
            errors.append(
                OptionError(message=type(e).__name__, key=key, path=options_file.path)
            )

    stats = OptionsStats(
        option_count=len(options_file.options), token_count=token_count
    )
    return stats, errors
