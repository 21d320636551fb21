"""termview's Configuration"""

from __future__ import annotations

import json
import logging as _logging
import os
from dataclasses import dataclass, field
from os import path
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from . import logging, notify
from .cancel import DEFAULT_INTERRUPT_TIMEOUT


class ConfigOptions(dict):
    """Config options store

    * Subscription with an option name returns the corresponding :py:class:`Option`
      instance.
    * Attribute reference with a variable name ('s/ /_/g') returns the option's current
      value.
    * Attribute reference with a "private" name ('s/ /_/g' and preceded by '_') returns
      the option's default value.
    """

    def _attr_to_option(self, attr: str) -> Tuple[Option, str]:
        default = attr.startswith("_")
        name = attr.replace("_", " ")
        if default:
            name = name[1:]
        try:
            return self[name], "default" if default else "value"
        except KeyError:
            raise AttributeError(f"Ain't no such config option as {name!r}") from None

    def __getattr__(self, attr: str):
        return getattr(*self._attr_to_option(attr))

    def __setattr__(self, attr: str, value: Any):
        setattr(*self._attr_to_option(attr), value)

    def reset(self) -> None:
        """Restores the default value of every option."""
        for option in self.values():
            option.value = option.default


@dataclass
class Option:
    """A config option."""

    value: Any = field(init=False)
    default: Any
    is_valid: Callable[[Any], bool]
    error_msg: str

    def __post_init__(self):
        self.value = self.default


def is_writable(path: Union[str, os.PathLike]) -> bool:
    """Checks if *path* is a writable file or one that could be created.

    A path to a directory is never writable.
    """
    path = Path(path).expanduser()
    try:
        if path.exists():
            return path.is_file() and os.access(path, os.W_OK)
        # The closest existing ancestor decides
        parent = next((parent for parent in path.parents if parent.exists()), None)
        return bool(parent and parent.is_dir() and os.access(parent, os.W_OK))
    except OSError:  # Fails to stat some directories
        return False


def get_log_function(level: str) -> Callable[[str], None]:
    def log(msg: str) -> None:
        if logging.VERBOSE is None:  # logging not yet initialized
            notify.notify(msg, notify_level, "config", verbose=verbose)
        else:
            logging.log(msg, _logger, log_level, "config", verbose=verbose)

    notify_level = getattr(notify, level)
    log_level = getattr(_logging, level)
    verbose = level == "INFO"

    return log


def init_config() -> None:
    """Initializes user configuration."""
    if user_config_file:
        load_config(user_config_file)
    else:
        load_xdg_config()


def load_config(config_file: str) -> bool:
    """Loads a user config file.

    Returns:
        ``True`` if the file was read. Otherwise, ``False``.

    Unknown options are warned about and invalid values are reported, leaving the
    former values in place.
    """
    try:
        with open(config_file) as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        error(f"Failed to load {config_file!r} ({type(e).__name__}: {e}).")
        return False

    if not isinstance(config, dict):
        error(f"Failed to load {config_file!r} (not a JSON object).")
        return False

    for name, value in config.items():
        try:
            option = config_options[name]
        except KeyError:
            warn(f"Unknown option {name!r} (in {config_file!r}).")
        else:
            if option.is_valid(value):
                option.value = value
            else:
                value_repr = "null" if value is None else repr(value)
                value_type_name = "null" if value is None else type(value).__name__
                error(
                    f"Invalid type/value for {name!r}; {option.error_msg} "
                    f"(got: {value_repr} of type {value_type_name!r})."
                )
                option_repr = "null" if option.value is None else repr(option.value)
                info(f"Using former value: {option_repr}.")

    return True


def xdg_config_files() -> List[str]:
    """Returns the existing config files in the XDG config directories, least
    important first.

    ``$XDG_CONFIG_HOME`` comes last since it takes precedence over
    ``$XDG_CONFIG_DIRS``. Relative directories are ignored.
    """
    config_dirs = os.environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"
    files = [
        path.join(config_dir, "termview", "config.json")
        for config_dir in reversed(config_dirs.split(":"))
        if path.isabs(config_dir)
    ]
    files.append(xdg_config_file)

    return [file for file in files if path.isfile(file)]


def load_xdg_config() -> None:
    """Loads user config files found in the XDG config directories."""
    for config_file in xdg_config_files():
        load_config(config_file)


def store_config(config_file: str) -> bool:
    """Writes the options whose values differ from the defaults to a file.

    Returns:
        ``True`` if the file was written. Otherwise, ``False``.
    """
    config = {
        name: option.value
        for name, option in config_options.items()
        if option.value != option.default
    }
    try:
        os.makedirs(path.dirname(config_file) or ".", exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(config, f, indent=4)
    except OSError as e:
        error(
            f"Failed to write user config to {config_file!r} "
            f"({type(e).__name__}: {e})."
        )
        return False

    return True


error = get_log_function("ERROR")
info = get_log_function("INFO")
warn = get_log_function("WARNING")

user_config_file: Optional[str] = None
xdg_config_file = path.join(
    os.environ.get("XDG_CONFIG_HOME", path.join(path.expanduser("~"), ".config")),
    "termview",
    "config.json",
)

config_options = {
    "color mode": Option(
        "auto",
        lambda x: x in {"auto", "direct", "indexed"},
        "must be one of 'auto', 'direct', 'indexed'",
    ),
    "frame duration": Option(
        None,
        lambda x: x is None or isinstance(x, float) and x > 0.0,
        "must be `null` or a float greater than zero",
    ),
    "interrupt timeout": Option(
        DEFAULT_INTERRUPT_TIMEOUT,
        lambda x: isinstance(x, float) and x > 0.0,
        "must be a float greater than zero",
    ),
    "log file": Option(
        path.join("~", ".termview", "termview.log"),
        lambda x: isinstance(x, str) and is_writable(x),
        "must be a string containing a writable/creatable file path",
    ),
    "loop": Option(
        True,
        lambda x: isinstance(x, bool),
        "must be a boolean",
    ),
    "transparent": Option(
        False,
        lambda x: isinstance(x, bool),
        "must be a boolean",
    ),
}
config_options = ConfigOptions(config_options)

_logger = _logging.getLogger(__name__)
