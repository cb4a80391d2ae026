"""Environment variable overlay for configuration trees."""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from kunfig.config.core import ConfigNode
from kunfig.config.paths import SEPARATOR

DEFAULT_PREFIX = "KUNFIG"
# Separates the prefix and the path segments in variable names, e.g. KUNFIG__APP__DB__HOST.
ENV_SEPARATOR = "__"


def env_key_to_path(name: str, prefix: str = DEFAULT_PREFIX) -> Optional[str]:
    """Converts a variable name to a dotted path, or None if it lacks the prefix.

    `KUNFIG__APP__DB__HOST` becomes `app.db.host`.
    """
    marker = f"{prefix}{ENV_SEPARATOR}"
    if not name.startswith(marker) or len(name) == len(marker):
        return None
    segments = name[len(marker) :].split(ENV_SEPARATOR)
    return SEPARATOR.join(segment.lower() for segment in segments)


def apply_environment(
    config: ConfigNode,
    prefix: str = DEFAULT_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None,
) -> int:
    """Writes prefixed environment variables into a configuration tree.

    Values are stored as strings; no type conversion is attempted.

    Args:
        config: The tree to update in place.
        prefix: Only variables named `<prefix>__...` are applied.
        environ: Variables to read. Defaults to `os.environ`, after loading
            `dotenv_path` (or a `.env` file found by python-dotenv) into it.
        dotenv_path: Optional path of a .env file.

    Returns:
        The number of values applied.
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    applied = 0
    for name in sorted(environ):
        path = env_key_to_path(name, prefix)
        if path is None:
            continue
        config.set(path, environ[name])
        applied += 1

    if applied:
        logging.getLogger("verbose").info(f"Applied {applied} configuration value(s) from {prefix}{ENV_SEPARATOR}* variables.")
    return applied


def require_env(name: str) -> str:
    """Returns an environment variable that must be set.

    Raises:
        ValueError: If the variable is not set in the environment.
    """
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing {name}. Please set this in your .env file.")
    return value
