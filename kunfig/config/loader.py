"""Loading of JSON configuration files into ConfigNode trees."""

import json
import logging
import os
from typing import Optional

from kunfig.config.core import ConfigNode

EXTENDS_KEY = "extends"


def resolve_config_path(config_filename: str, base_dir: Optional[str] = None) -> str:
    """Resolves the absolute path to a config file.

    Relative names are resolved against `base_dir` (the current directory when
    omitted). If the filename doesn't end with .json, it's added automatically.

    Args:
        config_filename: Filename or path of the config.
        base_dir: Base directory for resolving relative paths.

    Returns:
        Absolute path to the config file.
    """
    if not config_filename.endswith(".json"):
        config_filename += ".json"
    if os.path.isabs(config_filename):
        return config_filename
    return os.path.abspath(os.path.join(base_dir or os.getcwd(), config_filename))


def _load_json(path: str) -> dict:
    """Loads a JSON file whose root must be an object.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the root of the document is not an object.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root in {path} must be an object, got {type(data).__name__}")
    return data


def _load_with_inheritance(path: str, chain: tuple) -> ConfigNode:
    if path in chain:
        cycle = " -> ".join(os.path.basename(p) for p in chain + (path,))
        raise ValueError(f"Circular 'extends' in configuration files: {cycle}")

    config = ConfigNode(_load_json(path))
    logging.getLogger("verbose").info(f"Loaded configuration file: {path}")

    if not config.has(EXTENDS_KEY):
        return config
    parents = config.get(EXTENDS_KEY)
    config.remove(EXTENDS_KEY)

    if parents is None:
        return config
    if isinstance(parents, str):
        parents = [parents]
    elif isinstance(parents, ConfigNode) and parents._sequence:
        parents = parents.values()
    if not isinstance(parents, list) or not all(isinstance(parent, str) for parent in parents):
        raise ValueError(f"'{EXTENDS_KEY}' in {path} must be a file name or a list of file names")

    resolved = ConfigNode()
    for parent in parents:
        parent_path = resolve_config_path(parent, os.path.dirname(path))
        resolved.mix(_load_with_inheritance(parent_path, chain + (path,)))
    resolved.mix(config)
    return resolved


def load_config(config_filename: str, base_dir: Optional[str] = None) -> ConfigNode:
    """Loads a JSON config and handles 'extends' for inheritance.

    The 'extends' key names one or more base files, resolved relative to the
    file that extends them. Bases are merged in order and the extending file
    is merged on top; the 'extends' key itself is dropped.

    Args:
        config_filename: Filename or path of the config.
        base_dir: Base directory for resolving a relative `config_filename`.

    Returns:
        The fully resolved configuration tree.

    Raises:
        FileNotFoundError: If a file in the chain does not exist.
        ValueError: If a root is not an object, an 'extends' value is not a
            file name or list of file names, or the chain is circular.
    """
    return _load_with_inheritance(resolve_config_path(config_filename, base_dir), ())


def load_configs(*config_filenames: str, base_dir: Optional[str] = None) -> ConfigNode:
    """Loads several config files and merges them left to right."""
    config = ConfigNode()
    for config_filename in config_filenames:
        config.mix(load_config(config_filename, base_dir))
    return config
