"""Configuration tree and its collaborators.

This package provides the ConfigNode tree together with loading, environment
overlay, merging and export utilities.
"""

from .core import ConfigNode
from .environment import apply_environment, require_env
from .export import ConfigJSONEncoder, dumps
from .loader import load_config, load_configs
from .merge import deep_merge

__all__ = [
    "ConfigNode",
    "ConfigJSONEncoder",
    "apply_environment",
    "deep_merge",
    "dumps",
    "load_config",
    "load_configs",
    "require_env",
]
