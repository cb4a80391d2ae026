"""Dictionary merging utilities."""

from collections.abc import Mapping

from kunfig.config.core import ConfigNode


def deep_merge(source: Mapping, destination: Mapping) -> dict:
    """Recursively merges two dictionaries, overwriting destination with source values.

    Uses the same rules as `ConfigNode.mix`: nested dictionaries are merged key
    by key, everything else (lists included) is replaced by the source value.
    Neither argument is modified.

    Args:
        source: The dictionary with values to merge.
        destination: The dictionary to be merged into.

    Returns:
        A new merged dictionary.
    """
    merged = ConfigNode(destination)
    merged.mix(ConfigNode(source))
    return merged.all()
