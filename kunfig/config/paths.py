"""Dotted path helpers."""

from typing import Optional, Tuple

SEPARATOR = "."


def split_path(key: str) -> Tuple[str, Optional[str]]:
    """Splits a key at its first separator.

    The remainder is None when the key holds no separator. An empty remainder
    (e.g. for "a.") is a real segment and addresses the empty-string key.

    Args:
        key: A flat key or a dotted path such as "app.db.host".

    Returns:
        A (head, rest) tuple.
    """
    head, separator, rest = key.partition(SEPARATOR)
    if not separator:
        return head, None
    return head, rest
