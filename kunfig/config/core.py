import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Iterator, Tuple, Union

from kunfig.config.paths import split_path


def _is_key(key: Any) -> bool:
    """Returns True for usable keys, logging the ones that are ignored."""
    if isinstance(key, str):
        return True
    logging.getLogger("verbose").debug(f"Ignoring non-string configuration key: {key!r}")
    return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _normalize(value: Any) -> Any:
    """Turns structured data into a child node; everything else is kept as-is."""
    if isinstance(value, ConfigNode):
        return value
    if isinstance(value, Mapping) or _is_sequence(value):
        return ConfigNode(value)
    return value


def _is_mergeable(value: Any) -> bool:
    """Only mapping-shaped child nodes are merged key by key; lists are replaced whole."""
    return isinstance(value, ConfigNode) and not value._sequence


class ConfigNode:
    """A nested, insertion-ordered tree of configuration values.

    Every level of the tree is a ConfigNode. Values assigned to a node are
    normalized on the way in: mappings, lists and tuples become child nodes,
    everything else is stored unchanged. Keys are strings; a key containing a
    "." is a dotted path that descends through child nodes.

    Reads never raise for missing keys. They return the fallback (None by
    default), so `config["server.port"] or 8080` is a valid pattern. Keys that
    are not strings are ignored by every operation.

    The same four primitives (has, get, set, remove) back the index operator
    and attribute access, e.g. `config["db.host"]`, `config.db.host`.
    """

    __slots__ = ("_values", "_sequence")

    def __init__(self, values: Union[Mapping, list, tuple, "ConfigNode", None] = None):
        """Builds a node from plain nested data.

        Keys of the given mapping are stored literally, so a key holding a "."
        is not expanded into a path.

        Args:
            values: A mapping, a list/tuple, another node (copied), or None.

        Raises:
            TypeError: If values is a scalar.
        """
        self._values = {}
        self._sequence = False
        if values is None:
            return
        if isinstance(values, ConfigNode):
            other = values.copy()
            self._values = other._values
            self._sequence = other._sequence
            return

        if _is_sequence(values):
            self._sequence = True
            items = ((str(index), value) for index, value in enumerate(values))
        elif isinstance(values, Mapping):
            items = values.items()
        else:
            raise TypeError(f"ConfigNode expects a mapping or a sequence, got {type(values).__name__}")

        for key, value in items:
            if _is_key(key):
                self._store(key, value)

    @classmethod
    def from_state(cls, state: Mapping) -> "ConfigNode":
        """Restores a node from an exported `all()` snapshot."""
        return cls(state)

    def _store(self, key: str, value: Any):
        self._values[key] = _normalize(value)

    def has(self, key: str) -> bool:
        """Checks whether a key or dotted path exists.

        A path cannot descend through a scalar, so "a.b" is missing when "a"
        holds a plain value.

        Args:
            key: A flat key or a dotted path.

        Returns:
            True if the slot exists, even when it holds None.
        """
        if not _is_key(key):
            return False
        head, rest = split_path(key)
        if head not in self._values:
            return False
        if rest is None:
            return True
        child = self._values[head]
        return isinstance(child, ConfigNode) and child.has(rest)

    def get(self, key: str, fallback: Any = None) -> Any:
        """Returns the value at a key or dotted path.

        A path ending on a child node returns the node itself, not its
        exported contents. Use `has` first when a stored None must be told
        apart from a missing key.

        Args:
            key: A flat key or a dotted path.
            fallback: Returned when the key is missing or the path is blocked
                by a scalar.

        Returns:
            The stored scalar or child node, or the fallback.
        """
        if not _is_key(key):
            return fallback
        head, rest = split_path(key)
        if head not in self._values:
            return fallback
        value = self._values[head]
        if rest is None:
            return value
        if not isinstance(value, ConfigNode):
            return fallback
        return value.get(rest, fallback)

    def set(self, key: str, value: Any):
        """Stores a value at a key or dotted path.

        Missing intermediate nodes are created on the way down, and an
        intermediate scalar is replaced by a new empty node.

        Args:
            key: A flat key or a dotted path.
            value: The value to store; mappings and lists become child nodes.
        """
        if not _is_key(key):
            return
        head, rest = split_path(key)
        if rest is None:
            self._store(head, value)
            return
        child = self._values.get(head)
        if not isinstance(child, ConfigNode):
            child = ConfigNode()
            self._values[head] = child
        child.set(rest, value)

    def remove(self, key: str):
        """Deletes the slot at a key or dotted path, with its whole subtree.

        Missing keys, and paths blocked by a scalar, are ignored.
        """
        if not _is_key(key):
            return
        head, rest = split_path(key)
        if head not in self._values:
            return
        if rest is None:
            del self._values[head]
            return
        child = self._values[head]
        if isinstance(child, ConfigNode):
            child.remove(rest)

    def count(self) -> int:
        """Returns the number of direct slots."""
        return len(self._values)

    def all(self) -> Union[dict, list]:
        """Exports the tree as plain nested data.

        Child nodes are exported recursively. Nodes built from a list come back
        as lists as long as their keys are still "0".."n-1" in order. The result
        shares no containers with the tree.

        Returns:
            A dict (or a list for list-built nodes).
        """
        exported = {}
        for key, value in self._values.items():
            exported[key] = value.all() if isinstance(value, ConfigNode) else value
        if self._is_list_shaped():
            return list(exported.values())
        return exported

    def _is_list_shaped(self) -> bool:
        if not self._sequence:
            return False
        return list(self._values) == [str(index) for index in range(len(self._values))]

    def mix(self, other: Union["ConfigNode", Mapping]):
        """Merges another tree into this one in place.

        Entries of `other` are applied in its order. When both sides hold a
        mapping-shaped child node under the same key, the children are merged
        recursively. In every other case the incoming value replaces the
        existing one, so lists are overwritten whole rather than merged by
        index. Child nodes taken over from `other` are stored by reference.

        Args:
            other: A node, or plain nested data that is normalized first.
        """
        if not isinstance(other, ConfigNode):
            other = ConfigNode(other)
        for key, value in other:
            if key in self._values:
                preset = self._values[key]
                if _is_mergeable(preset) and _is_mergeable(value):
                    preset.mix(value)
                    continue
            self._store(key, value)

    def copy(self) -> "ConfigNode":
        """Returns an independent deep copy of the tree."""
        return deepcopy(self)

    def keys(self) -> list:
        return list(self._values)

    def values(self) -> list:
        return list(self._values.values())

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        """Yields (key, value) pairs of this level in insertion order."""
        for key, value in self._values.items():
            yield key, value

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.remove(key)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails. Dunders and internal slots are never keys.
        if name in ConfigNode.__slots__ or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any):
        if name in ConfigNode.__slots__:
            object.__setattr__(self, name, value)
        elif hasattr(type(self), name):
            raise AttributeError(f"'{name}' is a ConfigNode attribute; use node[{name!r}] to store it as a key")
        else:
            self.set(name, value)

    def __delattr__(self, name: str):
        if name in ConfigNode.__slots__:
            raise AttributeError(f"Cannot delete internal attribute '{name}'")
        if hasattr(type(self), name):
            raise AttributeError(f"'{name}' is a ConfigNode attribute; use del node[{name!r}] to remove the key")
        self.remove(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigNode):
            return NotImplemented
        return self.all() == other.all()

    __hash__ = None  # mutable

    def __reduce__(self):
        # Raw slots rather than all(), so list-built nodes keep their flag after edits.
        return (type(self), (), (self._sequence, list(self._values.items())))

    def __setstate__(self, state: Tuple[bool, list]):
        sequence, pairs = state
        self._sequence = sequence
        self._values = dict(pairs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.all()!r})"
