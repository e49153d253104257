from typing import Any, Dict, Sequence, Tuple

from .errors import ConfigurationError, PathConflictError


def split_path(key: str) -> Tuple[str, ...]:
    if not isinstance(key, str) or not key:
        raise ConfigurationError(f"Destination key must be a non-empty string, got {key!r}")
    parts = tuple(key.split('.'))
    if any(p == '' for p in parts):
        raise ConfigurationError(f"Empty path segment in destination key '{key}'")
    return parts


def set_path(tree: Dict[str, Any], segments: Sequence[str], value: Any) -> None:
    node = tree
    for i, seg in enumerate(segments[:-1]):
        child = node.get(seg)
        if child is None:
            child = node[seg] = {}
        elif not isinstance(child, dict):
            raise PathConflictError('.'.join(segments[:i + 1]))
        node = child
    leaf = segments[-1]
    if isinstance(node.get(leaf), dict):
        # would drop a sub-tree already written below this key
        raise PathConflictError('.'.join(segments))
    node[leaf] = value


def get_path(tree: Dict[str, Any], segments: Sequence[str], default: Any = None) -> Any:
    node = tree
    for seg in segments:
        if not isinstance(node, dict) or seg not in node:
            return default
        node = node[seg]
    return node
