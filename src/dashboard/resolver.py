"""
Field resolution over the loosely structured all-data payload.

The payload mixes a canonical nested form (`dashboardData.soilData.ph`),
legacy flat aliases at the root (`ph`), and unmodelled extras. A logical
field is resolved by trying each path in order and stopping at the first
value that is present and not None. Falsy values such as 0 or "" count as
resolved.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple, Union

Path = Union[str, Tuple[str, ...]]


def _split(path: Path) -> Tuple[str, ...]:
    if isinstance(path, tuple):
        return path
    return tuple(path.split("."))


def lookup(payload: Any, path: Path) -> Optional[Any]:
    """
    Follow a dotted path through nested mappings.

    Returns None when any step is missing or is not a mapping.
    """
    node = payload
    for part in _split(path):
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def first_present(payload: Any, paths: Sequence[Path]) -> Optional[Any]:
    """Return the value at the first path that resolves, or None."""
    for path in paths:
        value = lookup(payload, path)
        if value is not None:
            return value
    return None


def resolve(payload: Any, *paths: Path, default: Any = None) -> Any:
    """
    Resolve a field through its fallback chain.

    Args:
        payload: Raw payload (any type; non-mappings resolve nothing).
        *paths: Canonical path first, then legacy aliases, in priority order.
        default: Literal used when no path resolves.

    Example:
        resolve(payload, "dashboardData.soilData.ph", "ph", default=7.2)
    """
    value = first_present(payload, paths)
    return default if value is None else value
