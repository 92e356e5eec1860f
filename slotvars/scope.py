"""
Scope stack and dot-path resolution.

Data visible to a template is an ordered stack of read-only frames:

    context  <  page_data  <  loop item  <  nested loop item ...

The first path segment is looked up from the top of the stack down, so a
frame shadows a whole top-level key of the frames below it (the same
semantics as overlaying dicts, without building merged copies). Frames are
never mutated; entering a loop pushes a new frame onto a new stack.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

THIS = "this"
INDEX = "@index"
THIS_PREFIX = "this."
LENGTH = "length"

_MISSING = object()


@dataclass(frozen=True)
class ScopeStack:
    """Immutable stack of data frames, bottom first."""
    frames: Tuple[Mapping[str, Any], ...] = ()

    @classmethod
    def root(cls, context: Optional[Mapping[str, Any]], page_data: Optional[Mapping[str, Any]]) -> "ScopeStack":
        """MergedData: page_data keys take precedence over context keys."""
        return cls((dict(context or {}), dict(page_data or {})))

    def push_item(self, item: Any, index: int) -> "ScopeStack":
        """
        Build the scope for one loop element.

        `this` is bound to the element and `@index` to its position. If the
        element is a mapping, its own keys are shadowed onto the root as well.
        """
        frame: dict[str, Any] = {THIS: item, INDEX: index}
        if isinstance(item, Mapping):
            frame.update(item)
        return ScopeStack(self.frames + (frame,))

    def lookup(self, key: str) -> Any:
        """Top-level lookup through the frames; None when no frame has the key."""
        for frame in reversed(self.frames):
            if key in frame:
                return frame[key]
        return None

    def resolve(self, path: str) -> Any:
        """
        Resolve a dot-path.

        `this.`-prefixed paths try the explicit `this` binding first and fall
        back to the root when that yields None (item properties are shadowed
        onto the root, so `this.name` and `name` agree inside a loop).
        """
        path = path.strip()
        if not path:
            return None
        if path.startswith(THIS_PREFIX):
            rest = path[len(THIS_PREFIX):]
            bound = self.lookup(THIS)
            if bound is not None:
                value = walk(bound, rest.split("."))
                if value is not None:
                    return value
            return self.resolve(rest)

        head, *tail = path.split(".")
        return walk(self.lookup(head), tail)


def walk(obj: Any, segments: Sequence[str]) -> Any:
    """
    Descend into mappings and sequences; a falsy value or missing key gives None.

    Sequences and strings also expose `length`, so `images.length > 1` works.
    """
    for key in segments:
        if not is_truthy(obj):
            return None
        obj = _child(obj, key)
        if obj is _MISSING:
            return None
    return obj


def _child(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    if isinstance(obj, (Sequence, str)):
        if key == LENGTH:
            return len(obj)
        if isinstance(obj, str):
            return _MISSING
        if key.isdigit() and int(key) < len(obj):
            return obj[int(key)]
        return _MISSING
    return _MISSING


def is_truthy(value: Any) -> bool:
    """
    Storefront truthiness: None, False, 0, NaN and "" are false.

    Empty lists and mappings are true, unlike Python's bool().
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


__all__ = ["ScopeStack", "walk", "is_truthy", "THIS", "INDEX"]
