"""Mark-and-sweep bookkeeping for runtime objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kokos.objects import KokosObject, mark

if TYPE_CHECKING:
    from kokos.environment import Environment

DEFAULT_THRESHOLD = 1024


class Collector:
    """Tracks allocated objects and drops those no longer reachable from a scope."""

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        self.threshold = threshold
        self.objects: list[KokosObject] = []

    def alloc(self, obj: KokosObject) -> KokosObject:
        """Start tracking ``obj`` and return it."""
        obj.marked = False
        self.objects.append(obj)
        return obj

    def run(self, env: Environment | None) -> None:
        """Keep objects reachable from ``env`` and its parents (or already marked); drop the rest."""
        scope = env
        while scope is not None:
            for binding in scope.bindings.values():
                mark(binding.value)
            scope = scope.parent

        survivors = []
        for obj in self.objects:
            if obj.marked:
                obj.marked = False
                survivors.append(obj)
        self.objects = survivors

    def __len__(self) -> int:
        return len(self.objects)