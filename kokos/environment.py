"""Variable scopes: name-to-value bindings chained to an enclosing scope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kokos.objects import KokosObject


@dataclass
class Binding:
    """A name bound to a value."""

    name: str
    value: KokosObject


class Environment:
    """A scope of bindings with an optional parent scope."""

    def __init__(self, parent: Environment | None = None) -> None:
        self.parent = parent
        self.bindings: dict[str, Binding] = {}

    def find(self, name: str) -> Binding | None:
        """Find the binding for ``name`` here or in any enclosing scope."""
        scope: Environment | None = self
        while scope is not None:
            binding = scope.bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    def add(self, name: str, value: KokosObject) -> None:
        """Bind ``name``; an existing binding anywhere in the chain is updated instead."""
        found = self.find(name)
        if found is not None:
            found.value = value
            return
        self.bindings[name] = Binding(name, value)

    def __len__(self) -> int:
        return len(self.bindings)