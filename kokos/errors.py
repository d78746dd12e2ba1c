"""Evaluation errors and the argument checks that raise them."""

from __future__ import annotations

from kokos.objects import KokosObject, ObjType, type_name
from kokos.tokens import Location


class KokosError(Exception):
    """An error raised while evaluating a program, tied to a source location."""

    def __init__(self, location: Location, message: str) -> None:
        super().__init__(f"{location} {message}")
        self.location = location
        self.message = message


def type_mismatch(location: Location, got: ObjType, *args: ObjType) -> KokosError:
    """Build the error for a value of type ``got`` where one of ``args`` was expected."""
    expected = ", ".join(type_name(t) for t in args)
    if len(args) > 1:
        expected = f"one of {expected}"
    return KokosError(location, f"Type mismatch: got {type_name(got)}, expected {expected}")


def expect_type(obj: KokosObject, *args: ObjType) -> KokosObject:
    """Return ``obj`` if its type is one of ``args``; raise a type mismatch otherwise."""
    if obj.type in args:
        return obj
    raise type_mismatch(obj.location, obj.type, *args)


def expect_arity(location: Location, expected: int, got: int, at_least: bool = False) -> None:
    """Raise unless ``got`` arguments satisfy the expected count."""
    if at_least:
        if got < expected:
            raise KokosError(
                location,
                f"Arity mismatch: expected at least {expected} arguments, got {got}",
            )
    elif got != expected:
        raise KokosError(location, f"Arity mismatch: expected {expected} arguments, got {got}")