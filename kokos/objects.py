"""Runtime values of the language and the operations shared by all of them."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from kokos.hashtable import HashTable
from kokos.tokens import Location, Token

_INT64_MIN = -(1 << 63)
_UINT64 = 1 << 64
DEFAULT_MAP_CAPACITY = 11


class ObjType(enum.Enum):
    """Kinds of runtime values."""

    NIL = enum.auto()
    INT = enum.auto()
    STRING = enum.auto()
    FLOAT = enum.auto()
    BOOL = enum.auto()
    SYMBOL = enum.auto()
    LIST = enum.auto()
    VEC = enum.auto()
    MAP = enum.auto()
    PROCEDURE = enum.auto()
    BUILTIN_PROC = enum.auto()
    SPECIAL_FORM = enum.auto()
    MACRO = enum.auto()


_TYPE_NAMES = {
    ObjType.NIL: "nil",
    ObjType.INT: "int",
    ObjType.FLOAT: "float",
    ObjType.STRING: "string",
    ObjType.BOOL: "bool",
    ObjType.SYMBOL: "symbol",
    ObjType.BUILTIN_PROC: "builtin procedure",
    ObjType.PROCEDURE: "procedure",
    ObjType.LIST: "list",
    ObjType.VEC: "vector",
    ObjType.MAP: "map",
    ObjType.SPECIAL_FORM: "special form",
    ObjType.MACRO: "macro",
}


def type_name(obj_type: ObjType) -> str:
    """Return the user-facing name of a value type."""
    return _TYPE_NAMES[obj_type]


@dataclass
class Params:
    """Parameter names of a procedure or macro; ``var`` marks a trailing rest parameter."""

    names: list[str] = field(default_factory=list)
    var: bool = False

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class Procedure:
    """A user-defined procedure or macro: its parameters and body forms."""

    params: Params
    body: list[KokosObject]


@dataclass(eq=False)
class KokosObject:
    """A runtime value.

    ``value`` holds an int, float, str (strings and symbols), a list of objects
    (lists and vectors), an :class:`ObjMap`, a :class:`Procedure` (procedures and
    macros) or a Python callable (builtins and special forms).
    """

    type: ObjType
    value: Any = None
    token: Token | None = None
    quoted: bool = False
    marked: bool = field(default=False, repr=False)

    @property
    def location(self) -> Location:
        """Where the object came from in the source, if known."""
        return self.token.location if self.token is not None else Location()

    def __str__(self) -> str:
        return obj_to_str(self)


NIL = KokosObject(ObjType.NIL)
TRUE = KokosObject(ObjType.BOOL, True)
FALSE = KokosObject(ObjType.BOOL, False)


def _wrap64(value: int) -> int:
    return (value - _INT64_MIN) % _UINT64 + _INT64_MIN


def _djb2(text: str) -> int:
    result = 5381
    for byte in text.encode("utf-8", errors="surrogateescape"):
        signed = byte - 256 if byte >= 128 else byte
        result = _wrap64((result << 5) + result + signed)
    return result


def _is_num(obj: KokosObject) -> bool:
    return obj.type in (ObjType.INT, ObjType.FLOAT)


def obj_eq(lhs: KokosObject, rhs: KokosObject) -> bool:
    """Language-level equality of two values."""
    if lhs is rhs:
        return True

    if lhs.type is not rhs.type and not (_is_num(lhs) and _is_num(rhs)):
        return False

    kind = lhs.type
    if kind is ObjType.FLOAT:
        if math.isnan(lhs.value):
            return rhs.type is ObjType.FLOAT and math.isnan(rhs.value)
        if rhs.type is ObjType.INT:
            return lhs.value == float(rhs.value)
        return lhs.value == rhs.value
    if kind is ObjType.INT:
        if rhs.type is ObjType.FLOAT:
            return float(lhs.value) == rhs.value
        return lhs.value == rhs.value
    if kind in (ObjType.LIST, ObjType.VEC):
        return len(lhs.value) == len(rhs.value) and all(
            obj_eq(a, b) for a, b in zip(lhs.value, rhs.value)
        )
    if kind in (ObjType.STRING, ObjType.SYMBOL):
        return lhs.value == rhs.value
    if kind in (ObjType.BUILTIN_PROC, ObjType.SPECIAL_FORM):
        return lhs.value is rhs.value
    if kind is ObjType.NIL:
        return True
    # Booleans, maps, procedures and macros are equal only to themselves.
    return False


def obj_hash(obj: KokosObject) -> int:
    """A 64-bit hash consistent with :func:`obj_eq` for keyable values."""
    kind = obj.type
    if kind is ObjType.INT:
        return _wrap64(obj.value)
    if kind is ObjType.FLOAT:
        return _wrap64(int(obj.value)) if math.isfinite(obj.value) else 0
    if kind in (ObjType.SYMBOL, ObjType.STRING):
        return _djb2(obj.value)
    if kind in (ObjType.LIST, ObjType.VEC):
        return _wrap64(sum(obj_hash(item) for item in obj.value))
    if kind is ObjType.MAP:
        return _wrap64(sum(obj_hash(k) + obj_hash(v) for k, v in obj.value.items()))
    return _wrap64(id(obj))


def obj_to_bool(obj: KokosObject) -> bool:
    """Truthiness: everything except ``false`` and ``nil`` is true."""
    return obj is not FALSE and obj is not NIL


def bool_to_obj(value: bool) -> KokosObject:
    """Return the shared ``true`` or ``false`` object."""
    return TRUE if value else FALSE


def obj_to_str(obj: KokosObject) -> str:
    """The printed representation of a value."""
    kind = obj.type
    if kind is ObjType.NIL:
        return "nil"
    if kind is ObjType.INT:
        return str(obj.value)
    if kind is ObjType.STRING:
        return f'"{obj.value}"'
    if kind is ObjType.FLOAT:
        return f"{obj.value:f}"
    if kind is ObjType.BOOL:
        return "false" if obj is FALSE else "true"
    if kind is ObjType.SYMBOL:
        return obj.value
    if kind is ObjType.LIST:
        return "(" + " ".join(obj_to_str(item) for item in obj.value) + ")"
    if kind is ObjType.VEC:
        return "[" + " ".join(obj_to_str(item) for item in obj.value) + "]"
    if kind is ObjType.MAP:
        entries = (f"{obj_to_str(k)} {obj_to_str(v)}" for k, v in obj.value.items())
        return "{" + " ".join(entries) + "}"
    if kind is ObjType.BUILTIN_PROC:
        return "<builtin function>"
    if kind is ObjType.PROCEDURE:
        return "<procedure>"
    if kind is ObjType.MACRO:
        return "<macro>"
    raise ValueError(f"cannot print a {type_name(kind)}")


class ObjMap(HashTable):
    """A hash table keyed by runtime values using language equality."""

    def __init__(self, capacity: int = DEFAULT_MAP_CAPACITY) -> None:
        super().__init__(obj_hash, obj_eq, capacity)


def _children(obj: KokosObject) -> Iterator[KokosObject]:
    kind = obj.type
    if kind in (ObjType.LIST, ObjType.VEC):
        yield from obj.value
    elif kind in (ObjType.PROCEDURE, ObjType.MACRO):
        yield from obj.value.body
    elif kind is ObjType.MAP:
        for key, value in obj.value.items():
            yield key
            yield value


def mark(obj: KokosObject) -> None:
    """Mark ``obj`` and everything reachable from it as live."""
    seen: set[int] = set()
    stack = [obj]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        current.marked = True
        stack.extend(_children(current))


class _Allocator(Protocol):
    def alloc(self, obj: KokosObject) -> KokosObject: ...


def dup(collector: _Allocator, obj: KokosObject) -> KokosObject:
    """Deep-copy ``obj``, registering every new object with ``collector``.

    Booleans and nil are shared and returned as they are.
    """
    kind = obj.type
    if kind in (ObjType.BOOL, ObjType.NIL):
        return obj

    if kind in (ObjType.INT, ObjType.FLOAT, ObjType.SYMBOL, ObjType.STRING):
        value: Any = obj.value
    elif kind is ObjType.LIST:
        value = list_dup(collector, obj.value)
    elif kind is ObjType.PROCEDURE:
        proc: Procedure = obj.value
        value = Procedure(
            Params(list(proc.params.names), proc.params.var),
            list_dup(collector, proc.body),
        )
    else:
        raise TypeError(f"cannot duplicate a {type_name(kind)}")

    return collector.alloc(KokosObject(kind, value, obj.token, obj.quoted))


def list_dup(collector: _Allocator, objs: Iterable[KokosObject]) -> list[KokosObject]:
    """Deep-copy every object in ``objs``."""
    return [dup(collector, obj) for obj in objs]