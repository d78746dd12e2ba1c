"""Builtin procedures for lists, vectors, maps, files and macro expansion."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

from kokos.errors import KokosError, expect_arity, expect_type, type_mismatch
from kokos.objects import (
    DEFAULT_MAP_CAPACITY,
    NIL,
    TRUE,
    KokosObject,
    ObjMap,
    ObjType,
)
from kokos.tokens import Location
from kokos.util import read_whole_file

_COPYABLE = (ObjType.INT, ObjType.FLOAT, ObjType.SYMBOL, ObjType.STRING)


def _alloc(interp: Any, obj_type: ObjType, value: Any) -> KokosObject:
    return interp.collector.alloc(KokosObject(obj_type, value))


def _fresh(interp: Any, obj: KokosObject) -> KokosObject:
    """Copy ``obj`` as a plain, unquoted value; lists are copied deeply."""
    if obj.type in (ObjType.BOOL, ObjType.NIL):
        return obj
    if obj.type is ObjType.LIST:
        value: Any = [_fresh(interp, item) for item in obj.value]
    elif obj.type in _COPYABLE:
        value = obj.value
    else:
        return obj
    return interp.collector.alloc(KokosObject(obj.type, value, obj.token))


def make_list(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Build a list of fresh, unquoted copies of the arguments."""
    return _alloc(interp, ObjType.LIST, [_fresh(interp, obj) for obj in args])


def make_vec(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Build a vector holding the arguments."""
    return _alloc(interp, ObjType.VEC, list(args))


def push(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Append the remaining arguments to the vector given first."""
    expect_arity(called_from, 2, len(args), at_least=True)
    vec = expect_type(args[0], ObjType.VEC)
    vec.value.extend(args[1:])
    return NIL


def nth(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Return the element of a vector at an index, or nil when out of range."""
    expect_arity(called_from, 2, len(args))
    vec = expect_type(args[0], ObjType.VEC)
    idx = expect_type(args[1], ObjType.INT).value
    if 0 <= idx < len(vec.value):
        return vec.value[idx]
    return NIL


def make_map(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Build a map from alternating keys and values."""
    if len(args) % 2 != 0:
        raise KokosError(called_from, "expected an even number of arguments")
    table = ObjMap(DEFAULT_MAP_CAPACITY)
    for key, value in zip(args[::2], args[1::2]):
        table.add(key, value)
    return _alloc(interp, ObjType.MAP, table)


def add_map(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Store a value under a key in a map."""
    expect_arity(called_from, 3, len(args))
    table = expect_type(args[0], ObjType.MAP)
    table.value.add(args[1], args[2])
    return NIL


def find_map(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Look a key up in a map; nil when absent."""
    expect_arity(called_from, 2, len(args))
    table = expect_type(args[0], ObjType.MAP)
    found = table.value.find(args[1])
    return found if found is not None else NIL


def map_(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Apply a one-parameter procedure to each element of a vector or character of a string."""
    expect_arity(called_from, 2, len(args))
    proc = expect_type(args[0], ObjType.PROCEDURE)
    expect_arity(proc.location, 1, len(proc.value.params))

    collection = args[1]
    if collection.type is ObjType.VEC:
        items = list(collection.value)
    elif collection.type is ObjType.STRING:
        items = [KokosObject(ObjType.STRING, ch) for ch in collection.value]
    else:
        raise type_mismatch(collection.location, collection.type, ObjType.VEC, ObjType.STRING)

    results = [interp.call_procedure(proc.value, [item]) for item in items]
    return _alloc(interp, ObjType.VEC, results)


def read_file(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Return the contents of the named file as a string, or nil if it does not exist."""
    expect_arity(called_from, 1, len(args))
    filename = expect_type(args[0], ObjType.STRING).value
    if not os.path.exists(filename):
        return NIL
    return _alloc(interp, ObjType.STRING, read_whole_file(filename))


def write_file(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Write a string to the named file, replacing its contents."""
    expect_arity(called_from, 2, len(args))
    filename = expect_type(args[0], ObjType.STRING).value
    contents = expect_type(args[1], ObjType.STRING).value
    with open(filename, "wb") as f:
        f.write(contents.encode("utf-8", errors="surrogateescape"))
    return TRUE


def macroexpand_1(
    interp: Any, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """Expand a quoted macro call once; anything else is simply evaluated."""
    expect_arity(called_from, 1, len(args))
    form = args[0]
    if not (form.quoted and form.type is ObjType.LIST):
        return interp.eval(form)

    items = form.value
    if not items or items[0].type is not ObjType.SYMBOL:
        return interp.eval(form)

    binding = interp.current_env.find(items[0].value)
    if binding is None or binding.value.type is not ObjType.MACRO:
        return interp.eval(form)

    return interp.call_macro(binding.value.value, items[1:])