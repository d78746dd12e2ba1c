"""Arithmetic, comparison and general-purpose builtin procedures."""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Sequence
from typing import Any

from kokos.errors import expect_arity, type_mismatch
from kokos.objects import (
    NIL,
    KokosObject,
    ObjType,
    bool_to_obj,
    obj_eq,
    obj_to_bool,
    obj_to_str,
    type_name,
)
from kokos.tokens import Location

_NUMERIC = (ObjType.INT, ObjType.FLOAT)


def _expect_number(obj: KokosObject) -> None:
    if obj.type not in _NUMERIC:
        raise type_mismatch(obj.location, obj.type, ObjType.INT, ObjType.FLOAT)


def _alloc(interp: Any, obj_type: ObjType, value: Any) -> KokosObject:
    return interp.collector.alloc(KokosObject(obj_type, value))


def _number(interp: Any, value: int | float, use_float: bool) -> KokosObject:
    if use_float:
        return _alloc(interp, ObjType.FLOAT, float(value))
    return _alloc(interp, ObjType.INT, value)


def _fdiv(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def add(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Sum all arguments; the result is a float if any argument is."""
    int_res = 0
    float_res = 0.0
    use_float = False
    for obj in args:
        _expect_number(obj)
        if obj.type is ObjType.INT:
            int_res += obj.value
        else:
            use_float = True
            float_res += obj.value
    return _number(interp, float(int_res) + float_res if use_float else int_res, use_float)


def subtract(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Subtract the rest of the arguments from the first; no arguments give 0."""
    if not args:
        return _alloc(interp, ObjType.INT, 0)

    first, *rest = args
    _expect_number(first)
    int_res = 0
    float_res = 0.0
    use_float = first.type is ObjType.FLOAT
    if use_float:
        float_res = first.value
    else:
        int_res = first.value

    for obj in rest:
        _expect_number(obj)
        if obj.type is ObjType.INT:
            int_res -= obj.value
        else:
            use_float = True
            float_res -= obj.value
    return _number(interp, float(int_res) + float_res if use_float else int_res, use_float)


def multiply(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Multiply all arguments; no arguments give 1."""
    int_res = 1
    float_res = 1.0
    use_float = False
    for obj in args:
        _expect_number(obj)
        if obj.type is ObjType.INT:
            int_res *= obj.value
        else:
            use_float = True
            float_res *= obj.value
    return _number(interp, float(int_res) * float_res if use_float else int_res, use_float)


def divide(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Divide the first argument by the rest; always a float, NaN with no arguments."""
    if not args:
        return _alloc(interp, ObjType.FLOAT, math.nan)

    first, *rest = args
    _expect_number(first)
    result = float(first.value)
    for obj in rest:
        _expect_number(obj)
        result = _fdiv(result, float(obj.value))
    return _alloc(interp, ObjType.FLOAT, result)


def equal(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Compare the first two arguments for equality, resolving symbols first."""
    expect_arity(called_from, 2, len(args), at_least=True)
    left, right = args[0], args[1]
    if left.type is ObjType.SYMBOL:
        left = interp.eval(left, False)
    if right.type is ObjType.SYMBOL:
        right = interp.eval(right, False)
    return bool_to_obj(obj_eq(left, right))


def _compare(
    op: Callable[[Any, Any], bool], args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    expect_arity(called_from, 2, len(args))
    left, right = args
    _expect_number(left)
    _expect_number(right)
    if left.type is right.type:
        return bool_to_obj(op(left.value, right.value))
    return bool_to_obj(op(float(left.value), float(right.value)))


def less(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """``true`` if the first number is less than the second."""
    return _compare(operator.lt, args, called_from)


def greater(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """``true`` if the first number is greater than the second."""
    return _compare(operator.gt, args, called_from)


def less_equal(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """``true`` if the first number is at most the second."""
    return _compare(operator.le, args, called_from)


def greater_equal(
    interp: Any, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``true`` if the first number is at least the second."""
    return _compare(operator.ge, args, called_from)


def not_(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Logical negation of the single argument's truthiness."""
    expect_arity(called_from, 1, len(args))
    return bool_to_obj(not obj_to_bool(args[0]))


def print_(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Print the arguments separated by spaces, followed by a newline."""
    print(" ".join(obj_to_str(obj) for obj in args))
    return NIL


def type_of(interp: Any, args: Sequence[KokosObject], called_from: Location) -> KokosObject:
    """Return the name of the single argument's type as a string."""
    expect_arity(called_from, 1, len(args))
    return _alloc(interp, ObjType.STRING, type_name(args[0].type))