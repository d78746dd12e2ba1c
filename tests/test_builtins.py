import math

import pytest

from kokos import builtins
from kokos.collector import Collector
from kokos.environment import Environment
from kokos.errors import KokosError
from kokos.objects import FALSE, NIL, TRUE, KokosObject, ObjType
from kokos.tokens import Location


class FakeInterp:
    def __init__(self):
        self.collector = Collector(100)
        self.env = Environment()

    def eval(self, obj, top_level=False):
        if obj.type is ObjType.SYMBOL:
            binding = self.env.find(obj.value)
            if binding is None:
                raise KokosError(obj.location, f"Undefined symbol {obj.value}")
            return binding.value
        return obj


def num(value):
    return KokosObject(ObjType.FLOAT if isinstance(value, float) else ObjType.INT, value)


def call(func, *args, interp=None):
    return func(interp or FakeInterp(), list(args), Location("test", 1, 1))


def test_add():
    result = call(builtins.add, num(1), num(2), num(3), num(4), num(5))
    assert result.type is ObjType.INT
    assert result.value == 15


def test_subtract_mixed():
    result = call(builtins.subtract, num(5), num(2.1))
    assert result.type is ObjType.FLOAT
    assert result.value == 2.9


def test_multiply():
    result = call(builtins.multiply, num(2), num(8))
    assert result.type is ObjType.INT
    assert result.value == 16


def test_divide():
    result = call(builtins.divide, num(10), num(4), num(1))
    assert result.type is ObjType.FLOAT
    assert result.value == 2.5


def test_empty_arithmetic():
    plus = call(builtins.add)
    assert (plus.type, plus.value) == (ObjType.INT, 0)
    minus = call(builtins.subtract)
    assert (minus.type, minus.value) == (ObjType.INT, 0)
    star = call(builtins.multiply)
    assert (star.type, star.value) == (ObjType.INT, 1)
    slash = call(builtins.divide)
    assert slash.type is ObjType.FLOAT
    assert math.isnan(slash.value)


def test_divide_by_zero_gives_infinity():
    result = call(builtins.divide, num(1), num(0))
    assert math.isinf(result.value) and result.value > 0


def test_results_are_tracked_by_collector():
    interp = FakeInterp()
    before = len(interp.collector)
    call(builtins.add, num(1), num(2), interp=interp)
    assert len(interp.collector) == before + 1


@pytest.mark.parametrize(
    "func", [builtins.add, builtins.subtract, builtins.multiply, builtins.divide]
)
def test_arithmetic_rejects_non_numbers(func):
    with pytest.raises(KokosError, match="Type mismatch: got string, expected one of int, float"):
        call(func, num(1), KokosObject(ObjType.STRING, "x"))


def test_comparisons():
    assert call(builtins.less, num(1), num(2)) is TRUE
    assert call(builtins.less, num(2), num(1)) is FALSE
    assert call(builtins.greater, num(2), num(1.5)) is TRUE
    assert call(builtins.less_equal, num(2), num(2.0)) is TRUE
    assert call(builtins.greater_equal, num(1.5), num(2)) is FALSE


def test_comparison_arity_and_types():
    with pytest.raises(KokosError, match="Arity mismatch"):
        call(builtins.less, num(1))
    with pytest.raises(KokosError, match="Type mismatch"):
        call(builtins.greater, KokosObject(ObjType.STRING, "a"), num(1))
    with pytest.raises(KokosError, match="Type mismatch"):
        call(builtins.greater, num(1), NIL)


def test_equal_numbers_and_symbols():
    interp = FakeInterp()
    interp.env.add("x", num(3))
    assert call(builtins.equal, num(3), num(3.0)) is TRUE
    assert call(builtins.equal, KokosObject(ObjType.SYMBOL, "x"), num(3), interp=interp) is TRUE
    assert call(builtins.equal, num(3), num(4)) is FALSE
    with pytest.raises(KokosError, match="Arity mismatch"):
        call(builtins.equal, num(3))


def test_not():
    assert call(builtins.not_, NIL) is TRUE
    assert call(builtins.not_, FALSE) is TRUE
    assert call(builtins.not_, num(0)) is FALSE
    with pytest.raises(KokosError, match="Arity mismatch"):
        call(builtins.not_)


def test_print(capsys):
    result = call(builtins.print_, num(1), KokosObject(ObjType.STRING, "hi"))
    assert result is NIL
    assert capsys.readouterr().out == '1 "hi"\n'


def test_type_of():
    result = call(builtins.type_of, num(1.5))
    assert result.type is ObjType.STRING
    assert result.value == "float"
    assert call(builtins.type_of, KokosObject(ObjType.VEC, [])).value == "vector"
    with pytest.raises(KokosError, match="Arity mismatch"):
        call(builtins.type_of)