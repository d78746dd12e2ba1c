import pytest

from kokos.errors import KokosError, expect_arity, expect_type, type_mismatch
from kokos.objects import KokosObject, ObjType
from kokos.tokens import Location, Token, TokenType


def test_error_message_is_prefixed_with_location():
    err = KokosError(Location("repl", 2, 5), "Undefined symbol x")
    assert str(err) == "repl:2:5 Undefined symbol x"
    assert err.location == Location("repl", 2, 5)
    assert err.message == "Undefined symbol x"


def test_type_mismatch_single_expected():
    err = type_mismatch(Location("f", 1, 1), ObjType.STRING, ObjType.VEC)
    assert err.message == "Type mismatch: got string, expected vector"


def test_type_mismatch_several_expected():
    err = type_mismatch(Location("f", 1, 1), ObjType.STRING, ObjType.INT, ObjType.FLOAT)
    assert err.message == "Type mismatch: got string, expected one of int, float"


def test_expect_type_returns_matching_object():
    obj = KokosObject(ObjType.INT, 3)
    assert expect_type(obj, ObjType.FLOAT, ObjType.INT) is obj


def test_expect_type_raises_with_object_location():
    loc = Location("src", 4, 7)
    obj = KokosObject(ObjType.STRING, "s", Token(TokenType.STR_LIT, "s", loc))
    with pytest.raises(KokosError) as info:
        expect_type(obj, ObjType.MAP)
    assert info.value.location == loc
    assert info.value.message == "Type mismatch: got string, expected map"


def test_expect_arity_equal():
    expect_arity(Location(), 2, 2)
    with pytest.raises(KokosError) as info:
        expect_arity(Location(), 2, 3)
    assert info.value.message == "Arity mismatch: expected 2 arguments, got 3"


def test_expect_arity_at_least():
    expect_arity(Location(), 2, 5, at_least=True)
    with pytest.raises(KokosError) as info:
        expect_arity(Location(), 2, 1, at_least=True)
    assert info.value.message == "Arity mismatch: expected at least 2 arguments, got 1"