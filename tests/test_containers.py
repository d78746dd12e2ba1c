import pytest

from kokos.containers import (
    add_map,
    find_map,
    macroexpand_1,
    make_list,
    make_map,
    make_vec,
    map_,
    nth,
    push,
    read_file,
    write_file,
)
from kokos.errors import KokosError
from kokos.interpreter import Interpreter
from kokos.objects import NIL, TRUE, KokosObject, ObjType, obj_eq
from kokos.tokens import Location

HERE = Location()


def sym(name, quoted=False):
    return KokosObject(ObjType.SYMBOL, name, quoted=quoted)


def num(value):
    return KokosObject(ObjType.INT, value)


def string(value):
    return KokosObject(ObjType.STRING, value)


def lst(*items, quoted=False):
    return KokosObject(ObjType.LIST, list(items), quoted=quoted)


@pytest.fixture
def interp():
    return Interpreter(100)


def test_make_list_unquotes_elements(interp):
    result = make_list(interp, [sym("if", quoted=True), num(3)], HERE)
    assert result.type is ObjType.LIST
    assert [item.value for item in result.value] == ["if", 3]
    assert not any(item.quoted for item in result.value)


def test_make_vec_keeps_arguments(interp):
    a, b = num(1), string("x")
    result = make_vec(interp, [a, b], HERE)
    assert result.type is ObjType.VEC
    assert result.value[0] is a and result.value[1] is b


def test_push_then_nth(interp):
    vec = make_vec(interp, [], HERE)
    item = num(7)
    assert push(interp, [vec, item], HERE) is NIL
    assert nth(interp, [vec, num(0)], HERE) is item


def test_nth_out_of_range_is_nil(interp):
    vec = make_vec(interp, [num(1)], HERE)
    assert nth(interp, [vec, num(1)], HERE) is NIL
    assert nth(interp, [vec, num(-1)], HERE) is NIL


def test_push_requires_vector(interp):
    with pytest.raises(KokosError) as err:
        push(interp, [num(1), num(2)], HERE)
    assert err.value.message == "Type mismatch: got int, expected vector"


def test_push_arity(interp):
    vec = make_vec(interp, [], HERE)
    with pytest.raises(KokosError, match="expected at least 2 arguments, got 1"):
        push(interp, [vec], HERE)


def test_map_roundtrip(interp):
    table = make_map(interp, [string("hello"), string("world")], HERE)
    assert table.type is ObjType.MAP
    assert len(table.value) == 1
    assert find_map(interp, [table, string("hello")], HERE).value == "world"
    assert find_map(interp, [table, string("missing")], HERE) is NIL


def test_add_map_overwrites(interp):
    table = make_map(interp, [], HERE)
    assert add_map(interp, [table, num(1), string("a")], HERE) is NIL
    add_map(interp, [table, num(1), string("b")], HERE)
    assert len(table.value) == 1
    assert find_map(interp, [table, num(1)], HERE).value == "b"


def test_make_map_odd_arguments(interp):
    with pytest.raises(KokosError) as err:
        make_map(interp, [num(1)], HERE)
    assert err.value.message == "expected an even number of arguments"


def test_map_over_vector(interp):
    proc = interp.eval(lst(sym("fn"), lst(sym("x")), lst(sym("type"), sym("x"))))
    vec = make_vec(interp, [num(1), num(2)], HERE)
    result = map_(interp, [proc, vec], HERE)
    assert [item.value for item in result.value] == ["int", "int"]


def test_map_over_string(interp):
    proc = interp.eval(lst(sym("fn"), lst(sym("c")), sym("c")))
    result = map_(interp, [proc, string("abc")], HERE)
    assert result.type is ObjType.VEC
    assert [item.value for item in result.value] == list("abc")


def test_map_rejects_other_collections(interp):
    proc = interp.eval(lst(sym("fn"), lst(sym("c")), sym("c")))
    with pytest.raises(KokosError, match="expected one of vector, string"):
        map_(interp, [proc, num(1)], HERE)


def test_write_then_read(interp, tmp_path):
    path = str(tmp_path / "data.txt")
    assert write_file(interp, [string(path), string("contents\n")], HERE) is TRUE
    result = read_file(interp, [string(path)], HERE)
    assert result.type is ObjType.STRING
    assert result.value == "contents\n"


def test_read_missing_file_is_nil(interp, tmp_path):
    assert read_file(interp, [string(str(tmp_path / "absent"))], HERE) is NIL


def test_macroexpand_of_plain_value(interp):
    value = num(5)
    assert macroexpand_1(interp, [value], HERE) is value


def test_macroexpand_of_non_macro_quoted_list(interp):
    form = lst(sym("+"), num(1), quoted=True)
    assert macroexpand_1(interp, [form], HERE) is form


def test_macroexpand_expands_once(interp):
    interp.eval(
        lst(
            sym("macro"),
            sym("twice"),
            lst(sym("x")),
            lst(sym("list"), sym("+", quoted=True), sym("x"), sym("x")),
        )
    )
    form = lst(sym("twice"), num(4), quoted=True)
    expanded = macroexpand_1(interp, [form], HERE)
    assert expanded.type is ObjType.LIST
    assert obj_eq(expanded.value[1], num(4))
    assert expanded.value[0].value == "+"