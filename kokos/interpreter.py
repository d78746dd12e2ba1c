"""The evaluator, its special forms and the default global scope."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from kokos import builtins, containers
from kokos.collector import DEFAULT_THRESHOLD, Collector
from kokos.environment import Environment
from kokos.errors import KokosError, expect_arity, expect_type
from kokos.objects import (
    NIL,
    KokosObject,
    ObjType,
    Params,
    Procedure,
    mark,
    obj_to_bool,
    type_name,
)
from kokos.tokens import Location

Builtin = Callable[["Interpreter", Sequence[KokosObject], Location], KokosObject]

_SELF_EVALUATING = frozenset(
    {
        ObjType.NIL,
        ObjType.INT,
        ObjType.STRING,
        ObjType.FLOAT,
        ObjType.BOOL,
        ObjType.VEC,
        ObjType.MAP,
        ObjType.BUILTIN_PROC,
        ObjType.MACRO,
        ObjType.PROCEDURE,
    }
)


def make_params(params: Sequence[KokosObject]) -> Params:
    """Turn a parameter list into names; ``& name`` introduces a rest parameter."""
    names: list[str] = []
    for i, param in enumerate(params):
        expect_type(param, ObjType.SYMBOL)
        if param.value == "&":
            if i == len(params) - 1:
                raise KokosError(param.location, "expected a name for the rest parameter list")
            names.append(expect_type(params[i + 1], ObjType.SYMBOL).value)
            return Params(names, var=True)
        names.append(param.value)
    return Params(names, var=False)


def _check_call_arity(location: Location, params: Params, got: int) -> None:
    if params.var:
        expect_arity(location, len(params) - 1, got, at_least=True)
    else:
        expect_arity(location, len(params), got)


class Interpreter:
    """Evaluates objects against a global scope and tracks allocations."""

    def __init__(self, gc_threshold: int = DEFAULT_THRESHOLD) -> None:
        self.collector = Collector(gc_threshold)
        self.global_env = Environment()
        self.current_env = self.global_env
        self._install_defaults()

    def _install_defaults(self) -> None:
        procedures: dict[str, Builtin] = {
            "+": builtins.add,
            "-": builtins.subtract,
            "*": builtins.multiply,
            "/": builtins.divide,
            "=": builtins.equal,
            "<": builtins.less,
            ">": builtins.greater,
            "<=": builtins.less_equal,
            ">=": builtins.greater_equal,
            "not": builtins.not_,
            "print": builtins.print_,
            "type": builtins.type_of,
            "list": containers.make_list,
            "make-vec": containers.make_vec,
            "push": containers.push,
            "nth": containers.nth,
            "make-map": containers.make_map,
            "add-map": containers.add_map,
            "find-map": containers.find_map,
            "map": containers.map_,
            "read-file": containers.read_file,
            "write-file": containers.write_file,
            "macroexpand-1": containers.macroexpand_1,
        }
        forms: dict[str, Builtin] = {
            "def": sform_def,
            "proc": sform_proc,
            "macro": sform_macro,
            "fn": sform_fn,
            "if": sform_if,
            "let": sform_let,
            "or": sform_or,
            "and": sform_and,
        }
        for name, func in procedures.items():
            obj = self.collector.alloc(KokosObject(ObjType.BUILTIN_PROC, func))
            self.global_env.add(name, obj)
        for name, func in forms.items():
            obj = self.collector.alloc(KokosObject(ObjType.SPECIAL_FORM, func))
            self.global_env.add(name, obj)

    @contextmanager
    def scope(self, env: Environment) -> Iterator[Environment]:
        """Make ``env`` the current scope, nested in the previous one, for the block."""
        previous = self.current_env
        env.parent = previous
        self.current_env = env
        try:
            yield env
        finally:
            self.current_env = previous

    def _run_body(self, env: Environment, body: Sequence[KokosObject]) -> KokosObject:
        result: KokosObject = NIL
        with self.scope(env):
            for form in body:
                result = self.eval(form)
        return result

    def _rest_vector(self, values: list[KokosObject]) -> KokosObject:
        return self.collector.alloc(KokosObject(ObjType.VEC, values))

    def call_procedure(self, proc: Procedure, args: Sequence[KokosObject]) -> KokosObject:
        """Evaluate ``args`` in the current scope, bind them and run the body."""
        params = proc.params
        fixed = len(params) - 1 if params.var else len(params)
        env = Environment()
        for name, arg in zip(params.names[:fixed], args):
            env.add(name, self.eval(arg))
        if params.var:
            rest = [self.eval(arg) for arg in args[fixed:]]
            env.add(params.names[-1], self._rest_vector(rest))
        return self._run_body(env, proc.body)

    def call_macro(self, macro: Procedure, args: Sequence[KokosObject]) -> KokosObject:
        """Bind the unevaluated ``args`` and run the macro body, returning its expansion."""
        params = macro.params
        fixed = len(params) - 1 if params.var else len(params)
        env = Environment()
        for name, arg in zip(params.names[:fixed], args):
            env.add(name, arg)
        if params.var:
            env.add(params.names[-1], self._rest_vector(list(args[fixed:])))
        return self._run_body(env, macro.body)

    def _eval_list(self, obj: KokosObject) -> KokosObject:
        items: list[KokosObject] = obj.value
        if not items:
            return obj

        head = self.eval(items[0])
        rest = items[1:]
        kind = head.type
        if kind is ObjType.BUILTIN_PROC:
            args = [self.eval(arg) for arg in rest]
            return head.value(self, args, obj.location)
        if kind is ObjType.SPECIAL_FORM:
            return head.value(self, rest, obj.location)
        if kind is ObjType.PROCEDURE:
            _check_call_arity(obj.location, head.value.params, len(rest))
            return self.call_procedure(head.value, rest)
        if kind is ObjType.MACRO:
            _check_call_arity(obj.location, head.value.params, len(rest))
            return self.eval(self.call_macro(head.value, rest))
        raise KokosError(obj.location, f"Object of type '{type_name(kind)}' is not callable")

    def eval(self, obj: KokosObject, top_level: bool = False) -> KokosObject:
        """Evaluate ``obj``; at top level, collect garbage once over the threshold."""
        if obj.quoted:
            return obj

        kind = obj.type
        if kind in _SELF_EVALUATING:
            result = obj
        elif kind is ObjType.SYMBOL:
            binding = self.current_env.find(obj.value)
            if binding is None:
                raise KokosError(obj.location, f"Undefined symbol {obj.value}")
            result = binding.value
        elif kind is ObjType.LIST:
            result = self._eval_list(obj)
        else:
            raise KokosError(obj.location, "Special form cannot be used as a value")

        if top_level and len(self.collector) > self.collector.threshold:
            mark(result)
            self.collector.run(self.current_env)

        return result

    def stat(self) -> str:
        """A summary of allocated objects and the collection threshold."""
        return (
            f"ALLOCATED OBJECTS: {len(self.collector)}\n"
            f"GC THRESHOLD: {self.collector.threshold}"
        )


def sform_def(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(def name value)``: bind a name in the global scope."""
    expect_arity(called_from, 2, len(args))
    name = expect_type(args[0], ObjType.SYMBOL)
    value = interp.eval(args[1])
    interp.global_env.add(name.value, value)
    return NIL


def _make_lambda(
    interp: Interpreter, params: KokosObject, body: Sequence[KokosObject]
) -> KokosObject:
    proc = Procedure(make_params(params.value), list(body))
    return interp.collector.alloc(KokosObject(ObjType.PROCEDURE, proc))


def sform_proc(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(proc name (params...) body...)``: define a named procedure in the current scope."""
    expect_arity(called_from, 3, len(args), at_least=True)
    name = expect_type(args[0], ObjType.SYMBOL)
    params = expect_type(args[1], ObjType.LIST)
    result = _make_lambda(interp, params, args[2:])
    interp.current_env.add(name.value, result)
    return result


def sform_fn(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(fn (params...) body...)``: an anonymous procedure."""
    expect_arity(called_from, 2, len(args), at_least=True)
    params = expect_type(args[0], ObjType.LIST)
    return _make_lambda(interp, params, args[1:])


def sform_macro(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(macro name (params...) body...)``: define a macro in the current scope."""
    expect_arity(called_from, 3, len(args), at_least=True)
    name = expect_type(args[0], ObjType.SYMBOL)
    params = expect_type(args[1], ObjType.LIST)
    macro = Procedure(make_params(params.value), list(args[2:]))
    result = interp.collector.alloc(KokosObject(ObjType.MACRO, macro))
    interp.current_env.add(name.value, result)
    return result


def sform_if(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(if cond then [else])``."""
    expect_arity(called_from, 2, len(args), at_least=True)
    if len(args) > 3:
        raise KokosError(
            called_from,
            f"Too many arguments: expected 2 or 3, but got {len(args)} instead",
        )
    if obj_to_bool(interp.eval(args[0])):
        return interp.eval(args[1])
    if len(args) > 2:
        return interp.eval(args[2])
    return NIL


def sform_let(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """``(let (name value ...) body...)``: evaluate the body with local bindings."""
    expect_arity(called_from, 1, len(args), at_least=True)
    bindings = expect_type(args[0], ObjType.LIST)
    pairs: list[KokosObject] = bindings.value
    if len(pairs) % 2 != 0:
        raise KokosError(bindings.location, "expected an even number of arguments")

    env = Environment()
    for name, value in zip(pairs[::2], pairs[1::2]):
        expect_type(name, ObjType.SYMBOL)
        env.add(name.value, interp.eval(value))

    return interp._run_body(env, args[1:])


def sform_or(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """Return the first truthy value, or the last value."""
    expect_arity(called_from, 2, len(args), at_least=True)
    result = NIL
    for arg in args:
        result = interp.eval(arg)
        if obj_to_bool(result):
            break
    return result


def sform_and(
    interp: Interpreter, args: Sequence[KokosObject], called_from: Location
) -> KokosObject:
    """Return the first falsy value, or the last value."""
    expect_arity(called_from, 2, len(args), at_least=True)
    result = NIL
    for arg in args:
        result = interp.eval(arg)
        if not obj_to_bool(result):
            break
    return result