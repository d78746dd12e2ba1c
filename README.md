# kokos

kokos is a small Lisp-like language as a plain Python library. It has no
third-party dependencies and needs Python 3.10 or later.

It is made of:

- `kokos.tokens`: `TokenType`, `Location`, `Token` and `token_type_str`;
- `kokos.lexer`: `Lexer` and `lex`, which turn source text into tokens;
- `kokos.hashtable`: `HashTable`, a chained hash table with pluggable hash
  and equality functions;
- `kokos.objects`: runtime values (`KokosObject`, `ObjType`, `Params`,
  `Procedure`, `ObjMap`), the shared `NIL`, `TRUE` and `FALSE` objects, and
  `obj_eq`, `obj_hash`, `obj_to_bool`, `bool_to_obj`, `obj_to_str`,
  `type_name`, `mark`, `dup` and `list_dup`;
- `kokos.environment`: `Environment` scopes holding `Binding`s;
- `kokos.collector`: `Collector`, mark-and-sweep bookkeeping of allocated
  objects;
- `kokos.errors`: `KokosError` and the checks `expect_type`,
  `expect_arity` and `type_mismatch`;
- `kokos.builtins` and `kokos.containers`: the builtin procedures;
- `kokos.interpreter`: `Interpreter` and the special forms;
- `kokos.util`: `read_whole_file`.

## Lexing

```python
from kokos.lexer import lex
from kokos.tokens import token_type_str

for token in lex('(print "hello" 1 2.5)', "example.kks"):
    print(token_type_str(token.type), token.value, token.location)
```

Tokens come out in source order, each with its file name, row and column.
An unterminated string literal comes out as a `TT_STR_LIT_UNCLOSED` token
whose value starts with the opening quote; nothing is raised. Comments run
from `;` to the end of the line. `Lexer(text, filename)` yields the same
tokens one at a time through `next_token()` (which returns `None` at the
end) or by iteration.

## Hash tables

```python
from kokos.hashtable import HashTable

table = HashTable(len, lambda a, b: a == b, 11)
table.add("one", 1)      # True: the key was new
table.add("one", 10)     # False: the value was replaced
print(table.find("one"))     # 10
print(table.delete("one"))   # 10
print(len(table))            # 0
```

`items()` yields `(key, value)` pairs in bucket order, and iterating a
table yields its keys. The table doubles its capacity when `load()`
reaches 70.

## Evaluating

There is no reader in the package, so programs are given to the
interpreter as objects:

```python
from kokos.interpreter import Interpreter
from kokos.objects import KokosObject, ObjType, obj_to_str

interp = Interpreter()
form = KokosObject(ObjType.LIST, [
    KokosObject(ObjType.SYMBOL, "+"),
    KokosObject(ObjType.INT, 1),
    KokosObject(ObjType.INT, 2),
])
print(obj_to_str(interp.eval(form, True)))  # 3
```

The global scope provides the special forms `def`, `proc`, `fn`, `macro`,
`if`, `let`, `or` and `and`, and the builtin procedures `+ - * /`,
`= < > <= >=`, `not`, `print`, `type`, `list`, `make-vec`, `push`, `nth`,
`make-map`, `add-map`, `find-map`, `map`, `read-file`, `write-file` and
`macroexpand-1`. A parameter list may end in `& name` to collect the
remaining arguments into a vector.

`Interpreter(gc_threshold)` takes the collection threshold (1024 by
default). `eval(obj, top_level)` evaluates one object; when `top_level` is
true and more objects are tracked than the threshold, a collection runs
afterwards, keeping what is reachable from the current scope and the
result. `Interpreter.stat()` returns a two-line summary of allocated
objects and the threshold.

Evaluation errors are raised as `kokos.errors.KokosError`, with `location`
and `message` attributes; its text starts with the location, for example:

```
example.kks:1:2 Arity mismatch: expected 2 arguments, got 1
```

## What is not included

The package has no parser that turns tokens into objects, and no
command-line program: there is no interactive prompt and no way to run a
script file from the shell. Programs have to be built as `KokosObject`
values and passed to `Interpreter.eval`.