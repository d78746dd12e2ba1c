"""A small Lisp-like language: lexer, objects, collector and evaluator."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "collector",
    "containers",
    "environment",
    "errors",
    "hashtable",
    "interpreter",
    "lexer",
    "objects",
    "tokens",
    "util",
]