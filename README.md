# selfie

The middle stages of a compiler for Selfie, a small expression-oriented
language with functions, structs, enums, tuples and pattern matching.

The package works on a syntax tree built in Python: a `selfie.program.Program`
holds a list of `selfie.syntax.Module`s, each holding `FnDecl`, `StructDecl`
and `EnumDecl` declarations whose bodies are made of the expression classes in
`selfie.syntax` (`Literal`, `Var`, `FnCall`, `Let`, `If`, `Match`, `Tuple`,
`StructInit`, `EnumInit`, `BinaryOp`, ...). Identifiers are `selfie.names.Sym`
values (`Sym.named("x")`), a `Name` paired with a numeric id.

## Installation

Install the package into your environment with your usual tool; it has no
dependencies outside the standard library. The `test` extra adds pytest.

## Pipeline

```python
from selfie.namer import name_program
from selfie.naming_errors import NamingFailed
from selfie.typer import type_program
from selfie.typing_errors import TypingFailed

try:
    syms = name_program(program)        # returns the global Symbols
    ctx = type_program(program, syms)   # returns a TyCtx
except NamingFailed as failure:
    for error in failure.errors:
        print(error, error.note(), error.help())
except TypingFailed as failure:
    for error in failure.errors:
        print(error.header(), error)
```

- `name_program` rewrites the program in place, giving every binding a fresh
  id and pointing every reference at the symbol it resolves to. It collects
  all errors it finds (`UnboundVar`, `UnboundFn`, `UnknownType`,
  `WrongArgCount`, `MissingArgLabel`, `ExtraneousArgLabel`, `WrongArgLabel`,
  `UnexpectedArg`, `MissingField`, `UnknownField`, `UnknownVariant`,
  `MissingVariantArg`, `UnexpectedVariantArg`, the `Duplicate*` errors) and
  raises them together in `NamingFailed`. Two modules with the same name stop
  naming at once with a single `DuplicateModule`.
- `type_program` checks each module in turn. Within a module, each
  declaration stops at its first error; all of the module's errors are raised
  together in `TypingFailed`, and later modules are not checked.
- The type of every expression inferred is recorded in the context:
  `ctx.get_expr(expr)`, alongside `get_var`, `get_fn`, `get_struct` and
  `get_enum`. Semantic types live in `selfie.types` (`Primitive`,
  `TupleType`, `NamedType`, `FnType`); `from_syntax` turns a written
  `TypeExpr` into one.

Method calls (`MethodCall`) are part of the syntax tree but are not supported
by either stage: naming or typing one raises `TypeError`.

## Call graph

```python
graph = program.build_call_graph()
for fn_decl in program.fns():
    info = graph.build_fn_info(fn_decl.sym)
    print(fn_decl.sym, info.is_recursive, info.is_self_recursive, info.callees)
```

`CallGraph` also offers `callers`, `callees`, `transitive_callers` and
`transitive_callees` directly. The underlying `selfie.digraph.DiGraph` is
usable on its own:

```python
from selfie.digraph import DiGraph

g = DiGraph()
g.add_edge("a", "b")
g.add_edge("b", "c")
sorted(g.transitive_successors("a"))  # ['b', 'c']
list(g.sources())                      # ['a']
```

## Visitors

`selfie.visitor.ExprVisitor` and `TypeVisitor` walk expressions and written
types in source order; subclass them and override the `visit_*` methods you
need, calling the base method to keep descending.

## Literals and debug sections

`selfie.strings.parse_string(text, start=0)` and `parse_char(text, start=0)`
decode a quoted string or character literal beginning at `start` and return
the value with the offset just past the closing quote. They understand
`\n \r \t \b \f \\ \/ \" \'`, `\u{XXXX}` with one to six hex digits and, in
strings, a backslash followed by whitespace (which is dropped). Malformed
input raises `LiteralSyntaxError`, which carries the offending `position`.

`selfie.cli.DebugSections.parse("lex,name,call-graph")` reads a
comma-separated list of the debug sections `lex`, `parse`, `name`, `type` and
`call-graph`, rejecting unknown names with `ValueError`.
`selfie.cli.parse_args(argv)` parses a file path and a required
`-d/--debug` list into a `Cli` value.

## What this package does not do

There is no lexer or parser for Selfie source text: programs must be built
as `selfie.syntax` objects. Consequently there is also no command that reads
a source file and checks it, and no rendering of errors against source text
beyond each error's message, `span`, `note()`, `help()` and, for typing
errors, `header()`. `parse_args` only parses arguments; nothing acts on them.