"""Whole programs and the call graph between their functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from selfie.digraph import DiGraph
from selfie.names import Sym
from selfie.syntax import FnCall, FnDecl, MethodCall, Module
from selfie.visitor import ExprVisitor


@dataclass
class Program:
    modules: list[Module] = field(default_factory=list)

    def fns(self) -> Iterator[FnDecl]:
        """Every function declaration, module by module."""
        for module in self.modules:
            yield from module.fns()

    def build_call_graph(self) -> CallGraph:
        return CallGraph.build(self)


@dataclass
class FnInfo:
    """A summary of one function's place in the call graph."""

    sym: Sym
    is_recursive: bool
    is_self_recursive: bool
    callers: list[Sym]
    callees: list[Sym]
    transitive_callers: list[Sym]
    transitive_callees: list[Sym]


class _CallVisitor(ExprVisitor):
    def __init__(self, caller: Sym, graph: DiGraph[Sym]) -> None:
        self._caller = caller
        self._graph = graph

    def visit_fn_call(self, call: FnCall) -> None:
        self._graph.add_edge(self._caller, call.sym)
        self.visit_args(call.args)

    def visit_method_call(self, call: MethodCall) -> None:
        self._graph.add_edge(self._caller, call.sym)
        self.visit_expr(call.expr)
        self.visit_args(call.args)


class CallGraph:
    """Which function calls which, over every function of a program."""

    def __init__(self, graph: DiGraph[Sym]) -> None:
        self._graph = graph

    @classmethod
    def build(cls, program: Program) -> CallGraph:
        graph: DiGraph[Sym] = DiGraph()
        for fn_decl in program.fns():
            graph.add_node(fn_decl.sym)
            _CallVisitor(fn_decl.sym, graph).visit_expr(fn_decl.body)
        return cls(graph)

    def is_recursive(self, fn_sym: Sym) -> bool:
        """Whether the function can reach itself through any chain of calls."""
        return any(sym == fn_sym for sym in self._graph.transitive_successors(fn_sym))

    def is_self_recursive(self, fn_sym: Sym) -> bool:
        """Whether the function calls itself directly."""
        return any(sym == fn_sym for sym in self._graph.successors(fn_sym))

    def callers(self, fn_sym: Sym) -> Iterator[Sym]:
        return self._graph.predecessors(fn_sym)

    def transitive_callers(self, fn_sym: Sym) -> Iterator[Sym]:
        return self._graph.transitive_predecessors(fn_sym)

    def callees(self, fn_sym: Sym) -> Iterator[Sym]:
        return self._graph.successors(fn_sym)

    def transitive_callees(self, fn_sym: Sym) -> Iterator[Sym]:
        return self._graph.transitive_successors(fn_sym)

    def build_fn_info(self, fn_sym: Sym) -> FnInfo:
        return FnInfo(
            sym=fn_sym,
            is_recursive=self.is_recursive(fn_sym),
            is_self_recursive=self.is_self_recursive(fn_sym),
            callers=list(self.callers(fn_sym)),
            callees=list(self.callees(fn_sym)),
            transitive_callers=list(self.transitive_callers(fn_sym)),
            transitive_callees=list(self.transitive_callees(fn_sym)),
        )