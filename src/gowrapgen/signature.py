"""Method signature model and the Go code fragments rendered from it."""

from __future__ import annotations

from dataclasses import dataclass

_MAP_LITERAL = "map[string]interface{}"


@dataclass(frozen=True)
class Param:
    name: str
    type: str = ""

    def declaration(self) -> str:
        # An empty type emits nothing for its slot.
        if not self.type:
            return self.name
        return f"{self.name} {self.type}"


@dataclass(frozen=True)
class Method:
    """One method of a wrapped interface.

    Every renderer is a pure function of the method and returns a fixed
    template filled with its names and types. Degenerate input (an empty
    name, duplicate parameter names) yields degenerate text, never an error.
    """

    name: str
    params: tuple[Param, ...] = ()
    results: tuple[Param, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence; store tuples so the value stays hashable.
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "results", tuple(self.results))

    def has_params(self) -> bool:
        return len(self.params) > 0

    def has_results(self) -> bool:
        return len(self.results) > 0

    def declaration(self) -> str:
        """`Name(a int, b string) (err error)`."""
        return f"{self.name}{self.signature()}"

    def signature(self) -> str:
        """`(a int, b string) (err error)`."""
        return f"({_declarations(self.params)}) ({_declarations(self.results)})"

    def call(self) -> str:
        return f"{self.name}({_names(self.params)})"

    def pass_(self, receiver: str) -> str:
        """Forward the call to `receiver` (a literal prefix such as ``"d."``)."""
        call = f"{receiver}{self.call()}"
        if not self.has_results():
            return f"{call}\nreturn"
        return f"return {call}"

    def return_struct(self, receiver: str) -> str:
        if not self.has_results():
            return "return"
        # Only the first result is projected.
        return f"return {receiver}.{self.results[0].name}"

    def results_struct(self) -> str:
        body = "\n".join(p.declaration() for p in self.results)
        return f"struct{{\n{body}}}"

    def results_names(self) -> str:
        return _names(self.results)

    def params_map(self) -> str:
        return map_literal((p.name, p.name) for p in self.params)

    def results_map(self) -> str:
        return map_literal((p.name, p.name) for p in self.results)


@dataclass(frozen=True)
class Interface:
    name: str
    methods: tuple[Method, ...] = ()
    package: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", tuple(self.methods))

    def method(self, name: str) -> Method | None:
        for m in self.methods:
            if m.name == name:
                return m
        return None


def map_literal(entries) -> str:
    """Render `map[string]interface{}{\\n"key": expr, ...}` from (key, expr) pairs."""
    body = ", ".join(f'"{key}": {expr}' for key, expr in entries)
    return f"{_MAP_LITERAL}{{\n{body}}}"


def _declarations(params: tuple[Param, ...]) -> str:
    return ", ".join(p.declaration() for p in params)


def _names(params: tuple[Param, ...]) -> str:
    return ", ".join(p.name for p in params)
