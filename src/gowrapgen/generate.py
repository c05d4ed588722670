from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import section_name
from .errors import GenerateError
from .signature import Interface, Method, map_literal

DECORATOR_KINDS = ("pass", "log", "trace")

# Receiver and locals in generated methods are underscore-prefixed so they
# cannot shadow interface parameter names.
_RECV = "_d"
_HEADER = "// Code generated by gowrapgen. DO NOT EDIT."
_VALUES = "map[string]interface{}"

# kind -> (hook field, hook Go type)
_HOOKS = {
    "log": ("_log", f"func(method string, phase string, values {_VALUES}, fields {_VALUES})"),
    "trace": ("_start", f"func(method string, params {_VALUES}, fields {_VALUES}) func(results {_VALUES})"),
}


@dataclass(frozen=True)
class GenerateOptions:
    kind: str
    package: str | None = None
    type_name: str | None = None
    # (key, go_expression) pairs attached to every hook call.
    fields: tuple[tuple[str, str], ...] = ()


def default_type_name(iface: Interface, kind: str) -> str:
    if kind == "pass":
        return f"{iface.name}Wrapper"
    return f"{iface.name}With{section_name(kind)}"


def _indent(fragment: str, depth: int = 1) -> list[str]:
    prefix = "\t" * depth
    return [f"{prefix}{line}" if line else line for line in fragment.split("\n")]


def _forward(method: Method) -> str:
    """Like `Method.pass_`, but spreads a variadic last param as `args...`."""
    args = ", ".join(f"{p.name}..." if p.type.startswith("...") else p.name for p in method.params)
    call = f"{_RECV}._base.{method.name}({args})"
    if not method.has_results():
        return f"{call}\nreturn"
    return f"return {call}"


def _method_body(*, kind: str, method: Method, fields: str) -> list[str]:
    forward = _forward(method)
    if kind == "pass":
        return _indent(forward)

    lines: list[str] = []
    if kind == "log":
        lines.extend(_indent(f'{_RECV}._log("{method.name}", "call", {method.params_map()}, {fields})'))
        lines.append("\tdefer func() {")
        lines.extend(_indent(f'{_RECV}._log("{method.name}", "return", {method.results_map()}, {fields})', 2))
        lines.append("\t}()")
    else:
        lines.extend(_indent(f'_end := {_RECV}._start("{method.name}", {method.params_map()}, {fields})'))
        lines.append("\tdefer func() {")
        lines.extend(_indent(f"_end({method.results_map()})", 2))
        lines.append("\t}()")
    lines.extend(_indent(forward))
    return lines


def generate_decorator(iface: Interface, opts: GenerateOptions) -> str:
    """Render a Go decorator type wrapping every method of `iface`.

    Hooks observe named results through a deferred closure, which is why the
    rendered method declarations always carry result names.
    """
    kind = opts.kind
    if kind not in DECORATOR_KINDS:
        raise GenerateError(f"unknown decorator kind {kind!r} (expected one of: {', '.join(DECORATOR_KINDS)})")
    package = opts.package or iface.package
    if not package:
        raise GenerateError("Go package name is required (set it in the description or pass it explicitly)")
    if not iface.methods:
        raise GenerateError(f"interface {iface.name} has no methods")

    type_name = opts.type_name or default_type_name(iface, kind)
    fields = map_literal(opts.fields)
    hook = _HOOKS.get(kind)

    lines: list[str] = []
    lines.append(_HEADER)
    lines.append("")
    lines.append(f"package {package}")
    lines.append("")

    lines.append(f"// {type_name} implements {iface.name} by delegating to a base implementation.")
    lines.append(f"type {type_name} struct {{")
    lines.append(f"\t_base {iface.name}")
    if hook is not None:
        lines.append(f"\t{hook[0]} {hook[1]}")
    lines.append("}")
    lines.append("")

    if hook is None:
        lines.append(f"func New{type_name}(base {iface.name}) {type_name} {{")
        lines.append(f"\treturn {type_name}{{_base: base}}")
    else:
        lines.append(f"func New{type_name}(base {iface.name}, hook {hook[1]}) {type_name} {{")
        lines.append(f"\treturn {type_name}{{_base: base, {hook[0]}: hook}}")
    lines.append("}")
    lines.append("")
    lines.append(f"var _ {iface.name} = {type_name}{{}}")
    lines.append("")

    for m in iface.methods:
        lines.append(f"func ({_RECV} {type_name}) {m.declaration()} {{")
        lines.extend(_method_body(kind=kind, method=m, fields=fields))
        lines.append("}")
        lines.append("")

    return "\n".join(lines)


def write_decorator(iface: Interface, opts: GenerateOptions, out_file: Path) -> Path:
    out_file = Path(out_file)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(generate_decorator(iface, opts), encoding="utf-8")
    return out_file
