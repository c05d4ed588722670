from __future__ import annotations

from pathlib import Path

import pytest

from gowrapgen.description import interfaces_from_description
from gowrapgen.errors import GenerateError
from gowrapgen.generate import GenerateOptions, default_type_name, generate_decorator, write_decorator
from gowrapgen.signature import Interface, Method, Param


def _store() -> Interface:
    return Interface(
        name="Store",
        package="store",
        methods=[
            Method(
                name="Get",
                params=[Param(name="key", type="string")],
                results=[Param(name="v", type="[]byte"), Param(name="err", type="error")],
            ),
            Method(name="Close"),
        ],
    )


def test_generate_pass_decorator():
    src = generate_decorator(_store(), GenerateOptions(kind="pass"))
    assert src == "\n".join(
        [
            "// Code generated by gowrapgen. DO NOT EDIT.",
            "",
            "package store",
            "",
            "// StoreWrapper implements Store by delegating to a base implementation.",
            "type StoreWrapper struct {",
            "\t_base Store",
            "}",
            "",
            "func NewStoreWrapper(base Store) StoreWrapper {",
            "\treturn StoreWrapper{_base: base}",
            "}",
            "",
            "var _ Store = StoreWrapper{}",
            "",
            "func (_d StoreWrapper) Get(key string) (v []byte, err error) {",
            "\treturn _d._base.Get(key)",
            "}",
            "",
            "func (_d StoreWrapper) Close() () {",
            "\t_d._base.Close()",
            "\treturn",
            "}",
            "",
        ]
    )


def test_generate_log_decorator_with_fields():
    src = generate_decorator(_store(), GenerateOptions(kind="log", fields=(("ctx", "ctx"),)))
    assert "type StoreWithLog struct {" in src
    assert "\t_log func(method string, phase string, values map[string]interface{}, fields map[string]interface{})" in src
    assert "func (_d StoreWithLog) Get(key string) (v []byte, err error) {" in src
    assert "\n".join(
        [
            '\t_d._log("Get", "call", map[string]interface{}{',
            '\t"key": key}, map[string]interface{}{',
            '\t"ctx": ctx})',
            "\tdefer func() {",
            '\t\t_d._log("Get", "return", map[string]interface{}{',
            '\t\t"v": v, "err": err}, map[string]interface{}{',
            '\t\t"ctx": ctx})',
            "\t}()",
            "\treturn _d._base.Get(key)",
        ]
    ) in src
    assert "\t_d._base.Close()\n\treturn\n}" in src


def test_generate_trace_decorator():
    src = generate_decorator(_store(), GenerateOptions(kind="trace", package="wrapped", type_name="TracedStore"))
    assert "package wrapped" in src
    assert "func NewTracedStore(base Store, hook func(" in src
    assert '\t_end := _d._start("Get", map[string]interface{}{' in src
    assert "\t\t_end(map[string]interface{}{\n\t\t\"v\": v, \"err\": err})" in src
    assert src.count("func (_d TracedStore) ") == 2


def test_default_type_names():
    assert default_type_name(_store(), "pass") == "StoreWrapper"
    assert default_type_name(_store(), "log") == "StoreWithLog"
    assert default_type_name(_store(), "trace") == "StoreWithTrace"


def test_generate_rejects_bad_options():
    with pytest.raises(GenerateError, match=r"unknown decorator kind"):
        generate_decorator(_store(), GenerateOptions(kind="metrics"))
    with pytest.raises(GenerateError, match=r"package name is required"):
        generate_decorator(Interface(name="I", methods=[Method(name="M")]), GenerateOptions(kind="pass"))
    with pytest.raises(GenerateError, match=r"no methods"):
        generate_decorator(Interface(name="I", package="p"), GenerateOptions(kind="pass"))


def test_write_decorator_creates_parent_dirs(tmp_path: Path):
    out = write_decorator(_store(), GenerateOptions(kind="pass"), tmp_path / "gen" / "store_wrapper.go")
    assert out.read_text(encoding="utf-8").startswith("// Code generated by gowrapgen.")


def test_generate_keeps_unnamed_results_from_description():
    (iface,) = interfaces_from_description(
        {
            "package": "c",
            "interfaces": [{"name": "C", "methods": [{"name": "Close", "results": [{"type": "error"}]}]}],
        }
    )
    src = generate_decorator(iface, GenerateOptions(kind="pass"))
    assert "func (_d CWrapper) Close() (r0 error) {\n\treturn _d._base.Close()\n}" in src


def test_generate_spreads_variadic_params():
    iface = Interface(
        name="Joiner",
        package="j",
        methods=[
            Method(
                name="Join",
                params=[Param(name="sep", type="string"), Param(name="args", type="...string")],
                results=[Param(name="s", type="string")],
            ),
            Method(name="Log", params=[Param(name="args", type="...interface{}")]),
        ],
    )
    src = generate_decorator(iface, GenerateOptions(kind="log"))
    assert "func (_d JoinerWithLog) Join(sep string, args ...string) (s string) {" in src
    assert "\treturn _d._base.Join(sep, args...)" in src
    assert "\t_d._base.Log(args...)\n\treturn" in src
    # The hook still receives the slice itself.
    assert '"sep": sep, "args": args}' in src


def test_generated_locals_do_not_shadow_params_named_d_or_end():
    iface = Interface(
        name="Range",
        package="r",
        methods=[
            Method(
                name="Span",
                params=[Param(name="d", type="int"), Param(name="end", type="int")],
                results=[Param(name="n", type="int")],
            )
        ],
    )
    src = generate_decorator(iface, GenerateOptions(kind="trace"))
    assert "func (_d RangeWithTrace) Span(d int, end int) (n int) {" in src
    assert '\t_end := _d._start("Span", map[string]interface{}{\n\t"d": d, "end": end}' in src
    assert "\treturn _d._base.Span(d, end)" in src
