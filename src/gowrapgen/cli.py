from __future__ import annotations

import argparse
import importlib.metadata
import json
from pathlib import Path

FRAGMENTS = (
    "declaration",
    "signature",
    "call",
    "pass",
    "return-struct",
    "results-struct",
    "results-names",
    "params-map",
    "results-map",
)


def render_fragment(method, fragment: str, receiver: str) -> str:
    if fragment == "declaration":
        return method.declaration()
    if fragment == "signature":
        return method.signature()
    if fragment == "call":
        return method.call()
    if fragment == "pass":
        return method.pass_(receiver)
    if fragment == "return-struct":
        return method.return_struct(receiver)
    if fragment == "results-struct":
        return method.results_struct()
    if fragment == "results-names":
        return method.results_names()
    if fragment == "params-map":
        return method.params_map()
    if fragment == "results-map":
        return method.results_map()
    raise ValueError(f"unknown fragment: {fragment}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="gowrapgen")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print gowrapgen version.")

    p_merge = sub.add_parser("merge", help="Deep-merge JSON/MessagePack documents left to right.")
    p_merge.add_argument("files", nargs="+", help="Documents to merge; later files win on conflicts.")
    p_merge.add_argument("--out", default=None, help="Write merged JSON here instead of stdout.")

    p_render = sub.add_parser("render", help="Print one code fragment for an interface method.")
    p_render.add_argument("--interface", required=True, help="Interface description document.")
    p_render.add_argument("--name", default=None, help="Interface name (required if the description has several).")
    p_render.add_argument("--method", required=True, help="Method name.")
    p_render.add_argument("--fragment", required=True, choices=FRAGMENTS, help="Fragment to render.")
    p_render.add_argument("--receiver", default="d.", help="Receiver prefix for pass/return-struct (default: d.).")

    p_gen = sub.add_parser("gen", help="Generate a Go decorator for an interface.")
    p_gen.add_argument("--interface", required=True, help="Interface description document.")
    p_gen.add_argument("--name", default=None, help="Interface name (required if the description has several).")
    p_gen.add_argument("--kind", required=True, help="Decorator kind: pass, log or trace.")
    p_gen.add_argument("--out", required=True, help="Output .go file path.")
    p_gen.add_argument(
        "--config",
        action="append",
        default=[],
        help="Config overlay document (repeatable; merged in order after GOWRAPGEN_CONFIG).",
    )
    p_gen.add_argument("--package", default=None, help="Go package name (default: from the description).")
    p_gen.add_argument("--type-name", default=None, help="Generated type name.")

    args = parser.parse_args(argv)
    if args.cmd == "version":
        try:
            print(importlib.metadata.version("gowrapgen"))
        except importlib.metadata.PackageNotFoundError:
            print("0.0.0")
        return

    from .errors import GoWrapGenError

    try:
        _run(args)
    except GoWrapGenError as e:
        raise SystemExit(f"gowrapgen: {e}") from None


def _run(args: argparse.Namespace) -> None:
    if args.cmd == "merge":
        from .description import load_document
        from .merge import merge_maps

        merged: dict = {}
        for f in args.files:
            merge_maps(merged, load_document(Path(f)))
        try:
            text = json.dumps(merged, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            # MessagePack inputs may carry bin/ext values JSON cannot hold.
            raise SystemExit(f"gowrapgen: merged document is not JSON-serializable: {e}") from None
        if args.out:
            out = Path(args.out)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(text + "\n", encoding="utf-8")
        else:
            print(text)
        return

    if args.cmd == "render":
        from .description import load_interfaces, select_interface

        iface = select_interface(load_interfaces(Path(args.interface)), args.name)
        method = iface.method(args.method)
        if method is None:
            raise SystemExit(f"gowrapgen: method not found: {iface.name}.{args.method}")
        print(render_fragment(method, args.fragment, args.receiver))
        return

    if args.cmd == "gen":
        from .config import decorator_fields, load_config
        from .description import load_interfaces, select_interface
        from .generate import GenerateOptions, write_decorator

        iface = select_interface(load_interfaces(Path(args.interface)), args.name)
        config = load_config([Path(p) for p in args.config])
        opts = GenerateOptions(
            kind=args.kind,
            package=args.package,
            type_name=args.type_name,
            fields=tuple(decorator_fields(config, args.kind)),
        )
        write_decorator(iface, opts, Path(args.out))
        return
