"""Interface description documents (JSON or MessagePack)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import msgpack

from .errors import DescriptionError, DocumentError
from .signature import Interface, Method, Param

_MSGPACK_SUFFIXES = {".msgpack", ".mpk"}


def load_document(path: Path) -> dict[str, Any]:
    """Decode a JSON or MessagePack document whose top level is a mapping."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentError(f"cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in _MSGPACK_SUFFIXES:
            obj = msgpack.unpackb(raw, raw=False)
        else:
            obj = json.loads(raw.decode("utf-8"))
    except Exception as e:  # noqa: BLE001 - boundary decoding error
        raise DocumentError(f"failed to decode {path}: {e}") from e

    if not isinstance(obj, dict):
        raise DocumentError(f"{path}: top-level value must be an object")
    return obj


def _params_from(raw: Any, *, prefix: str) -> list[Param]:
    # Unnamed entries (common for Go results) get positional names such as
    # p0 or r1 so forwarded calls and deferred hooks can refer to them.
    out: list[Param] = []
    if not isinstance(raw, list):
        return out
    for i, p in enumerate(raw):
        if not isinstance(p, dict):
            continue
        name = p.get("name")
        ty = p.get("type")
        if not isinstance(name, str) or not name or name == "_":
            name = f"{prefix}{i}"
        out.append(Param(name=name, type=ty if isinstance(ty, str) else ""))
    return out


def interfaces_from_description(doc: dict[str, Any]) -> list[Interface]:
    """Build interfaces from a decoded description document.

    Expected shape::

        {"package": "store",
         "interfaces": [{"name": "Store",
                         "methods": [{"name": "Get",
                                      "params": [{"name": "key", "type": "string"}],
                                      "results": [{"name": "err", "type": "error"}]}]}]}

    Interfaces and methods that are not objects or have no name are
    skipped. Unnamed (or blank ``_``) params and results are named by
    position: ``p0, p1, ...`` and ``r0, r1, ...``.
    """
    raw_ifaces = doc.get("interfaces")
    if not isinstance(raw_ifaces, list):
        raise DescriptionError("description must contain an 'interfaces' list")
    package = doc.get("package")
    if not isinstance(package, str):
        package = ""

    out: list[Interface] = []
    for ri in raw_ifaces:
        if not isinstance(ri, dict):
            continue
        iface_name = ri.get("name")
        if not isinstance(iface_name, str) or not iface_name:
            continue
        methods: list[Method] = []
        raw_methods = ri.get("methods")
        if isinstance(raw_methods, list):
            for rm in raw_methods:
                if not isinstance(rm, dict):
                    continue
                name = rm.get("name")
                if not isinstance(name, str) or not name:
                    continue
                methods.append(
                    Method(
                        name=name,
                        params=_params_from(rm.get("params"), prefix="p"),
                        results=_params_from(rm.get("results"), prefix="r"),
                    )
                )
        out.append(Interface(name=iface_name, methods=methods, package=package))
    return out


def load_interfaces(path: Path) -> list[Interface]:
    return interfaces_from_description(load_document(path))


def select_interface(interfaces: list[Interface], name: str | None) -> Interface:
    """Pick an interface by name; without a name there must be exactly one."""
    if name is None:
        if len(interfaces) != 1:
            found = ", ".join(i.name for i in interfaces) or "none"
            raise DescriptionError(f"expected exactly one interface (found: {found}); pass a name")
        return interfaces[0]
    for iface in interfaces:
        if iface.name == name:
            return iface
    raise DescriptionError(f"interface not found: {name}")
