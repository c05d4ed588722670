from __future__ import annotations

import copy
from typing import Any


def merge_maps(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge `source` into `target` in place and return `target`.

    Keys missing from `target` are added. When both sides hold a mapping for
    the same key the two are merged recursively; any other collision
    (scalar/scalar or scalar/mapping) is resolved in favour of `source`.
    Keys present only in `target` are left untouched.
    """
    for key, sv in source.items():
        tv = target.get(key)
        if isinstance(tv, dict) and isinstance(sv, dict):
            if tv is not sv:
                merge_maps(tv, sv)
            continue
        # New nested mappings are copied so target never aliases source.
        target[key] = copy.deepcopy(sv) if isinstance(sv, dict) else sv
    return target
