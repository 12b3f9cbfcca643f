"""JSON request bodies for batch file operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from panpcs.util import _json_compact, _path_dir

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal(obj: object) -> str:
    """Compact JSON with HTML-sensitive characters escaped."""
    text = _json_compact(obj)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


@dataclass
class CpMv:
    """Source and destination of a copy, move or rename."""

    from_: str
    to: str

    def as_dict(self) -> dict[str, str]:
        return {"from": self.from_, "to": self.to}

    def to_json(self) -> str:
        return _marshal(self.as_dict())


def paths_list_json(*args: str) -> str:
    """``{"list":[{"path":...},...]}``."""
    return _marshal({"list": [{"path": p} for p in args]})


def fs_id_list_json(*args: int) -> str:
    """``{"list":[{"fs_id":...},...]}``."""
    return _marshal({"list": [{"fs_id": int(i)} for i in args]})


def block_list_json(*args: str) -> str:
    """``{"block_list":[...]}``; no blocks encode as null."""
    return _marshal({"block_list": list(args) or None})


def cp_mv_list_json(items: Iterable[CpMv]) -> str:
    """``{"list":[{"from":...,"to":...},...]}``; an empty list encodes as null."""
    entries = [item.as_dict() for item in items]
    return _marshal({"list": entries or None})


def cp_mv_related_dirs(items: Iterable[CpMv]) -> list[str]:
    """Every directory touched by the operations, without repeats."""
    dirs: list[str] = []
    for item in items:
        for parent in (_path_dir(item.from_), _path_dir(item.to)):
            if parent not in dirs:
                dirs.append(parent)
    return dirs