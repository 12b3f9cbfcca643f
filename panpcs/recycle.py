"""Recycle bin listings and results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from panpcs.errors import PanErrorInfo, PCSErrInfo, handle_json_parse

OPERATION_RECYCLE_LIST = "列出回收站文件列表"
OPERATION_RECYCLE_RESTORE = "还原回收站文件或目录"
OPERATION_RECYCLE_CLEAR = "清空回收站"


@dataclass
class RecycleFDInfo:
    """A file or directory in the recycle bin."""

    fs_id: int = 0
    isdir: int = 0
    left_time: int = 0
    path: str = ""
    filename: str = ""
    ctime: int = 0
    mtime: int = 0
    md5: str = ""
    size: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "RecycleFDInfo":
        return cls(
            fs_id=data.get("fs_id") or 0,
            isdir=data.get("isdir") or 0,
            left_time=data.get("leftTime") or 0,
            path=data.get("path") or "",
            filename=data.get("server_filename") or "",
            ctime=data.get("server_ctime") or 0,
            mtime=data.get("server_mtime") or 0,
            md5=data.get("md5") or "",
            size=data.get("size") or 0,
        )


def _items(raw: Any) -> list[RecycleFDInfo]:
    return [RecycleFDInfo.from_json(item) for item in raw or [] if item is not None]


def parse_recycle_list(data: Any) -> list[RecycleFDInfo]:
    """Parse the recycle list response; raises :class:`PanErrorInfo` on errors."""
    op = OPERATION_RECYCLE_LIST
    parsed = handle_json_parse(op, data, PanErrorInfo(op))
    return _items(parsed.get("list"))


def parse_recycle_restore(data: Any) -> list[int]:
    """fs_ids restored; raises :class:`PCSErrInfo` on errors."""
    op = OPERATION_RECYCLE_RESTORE
    parsed = handle_json_parse(op, data, PCSErrInfo(op))
    extra = parsed.get("extra") or {}
    return [item.get("fs_id") or 0 for item in extra.get("list") or [] if item is not None]


def parse_recycle_clear(data: Any) -> int:
    """Number of entries removed; raises :class:`PCSErrInfo` on errors."""
    op = OPERATION_RECYCLE_CLEAR
    parsed = handle_json_parse(op, data, PCSErrInfo(op))
    extra = parsed.get("extra") or {}
    return extra.get("succNum") or 0