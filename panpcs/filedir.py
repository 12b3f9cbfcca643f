"""File and directory metadata as returned by the listing interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

from panpcs.errors import PCSErrInfo, handle_json_parse

OPERATION_FILES_DIRECTORIES_LIST = "获取目录下的文件列表"


class OrderBy(str, Enum):
    """Field to sort listings by."""

    NAME = "name"
    TIME = "time"
    SIZE = "size"


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderOptions:
    by: OrderBy = OrderBy.NAME
    order: Order = Order.ASC


DEFAULT_ORDER_OPTIONS = OrderOptions()


@dataclass
class FileDirectory:
    """Metadata of one file or directory."""

    fs_id: int = 0
    app_id: int = 0
    path: str = ""
    filename: str = ""
    ctime: int = 0
    mtime: int = 0
    md5: str = ""
    block_list: list[str] = field(default_factory=list)
    size: int = 0
    isdir: bool = False
    ifhassubdir: bool = False
    pre_base: str = ""
    parent: Optional["FileDirectory"] = field(default=None, repr=False, compare=False)
    children: list[Optional["FileDirectory"]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FileDirectory":
        return cls(
            fs_id=data.get("fs_id") or 0,
            app_id=data.get("app_id") or 0,
            path=data.get("path") or "",
            filename=data.get("server_filename") or "",
            ctime=data.get("ctime") or 0,
            mtime=data.get("mtime") or 0,
            md5=data.get("md5") or "",
            block_list=list(data.get("block_list") or []),
            size=data.get("size") or 0,
            isdir=bool(data.get("isdir") or 0),
            ifhassubdir=bool(data.get("ifhassubdir") or 0),
        )

    def fix_md5(self) -> None:
        """Use the single block md5 in place of the often wrong md5 field."""
        if len(self.block_list) == 1:
            self.md5 = self.block_list[0]


def parse_file_directory_list(data: Any) -> list[FileDirectory]:
    """Parse a listing/meta/search response; raises :class:`PCSErrInfo` on errors."""
    info = PCSErrInfo(OPERATION_FILES_DIRECTORIES_LIST)
    parsed = handle_json_parse(OPERATION_FILES_DIRECTORIES_LIST, data, info)
    items = parsed.get("list") or []
    if not isinstance(items, list) or not all(isinstance(i, dict) or i is None for i in items):
        info.set_json_error(TypeError("field 'list': expected array of objects"))
        raise info
    result = [FileDirectory.from_json(item) for item in items if item is not None]
    for fd in result:
        fd.fix_md5()
    return result


def total_size(fdl: Iterable[Optional[FileDirectory]]) -> int:
    """Sum of sizes, children included."""
    return sum(fd.size + total_size(fd.children) for fd in fdl if fd is not None)


def count(fdl: Iterable[Optional[FileDirectory]]) -> tuple[int, int]:
    """``(files, directories)``, children included."""
    files = directories = 0
    for fd in fdl:
        if fd is None:
            continue
        if fd.isdir:
            directories += 1
        else:
            files += 1
        sub_files, sub_dirs = count(fd.children)
        files += sub_files
        directories += sub_dirs
    return files, directories


def all_file_paths(fdl: Iterable[Optional[FileDirectory]]) -> list[str]:
    """Every path in the tree, each entry followed by its children."""
    paths: list[str] = []
    for fd in fdl:
        if fd is None:
            continue
        paths.append(fd.path)
        paths.extend(all_file_paths(fd.children))
    return paths