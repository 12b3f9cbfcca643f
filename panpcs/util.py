"""Small helpers shared by the request builders and response parsers."""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from typing import Iterable


def _path_clean(path: str) -> str:
    """Shortest equivalent slash-separated path, processed purely lexically."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    cleaned = "/".join(parts)
    if rooted:
        cleaned = "/" + cleaned
    return cleaned or "."


def _path_dir(path: str) -> str:
    """Everything but the last element of ``path``, cleaned."""
    return _path_clean(path[: path.rfind("/") + 1])


def merge_string_list(*args: str) -> str:
    """Join strings into a JSON-style array literal: ``["a","b"]``."""
    return '["' + '","'.join(args) + '"]'


def merge_int64_list(*args: int) -> str:
    """Join integers into an array literal: ``[1,2]``."""
    return "[" + ",".join(str(int(value)) for value in args) + "]"


def all_related_dir(pcspaths: Iterable[str]) -> list[str]:
    """Parent directories of the given paths, first occurrence order, no repeats."""
    dirs: list[str] = []
    for pcspath in pcspaths:
        parent = _path_dir(pcspath)
        if parent not in dirs:
            dirs.append(parent)
    return dirs


def create_passwd() -> str:
    """Four hex characters derived from the current time, for share passwords."""
    digest = hashlib.md5()
    digest.update(b"Asswecan")
    digest.update(str(datetime.now()).encode())
    return digest.hexdigest()[:4]


def get_http_scheme(https: bool) -> str:
    """URL scheme for the given security choice: ``https`` or ``http``."""
    if https:
        return "https"
    return "http"


def public_suffix(domain: str) -> str:
    """Cookie public suffix: every ``*.baidu.com`` host shares ``com``."""
    if domain.endswith(".baidu.com"):
        return "com"
    return domain


PUBLIC_SUFFIX_LIST_NAME = "baidupcs"


def _json_compact(obj: object) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))