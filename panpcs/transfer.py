"""Share-link transfer: query URLs and parsing of the share pages and responses."""

from __future__ import annotations

import json
import re
import time
from typing import Any, Mapping, Optional
from urllib.parse import urlencode, urlunsplit

PAN_BAIDU_COM = "pan.baidu.com"
PAN_APP_ID = "250528"

_LOGIN_STATE_RE = re.compile(r"(\{.+?loginstate.+?\})\);")

_MISSING = object()


def _text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def _load(data: str | bytes) -> Any:
    try:
        return json.loads(_text(data))
    except ValueError:
        return _MISSING


def _walk(node: Any, parts: list[str]) -> Any:
    if not parts:
        return node
    key, rest = parts[0], parts[1:]
    if isinstance(node, list):
        if key == "#":
            if not rest:
                return len(node)
            found = (_walk(element, rest) for element in node)
            return [value for value in found if value is not _MISSING]
        if key.isdigit():
            index = int(key)
            return _walk(node[index], rest) if index < len(node) else _MISSING
        return _MISSING
    if isinstance(node, dict) and key in node:
        return _walk(node[key], rest)
    return _MISSING


def _get(doc: Any, path: str) -> Any:
    """Look up a dotted path; ``#`` maps the rest of the path over an array."""
    if doc is _MISSING:
        return _MISSING
    return _walk(doc, path.split("."))


def _as_str(value: Any) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                return int(float(value))
            except ValueError:
                return 0
    return 0


def _as_list(value: Any) -> list:
    if value is _MISSING:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _base(path: str) -> str:
    """Last element of a slash-separated path."""
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path[path.rfind("/") + 1:]


def _share_url(sub_path: str, query: Mapping[str, str]) -> str:
    encoded = urlencode(sorted(query.items()))
    return urlunsplit(("https", PAN_BAIDU_COM, "/share/" + sub_path, encoded, ""))


def generate_share_query_url(sub_path: str, params: Optional[Mapping[str, str]] = None,
                             now_ms: Optional[int] = None) -> str:
    """URL of a share interface with the usual web client parameters."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    query = {
        "app_id": PAN_APP_ID,
        "channel": "chunlei",
        "t": str(now_ms),
        "web": "1",
        "clienttype": "0",
    }
    query.update(params or {})
    return _share_url(sub_path, query)


def extract_share_info(metajson: str) -> dict[str, str]:
    """Transfer parameters from the share page metadata.

    ``ErrMsg`` is ``"0"`` on success, otherwise a description of the failure.
    """
    res: dict[str, str] = {}
    if "server_filename" not in metajson:
        res["ErrMsg"] = "获取分享文件详情失败"
        return res
    doc = _load(metajson)
    errno = _as_int(_get(doc, "file_list.errno"))
    if errno != 0:
        res["ErrMsg"] = f"未知错误, 错误码{errno}"
        return res

    res["filename"] = _as_str(_get(doc, "file_list.0.server_filename"))
    fs_ids = _as_list(_get(doc, "file_list.#.fs_id"))
    fids = "[" + "".join(_as_str(fid) + "," for fid in fs_ids)

    res["shareid"] = _as_str(_get(doc, "shareid"))
    res["from"] = _as_str(_get(doc, "share_uk"))
    res["bdstoken"] = _as_str(_get(doc, "bdstoken"))

    query = {"app_id": PAN_APP_ID, "channel": "chunlei", "clienttype": "0", "web": "1"}
    query.update(res)
    res["item_num"] = str(len(fs_ids))
    res["ErrMsg"] = "0"
    res["fs_id"] = fids[:-1] + "]"
    res["shareUrl"] = _share_url("transfer", query)
    return res


def parse_share_page(body: str | bytes) -> dict[str, str]:
    """Tokens found in a share page; ``ErrMsg`` is ``"0"`` on success."""
    text = _text(body)
    tokens = {"ErrMsg": "0"}
    if "error-404" in text:
        tokens["ErrMsg"] = "页面不存在"
        return tokens
    if "platform-non-found" in text:
        tokens["ErrMsg"] = "分享链接已失效"
        return tokens

    match = _LOGIN_STATE_RE.search(text)
    if match is None:
        tokens["ErrMsg"] = "请确认登录参数中已经包含了网盘STOKEN"
        return tokens
    meta = match.group(1)
    doc = _load(meta)
    tokens["metajson"] = meta
    for key in ("bdstoken", "uk", "share_uk", "shareid"):
        tokens[key] = _as_str(_get(doc, key))
    return tokens


def parse_post_share_query(body: str | bytes) -> dict[str, str]:
    """Result of submitting a share query; ``ErrMsg`` is ``"0"`` on success."""
    errno = _as_int(_get(_load(body), "errno"))
    if errno != 0:
        return {"ErrMsg": f"未知错误, 错误码{errno}"}
    return {"ErrMsg": "0"}


def parse_transfer_response(mode: str, body: str | bytes) -> dict[str, str]:
    """Interpret a transfer response; ``ErrNo`` is ``"0"`` on success."""
    res = {"ErrNo": "0"}
    doc = _load(body)
    if doc is _MISSING:
        res["ErrNo"] = "2"
        res["ErrMsg"] = "返回json解析错误"
        return res

    errno = _as_int(_get(doc, "errno"))
    if errno != 0:
        res["ErrNo"] = "3"
        res["ErrMsg"] = "获取分享项元数据错误"
        if mode == "POST" and errno == 12:
            file = _as_str(_get(doc, "info.0.path")).rsplit("/", 1)[-1]
            item_errno = _as_int(_get(doc, "info.0.errno"))
            nums = _as_int(_get(doc, "target_file_nums"))
            limit = _as_int(_get(doc, "target_file_nums_limit"))
            if nums > limit:
                res["ErrNo"] = "4"
                res["ErrMsg"] = f"转存文件数{nums}超过当前用户上限, 当前用户单次最大转存数{limit}"
                res["limit"] = str(limit)
            elif item_errno == -30:
                res["ErrNo"] = "9"
                res["ErrMsg"] = f"当前目录下已有{file}同名文件/文件夹"
            else:
                res["ErrMsg"] = f"未知错误, 错误代码{item_errno}"
        elif mode == "POST" and errno == 4:
            res["ErrMsg"] = "文件重复"
        return res

    res["filename"] = _as_str(_get(doc, "info.0.path")).rsplit("/", 1)[-1]
    paths = _as_list(_get(doc, "info.#.path"))
    if not paths:
        raise ValueError("no transferred paths in response")
    res["filenames"] = ",".join(_base(_as_str(p)) for p in paths)
    if len(_as_list(_get(doc, "info.#.fsid"))) > 1:
        res["filename"] += "等多个文件/文件夹"
    return res