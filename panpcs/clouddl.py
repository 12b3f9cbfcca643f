"""Offline (cloud) download tasks."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Sequence

from panpcs.errors import ErrType, PCSErrInfo, handle_json_parse
from panpcs.util import _path_clean

OPERATION_CLOUD_DL_QUERY_TASK = "精确查询离线下载任务"
OPERATION_CLOUD_DL_LIST_TASK = "查询离线下载任务列表"

MAX_QUERY_TASK_IDS = 100

_STATUS_TEXTS = {
    0: "下载成功",
    1: "下载进行中",
    2: "系统错误",
    3: "资源不存在",
    4: "下载超时",
    5: "资源存在但下载失败",
    6: "存储空间不足",
    7: "任务取消",
}

_TABLE_HEADER = ["#", "任务ID", "任务名称", "文件大小", "创建日期", "保存路径", "资源地址", "状态"]


def _must_int(value: Any) -> int:
    """Integer value of a number or numeric string; 0 when it is neither."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def status_text(status: int) -> str:
    """Human-readable text for a task status code."""
    return _STATUS_TEXTS.get(status, f"未知状态码: {status}")


@dataclass
class CloudDlFileInfo:
    file_name: str = ""
    file_size: int = 0


@dataclass
class CloudDlTaskInfo:
    """State of one offline download task."""

    task_id: int = 0
    status: int = 0
    status_text: str = ""
    file_size: int = 0
    finished_size: int = 0
    create_time: int = 0
    start_time: int = 0
    finish_time: int = 0
    save_path: str = ""
    source_url: str = ""
    task_name: str = ""
    od_type: int = 0
    file_list: list[CloudDlFileInfo] = field(default_factory=list)
    result: int = 0

    @classmethod
    def from_json(cls, task_id: int, data: dict[str, Any]) -> "CloudDlTaskInfo":
        status = _must_int(data.get("status"))
        files = [
            CloudDlFileInfo(
                file_name=entry.get("file_name") or "",
                file_size=_must_int(entry.get("file_size")),
            )
            for entry in data.get("file_list") or []
            if entry is not None
        ]
        return cls(
            task_id=task_id,
            status=status,
            status_text=status_text(status),
            file_size=_must_int(data.get("file_size")),
            finished_size=_must_int(data.get("finished_size")),
            create_time=_must_int(data.get("create_time")),
            start_time=_must_int(data.get("start_time")),
            finish_time=_must_int(data.get("finish_time")),
            save_path=data.get("save_path") or "",
            source_url=data.get("source_url") or "",
            task_name=data.get("task_name") or "",
            od_type=_must_int(data.get("od_type")),
            file_list=files,
            result=_must_int(data.get("result")),
        )


def parse_query_task(data: Any, task_ids: Sequence[int]) -> list[CloudDlTaskInfo]:
    """Tasks from a query response, in the order of ``task_ids``.

    Only the first 100 ids are considered; ids absent from the response are
    left out. Raises :class:`PCSErrInfo` when no ids are given or the
    response reports an error.
    """
    op = OPERATION_CLOUD_DL_QUERY_TASK
    if not task_ids:
        raise PCSErrInfo(op, ErrType.OTHERS, ValueError("no input any task_ids"))
    ids = list(task_ids)[:MAX_QUERY_TASK_IDS]

    info = PCSErrInfo(op)
    parsed = handle_json_parse(op, data, info)
    task_info = parsed.get("task_info") or {}
    if not isinstance(task_info, dict):
        info.set_json_error(TypeError("field 'task_info': expected object"))
        raise info

    tasks = []
    for task_id in ids:
        entry = task_info.get(str(task_id))
        if not isinstance(entry, dict):
            continue
        tasks.append(CloudDlTaskInfo.from_json(int(task_id), entry))
    return tasks


def parse_list_task_ids(data: Any) -> list[int]:
    """Task ids from a list response; ids that are not integers are skipped."""
    op = OPERATION_CLOUD_DL_LIST_TASK
    info = PCSErrInfo(op)
    parsed = handle_json_parse(op, data, info)
    entries = parsed.get("task_info") or []
    if not isinstance(entries, list):
        info.set_json_error(TypeError("field 'task_info': expected array"))
        raise info

    ids = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            ids.append(int(str(entry.get("task_id"))))
        except ValueError:
            continue
    return ids


def _format_size(size: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    value = float(size)
    for unit in units:
        if abs(value) < 1024 or unit == units[-1]:
            return f"{int(value)}{unit}" if unit == "B" else f"{value:.2f}{unit}"
        value /= 1024
    return f"{size}B"


def _format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def _display_width(text: str) -> int:
    return sum(2 if unicodedata.east_asian_width(c) in ("W", "F") else 1 for c in text)


def _render_table(header: list[str], rows: Iterable[list[str]]) -> str:
    all_rows = [header, *rows]
    widths = [max(_display_width(row[col]) for row in all_rows) for col in range(len(header))]
    lines = []
    for row in all_rows:
        cells = [cell + " " * (width - _display_width(cell)) for cell, width in zip(row, widths)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines) + "\n"


def format_task_list(tasks: Iterable[CloudDlTaskInfo]) -> str:
    """Render tasks as a text table."""
    rows = [
        [
            str(index),
            str(task.task_id),
            task.task_name,
            _format_size(task.file_size),
            _format_time(task.create_time),
            _path_clean(task.save_path),
            task.source_url,
            task.status_text,
        ]
        for index, task in enumerate(tasks)
    ]
    return _render_table(_TABLE_HEADER, rows)