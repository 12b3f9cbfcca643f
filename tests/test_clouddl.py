import json

import pytest

from panpcs.clouddl import (
    CloudDlFileInfo,
    CloudDlTaskInfo,
    format_task_list,
    parse_list_task_ids,
    parse_query_task,
    status_text,
)
from panpcs.errors import ErrType, PCSErrInfo


def _task(name="movie.mkv", status="1"):
    return {
        "status": status,
        "file_size": "2048",
        "finished_size": "1024",
        "create_time": "1600000000",
        "start_time": "1600000001",
        "finish_time": "0",
        "save_path": "/downloads//films/",
        "source_url": "http://example.com/movie.mkv",
        "task_name": name,
        "od_type": "0",
        "file_list": [{"file_name": name, "file_size": "2048"}, None],
        "result": 0,
    }


@pytest.mark.parametrize(
    "status, text",
    [(0, "下载成功"), (1, "下载进行中"), (6, "存储空间不足"), (7, "任务取消")],
)
def test_status_text_known(status, text):
    assert status_text(status) == text


def test_status_text_unknown():
    assert status_text(42) == "未知状态码: 42"


def test_from_json_converts_strings():
    task = CloudDlTaskInfo.from_json(9, _task())
    assert task.task_id == 9
    assert task.status == 1
    assert task.status_text == "下载进行中"
    assert task.file_size == 2048
    assert task.finished_size == 1024
    assert task.create_time == 1600000000
    assert task.file_list == [CloudDlFileInfo("movie.mkv", 2048)]


def test_from_json_bad_numbers_become_zero():
    data = _task()
    data["file_size"] = "n/a"
    task = CloudDlTaskInfo.from_json(1, data)
    assert task.file_size == 0


def test_parse_query_task_follows_id_order_and_skips_missing():
    body = json.dumps({"task_info": {"2": _task("b"), "1": _task("a")}})
    tasks = parse_query_task(body, [1, 3, 2])
    assert [t.task_id for t in tasks] == [1, 2]
    assert [t.task_name for t in tasks] == ["a", "b"]


def test_parse_query_task_only_first_hundred_ids():
    ids = list(range(1, 151))
    body = json.dumps({"task_info": {"5": _task("five"), "120": _task("late")}})
    tasks = parse_query_task(body, ids)
    assert [t.task_id for t in tasks] == [5]


def test_parse_query_task_requires_ids():
    with pytest.raises(PCSErrInfo) as exc_info:
        parse_query_task("{}", [])
    assert exc_info.value.err_type is ErrType.OTHERS
    assert "no input any task_ids" in str(exc_info.value)


def test_parse_query_task_remote_error():
    body = json.dumps({"error_code": 31066, "error_msg": "not found"})
    with pytest.raises(PCSErrInfo) as exc_info:
        parse_query_task(body, [1])
    assert exc_info.value.err_type is ErrType.REMOTE_ERROR
    assert exc_info.value.remote_err_code == 31066


def test_parse_query_task_bad_json():
    with pytest.raises(PCSErrInfo) as exc_info:
        parse_query_task("not json", [1])
    assert exc_info.value.err_type is ErrType.JSON_PARSE_ERROR


def test_parse_list_task_ids_skips_invalid():
    body = json.dumps({"task_info": [{"task_id": "11"}, None, {"task_id": "x"}, {"task_id": "12"}]})
    assert parse_list_task_ids(body) == [11, 12]


def test_parse_list_task_ids_empty():
    assert parse_list_task_ids(json.dumps({"task_info": []})) == []


def test_format_task_list_contents():
    task = CloudDlTaskInfo.from_json(77, _task("movie.mkv"))
    table = format_task_list([task])
    lines = table.splitlines()
    assert len(lines) == 2
    assert "任务ID" in lines[0] and "资源地址" in lines[0]
    assert "movie.mkv" in lines[1]
    assert "77" in lines[1]
    assert "/downloads/films" in lines[1]
    assert "/downloads//films/" not in lines[1]
    assert "下载进行中" in lines[1]