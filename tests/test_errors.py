import io

import pytest

from panpcs.errors import (
    STR_JSON_PARSE_ERROR,
    STR_NET_ERROR,
    STR_REMOTE_ERROR,
    STR_SUCCESS,
    DlinkErrInfo,
    ErrType,
    PanErrorInfo,
    PCSErrInfo,
    decode_pan_json_error,
    decode_pcs_json_error,
    find_pan_err,
    find_pcs_err,
    handle_json_parse,
)


def test_find_pan_err_known_and_unknown():
    assert find_pan_err(0) == STR_SUCCESS
    assert find_pan_err(-9) == "文件不存在"
    assert find_pan_err(113) == "签名错误"
    assert find_pan_err(424242) == "未知错误"


def test_find_pcs_err():
    assert find_pcs_err(0, "ignored") == (0, "")
    assert find_pcs_err(31061, "file already exists") == (31061, "文件已存在")
    assert find_pcs_err(31079, "x") == (31079, "秒传文件失败")
    assert find_pcs_err(12345, "raw message") == (12345, "raw message")
    code, msg = find_pcs_err(31045, "user not exists")
    assert code == 31045
    assert msg.endswith("消息: user not exists")


def test_decode_pcs_success_returns_object():
    result = decode_pcs_json_error("list", b'{"error_code": 0, "list": [1, 2]}')
    assert result["list"] == [1, 2]


def test_decode_pcs_remote_error():
    body = b'{"error_code": 31066, "error_msg": "file does not exist"}'
    with pytest.raises(PCSErrInfo) as info:
        decode_pcs_json_error("meta", body)
    err = info.value
    assert err.err_type is ErrType.REMOTE_ERROR
    assert err.remote_err_code == 31066
    assert err.remote_err_msg == "文件或目录不存在"
    assert str(err) == f"meta: 遇到错误, {STR_REMOTE_ERROR}, 代码: 31066, 消息: 文件或目录不存在"


def test_decode_pan_remote_error_from_stream():
    with pytest.raises(PanErrorInfo) as info:
        decode_pan_json_error("share", io.BytesIO(b'{"errno": -7}'))
    assert info.value.remote_err_code == -7
    assert info.value.remote_err_msg == "该分享已删除或已取消"
    assert "该分享已删除或已取消" in str(info.value)


def test_invalid_json_is_parse_error():
    with pytest.raises(PCSErrInfo) as info:
        decode_pcs_json_error("quota", b"not json")
    assert info.value.err_type is ErrType.JSON_PARSE_ERROR
    assert str(info.value).startswith(f"quota: {STR_JSON_PARSE_ERROR}, ")


def test_wrong_field_type_is_parse_error():
    with pytest.raises(PanErrorInfo) as info:
        decode_pan_json_error("op", '{"errno": "bad"}')
    assert info.value.err_type is ErrType.JSON_PARSE_ERROR


def test_handle_json_parse_defaults_to_pcs_info():
    with pytest.raises(PCSErrInfo) as info:
        handle_json_parse("op", '{"error_code": 31061}', None)
    assert info.value.operation == "op"
    assert info.value.remote_err_msg == "文件已存在"


def test_dlink_remote_message():
    with pytest.raises(DlinkErrInfo) as info:
        handle_json_parse("dlink", '{"errno": 9, "msg": "denied"}', DlinkErrInfo("dlink"))
    assert info.value.remote_err_msg == "denied"
    assert str(info.value).endswith("代码: 9, 消息: denied")


def test_str_without_operation():
    assert str(PCSErrInfo()) == STR_SUCCESS
    assert str(PanErrorInfo(err=ValueError("boom"))) == "boom"


def test_str_net_and_others():
    err = PCSErrInfo("upload")
    err.set_net_error(OSError("reset"))
    assert err.err_type is ErrType.NET_ERROR
    assert str(err) == f"upload: {STR_NET_ERROR}, reset"

    other = PanErrorInfo("op", ErrType.OTHERS)
    assert str(other) == f"op: {STR_SUCCESS}"
    other.err = RuntimeError("bad")
    assert str(other) == "op, 遇到错误, bad"


def test_remote_with_zero_code_is_success():
    err = DlinkErrInfo("dl")
    err.set_remote_error()
    assert str(err) == f"dl: {STR_SUCCESS}"


def test_unknown_err_type_with_operation_raises():
    with pytest.raises(ValueError):
        str(PCSErrInfo("op"))