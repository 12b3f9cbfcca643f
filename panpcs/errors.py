"""Error types raised by the PCS, pan and dlink web interfaces."""

from __future__ import annotations

import json
from abc import ABCMeta, abstractmethod
from enum import IntEnum
from typing import Any, ClassVar

STR_SUCCESS = "操作成功"
STR_INTERNAL_ERROR = "内部错误"
STR_REMOTE_ERROR = "远端服务器返回错误"
STR_NET_ERROR = "网络错误"
STR_JSON_PARSE_ERROR = "json 数据解析失败"


class ErrType(IntEnum):
    """Kind of failure carried by an error info."""

    NO_ERROR = 0
    INTERNAL_ERROR = 1
    REMOTE_ERROR = 2
    NET_ERROR = 3
    JSON_PARSE_ERROR = 4
    OTHERS = 5


_PAN_ERRORS = {
    0: STR_SUCCESS,
    -1: "由于您分享了违反相关法律法规的文件，分享功能已被禁用，之前分享出去的文件不受影响。",
    -2: "用户不存在,请刷新页面后重试",
    -3: "文件不存在,请刷新页面后重试",
    -4: "登录信息有误，请重新登录试试",
    -5: "host_key和user_key无效",
    -6: "请重新登录",
    -7: "该分享已删除或已取消",
    -8: "该分享已经过期",
    -9: "文件不存在",
    -10: "分享外链已经达到最大上限100000条，不能再次分享",
    -11: "验证cookie无效",
    -12: "访问密码错误",
    -14: "对不起，短信分享每天限制20条，你今天已经分享完，请明天再来分享吧！",
    -15: "对不起，邮件分享每天限制20封，你今天已经分享完，请明天再来分享吧！",
    -16: "对不起，该文件已经限制分享！",
    -17: "文件分享超过限制",
    -19: "需要输入验证码",
    -21: "分享已取消或分享信息无效",
    -30: "文件已存在",
    -31: "文件保存失败",
    -33: "一次支持操作999个，减点试试吧",
    -62: "可能需要输入验证码",
    -70: "你分享的文件中包含病毒或疑似病毒，为了你和他人的数据安全，换个文件分享吧",
    2: "参数错误",
    3: "未登录或帐号无效",
    4: "存储好像出问题了，请稍候再试",
    105: "啊哦，链接错误没找到文件，请打开正确的分享链接",
    108: "文件名有敏感词，优化一下吧",
    110: "分享次数超出限制，可以到“我的分享”中查看已分享的文件链接",
    112: "页面已过期，请刷新后重试",
    113: "签名错误",
    114: "当前任务不存在，保存失败",
    115: "该文件禁止分享",
    132: "您的帐号可能存在安全风险，为了确保为您本人操作，请先进行安全验证。",
}


def find_pan_err(errno: int) -> str:
    """Return the message for a pan web errno."""
    return _PAN_ERRORS.get(errno, "未知错误")


def find_pcs_err(err_code: int, err_msg: str) -> tuple[int, str]:
    """Translate a known PCS error code; unknown codes keep their message."""
    if err_code == 0:
        return err_code, ""
    if err_code == 31045:
        return err_code, "操作失败, 可能百度帐号登录状态过期, 请尝试重新登录, 消息: " + err_msg
    known = {
        31061: "文件已存在",
        31066: "文件或目录不存在",
        31079: "秒传文件失败",
    }
    return err_code, known.get(err_code, err_msg)


class BaseErrorInfo(Exception, metaclass=ABCMeta):
    """An operation's failure: local, network, JSON or reported by the server."""

    _label: ClassVar[str] = "errorinfo"
    # json key -> (attribute name, expected type)
    _json_fields: ClassVar[dict[str, tuple[str, type]]] = {}

    def __init__(self, operation: str = "", err_type: ErrType = ErrType.NO_ERROR, err: Any = None):
        super().__init__(operation)
        self.operation = operation
        self.err_type = err_type
        self.err = err

    def set_json_error(self, err: Any) -> None:
        self.err_type = ErrType.JSON_PARSE_ERROR
        self.err = err

    def set_net_error(self, err: Any) -> None:
        self.err_type = ErrType.NET_ERROR
        self.err = err

    def set_remote_error(self) -> None:
        self.err_type = ErrType.REMOTE_ERROR

    def load_json(self, data: Any) -> None:
        """Fill the server error fields from a decoded JSON object."""
        if not isinstance(data, dict):
            raise TypeError(f"cannot decode {type(data).__name__} into an error object")
        for key, (attr, kind) in self._json_fields.items():
            value = data.get(key)
            if value is None:
                continue
            if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"field {key!r}: expected integer, got {value!r}")
            if kind is str and not isinstance(value, str):
                raise TypeError(f"field {key!r}: expected string, got {value!r}")
            setattr(self, attr, value)

    @property
    @abstractmethod
    def remote_err_code(self) -> int:
        """Error code reported by the server."""

    @property
    @abstractmethod
    def remote_err_msg(self) -> str:
        """Error message reported by the server."""

    @abstractmethod
    def _remote_report(self) -> tuple[int, str]:
        """Code and message shown for a remote error."""

    def __str__(self) -> str:
        op = self.operation
        if not op:
            return str(self.err) if self.err is not None else STR_SUCCESS

        kind = self.err_type
        if kind is ErrType.INTERNAL_ERROR:
            return f"{op}: {STR_INTERNAL_ERROR}, {self.err}"
        if kind is ErrType.JSON_PARSE_ERROR:
            return f"{op}: {STR_JSON_PARSE_ERROR}, {self.err}"
        if kind is ErrType.NET_ERROR:
            return f"{op}: {STR_NET_ERROR}, {self.err}"
        if kind is ErrType.REMOTE_ERROR:
            if self.remote_err_code == 0:
                return f"{op}: {STR_SUCCESS}"
            code, msg = self._remote_report()
            return f"{op}: 遇到错误, {STR_REMOTE_ERROR}, 代码: {code}, 消息: {msg}"
        if kind is ErrType.OTHERS:
            if self.err is None:
                return f"{op}: {STR_SUCCESS}"
            return f"{op}, 遇到错误, {self.err}"
        raise ValueError(f"{self._label}: unknown ErrType")


class PCSErrInfo(BaseErrorInfo):
    """Error from the PCS REST interface."""

    _label = "pcserrorinfo"
    _json_fields = {"error_code": ("err_code", int), "error_msg": ("err_msg", str)}

    def __init__(self, operation: str = "", err_type: ErrType = ErrType.NO_ERROR, err: Any = None,
                 err_code: int = 0, err_msg: str = ""):
        super().__init__(operation, err_type, err)
        self.err_code = err_code
        self.err_msg = err_msg

    @property
    def remote_err_code(self) -> int:
        return self.err_code

    @property
    def remote_err_msg(self) -> str:
        return find_pcs_err(self.err_code, self.err_msg)[1]

    def _remote_report(self) -> tuple[int, str]:
        return find_pcs_err(self.err_code, self.err_msg)


class PanErrorInfo(BaseErrorInfo):
    """Error from the pan web interface."""

    _label = "panerrorinfo"
    _json_fields = {"errno": ("errno", int)}

    def __init__(self, operation: str = "", err_type: ErrType = ErrType.NO_ERROR, err: Any = None,
                 errno: int = 0):
        super().__init__(operation, err_type, err)
        self.errno = errno

    @property
    def remote_err_code(self) -> int:
        return self.errno

    @property
    def remote_err_msg(self) -> str:
        return find_pan_err(self.errno)

    def _remote_report(self) -> tuple[int, str]:
        return self.errno, find_pan_err(self.errno)


class DlinkErrInfo(BaseErrorInfo):
    """Error from the dlink server."""

    _label = "dlinkerrinfo"
    _json_fields = {"errno": ("errno", int), "msg": ("msg", str)}

    def __init__(self, operation: str = "", err_type: ErrType = ErrType.NO_ERROR, err: Any = None,
                 errno: int = 0, msg: str = ""):
        super().__init__(operation, err_type, err)
        self.errno = errno
        self.msg = msg

    @property
    def remote_err_code(self) -> int:
        return self.errno

    @property
    def remote_err_msg(self) -> str:
        return self.msg

    def _remote_report(self) -> tuple[int, str]:
        return self.errno, self.msg


def _read(data: Any) -> Any:
    if hasattr(data, "read"):
        return data.read()
    return data


def handle_json_parse(op: str, data: Any, info: BaseErrorInfo | None = None) -> dict:
    """Decode a JSON response, raising ``info`` on parse or remote errors.

    Returns the decoded object when the server reported no error.
    """
    if info is None:
        info = PCSErrInfo(op)
    try:
        parsed = json.loads(_read(data))
        if parsed is None:
            parsed = {}
        info.load_json(parsed)
    except (ValueError, TypeError) as exc:
        info.set_json_error(exc)
        raise info from exc

    if info.remote_err_code != 0:
        info.set_remote_error()
        raise info
    return parsed


def decode_pcs_json_error(op: str, data: Any) -> dict:
    """Check a PCS JSON response for errors."""
    return handle_json_parse(op, data, PCSErrInfo(op))


def decode_pan_json_error(op: str, data: Any) -> dict:
    """Check a pan JSON response for errors."""
    return handle_json_parse(op, data, PanErrorInfo(op))