"""Upload, rapid upload and chunked upload responses."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from typing import Any, Sequence

from panpcs.errors import ErrType, PanErrorInfo, PCSErrInfo, handle_json_parse

KB = 1024
MB = 1024 * KB
GB = 1024 * MB

MAX_UPLOAD_BLOCK_SIZE = 2 * GB
MIN_UPLOAD_BLOCK_SIZE = 4 * MB
MAX_RAPID_UPLOAD_SIZE = 20 * GB
RECOMMEND_UPLOAD_BLOCK_SIZE = 1 * GB
SLICE_MD5_SIZE = 256 * KB
EMPTY_CONTENT_MD5 = "d41d8cd98f00b204e9800998ecf8427e"

OPERATION_UPLOAD = "上传单个文件"
OPERATION_UPLOAD_TMP_FILE = "分片上传—文件分片及上传"
OPERATION_UPLOAD_PRECREATE = "分片上传—Precreate"
OPERATION_RAPID_UPLOAD = "秒传文件"


class UploadMD5NotFound(LookupError):
    def __init__(self) -> None:
        super().__init__("unknown response data, md5 not found")


class UploadSavePathNotFound(LookupError):
    def __init__(self) -> None:
        super().__init__("unknown response data, file saved path not found")


class UploadSeqNotMatch(ValueError):
    def __init__(self) -> None:
        super().__init__("服务器返回的上传队列不匹配")


class UploadMD5Unknown(LookupError):
    def __init__(self) -> None:
        super().__init__("服务器无匹配文件/秒传未生效")


class UploadFileExists(FileExistsError):
    def __init__(self) -> None:
        super().__init__("文件已存在")


@dataclass
class RapidUploadInfo:
    """What the server needs to accept a file without its content."""

    filename: str = ""
    content_length: int = 0
    content_md5: str = ""
    slice_md5: str = ""
    content_crc32: str = ""


@dataclass
class UploadSeq:
    seq: int
    block: str


@dataclass
class PrecreateInfo:
    is_rapid_upload: bool = False
    upload_id: str = ""
    upload_seq_list: list[UploadSeq] = field(default_factory=list)


def randomify_md5(md5: str) -> str:
    """Lower-case ``md5`` with about 40% of its characters upper-cased at random."""
    rng = random.Random()
    return "".join(c.upper() if rng.random() > 0.6 else c.lower() for c in md5)


def parse_upload_response(data: Any) -> str:
    """Saved path from a single-file upload response."""
    info = PCSErrInfo(OPERATION_UPLOAD)
    parsed = handle_json_parse(OPERATION_UPLOAD, data, info)
    path = parsed.get("path")
    if not isinstance(path, str) or not path:
        info.err_type = ErrType.INTERNAL_ERROR
        info.err = UploadSavePathNotFound()
        raise info
    return path


def parse_tmpfile_response(data: Any) -> str:
    """Block md5 from a chunk upload response."""
    info = PCSErrInfo(OPERATION_UPLOAD_TMP_FILE)
    parsed = handle_json_parse(OPERATION_UPLOAD_TMP_FILE, data, info)
    md5 = parsed.get("md5")
    if not isinstance(md5, str) or not md5:
        info.err_type = ErrType.INTERNAL_ERROR
        info.err = UploadMD5NotFound()
        raise info
    return md5


def parse_precreate(data: Any, block_list: Sequence[str]) -> PrecreateInfo:
    """Interpret a precreate response for the given block md5 list."""
    info = PanErrorInfo(OPERATION_UPLOAD_PRECREATE)
    parsed = handle_json_parse(OPERATION_UPLOAD_PRECREATE, data, info)
    return_type = parsed.get("return_type")

    if return_type == 1:
        seqs = parsed.get("block_list") or []
        if len(seqs) != len(block_list):
            info.err_type = ErrType.REMOTE_ERROR
            info.err = UploadSeqNotMatch()
            raise info
        return PrecreateInfo(
            upload_id=parsed.get("uploadid") or "",
            upload_seq_list=[UploadSeq(seq=seq, block=block) for seq, block in zip(seqs, block_list)],
        )
    if return_type == 2:
        return PrecreateInfo(is_rapid_upload=True)
    raise ValueError("unknown returntype")


def check_rapid_upload_v2(data: Any) -> str:
    """Check an xpan create response; returns the saved path.

    Raises :class:`PanErrorInfo` for unparseable responses and for any
    nonzero ``errno``.
    """
    info = PanErrorInfo(OPERATION_RAPID_UPLOAD)
    try:
        raw = data.read() if hasattr(data, "read") else data
        parsed = json.loads(raw)
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise TypeError(f"cannot decode {type(parsed).__name__} into an object")
        errno = parsed.get("errno") or 0
        if isinstance(errno, bool) or not isinstance(errno, int):
            raise TypeError(f"field 'errno': expected integer, got {errno!r}")
    except (ValueError, TypeError) as exc:
        info.set_json_error(exc)
        raise info from exc

    if errno == 0:
        path = parsed.get("path")
        return path if isinstance(path, str) else ""

    info.err_type = ErrType.OTHERS
    if errno == 2:
        info.err = UploadMD5Unknown()
    elif errno == -8:
        info.err = UploadFileExists()
    else:
        info.err = RuntimeError(f"errno={errno}")
    raise info