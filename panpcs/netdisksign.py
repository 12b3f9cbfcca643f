"""Request signatures used by the netdisk web and client interfaces."""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass

_LOCATE_DOWNLOAD_SALT = b"ebrcUYiuxaZv2XGu7KIYKxUrqfnOfpDF"
_SHARE_SURL_INFO_SALT = b"_sharesurlinfo!@#"


def dev_uid(feature: str) -> str:
    """Device id derived from ``feature``: upper-case MD5 hex followed by ``|0``."""
    return hashlib.md5(feature.encode()).hexdigest().upper() + "|0"


@dataclass
class LocateDownloadSign:
    """Signature parameters for the locatedownload request."""

    time: int
    dev_uid: str
    rand: str = ""

    @classmethod
    def create(cls, uid: int, bduss: str, timestamp: int | None = None,
               devuid: str | None = None) -> "LocateDownloadSign":
        """Build and sign; time and device id default to now and ``dev_uid(bduss)``."""
        sign = cls(
            time=int(time.time()) if timestamp is None else timestamp,
            dev_uid=dev_uid(bduss) if devuid is None else devuid,
        )
        sign.sign(uid, bduss)
        return sign

    def sign(self, uid: int, bduss: str) -> None:
        """Compute ``rand`` for the given user."""
        bduss_hex = hashlib.sha1(bduss.encode()).hexdigest().encode()
        digest = hashlib.sha1()
        digest.update(bduss_hex)
        digest.update(str(uid).encode())
        digest.update(_LOCATE_DOWNLOAD_SALT)
        digest.update(str(self.time).encode())
        digest.update(self.dev_uid.encode())
        self.rand = digest.hexdigest()

    def url_param(self) -> str:
        return f"time={self.time}&rand={self.rand}&devuid={self.dev_uid}&cuid={self.dev_uid}"


def share_surl_info_sign(share_id: int) -> str:
    """Sign for the share detail query."""
    return hashlib.md5(str(share_id).encode() + _SHARE_SURL_INFO_SALT).hexdigest()


def sign2(key: str, data: str) -> bytes:
    """RC4 of ``data`` keyed by ``key`` (characters taken by code point)."""
    out = bytearray(len(data))
    if not key:
        return bytes(out)

    key_codes = [ord(c) for c in key]
    state = list(range(256))
    j = 0
    for i in range(256):
        j = (j + state[i] + key_codes[i % len(key_codes)]) % 256
        state[i], state[j] = state[j], state[i]

    i = j = 0
    for pos, char in enumerate(data):
        i = (i + 1) % 256
        j = (j + state[i]) % 256
        state[i], state[j] = state[j], state[i]
        k = state[(state[i] + state[j]) % 256]
        out[pos] = (ord(char) ^ k) & 0xFF
    return bytes(out)