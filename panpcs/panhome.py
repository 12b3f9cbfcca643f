"""Signature obtained from the netdisk home page, cached for an hour."""

from __future__ import annotations

import base64
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Callable, Mapping, Optional
from urllib.parse import urlsplit

from panpcs.expires import Expires
from panpcs.netdisksign import sign2

OPERATION_SIGNATURE = "signature"
PAN_HOME_URL = "https://pan.baidu.com/disk/home"
PAN_HOME_USER_AGENT = "Mozilla/5.0"
SIGN_LIFETIME_SECONDS = 3600

_SIGN_INFO_RE = re.compile(r'"sign1":"(.*?)"[\s\S]*"sign3":"(.*?)","timestamp":(\d*?),')

Fetch = Callable[[str, Mapping[str, str]], "tuple[str, bytes]"]


class CookieInvalidError(Exception):
    def __init__(self) -> None:
        super().__init__("cookie is invalid")


class UnknownLocationError(Exception):
    def __init__(self) -> None:
        super().__init__("unknown location")


class PanHomeMatchError(Exception):
    def __init__(self) -> None:
        super().__init__("网盘首页数据匹配出错")


@dataclass(frozen=True)
class SignRes:
    """A signature and the timestamp it belongs to."""

    sign: str
    timestamp: str


def parse_sign_info(location: str, body: bytes | str) -> tuple[str, str, str]:
    """``(sign1, sign3, timestamp)`` from the home page response."""
    if location == "/":
        raise CookieInvalidError()
    if location:
        try:
            host = urlsplit(location).hostname
        except ValueError:
            raise UnknownLocationError() from None
        if host == "passport.baidu.com":
            raise CookieInvalidError()
        raise UnknownLocationError()

    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    match = _SIGN_INFO_RE.search(text)
    if match is None:
        raise PanHomeMatchError()
    return match.group(1), match.group(2), match.group(3)


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Hands redirect responses back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        raise urllib.error.HTTPError(req.full_url, code, msg, headers, fp)


def _make_fetch(cookie: str) -> Fetch:
    opener = urllib.request.build_opener(_NoRedirect)

    def fetch(url: str, headers: Mapping[str, str]) -> tuple[str, bytes]:
        all_headers = dict(headers)
        if cookie:
            all_headers["Cookie"] = cookie
        request = urllib.request.Request(url, headers=all_headers, method="GET")
        try:
            with opener.open(request) as resp:
                return resp.headers.get("Location", ""), resp.read()
        except urllib.error.HTTPError as exc:
            with exc:
                location = exc.headers.get("Location", "") if exc.headers else ""
                if 300 <= exc.code < 400:
                    return location, exc.read()
                raise

    return fetch


class PanHome:
    """Obtains and caches the home page signature."""

    def __init__(self, fetch: Optional[Fetch] = None, cookie: str = ""):
        self._fetch = fetch or _make_fetch(cookie)
        self._sign_res: Optional[SignRes] = None
        self._sign_expires: Optional[Expires] = None

    def signature(self) -> SignRes:
        """Fetch the home page and compute a fresh signature."""
        location, body = self._fetch(PAN_HOME_URL, {"User-Agent": PAN_HOME_USER_AGENT})
        sign1, sign3, timestamp = parse_sign_info(location, body)
        signed = base64.b64encode(sign2(sign3, sign1)).decode("ascii")
        return SignRes(sign=signed, timestamp=timestamp)

    def cache_signature(self) -> SignRes:
        """The cached signature, renewed when missing or expired."""
        if self._sign_res is None or self._sign_expires is None or self._sign_expires.is_expired():
            self._sign_res = self.signature()
            self._sign_expires = Expires(SIGN_LIFETIME_SECONDS)
        return self._sign_res

    def set_sign_expires(self) -> None:
        """Force the cached signature to be renewed on next use."""
        if self._sign_expires is not None:
            self._sign_expires.set_expires(True)