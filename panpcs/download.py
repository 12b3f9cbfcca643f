"""Download link information."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

from panpcs.errors import PanErrorInfo, handle_json_parse
from panpcs.util import get_http_scheme

OPERATION_LOCATE_PAN_API_DOWNLOAD = "获取下载链接2"

INIT_RANGE_SIZE = 32 * 1024


class LocateDownloadURLNotFound(LookupError):
    """No download link was returned."""

    def __init__(self) -> None:
        super().__init__("locatedownload url not found")


def _with_scheme(raw: str, https: bool) -> Optional[str]:
    try:
        parts = urlsplit(raw)
    except ValueError:
        return None
    return urlunsplit(parts._replace(scheme=get_http_scheme(https)))


@dataclass
class URLInfo:
    """Download links returned by locatedownload."""

    urls: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "URLInfo":
        entries = data.get("urls") or []
        return cls(urls=[entry.get("url") or "" for entry in entries if entry is not None])

    def url_strings(self, https: bool) -> list[str]:
        """All links with the scheme set; unparseable links are left out."""
        return [u for u in (_with_scheme(raw, https) for raw in self.urls) if u is not None]

    def single_url(self, https: bool) -> Optional[str]:
        """The first link, or None."""
        return _with_scheme(self.urls[0], https) if self.urls else None

    def last_url(self, https: bool) -> Optional[str]:
        """The last link, or None."""
        return _with_scheme(self.urls[-1], https) if self.urls else None


@dataclass
class DlinkInfo:
    dlink: str
    fs_id: str


def parse_dlink_list(data: Any) -> list[DlinkInfo]:
    """Parse a pan download response; raises :class:`PanErrorInfo` on errors."""
    op = OPERATION_LOCATE_PAN_API_DOWNLOAD
    parsed = handle_json_parse(op, data, PanErrorInfo(op))
    result = []
    for item in parsed.get("dlink") or []:
        if item is None:
            continue
        fs_id = item.get("fs_id")
        result.append(DlinkInfo(dlink=item.get("dlink") or "", fs_id="" if fs_id is None else str(fs_id)))
    return result