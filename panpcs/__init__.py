"""Errors, request signatures, expiring caches and reply parsers for a personal cloud storage client."""

__version__ = "0.1.0"

__all__ = [
    "cachemap",
    "clouddl",
    "download",
    "errors",
    "expires",
    "filedir",
    "jsontable",
    "ndkbuild",
    "netdisksign",
    "panhome",
    "recycle",
    "transfer",
    "upload",
    "util",
]