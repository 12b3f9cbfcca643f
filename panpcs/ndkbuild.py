"""Compiler wrapper that runs the Android NDK gcc with the right sysroot."""

from __future__ import annotations

import glob
import os
import platform
import subprocess
import sys
from typing import Optional, Sequence

DEFAULT_API_LEVEL = "21"

_MACHINE_TO_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


def _goos() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return sys.platform.rstrip("0123456789")


def _goarch() -> str:
    arch = os.environ.get("GOARCH")
    if arch is not None:
        return arch
    machine = platform.machine().lower()
    return _MACHINE_TO_GOARCH.get(machine, machine)


def get_ndk_path() -> str:
    """NDK location from NDK, ANDROID_NDK_ROOT or ANDROID_NDK_DIR."""
    for name in ("NDK", "ANDROID_NDK_ROOT", "ANDROID_NDK_DIR"):
        value = os.environ.get(name)
        if value is not None:
            return value
    return ""


def get_api_level() -> str:
    return os.environ.get("ANDROID_API_LEVEL", DEFAULT_API_LEVEL)


def get_arch() -> str:
    """NDK toolchain architecture for the target."""
    goarch = _goarch()
    return {"386": "x86", "amd64": "x86_64", "arm64": "aarch64"}.get(goarch, goarch)


def get_platforms_arch() -> str:
    """Architecture name used under ``platforms/android-*/``."""
    arch = get_arch()
    return "arm64" if arch == "aarch64" else arch


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the matching NDK gcc with ``argv``; returns its exit status."""
    if argv is None:
        argv = sys.argv[1:]
    ndk_path = get_ndk_path()
    api_level = get_api_level()
    arch = get_arch()
    goos = _goos()

    pattern = "*-gcc" + (".exe" if goos == "windows" else "")
    gcc_paths = sorted(glob.glob(os.path.join(
        ndk_path, "toolchains", arch + "-*", "prebuilt", goos + "-*", "bin", pattern)))
    if not gcc_paths:
        raise RuntimeError("no match gcc")

    sysroot = os.path.join(ndk_path, "platforms", "android-" + api_level,
                           "arch-" + get_platforms_arch())
    try:
        result = subprocess.run([gcc_paths[0], "--sysroot=" + sysroot, *argv])
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 0
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())