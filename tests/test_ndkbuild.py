import os
import subprocess
from unittest import mock

import pytest

from panpcs import ndkbuild

ENV_NAMES = ["NDK", "ANDROID_NDK_ROOT", "ANDROID_NDK_DIR", "ANDROID_API_LEVEL", "GOARCH"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_get_ndk_path_order(monkeypatch):
    assert ndkbuild.get_ndk_path() == ""
    monkeypatch.setenv("ANDROID_NDK_DIR", "/c")
    assert ndkbuild.get_ndk_path() == "/c"
    monkeypatch.setenv("ANDROID_NDK_ROOT", "/b")
    assert ndkbuild.get_ndk_path() == "/b"
    monkeypatch.setenv("NDK", "/a")
    assert ndkbuild.get_ndk_path() == "/a"


def test_get_api_level(monkeypatch):
    assert ndkbuild.get_api_level() == "21"
    monkeypatch.setenv("ANDROID_API_LEVEL", "15")
    assert ndkbuild.get_api_level() == "15"


@pytest.mark.parametrize("goarch, arch, platforms_arch", [
    ("386", "x86", "x86"),
    ("amd64", "x86_64", "x86_64"),
    ("arm64", "aarch64", "arm64"),
    ("arm", "arm", "arm"),
])
def test_arch_mapping(monkeypatch, goarch, arch, platforms_arch):
    monkeypatch.setenv("GOARCH", goarch)
    assert ndkbuild.get_arch() == arch
    assert ndkbuild.get_platforms_arch() == platforms_arch


def _make_toolchain(root):
    bindir = root / "toolchains" / "x86_64-4.9" / "prebuilt" / (ndkbuild._goos() + "-x86_64") / "bin"
    bindir.mkdir(parents=True)
    for name in ("x86_64-linux-android-gcc", "x86_64-linux-android-gcc.exe"):
        (bindir / name).write_text("")
    return bindir


def test_main_runs_gcc_with_sysroot(monkeypatch, tmp_path):
    bindir = _make_toolchain(tmp_path)
    monkeypatch.setenv("NDK", str(tmp_path))
    monkeypatch.setenv("GOARCH", "amd64")
    monkeypatch.setenv("ANDROID_API_LEVEL", "15")
    with mock.patch("panpcs.ndkbuild.subprocess.run",
                    return_value=subprocess.CompletedProcess([], 3)) as run:
        status = ndkbuild.main(["-c", "x.c"])
    assert status == 3
    cmd = run.call_args[0][0]
    assert os.path.dirname(cmd[0]) == str(bindir)
    assert cmd[1] == "--sysroot=" + os.path.join(str(tmp_path), "platforms", "android-15", "arch-x86_64")
    assert cmd[2:] == ["-c", "x.c"]


def test_main_without_gcc(monkeypatch, tmp_path):
    monkeypatch.setenv("NDK", str(tmp_path))
    monkeypatch.setenv("GOARCH", "amd64")
    with pytest.raises(RuntimeError, match="no match gcc"):
        ndkbuild.main([])