"""Test helpers: digest references, tree builders and fake openers."""

from __future__ import annotations

import errno
import hashlib
from pathlib import Path

# sha256 of a directory holding a.txt="x" and b.txt="y".
XY_DIRECTORY_SHA256 = "4214FEF4B3C6D52E699C6C12271D62A1C5F8E0EAF64ADA0D53707EB87F57B6EF"
X_SHA256 = "2D711642B726B04401627CA9FBAC32F5C8530FB1903CC4DB02258717921A4881"
Y_SHA256 = "A1FCE4363854FF888CFF4B8E7875D600C2682390412A8CF79B37D0B11148B0FA"


def hexdigest(data: bytes | str, algorithm: str = "sha256") -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.new(algorithm, data).hexdigest().upper()


def write_tree(root: Path, layout: dict) -> Path:
    """Create files (str/bytes values) and folders (dict values) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        target = root / name
        if isinstance(content, dict):
            write_tree(target, content)
        elif isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


class FlakyOpener:
    """Opener that reports EMFILE for the first ``failures`` calls."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls = 0

    def __call__(self, path: str):
        self.calls += 1
        if self.calls <= self.failures:
            raise OSError(errno.EMFILE, "Too many open files", path)
        return open(path, "rb")


class DenyingOpener:
    def __init__(self):
        self.calls = 0

    def __call__(self, path: str):
        self.calls += 1
        raise PermissionError(errno.EACCES, "Permission denied", path)


class BrokenStream:
    """File object whose reads fail after a successful open."""

    def read(self, size: int = -1) -> bytes:
        raise OSError(errno.EIO, "Input/output error")

    def close(self) -> None:
        pass
