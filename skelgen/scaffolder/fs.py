"""Filesystem capability used by the scaffolder.

``OutputContext`` never touches ``os`` directly; it goes through an object
implementing :class:`FileSystem`.  :class:`LocalFileSystem` is the default and
maps each operation onto ``os``/``shutil``.  Tests may pass a fake, or wrap the
local implementation in a ``MagicMock`` to observe calls.

A missing file must surface as ``FileNotFoundError`` so callers can tell it
apart from every other ``OSError``.
"""

from __future__ import annotations

import os
import shutil
from typing import IO, Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """POSIX-like file operations on concrete paths."""

    def stat(self, path: str) -> os.stat_result: ...

    def open(self, path: str) -> IO[bytes]: ...

    def read_bytes(self, path: str) -> bytes: ...

    def create(self, path: str) -> IO[bytes]: ...

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> IO[bytes]: ...

    def mkdir(self, path: str, mode: int = 0o777) -> None: ...

    def makedirs(self, path: str, mode: int = 0o777) -> None: ...

    def chmod(self, path: str, mode: int) -> None: ...

    def chown(self, path: str, uid: int, gid: int) -> None: ...

    def remove(self, path: str) -> None: ...

    def remove_all(self, path: str) -> None: ...

    def rename(self, old: str, new: str) -> None: ...

    def utime(self, path: str, atime: float, mtime: float) -> None: ...


class LocalFileSystem:
    """The operating system's filesystem."""

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def open(self, path: str) -> IO[bytes]:
        return open(path, "rb")

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def create(self, path: str) -> IO[bytes]:
        """Open *path* for writing, truncating it or creating it empty."""
        return open(path, "wb")

    def open_file(self, path: str, flags: int, mode: int = 0o666) -> IO[bytes]:
        fd = os.open(path, flags, mode)
        access = flags & (os.O_RDONLY | os.O_WRONLY | os.O_RDWR)
        if access == os.O_RDONLY:
            file_mode = "rb"
        elif flags & os.O_APPEND:
            file_mode = "ab" if access == os.O_WRONLY else "a+b"
        else:
            file_mode = "wb" if access == os.O_WRONLY else "r+b"
        return os.fdopen(fd, file_mode)

    def mkdir(self, path: str, mode: int = 0o777) -> None:
        os.mkdir(path, mode)

    def makedirs(self, path: str, mode: int = 0o777) -> None:
        os.makedirs(path, mode, exist_ok=True)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        os.chown(path, uid, gid)

    def remove(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)

    def remove_all(self, path: str) -> None:
        """Remove *path* and everything below it; a missing path is not an error."""
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)

    def rename(self, old: str, new: str) -> None:
        os.replace(old, new)

    def utime(self, path: str, atime: float, mtime: float) -> None:
        os.utime(path, (atime, mtime))
