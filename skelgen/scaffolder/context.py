"""Execution context for a generation run.

An :class:`OutputContext` is created once per run.  It owns the variable
bindings, the working-directory stack, the filesystem capability and the
overwrite/dry-run flags, and it prints one change-report line per touched
file::

          create  app/__main__.py
       identical  README.md
       overwrite  pyproject.toml (dry-run)

Every generator in the tree receives the same context.  The context is not
safe to share between threads or between concurrent runs.
"""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

from jinja2 import TemplateError
from rich.console import Console
from rich.text import Text

from skelgen.utils import console as default_console

from .fs import FileSystem, LocalFileSystem
from .templates import TemplateRenderer

if TYPE_CHECKING:
    from .generator import Generator


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------

LABEL_WIDTH = 12

CATEGORY_COLORS: dict[str, str] = {
    "error": "red",
    "create": "green",
    "overwrite": "cyan",
    "identical": "bright_black",
}

DIR_MODE = 0o755

_WRITE_FLAGS = os.O_WRONLY | os.O_RDWR | os.O_CREAT | os.O_TRUNC | os.O_APPEND


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for errors raised by the scaffolder."""


class DirStackError(ScaffoldError):
    """Raised when the working-directory stack would become empty."""


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


class ExpandedName(str):
    """A file or directory name whose template expressions were rendered."""


# ---------------------------------------------------------------------------
# Dry-run staging
# ---------------------------------------------------------------------------


class _StagedFile(io.BytesIO):
    """In-memory file whose contents are staged on close instead of written."""

    def __init__(self, staged: dict[str, bytes], path: str, initial: bytes = b"") -> None:
        super().__init__(initial)
        self._staged = staged
        self._path = path

    def close(self) -> None:
        if not self.closed:
            self._staged[self._path] = self.getvalue()
        super().close()


# ---------------------------------------------------------------------------
# OutputContext
# ---------------------------------------------------------------------------


class OutputContext:
    """Per-run state shared by every generator in the tree.

    Logical file names passed to the methods below are template-expanded and
    resolved against the current working directory (see :meth:`file`).  In a
    dry run nothing is written: file contents are staged in memory, so later
    reads and the change report still see them, and metadata operations do
    nothing.
    """

    def __init__(
        self,
        fs: FileSystem | None = None,
        *,
        vars: dict[str, Any] | None = None,
        overwrite: bool = False,
        dry_run: bool = False,
        working_directory: str = ".",
        console: Console | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self.vars: dict[str, Any] = vars if vars is not None else {}
        self.overwrite = overwrite
        self.dry_run = dry_run
        self.console = console if console is not None else default_console
        self.renderer = renderer if renderer is not None else TemplateRenderer()
        self._working: list[str] = [working_directory or "."]
        self._staged: dict[str, bytes] = {}

    # -- Running generators ------------------------------------------------

    def do(self, *generators: Generator) -> None:
        """Run *generators* in order against this context."""
        for g in generators:
            g.generate(self)

    def set_data(self, name: str, value: Any) -> None:
        self.vars[name] = value

    # -- Paths -------------------------------------------------------------

    @property
    def work_dir(self) -> str:
        """The current working directory: the joined directory stack."""
        return os.path.normpath(os.path.join(*self._working))

    def push_dir(self, name: str) -> None:
        self._working.append(name)

    def pop_dir(self) -> None:
        if len(self._working) <= 1:
            raise DirStackError("cannot pop dir")
        self._working.pop()

    @contextmanager
    def pushd(self, name: str) -> Iterator[str]:
        """Push *name* for the duration of the block; the pop always happens."""
        self.push_dir(name)
        try:
            yield self.work_dir
        finally:
            self.pop_dir()

    def expand_name(self, name: str) -> str:
        """Render *name* against the bindings, or return it unchanged on error.

        The result is marked as expanded, so passing it back in (or to any
        method taking a logical name) does not render it a second time.
        """
        if isinstance(name, ExpandedName):
            return name
        try:
            return ExpandedName(self.renderer.render_string(name, self.vars))
        except (TemplateError, TypeError, ValueError):
            return ExpandedName(name)

    def file(self, name: str) -> str:
        """Resolve a logical file name to a concrete path.

        Absolute names are returned unchanged.  Anything else is expanded and
        joined onto the working directory.
        """
        if name.startswith(os.sep):
            return name
        return os.path.normpath(os.path.join(self.work_dir, self.expand_name(name)))

    def ensure_path(self, name: str) -> str:
        """Resolve *name* and create its missing parent directories."""
        name = self.expand_name(name)
        if name.startswith(os.sep):
            return name

        path = self.file(name)
        parent = os.path.dirname(path)
        if parent and not self.dry_run:
            try:
                self.fs.stat(parent)
            except FileNotFoundError:
                self.fs.makedirs(parent, DIR_MODE)
        return path

    # -- Reading -----------------------------------------------------------

    def exists(self, name: str) -> bool:
        """Whether *name* exists.  Only "not found" counts as absent."""
        if self.file(name) in self._staged:
            return True
        try:
            self.stat(name)
        except FileNotFoundError:
            return False
        except OSError:
            return True
        return True

    def stat(self, name: str) -> os.stat_result:
        return self.fs.stat(self.file(name))

    def open(self, name: str) -> IO[bytes]:
        path = self.file(name)
        if path in self._staged:
            return io.BytesIO(self._staged[path])
        return self.fs.open(path)

    def read_bytes(self, name: str) -> bytes:
        """Current contents of *name*, including contents staged by a dry run."""
        path = self.file(name)
        if path in self._staged:
            return self._staged[path]
        return self.fs.read_bytes(path)

    # -- Writing -----------------------------------------------------------

    def create(self, name: str) -> IO[bytes]:
        """Open *name* for writing, truncating it."""
        path = self.ensure_path(name)
        if self.dry_run:
            return _StagedFile(self._staged, path)
        return self.fs.create(path)

    def write_bytes(self, name: str, data: bytes) -> str:
        """Replace the contents of *name* with *data* and return its path."""
        with self.create(name) as f:
            f.write(data)
        return self.file(name)

    def open_file(self, name: str, flags: int, mode: int = 0o666) -> IO[bytes]:
        path = self.file(name)
        if self.dry_run and flags & _WRITE_FLAGS:
            initial = b""
            if not flags & os.O_TRUNC and self.exists(name):
                initial = self.read_bytes(name)
            staged = _StagedFile(self._staged, path, initial)
            if flags & os.O_APPEND:
                staged.seek(0, io.SEEK_END)
            return staged
        return self.fs.open_file(path, flags, mode)

    # -- Metadata and structure (no-ops in a dry run) ----------------------

    def mkdir(self, name: str, mode: int = 0o777) -> None:
        path = self.ensure_path(name)
        if not self.dry_run:
            self.fs.mkdir(path, mode)

    def makedirs(self, name: str, mode: int = 0o777) -> None:
        if not self.dry_run:
            self.fs.makedirs(self.file(name), mode)

    def chmod(self, name: str, mode: int) -> None:
        path = self.ensure_path(name)
        if not self.dry_run:
            self.fs.chmod(path, mode)

    def chown(self, name: str, uid: int, gid: int) -> None:
        path = self.ensure_path(name)
        if not self.dry_run:
            self.fs.chown(path, uid, gid)

    def utime(self, name: str, atime: float, mtime: float) -> None:
        path = self.ensure_path(name)
        if not self.dry_run:
            self.fs.utime(path, atime, mtime)

    def rename(self, old: str, new: str) -> None:
        old_path = self.ensure_path(old)
        new_path = self.ensure_path(new)
        if not self.dry_run:
            self.fs.rename(old_path, new_path)

    def remove(self, name: str) -> None:
        if not self.dry_run:
            self.fs.remove(self.file(name))

    def remove_all(self, name: str) -> None:
        if not self.dry_run:
            self.fs.remove_all(self.file(name))

    # -- Reporting ---------------------------------------------------------

    def report_change(self, original: bytes | None, name: str, created: bool) -> None:
        """Classify the change to *name* against its *original* contents.

        Only called after a step has produced the file, so failing to read it
        back is reported as empty content rather than raised.
        """
        path = self.file(name)
        if created:
            self.trace("create", path)
            return

        try:
            new_contents = self.read_bytes(name)
        except OSError:
            new_contents = b""

        if (original or b"") == new_contents:
            self.trace("identical", path)
        else:
            self.trace("overwrite", path)

    def trace(self, category: str, path: str) -> None:
        """Print one change-report line."""
        color = CATEGORY_COLORS.get(category, "default")
        line = Text.assemble(
            " " * max(LABEL_WIDTH - len(category), 0),
            (category, color),
            "  ",
            path,
        )
        if self.dry_run:
            line.append(" (dry-run)")
        self.console.print(line, soft_wrap=True, highlight=False)
