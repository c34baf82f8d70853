"""File generators and their content pipeline.

``File(name, *steps)`` produces one file.  Each step transforms the body or
metadata of that file, in order::

    File("bin/run.py", Template(run_tpl, "entry", "main"), Format(), EXECUTABLE)

After the steps have run, the file is reported as created, identical or
overwritten by comparing its bytes before and after.
"""

from __future__ import annotations

import dataclasses
import json
import sys
import time
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from skelgen.utils import format_command, run_command

from .context import OutputContext, ScaffoldError
from .generator import some_data


class FormatError(ScaffoldError):
    """Raised when the source formatter rejects its input."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(message)


@runtime_checkable
class FileGenerator(Protocol):
    """Transforms the file *name* within a context."""

    def generate_file(self, ctx: OutputContext, name: str) -> None: ...


class FileGeneratorFunc:
    """Adapts a plain ``fn(ctx, name)`` callable into a file generator."""

    def __init__(self, fn: Callable[[OutputContext, str], None]) -> None:
        self.fn = fn

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        self.fn(ctx, name)


# ---------------------------------------------------------------------------
# File
# ---------------------------------------------------------------------------


class File:
    """Generates a file by running *ops* against it in order."""

    def __init__(self, name: str, *ops: FileGenerator) -> None:
        self.name = name
        self.ops = list(ops)

    def generate(self, ctx: OutputContext) -> None:
        if not self.ops:
            ctx.trace("identical", ctx.file(self.name))
            return

        # Expand once so bindings set by the steps cannot move the target.
        name = ctx.expand_name(self.name)
        try:
            original: bytes | None = ctx.read_bytes(name)
            created = False
        except FileNotFoundError:
            original = None
            created = True

        ctx.ensure_path(name)
        for op in self.ops:
            op.generate_file(ctx, name)

        ctx.report_change(original, name, created)

    def __repr__(self) -> str:
        return f"File({self.name!r}, {len(self.ops)} ops)"


# ---------------------------------------------------------------------------
# Content steps
# ---------------------------------------------------------------------------


class _ContentStep:
    """Base for steps that compute the whole body of the file.

    The body is computed even in a dry run; the context stages it instead of
    writing it.
    """

    def produce(self, ctx: OutputContext) -> bytes:
        raise NotImplementedError

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        ctx.write_bytes(name, self.produce(ctx))


class Contents(_ContentStep):
    """Writes *contents* as the file body.

    ``str`` is written as UTF-8 text, bytes-like values verbatim, and readable
    streams are read to the end.  Anything else is serialised as indented JSON.
    """

    def __init__(self, contents: Any) -> None:
        self.contents = contents

    def produce(self, ctx: OutputContext) -> bytes:
        c = self.contents
        if isinstance(c, str):
            return c.encode("utf-8")
        if isinstance(c, (bytes, bytearray, memoryview)):
            return bytes(c)
        if callable(getattr(c, "read", None)):
            data = c.read()
            return data.encode("utf-8") if isinstance(data, str) else bytes(data)
        return json.dumps(c, indent=4, ensure_ascii=False, default=_json_default).encode("utf-8")


class Template(_ContentStep):
    """Renders a template with the run's bindings as the file body.

    *template* is anything with a ``render(mapping)`` method, such as a
    ``jinja2.Template``, or an inline template string.  *namedata* are extra
    ``name, value`` pairs bound before rendering.
    """

    def __init__(self, template: Any, *namedata: Any) -> None:
        self.template = template
        self.data = some_data(*namedata)

    def produce(self, ctx: OutputContext) -> bytes:
        self.data.generate(ctx)
        if isinstance(self.template, str):
            text = ctx.renderer.render_string(self.template, ctx.vars)
        else:
            text = self.template.render(ctx.vars)
        return text.encode("utf-8")


class Format:
    """Rewrites the file through a source formatter.

    *formatter* maps source bytes to formatted bytes and raises on failure.
    It defaults to :func:`ruff_format`.
    """

    def __init__(self, formatter: Callable[[bytes], bytes] | None = None) -> None:
        self.formatter = formatter or ruff_format

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        src = ctx.read_bytes(name)
        Contents(self.formatter(src)).generate_file(ctx, name)


def ruff_format(source: bytes) -> bytes:
    """Format Python source with ``ruff format``."""
    cmd = [sys.executable, "-m", "ruff", "format", "-"]
    returncode, stdout, stderr = run_command(cmd, input=source)
    if returncode != 0:
        raise FormatError(
            f"'{format_command(cmd)}' failed (exit {returncode}): {stderr}",
            stderr=stderr,
        )
    return stdout


# ---------------------------------------------------------------------------
# Metadata steps
# ---------------------------------------------------------------------------


class Touch:
    """Creates the file empty if missing, otherwise bumps its timestamps."""

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        if not ctx.exists(name):
            ctx.write_bytes(name, b"")
            return
        now = time.time()
        ctx.utime(name, now, now)


class FileMode(int):
    """Permission bits, applied to the file as a step."""

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        ctx.chmod(name, int(self))

    def __repr__(self) -> str:
        return f"FileMode(0o{int(self):o})"


READ_ONLY = FileMode(0o600)
EXECUTABLE = FileMode(0o755)


def Mode(mode: int) -> FileMode:
    """Sets the file's permission bits to *mode*."""
    return FileMode(mode)


class Owner:
    """Sets the file's owning user and group."""

    def __init__(self, uid: int, gid: int) -> None:
        self.uid = uid
        self.gid = gid

    def generate_file(self, ctx: OutputContext, name: str) -> None:
        ctx.chown(name, self.uid, self.gid)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)
