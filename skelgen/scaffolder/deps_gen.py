"""Dependency management as a generator.

Adding a dependency is delegated to the project's package manager, which
rewrites its manifest files.  The generator treats the tool as a black box:
it snapshots the manifests, runs the command, and reports each manifest with
the same create/identical/overwrite protocol as generated files.

A dry run never starts the tool.  Instead the primary manifest is searched for
each requested package and, if one is missing, every manifest is reported as
overwritten.  This is a best-effort guess; a package pinned under a different
spelling is reported as a change.
"""

from __future__ import annotations

from rich.markup import escape

from skelgen.utils import format_command, run_command

from .context import OutputContext, ScaffoldError


class ExternalCommandError(ScaffoldError):
    """Raised when the dependency tool exits with a non-zero status."""

    def __init__(self, message: str, command: str = "", returncode: int = -1, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class DependencyAdd:
    """Runs ``command + packages`` in the working directory.

    Args:
        command: The tool invocation without packages, e.g. ``["uv", "add"]``.
        manifests: Files the tool rewrites; the first one is the primary
            manifest, reported as the error when the tool fails.
        packages: Package requirements passed as trailing arguments.
    """

    def __init__(self, command: list[str], manifests: list[str], packages: list[str]) -> None:
        if not manifests:
            raise ValueError("at least one manifest is required")
        self.command = list(command)
        self.manifests = list(manifests)
        self.packages = list(packages)

    def generate(self, ctx: OutputContext) -> None:
        if not self.packages:
            return
        if ctx.dry_run:
            self._dry_run(ctx)
        else:
            self._real_generate(ctx)

    def _real_generate(self, ctx: OutputContext) -> None:
        originals = {m: self._read(ctx, m) for m in self.manifests}

        cmd = self.command + self.packages
        try:
            returncode, _, stderr = run_command(cmd, cwd=ctx.work_dir)
        except OSError as exc:
            ctx.trace("error", ctx.file(self.manifests[0]))
            raise ExternalCommandError(
                f"cannot run '{format_command(cmd)}': {exc}",
                command=format_command(cmd),
            ) from exc

        if returncode != 0:
            ctx.trace("error", ctx.file(self.manifests[0]))
            if stderr:
                ctx.console.print(f"[dim]{escape(stderr)}[/dim]")
            raise ExternalCommandError(
                f"'{format_command(cmd)}' failed with exit code {returncode}",
                command=format_command(cmd),
                returncode=returncode,
                stderr=stderr,
            )

        for manifest, original in originals.items():
            created = original is None and ctx.exists(manifest)
            ctx.report_change(original, manifest, created)

    def _dry_run(self, ctx: OutputContext) -> None:
        primary = (self._read(ctx, self.manifests[0]) or b"").decode("utf-8", errors="replace")
        if all(pkg in primary for pkg in self.packages):
            return
        for manifest in self.manifests:
            ctx.trace("overwrite", ctx.file(manifest))

    @staticmethod
    def _read(ctx: OutputContext, name: str) -> bytes | None:
        try:
            return ctx.read_bytes(name)
        except FileNotFoundError:
            return None

    def __repr__(self) -> str:
        return f"DependencyAdd({self.command!r}, {self.packages!r})"


def UvAdd(*packages: str) -> DependencyAdd:
    """Adds *packages* to the project with ``uv add``."""
    return DependencyAdd(["uv", "add"], ["pyproject.toml", "uv.lock"], list(packages))
