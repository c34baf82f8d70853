"""Generator composition tree.

A scaffold is described as a tree of generators and run against an
:class:`~skelgen.scaffolder.context.OutputContext`::

    root = Root(
        Data("App", spec),
        Dir("docs", File("index.md", Contents("# {{ App.name }}"))),
        File("{{ App.name }}/__init__.py", Touch()),
    )
    root.execute()

Any object with a ``generate(ctx)`` method is a generator.  Errors are raised
and stop the walk; files already written are left in place.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from rich.console import Console

from skelgen.config import GenerateOptions

from .context import OutputContext
from .fs import FileSystem
from .templates import TemplateRenderer


@runtime_checkable
class Generator(Protocol):
    """Performs directory, file, binding or side-effect actions on a context."""

    def generate(self, ctx: OutputContext) -> None: ...


class Sequence(list):
    """An ordered list of generators; ``None`` entries are skipped."""

    def generate(self, ctx: OutputContext) -> None:
        for g in self:
            if g is None:
                continue
            g.generate(ctx)


class Dir:
    """Runs its children with *name* pushed onto the working directory.

    *name* is expanded against the bindings when the directory is entered.
    """

    def __init__(self, name: str, *contents: Generator | None) -> None:
        self.name = name
        self.contents = Sequence(contents)

    def generate(self, ctx: OutputContext) -> None:
        with ctx.pushd(ctx.expand_name(self.name)):
            self.contents.generate(ctx)

    def __repr__(self) -> str:
        return f"Dir({self.name!r}, {len(self.contents)} items)"


class Data:
    """Binds a single template variable."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value

    def generate(self, ctx: OutputContext) -> None:
        ctx.set_data(self.name, self.value)

    def __repr__(self) -> str:
        return f"Data({self.name!r}, {self.value!r})"


class Vars(dict):
    """Binds every key of the mapping as a template variable."""

    def generate(self, ctx: OutputContext) -> None:
        for k, v in self.items():
            ctx.set_data(k, v)


def some_data(*namevalues: Any) -> Sequence:
    """Build a sequence of :class:`Data` from ``name, value, ...`` pairs."""
    if len(namevalues) % 2 != 0:
        raise ValueError("expected name, value in pairs")
    return Sequence(
        Data(namevalues[i], namevalues[i + 1]) for i in range(0, len(namevalues), 2)
    )


class Root:
    """The top of a template: a sequence plus the options to run it with."""

    def __init__(
        self,
        *items: Generator | None,
        options: GenerateOptions | None = None,
        overwrite: bool = False,
        dry_run: bool = False,
        working_directory: str = "",
    ) -> None:
        self.sequence = Sequence(items)
        self.options = options or GenerateOptions(
            overwrite=overwrite,
            dry_run=dry_run,
            working_directory=working_directory,
        )

    def generate(self, ctx: OutputContext) -> None:
        self.sequence.generate(ctx)

    def execute(
        self,
        fs: FileSystem | None = None,
        *,
        console: Console | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> OutputContext:
        """Run the template with fresh bindings and return the context used.

        Args:
            fs: Filesystem to generate into.  Defaults to the local one.
            console: Where the change report is printed.
            renderer: Template renderer for names and inline templates.
        """
        ctx = OutputContext(
            fs,
            vars={},
            overwrite=self.options.overwrite,
            dry_run=self.options.dry_run,
            working_directory=self.options.work_dir,
            console=console,
            renderer=renderer,
        )
        self.generate(ctx)
        return ctx
