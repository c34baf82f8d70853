"""skelgen scaffolder -- declarative file and directory generation.

A scaffold is a tree of generators run against an ``OutputContext``.  Each
touched file is reported as created, identical or overwritten, and a dry run
reports the same without writing anything.

Quick usage::

    from skelgen.scaffolder import Contents, Dir, File, Root, Vars

    root = Root(
        Vars({"App": {"Name": "demo"}}),
        Dir("bin", File("{{ App.Name }}.txt", Contents("hello"))),
        dry_run=True,
    )
    root.execute()
"""

from skelgen.scaffolder.app_gen import AppSpec, new_app_template, new_init_template
from skelgen.scaffolder.context import DirStackError, OutputContext, ScaffoldError
from skelgen.scaffolder.deps_gen import DependencyAdd, ExternalCommandError, UvAdd
from skelgen.scaffolder.files import (
    EXECUTABLE,
    READ_ONLY,
    Contents,
    File,
    FileGenerator,
    FileGeneratorFunc,
    FileMode,
    Format,
    FormatError,
    Mode,
    Owner,
    Template,
    Touch,
    ruff_format,
)
from skelgen.scaffolder.fs import FileSystem, LocalFileSystem
from skelgen.scaffolder.generator import (
    Data,
    Dir,
    Generator,
    Root,
    Sequence,
    Vars,
    some_data,
)
from skelgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "AppSpec",
    "Contents",
    "Data",
    "DependencyAdd",
    "Dir",
    "DirStackError",
    "EXECUTABLE",
    "ExternalCommandError",
    "File",
    "FileGenerator",
    "FileGeneratorFunc",
    "FileMode",
    "FileSystem",
    "Format",
    "FormatError",
    "Generator",
    "LocalFileSystem",
    "Mode",
    "OutputContext",
    "Owner",
    "READ_ONLY",
    "Root",
    "ScaffoldError",
    "Sequence",
    "Template",
    "TemplateRenderer",
    "Touch",
    "UvAdd",
    "Vars",
    "new_app_template",
    "new_init_template",
    "ruff_format",
    "some_data",
]
